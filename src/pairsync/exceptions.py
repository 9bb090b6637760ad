"""Exceptions raised by the sync pair core.

I/O failures are not wrapped: the builtin ``OSError`` family raised by the
filesystem gateway and the metadata reader reaches the caller unchanged.
"""


class PairSyncError(Exception):
    """Base class for errors raised by pairsync itself."""


class InvalidPairArgument(PairSyncError, ValueError):
    """A file handed to a pair is missing or does not match its partner."""


class InvalidPairState(PairSyncError, RuntimeError):
    """An operation was invoked before (or after) the pair allows it."""
