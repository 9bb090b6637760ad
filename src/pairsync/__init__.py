"""
pairsync

Keeps a pair of files (for example a local copy and a copy on removable media)
identical by overwriting the older copy with the more recently modified one,
optionally keeping a timestamped backup of what gets overwritten.
"""

__version__ = "1.0.0"
__description__ = "Keep two copies of a file in sync by modification time"

from .config.settings import SyncConfig
from .exceptions import InvalidPairArgument, InvalidPairState, PairSyncError
from .sync.pair import SyncDirection, SyncOutcome, SyncPair
from .sync.pair_manager import PairSyncManager
from .sync.sync_file import SyncFile

__all__ = [
    "SyncConfig",
    "SyncPair",
    "SyncFile",
    "SyncOutcome",
    "SyncDirection",
    "PairSyncManager",
    "PairSyncError",
    "InvalidPairArgument",
    "InvalidPairState",
]
