"""Sync pair: two copies of one logical file kept identical.

A pair is built in three steps: the first file is attached, then the second
file (which must carry the same file name and extension), then
:meth:`SyncPair.synchronize` is called as often as needed. Each call re-reads
both files' metadata, picks the more recently modified file as the actual one
and overwrites the stale one with it, optionally saving a timestamped backup
of the stale file first.

Failures of the filesystem are never retried or rolled back here. When the
gateway cannot replace files atomically, a failure between the delete and the
copy leaves the stale path missing on disk; the backup variant keeps the
overwritten content recoverable in that case.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..exceptions import InvalidPairArgument, InvalidPairState
from .clock import Clock
from .gateway import FileSystemGateway
from .sync_file import SyncFile

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d %H-%M-%S"


class SyncDirection(str, Enum):
    """Which way content flowed during a synchronization."""
    NONE = "none"
    FIRST_TO_SECOND = "first_to_second"
    SECOND_TO_FIRST = "second_to_first"


@dataclass(frozen=True)
class SyncOutcome:
    """Result of deciding (and possibly performing) a synchronization."""
    direction: SyncDirection = SyncDirection.NONE
    source: Optional[str] = None
    target: Optional[str] = None
    backup_path: Optional[str] = None
    atomic: bool = False

    @property
    def synced(self) -> bool:
        return self.direction is not SyncDirection.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'direction': self.direction.value,
            'source': self.source,
            'target': self.target,
            'backup_path': self.backup_path,
            'atomic': self.atomic,
        }


def build_backup_path(backup_dir_path: str, file_path: str, timestamp) -> str:
    """Build the backup location for ``file_path`` taken at ``timestamp``.

    ``backup/report.docx`` backed up at 2024-01-01 12:00:00 becomes
    ``backup/report[2024-01-01 12-00-00].docx``.
    """
    stem, extension = os.path.splitext(os.path.basename(file_path))
    backup_name = f"{stem}[{timestamp.strftime(BACKUP_TIMESTAMP_FORMAT)}]{extension}"
    return os.path.join(backup_dir_path, backup_name)


class SyncPair:
    """Two file descriptors for the same logical file in two locations."""

    def __init__(
        self,
        gateway: FileSystemGateway,
        clock: Clock,
        need_backup: bool = False,
        backup_dir_path: str = "backup",
        mtime_tolerance: float = 0.0,
        name: Optional[str] = None,
    ):
        """Initialize an empty pair.

        Args:
            gateway: Filesystem gateway performing copies and deletes
            clock: Clock used to timestamp backup files
            need_backup: Back up the stale file before overwriting it
            backup_dir_path: Existing directory receiving backups
            mtime_tolerance: Largest modification time difference, in
                seconds, still treated as equal
            name: Label used in log messages

        Raises:
            InvalidPairArgument: If mtime_tolerance is negative
        """
        self._gateway = gateway
        self._clock = clock
        self._first_file: Optional[SyncFile] = None
        self._second_file: Optional[SyncFile] = None
        self.need_backup = need_backup
        self.backup_dir_path = backup_dir_path
        self.mtime_tolerance = mtime_tolerance
        self.name = name

    @property
    def mtime_tolerance(self) -> float:
        return self._mtime_tolerance

    @mtime_tolerance.setter
    def mtime_tolerance(self, value: float) -> None:
        if value < 0:
            raise InvalidPairArgument(
                f"mtime_tolerance must not be negative (got {value})."
            )
        self._mtime_tolerance = value

    @property
    def first_file(self) -> Optional[SyncFile]:
        return self._first_file

    @property
    def second_file(self) -> Optional[SyncFile]:
        return self._second_file

    @property
    def is_complete(self) -> bool:
        """True once both files are attached."""
        return self._first_file is not None and self._second_file is not None

    def set_first_file(self, file: SyncFile) -> None:
        """Attach the first file; it establishes the pair's identity.

        Raises:
            InvalidPairArgument: If ``file`` is None
            InvalidPairState: If the first file is already attached
        """
        if file is None:
            raise InvalidPairArgument("Invalid file for sync pair: file is not set.")
        if self._first_file is not None:
            raise InvalidPairState("First file of the sync pair is already set.")

        self._first_file = file

    def set_second_file(self, file: SyncFile) -> None:
        """Attach the second file.

        Its file name and extension must equal the first file's; directories
        may differ.

        Raises:
            InvalidPairState: If the first file is not attached yet, or the
                second file is already attached
            InvalidPairArgument: If ``file`` is None or its name differs
        """
        if self._first_file is None:
            raise InvalidPairState("First file of the sync pair is not set.")
        if file is None:
            raise InvalidPairArgument("Invalid file for sync pair: file is not set.")
        if file.name != self._first_file.name:
            raise InvalidPairArgument(
                "Invalid file for sync pair: name or type mismatch "
                f"('{file.name}' differs from '{self._first_file.name}')."
            )
        if self._second_file is not None:
            raise InvalidPairState("Second file of the sync pair is already set.")

        self._second_file = file

    def plan(self) -> SyncOutcome:
        """Decide what :meth:`synchronize` would do, without touching files."""
        non_actual, actual, direction = self._decide()
        if direction is SyncDirection.NONE:
            return SyncOutcome()

        backup_path = None
        if self.need_backup:
            backup_path = build_backup_path(
                self.backup_dir_path, non_actual.full_path, self._clock.now()
            )
        return SyncOutcome(
            direction=direction,
            source=actual.full_path,
            target=non_actual.full_path,
            backup_path=backup_path,
            atomic=self._gateway.supports_atomic_replace,
        )

    def synchronize(self) -> SyncOutcome:
        """Overwrite the stale file with the more recently modified one.

        Returns:
            SyncOutcome describing the direction taken, NONE when both files
            carry the same modification time

        Raises:
            InvalidPairState: If either file is not attached
            OSError: If reading metadata or any file operation fails
        """
        non_actual, actual, direction = self._decide()
        if direction is SyncDirection.NONE:
            logger.debug(f"{self._label()}: files are in sync")
            return SyncOutcome()

        logger.info(f"{self._label()}: {actual.full_path} is newer than {non_actual.full_path}")
        try:
            if self.need_backup:
                backup_path = self._reconcile_with_backup(non_actual, actual)
            else:
                backup_path = None
                self._reconcile(non_actual, actual)
        except OSError as e:
            logger.error(f"{self._label()}: synchronization failed: {e}")
            raise

        return SyncOutcome(
            direction=direction,
            source=actual.full_path,
            target=non_actual.full_path,
            backup_path=backup_path,
            atomic=self._gateway.supports_atomic_replace,
        )

    def _decide(self) -> Tuple[Optional[SyncFile], Optional[SyncFile], SyncDirection]:
        """Return ``(non_actual, actual, direction)`` from fresh metadata."""
        if self._first_file is None:
            raise InvalidPairState("First file of the sync pair is not set.")
        if self._second_file is None:
            raise InvalidPairState("Second file of the sync pair is not set.")

        first_meta = self._first_file.retrieve_metadata()
        second_meta = self._second_file.retrieve_metadata()

        delta = (first_meta.last_modified - second_meta.last_modified).total_seconds()
        if abs(delta) <= self.mtime_tolerance:
            return None, None, SyncDirection.NONE

        if delta > 0:
            return self._second_file, self._first_file, SyncDirection.FIRST_TO_SECOND
        return self._first_file, self._second_file, SyncDirection.SECOND_TO_FIRST

    def _reconcile_with_backup(self, non_actual: SyncFile, actual: SyncFile) -> str:
        # backup must land before anything destructive happens
        backup_path = build_backup_path(
            self.backup_dir_path, non_actual.full_path, self._clock.now()
        )
        logger.info(f"{self._label()}: backing up {non_actual.full_path} to {backup_path}")
        self._gateway.copy_file(non_actual.full_path, backup_path)

        self._reconcile(non_actual, actual)
        return backup_path

    def _reconcile(self, non_actual: SyncFile, actual: SyncFile) -> None:
        if self._gateway.supports_atomic_replace:
            self._gateway.replace_file(actual.full_path, non_actual.full_path)
            return

        self._gateway.delete_file(non_actual.full_path)
        self._gateway.copy_file(actual.full_path, non_actual.full_path)

    def _label(self) -> str:
        if self.name:
            return f"Pair '{self.name}'"
        return f"Pair '{self._first_file.name}'"

    def __repr__(self) -> str:
        return f"SyncPair(first={self._first_file!r}, second={self._second_file!r})"
