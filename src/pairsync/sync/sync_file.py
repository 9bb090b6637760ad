"""File descriptors for the members of a sync pair."""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict


@dataclass(frozen=True)
class FileMetadata:
    """Snapshot of a file's metadata taken at one moment."""
    last_modified: datetime
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'last_modified': self.last_modified.isoformat(),
            'size': self.size,
        }


class SyncFile:
    """One physical file taking part in a sync pair.

    The descriptor only knows its path. Metadata is read from the filesystem
    every time :meth:`retrieve_metadata` is called and is never cached, so a
    pair always decides on the current on-disk state.
    """

    def __init__(self, full_path, stat_func: Callable[[str], Any] = os.stat):
        """Initialize the descriptor.

        Args:
            full_path: Absolute or resolvable path of the file
            stat_func: Function returning an ``os.stat_result``-like object
                for a path
        """
        self._full_path = os.fspath(full_path)
        self._stat = stat_func

    @property
    def full_path(self) -> str:
        return self._full_path

    @property
    def name(self) -> str:
        """File name with extension, without the directory."""
        return os.path.basename(self._full_path)

    def retrieve_metadata(self) -> FileMetadata:
        """Read the file's current metadata.

        Raises:
            FileNotFoundError: If the file no longer exists
            OSError: If the metadata cannot be read
        """
        stat = self._stat(self._full_path)
        return FileMetadata(
            last_modified=datetime.fromtimestamp(stat.st_mtime),
            size=stat.st_size,
        )

    def __repr__(self) -> str:
        return f"SyncFile({self._full_path!r})"
