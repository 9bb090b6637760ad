"""Filesystem gateways: the only place where pair files are mutated.

The sync pair never opens or writes file content itself. Every copy and delete
goes through a :class:`FileSystemGateway`, which keeps the core testable with
an in-memory implementation and lets the production gateway decide how a copy
reaches the disk.
"""

import logging
import os
import shutil
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class FileSystemGateway(ABC):
    """Interface for the file operations a sync pair needs.

    All methods raise ``OSError`` (or a subclass) on failure.

    Attributes:
        supports_atomic_replace: True when :meth:`replace_file` can overwrite
            a destination without ever leaving its path empty.
    """

    supports_atomic_replace: bool = False

    @abstractmethod
    def copy_file(self, source_path: str, dest_path: str) -> None:
        """Copy the full content of ``source_path`` to ``dest_path``.

        The destination is created or overwritten and keeps the source's
        modification time.
        """

    @abstractmethod
    def delete_file(self, path: str) -> None:
        """Remove the file at ``path``."""

    def replace_file(self, source_path: str, dest_path: str) -> None:
        """Atomically overwrite ``dest_path`` with a copy of ``source_path``."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support atomic replace"
        )


class LocalFileSystem(FileSystemGateway):
    """Gateway for the local filesystem (including mounted removable media)."""

    TEMP_SUFFIX = ".pairsync-tmp"

    def __init__(self, atomic_replace: bool = True):
        """Initialize the gateway.

        Args:
            atomic_replace: Overwrite stale files through a temporary copy and
                a rename instead of delete-then-copy
        """
        self.supports_atomic_replace = atomic_replace

    def copy_file(self, source_path: str, dest_path: str) -> None:
        logger.debug(f"Copying {source_path} -> {dest_path}")
        shutil.copy2(source_path, dest_path)

    def delete_file(self, path: str) -> None:
        logger.debug(f"Deleting {path}")
        os.remove(path)

    def replace_file(self, source_path: str, dest_path: str) -> None:
        """Copy into a temporary sibling of ``dest_path`` and rename it over.

        The temporary file lives in the destination directory so the rename
        never crosses a filesystem boundary. A failed copy or rename removes
        whatever part of the temporary file was written.
        """
        if not self.supports_atomic_replace:
            raise RuntimeError(
                f"Atomic replace is disabled for this gateway; cannot replace {dest_path}"
            )

        temp_path = dest_path + self.TEMP_SUFFIX
        logger.debug(f"Replacing {dest_path} with {source_path} via {temp_path}")

        replaced = False
        try:
            shutil.copy2(source_path, temp_path)
            os.replace(temp_path, dest_path)
            replaced = True
        finally:
            if not replaced and os.path.exists(temp_path):
                os.remove(temp_path)
