"""Sync pair core and the collaborators it runs through."""

from .clock import Clock, SystemClock
from .gateway import FileSystemGateway, LocalFileSystem
from .pair import SyncDirection, SyncOutcome, SyncPair, build_backup_path
from .pair_manager import PairSyncManager
from .sync_file import FileMetadata, SyncFile

__all__ = [
    "Clock",
    "SystemClock",
    "FileSystemGateway",
    "LocalFileSystem",
    "SyncPair",
    "SyncOutcome",
    "SyncDirection",
    "build_backup_path",
    "PairSyncManager",
    "SyncFile",
    "FileMetadata",
]
