"""Shared pytest fixtures for pairsync tests.

Provides an in-memory filesystem gateway that records every call, a fixed
clock, and helpers for real files with controlled modification times.
"""

import os
from datetime import datetime
from types import SimpleNamespace

import pytest

from pairsync.sync.clock import Clock
from pairsync.sync.gateway import FileSystemGateway
from pairsync.sync.sync_file import SyncFile

T0 = datetime(2024, 1, 1, 10, 0, 0).timestamp()


class InMemoryFileSystem(FileSystemGateway):
    """Gateway keeping files as ``path -> (content, mtime)`` and logging calls."""

    def __init__(self):
        self.files = {}
        self.calls = []
        self.fail_on = None  # ("copy" | "delete", None) makes every such call fail

    def add(self, path, content=b"", mtime=T0):
        self.files[path] = (content, mtime)
        return SyncFile(path, stat_func=self.stat)

    def touch(self, path, mtime):
        content, _ = self.files[path]
        self.files[path] = (content, mtime)

    def stat(self, path):
        if path not in self.files:
            raise FileNotFoundError(path)
        content, mtime = self.files[path]
        return SimpleNamespace(st_mtime=mtime, st_size=len(content))

    def _maybe_fail(self, op):
        if self.fail_on and self.fail_on[0] == op:
            raise PermissionError(f"simulated {op} failure")

    def copy_file(self, source_path, dest_path):
        self.calls.append(("copy", source_path, dest_path))
        self._maybe_fail("copy")
        if source_path not in self.files:
            raise FileNotFoundError(source_path)
        self.files[dest_path] = self.files[source_path]

    def delete_file(self, path):
        self.calls.append(("delete", path))
        self._maybe_fail("delete")
        if path not in self.files:
            raise FileNotFoundError(path)
        del self.files[path]


class AtomicInMemoryFileSystem(InMemoryFileSystem):
    """In-memory gateway that also offers atomic replace."""

    supports_atomic_replace = True

    def replace_file(self, source_path, dest_path):
        self.calls.append(("replace", source_path, dest_path))
        self.files[dest_path] = self.files[source_path]


class FixedClock(Clock):
    def __init__(self, now):
        self._now = now

    def now(self):
        return self._now


@pytest.fixture
def memfs():
    return InMemoryFileSystem()


@pytest.fixture
def atomic_memfs():
    return AtomicInMemoryFileSystem()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 1, 12, 0, 0))


@pytest.fixture
def make_file(tmp_path):
    """Create a real file with the given content and modification time."""

    def _make(relative, content="", mtime=T0):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        os.utime(path, (mtime, mtime))
        return path

    return _make
