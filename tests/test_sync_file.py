"""Tests for pairsync.sync.sync_file."""

import os
from datetime import datetime

import pytest

from pairsync.sync.sync_file import FileMetadata, SyncFile

from conftest import T0


class TestSyncFile:

    def test_accepts_path_objects(self, tmp_path):
        f = SyncFile(tmp_path / "notes.txt")
        assert f.full_path == str(tmp_path / "notes.txt")
        assert f.name == "notes.txt"

    def test_full_path_read_only(self):
        f = SyncFile("/a/notes.txt")
        with pytest.raises(AttributeError):
            f.full_path = "/b/notes.txt"

    def test_retrieve_metadata(self, make_file):
        path = make_file("notes.txt", "12345", mtime=T0)
        meta = SyncFile(path).retrieve_metadata()

        assert meta.last_modified == datetime.fromtimestamp(T0)
        assert meta.size == 5

    def test_metadata_not_cached(self, make_file):
        path = make_file("notes.txt", "x", mtime=T0)
        f = SyncFile(path)
        first = f.retrieve_metadata()

        os.utime(path, (T0 + 30, T0 + 30))
        second = f.retrieve_metadata()

        assert second.last_modified > first.last_modified

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SyncFile(tmp_path / "gone.txt").retrieve_metadata()

    def test_injected_stat(self, memfs):
        f = memfs.add("/m/notes.txt", b"abc", mtime=T0 + 5)
        meta = f.retrieve_metadata()
        assert meta.size == 3
        assert meta.last_modified == datetime.fromtimestamp(T0 + 5)


def test_metadata_to_dict():
    meta = FileMetadata(last_modified=datetime(2024, 1, 1, 12, 0), size=10)
    assert meta.to_dict() == {'last_modified': '2024-01-01T12:00:00', 'size': 10}
