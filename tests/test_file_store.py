"""Unit tests for snapshot storage."""

import pytest
from unittest.mock import patch

from gvt.core.exceptions import StorageFaultError
from gvt.storage.file_store import SnapshotStore
from gvt.storage.layout import RepositoryLayout


class TestSnapshotStore:
    """Test cases for SnapshotStore."""

    @pytest.fixture
    def layout(self, tmp_path):
        layout = RepositoryLayout(tmp_path)
        layout.files_dir.mkdir(parents=True)
        return layout

    @pytest.fixture
    def store(self, layout):
        return SnapshotStore(layout)

    @pytest.fixture
    def populated_store(self, store, layout):
        """Store with snapshot 0 holding two files."""
        snapshot_dir = store.create_empty_snapshot(0)
        (snapshot_dir / "a.txt").write_text("alpha")
        (snapshot_dir / "b.txt").write_text("beta")
        return store

    def test_create_empty_snapshot(self, store, layout):
        snapshot_dir = store.create_empty_snapshot(0)

        assert snapshot_dir == layout.files_dir / "0"
        assert snapshot_dir.is_dir()
        assert store.snapshot_exists(0)
        assert store.list_files(0) == []

    def test_create_existing_snapshot_fails(self, store):
        store.create_empty_snapshot(0)

        with pytest.raises(StorageFaultError, match="already exists"):
            store.create_empty_snapshot(0)

    def test_clone_copies_every_file(self, populated_store, layout):
        populated_store.clone_snapshot(0, 1)

        assert populated_store.list_files(1) == ["a.txt", "b.txt"]
        assert (layout.snapshot_dir(1) / "a.txt").read_text() == "alpha"
        assert (layout.snapshot_dir(1) / "b.txt").read_text() == "beta"

    def test_clone_is_independent_copy(self, populated_store, layout):
        populated_store.clone_snapshot(0, 1)
        (layout.snapshot_dir(1) / "a.txt").write_text("changed")

        assert (layout.snapshot_dir(0) / "a.txt").read_text() == "alpha"

    def test_clone_skips_directories(self, populated_store, layout):
        (layout.snapshot_dir(0) / "nested").mkdir()

        populated_store.clone_snapshot(0, 1)

        assert not (layout.snapshot_dir(1) / "nested").exists()

    def test_clone_missing_source_fails(self, store):
        with pytest.raises(StorageFaultError, match="missing"):
            store.clone_snapshot(3, 4)

    def test_clone_copy_failure_is_storage_fault(self, populated_store):
        with patch("gvt.storage.file_store.shutil.copyfile", side_effect=OSError("disk full")):
            with pytest.raises(StorageFaultError, match="disk full"):
                populated_store.clone_snapshot(0, 1)

    def test_put_file_replaces_stored_copy(self, populated_store, layout, tmp_path):
        source = tmp_path / "a.txt"
        source.write_text("new alpha")

        populated_store.put_file(0, source, "a.txt")

        assert (layout.snapshot_dir(0) / "a.txt").read_text() == "new alpha"

    def test_remove_file(self, populated_store):
        assert populated_store.remove_file(0, "a.txt") is True
        assert populated_store.list_files(0) == ["b.txt"]
        assert populated_store.remove_file(0, "a.txt") is False

    def test_restore_snapshot_overwrites_only_snapshot_files(self, populated_store, tmp_path):
        target = tmp_path / "work"
        target.mkdir()
        (target / "a.txt").write_text("local edit")
        (target / "other.txt").write_text("untouched")

        restored = populated_store.restore_snapshot(0, target)

        assert restored == ["a.txt", "b.txt"]
        assert (target / "a.txt").read_text() == "alpha"
        assert (target / "b.txt").read_text() == "beta"
        assert (target / "other.txt").read_text() == "untouched"

    def test_list_snapshots(self, store, layout):
        assert store.list_snapshots() == []

        store.create_empty_snapshot(0)
        store.create_empty_snapshot(2)
        store.create_empty_snapshot(10)
        (layout.files_dir / "junk").mkdir()

        assert store.list_snapshots() == [0, 2, 10]
