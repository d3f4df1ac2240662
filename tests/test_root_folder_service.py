"""Tests for root folder registry and reconciliation."""

import logging
import threading
from unittest.mock import Mock

import pytest

from reelshelf.error_handling import (
    InvalidInputError,
    InvalidPathError,
    NotFoundError,
    RootFolderExistsError,
    RootFolderNotFoundError,
)
from reelshelf.rootfolders.models import RootFolder, UnmappedFolder
from reelshelf.rootfolders.service import RootFolderService


class InMemoryStore:
    """Root folder store that assigns sequential ids."""

    def __init__(self, folders: list[RootFolder] | None = None):
        self.folders = list(folders or [])
        self.added: list[RootFolder] = []
        self.deleted: list[int] = []
        self._next_id = max((f.id for f in self.folders), default=0) + 1

    def all(self) -> list[RootFolder]:
        # Fresh copies, like rows read back from a database
        return [RootFolder(id=f.id, path=f.path) for f in self.folders]

    def add(self, root_folder: RootFolder) -> RootFolder:
        root_folder.id = self._next_id
        self._next_id += 1
        self.folders.append(RootFolder(id=root_folder.id, path=root_folder.path))
        self.added.append(root_folder)
        return root_folder

    def delete(self, root_folder_id: int) -> None:
        self.deleted.append(root_folder_id)
        self.folders = [f for f in self.folders if f.id != root_folder_id]


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def service(store, mock_catalog, fake_disk):
    return RootFolderService(store, mock_catalog, fake_disk)


class TestAll:
    """Test listing root folders."""

    def test_enriches_existing_folders(self, store, service, fake_disk, mock_catalog):
        """Scenario: /media/tv holds ShowA (claimed) and ShowB (unclaimed)."""
        fake_disk.add_folder("/media/tv", ["ShowA", "ShowB"], free=1000)
        mock_catalog.series_path_exists.side_effect = lambda p: p == "/media/tv/ShowA"
        store.folders.append(RootFolder(id=1, path="/media/tv"))

        folders = service.all()

        assert len(folders) == 1
        assert folders[0].free_space == 1000
        assert folders[0].unmapped_folders == [
            UnmappedFolder(name="ShowB", path="/media/tv/ShowB"),
        ]

    def test_missing_folder_left_at_defaults(self, store, service, fake_disk):
        """A folder gone from disk is returned without derived data."""
        store.folders.append(RootFolder(id=1, path="/media/gone"))

        folders = service.all()

        assert folders == [RootFolder(id=1, path="/media/gone")]
        assert folders[0].free_space == 0
        assert folders[0].unmapped_folders == []
        assert fake_disk.free_space_calls == []

    def test_missing_folder_is_not_deleted(self, store, service):
        store.folders.append(RootFolder(id=1, path="/media/gone"))

        service.all()

        assert store.deleted == []
        assert [f.id for f in store.folders] == [1]

    def test_recomputes_on_every_call(self, store, service, fake_disk):
        fake_disk.add_folder("/media/tv", ["ShowA"], free=500)
        store.folders.append(RootFolder(id=1, path="/media/tv"))

        first = service.all()
        fake_disk.free_space["/media/tv"] = 200
        fake_disk.listings["/media/tv"].append("/media/tv/ShowB")
        second = service.all()

        assert first[0].free_space == 500
        assert second[0].free_space == 200
        assert [f.name for f in second[0].unmapped_folders] == ["ShowA", "ShowB"]

    def test_no_folders(self, service):
        assert service.all() == []


class TestAdd:
    """Test adding root folders."""

    @pytest.mark.parametrize("path", ["", "   ", "media/tv", "./tv", "tv"])
    def test_invalid_paths_rejected_without_write(self, store, service, path):
        with pytest.raises(InvalidPathError):
            service.add(RootFolder(path=path))

        assert store.added == []

    def test_invalid_path_is_value_error(self, service):
        with pytest.raises(ValueError):
            service.add(RootFolder(path="relative"))

    def test_missing_folder_rejected_without_write(self, store, service):
        with pytest.raises(RootFolderNotFoundError) as exc_info:
            service.add(RootFolder(path="/media/missing"))

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.path == "/media/missing"
        assert store.added == []

    def test_duplicate_rejected_without_write(self, store, service, fake_disk):
        fake_disk.add_folder("/media/tv")
        store.folders.append(RootFolder(id=1, path="/media/tv"))

        with pytest.raises(RootFolderExistsError):
            service.add(RootFolder(path="/media/tv"))

        assert store.added == []

    def test_duplicate_with_trailing_separator(self, store, service, fake_disk):
        fake_disk.add_folder("/media/tv")
        fake_disk.folders.add("/media/tv/")
        store.folders.append(RootFolder(id=1, path="/media/tv"))

        with pytest.raises(RootFolderExistsError):
            service.add(RootFolder(path="/media/tv/"))

        assert store.added == []

    def test_duplicate_by_case_on_case_insensitive_disk(self, store, service, fake_disk):
        fake_disk.case_insensitive = True
        fake_disk.add_folder("/media/tv")
        fake_disk.folders.add("/Media/TV")
        store.folders.append(RootFolder(id=1, path="/media/tv"))

        with pytest.raises(RootFolderExistsError):
            service.add(RootFolder(path="/Media/TV"))

        assert store.added == []

    def test_case_difference_allowed_on_case_sensitive_disk(self, store, service, fake_disk):
        fake_disk.add_folder("/media/tv")
        fake_disk.add_folder("/Media/TV")
        store.folders.append(RootFolder(id=1, path="/media/tv"))

        added = service.add(RootFolder(path="/Media/TV"))

        assert store.added == [added]
        assert added.path == "/Media/TV"

    def test_add_persists_then_enriches(self, store, service, fake_disk, mock_catalog):
        fake_disk.add_folder("/media/tv", ["ShowA", "ShowB"], free=4096)
        mock_catalog.series_path_exists.side_effect = lambda p: p.endswith("ShowA")

        added = service.add(RootFolder(path="/media/tv"))

        assert added.id == 1
        assert store.added == [added]
        assert added.free_space == 4096
        assert added.unmapped_folders == [
            UnmappedFolder(name="ShowB", path="/media/tv/ShowB"),
        ]

    def test_validation_happens_before_existence_check(self, store, mock_catalog):
        disk = Mock()

        service = RootFolderService(store, mock_catalog, disk)
        with pytest.raises(InvalidInputError):
            service.add(RootFolder(path=""))

        disk.folder_exists.assert_not_called()

    def test_concurrent_adds_of_same_path_store_once(self, store, mock_catalog, fake_disk):
        fake_disk.add_folder("/media/tv")
        service = RootFolderService(store, mock_catalog, fake_disk)
        errors: list[Exception] = []

        def add() -> None:
            try:
                service.add(RootFolder(path="/media/tv"))
            except RootFolderExistsError as e:
                errors.append(e)

        threads = [threading.Thread(target=add) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.added) == 1
        assert len(errors) == 7


class TestRemove:
    """Test removing root folders."""

    def test_remove_deletes_by_id(self, store, service):
        store.folders.append(RootFolder(id=3, path="/media/tv"))

        service.remove(3)

        assert store.deleted == [3]
        assert store.folders == []

    def test_remove_unknown_id_does_not_raise(self, store, service):
        service.remove(42)

        assert store.deleted == [42]


class TestGetUnmappedFolders:
    """Test unmapped folder discovery."""

    @pytest.mark.parametrize("path", ["", None])
    def test_empty_path_rejected(self, service, path):
        with pytest.raises(InvalidPathError):
            service.get_unmapped_folders(path)

    def test_missing_path_returns_empty(self, service):
        assert service.get_unmapped_folders("/does/not/exist") == []

    def test_claimed_folders_excluded_in_listing_order(self, service, fake_disk, mock_catalog):
        fake_disk.add_folder("/media/tv", ["C", "A", "B"])
        mock_catalog.series_path_exists.side_effect = lambda p: p == "/media/tv/B"

        unmapped = service.get_unmapped_folders("/media/tv")

        assert unmapped == [
            UnmappedFolder(name="C", path="/media/tv/C"),
            UnmappedFolder(name="A", path="/media/tv/A"),
        ]

    def test_catalog_asked_about_each_subfolder(self, service, fake_disk, mock_catalog):
        fake_disk.add_folder("/media/tv", ["A", "B"])

        service.get_unmapped_folders("/media/tv")

        assert [c.args[0] for c in mock_catalog.series_path_exists.call_args_list] == [
            "/media/tv/A",
            "/media/tv/B",
        ]

    def test_all_claimed(self, service, fake_disk, mock_catalog):
        fake_disk.add_folder("/media/tv", ["A", "B"])
        mock_catalog.series_path_exists.return_value = True

        assert service.get_unmapped_folders("/media/tv") == []

    def test_uses_injected_logger(self, store, mock_catalog, fake_disk):
        logger = Mock(spec=logging.Logger)
        service = RootFolderService(store, mock_catalog, fake_disk, logger=logger)

        service.get_unmapped_folders("/does/not/exist")

        logger.debug.assert_any_call("Path supplied does not exist: %s", "/does/not/exist")


class TestFreeSpaceOnDrives:
    """Test free space aggregation per drive."""

    def test_same_drive_queried_once(self, store, service, fake_disk):
        fake_disk.add_folder("/mnt/a/tv", free=100)
        fake_disk.add_folder("/mnt/a/anime", free=999)
        fake_disk.roots = {"/mnt/a/tv": "/mnt/a", "/mnt/a/anime": "/mnt/a"}
        store.folders += [
            RootFolder(id=1, path="/mnt/a/tv"),
            RootFolder(id=2, path="/mnt/a/anime"),
        ]

        free_space = service.free_space_on_drives()

        assert free_space == {"/mnt/a": 100}

    def test_one_entry_per_drive(self, store, service, fake_disk):
        fake_disk.add_folder("/mnt/a/tv", free=100)
        fake_disk.add_folder("/mnt/b/tv", free=200)
        fake_disk.roots = {"/mnt/a/tv": "/mnt/a", "/mnt/b/tv": "/mnt/b"}
        store.folders += [
            RootFolder(id=1, path="/mnt/a/tv"),
            RootFolder(id=2, path="/mnt/b/tv"),
        ]

        assert service.free_space_on_drives() == {"/mnt/a": 100, "/mnt/b": 200}

    def test_failed_drive_omitted(self, store, service, fake_disk, caplog):
        fake_disk.add_folder("/mnt/a/tv", free=100)
        fake_disk.add_folder("/mnt/b/tv", free=200)
        fake_disk.roots = {"/mnt/a/tv": "/mnt/a", "/mnt/b/tv": "/mnt/b"}
        store.folders += [
            RootFolder(id=1, path="/mnt/a/tv"),
            RootFolder(id=2, path="/mnt/b/tv"),
        ]
        fake_disk.failing.add("/mnt/a/tv")

        with caplog.at_level(logging.WARNING):
            free_space = service.free_space_on_drives()

        assert free_space == {"/mnt/b": 200}
        assert "Error getting free space for: /mnt/a" in caplog.text

    def test_unreadable_listing_does_not_block_other_drives(self, store, service, fake_disk):
        fake_disk.add_folder("/mnt/a/tv", free=100)
        fake_disk.add_folder("/mnt/b/tv", free=200)
        fake_disk.roots = {"/mnt/a/tv": "/mnt/a", "/mnt/b/tv": "/mnt/b"}
        store.folders += [
            RootFolder(id=1, path="/mnt/a/tv"),
            RootFolder(id=2, path="/mnt/b/tv"),
        ]
        fake_disk.get_directories = Mock(side_effect=PermissionError("/mnt/a/tv"))

        assert service.free_space_on_drives() == {"/mnt/a": 100, "/mnt/b": 200}
        fake_disk.get_directories.assert_not_called()

    def test_missing_root_folders_still_queried(self, store, service, fake_disk):
        fake_disk.free_space["/mnt/offline/tv"] = 0
        fake_disk.failing.add("/mnt/offline/tv")
        fake_disk.roots = {"/mnt/offline/tv": "/mnt/offline"}
        store.folders.append(RootFolder(id=1, path="/mnt/offline/tv"))

        assert service.free_space_on_drives() == {}

    def test_no_root_folders(self, service):
        assert service.free_space_on_drives() == {}
