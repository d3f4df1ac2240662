"""Tests for the SQLite root folder store."""

import pytest

from reelshelf.rootfolders.models import RootFolder, UnmappedFolder
from reelshelf.rootfolders.repository import RootFolderRepository
from reelshelf.storage import Database


@pytest.fixture
def database(tmp_path):
    return Database(tmp_path / "data" / "reelshelf.db")


@pytest.fixture
def repository(database):
    return RootFolderRepository(database)


class TestRootFolderRepository:
    """Test root folder persistence."""

    def test_creates_database_directory(self, tmp_path):
        database = Database(tmp_path / "nested" / "dir" / "reelshelf.db")
        RootFolderRepository(database)

        assert (tmp_path / "nested" / "dir" / "reelshelf.db").exists()

    def test_add_assigns_ids(self, repository):
        first = repository.add(RootFolder(path="/media/tv"))
        second = repository.add(RootFolder(path="/media/anime"))

        assert first.id == 1
        assert second.id == 2

    def test_all_returns_in_id_order(self, repository):
        repository.add(RootFolder(path="/media/tv"))
        repository.add(RootFolder(path="/media/anime"))

        assert [f.path for f in repository.all()] == ["/media/tv", "/media/anime"]

    def test_derived_fields_not_persisted(self, repository):
        folder = RootFolder(
            path="/media/tv",
            free_space=1234,
            unmapped_folders=[UnmappedFolder(name="A", path="/media/tv/A")],
        )
        repository.add(folder)

        stored = repository.all()[0]

        assert stored.free_space == 0
        assert stored.unmapped_folders == []

    def test_delete(self, repository):
        folder = repository.add(RootFolder(path="/media/tv"))

        repository.delete(folder.id)

        assert repository.all() == []

    def test_delete_unknown_id_is_noop(self, repository):
        repository.add(RootFolder(path="/media/tv"))

        repository.delete(99)

        assert len(repository.all()) == 1

    def test_data_survives_new_repository(self, database):
        RootFolderRepository(database).add(RootFolder(path="/media/tv"))

        assert [f.path for f in RootFolderRepository(database).all()] == ["/media/tv"]
