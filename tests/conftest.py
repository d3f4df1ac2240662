"""Shared test configuration and fixtures."""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest

from reelshelf.catalog.models import Episode
from reelshelf.cli import cleanup_logging
from reelshelf.config import ReelshelfConfig


@pytest.fixture(scope="function", autouse=True)
def cleanup_logging_handlers():
    """Automatically cleanup logging handlers after each test to prevent ResourceWarnings."""
    yield
    cleanup_logging()


@pytest.fixture(scope="function", autouse=True)
def reset_logging():
    """Reset logging configuration after each test."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)


@pytest.fixture
def config(tmp_path):
    """Configuration rooted in a temporary directory."""
    return ReelshelfConfig(
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "logs",
        conversion_dir=tmp_path / "converted",
    )


@pytest.fixture
def episode(tmp_path):
    """An episode whose source file exists."""
    source = tmp_path / "source" / "show.s01e02.mkv"
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text("fake video content")
    return Episode(
        id=7,
        series_id=1,
        season_number=1,
        episode_number=2,
        title="The Second One",
        path=str(source),
        series_title="Test Show",
    )


class FakeDiskProvider:
    """In-memory disk: a set of folders, listings and free space per path."""

    def __init__(self):
        self.folders: set[str] = set()
        self.listings: dict[str, list[str]] = {}
        self.free_space: dict[str, int] = {}
        self.roots: dict[str, str] = {}
        self.failing: set[str] = set()
        self.free_space_calls: list[str] = []
        self.case_insensitive = False

    def add_folder(self, path: str, children: list[str] | None = None, free: int = 0) -> None:
        self.folders.add(path)
        self.listings[path] = [str(Path(path) / child) for child in (children or [])]
        self.free_space[path] = free
        for child in self.listings[path]:
            self.folders.add(child)

    def folder_exists(self, path: str) -> bool:
        return path in self.folders

    def free_disk_space(self, path: str) -> int:
        self.free_space_calls.append(path)
        if path in self.failing:
            raise OSError(f"cannot stat {path}")
        return self.free_space.get(path, 0)

    def get_directories(self, path: str) -> list[str]:
        return list(self.listings.get(path, []))

    def paths_equal(self, first: str, second: str) -> bool:
        a, b = first.rstrip("/"), second.rstrip("/")
        if self.case_insensitive:
            a, b = a.lower(), b.lower()
        return a == b

    def get_path_root(self, path: str) -> str:
        return self.roots.get(path, "/")


@pytest.fixture
def fake_disk():
    return FakeDiskProvider()


@pytest.fixture
def mock_catalog():
    catalog = Mock()
    catalog.series_path_exists.return_value = False
    return catalog
