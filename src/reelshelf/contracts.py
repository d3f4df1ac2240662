"""Collaborator interfaces used by the root folder service and conversion jobs.

Concrete implementations live in :mod:`reelshelf.disk`, :mod:`reelshelf.catalog`,
:mod:`reelshelf.rootfolders.repository` and :mod:`reelshelf.convert`. Tests and
alternative backends only need to satisfy these protocols.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from reelshelf.catalog.models import Episode
    from reelshelf.jobs.notification import ProgressNotification
    from reelshelf.rootfolders.models import RootFolder


class DiskInspector(Protocol):
    """Filesystem primitives."""

    def folder_exists(self, path: str) -> bool: ...

    def free_disk_space(self, path: str) -> int: ...

    def get_directories(self, path: str) -> list[str]: ...

    def paths_equal(self, first: str, second: str) -> bool: ...

    def get_path_root(self, path: str) -> str: ...


class LibraryCatalogQuery(Protocol):
    """Answers whether a catalog entry already claims a directory."""

    def series_path_exists(self, path: str) -> bool: ...


class RootFolderStore(Protocol):
    """Persistence for root folder records."""

    def all(self) -> list["RootFolder"]: ...

    def add(self, root_folder: "RootFolder") -> "RootFolder": ...

    def delete(self, root_folder_id: int) -> None: ...


class EpisodeLookup(Protocol):
    """Resolves an episode by id."""

    def get_episode(self, episode_id: int) -> "Episode": ...


class Transcoder(Protocol):
    """Converts an episode; returns the output path or None on failure."""

    def convert_file(
        self,
        episode: "Episode",
        notification: "ProgressNotification",
    ) -> str | None: ...


class Tagger(Protocol):
    """Writes metadata into a converted file."""

    def run_atomic_parsley(self, episode: "Episode", output_file: str | None) -> bool: ...
