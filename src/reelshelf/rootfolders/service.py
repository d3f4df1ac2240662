"""Root folder registry reconciled against the filesystem."""

import logging
import os
import threading
import unicodedata

from reelshelf.contracts import DiskInspector, LibraryCatalogQuery, RootFolderStore
from reelshelf.error_handling import (
    InvalidPathError,
    RootFolderExistsError,
    RootFolderNotFoundError,
)

from .models import RootFolder, UnmappedFolder


class RootFolderService:
    """Manages root folders and works out which of their subfolders are unmapped.

    Free space and unmapped folders are recomputed on every read; the store
    only ever sees ids and paths.
    """

    def __init__(
        self,
        repository: RootFolderStore,
        catalog: LibraryCatalogQuery,
        disk_provider: DiskInspector,
        *,
        logger: logging.Logger | None = None,
    ):
        self.repository = repository
        self.catalog = catalog
        self.disk_provider = disk_provider
        self.logger = logger or logging.getLogger(__name__)
        self._add_lock = threading.Lock()

    def all(self) -> list[RootFolder]:
        """Return all root folders with free space and unmapped folders filled in.

        Folders missing from disk are returned as stored, without derived data.
        """
        root_folders = self.repository.all()

        for folder in root_folders:
            if self.disk_provider.folder_exists(folder.path):
                self._enrich(folder)

        return root_folders

    def add(self, root_folder: RootFolder) -> RootFolder:
        """Validate and store a new root folder.

        Raises:
            InvalidPathError: path is blank or not absolute
            RootFolderNotFoundError: path does not exist on disk
            RootFolderExistsError: an equal path is already registered
        """
        path = root_folder.path
        if not path or not path.strip() or not os.path.isabs(path):
            raise InvalidPathError(path)

        with self._add_lock:
            if not self.disk_provider.folder_exists(path):
                raise RootFolderNotFoundError(path)

            if any(
                self.disk_provider.paths_equal(existing.path, path)
                for existing in self.all()
            ):
                raise RootFolderExistsError(path)

            self.repository.add(root_folder)

        self.logger.info("Added root folder %s (id %s)", path, root_folder.id)
        self._enrich(root_folder)
        return root_folder

    def remove(self, root_folder_id: int) -> None:
        """Forget a root folder. The directory itself is left alone."""
        self.repository.delete(root_folder_id)

    def get_unmapped_folders(self, path: str | None) -> list[UnmappedFolder]:
        """List subfolders of ``path`` that no series claims, in listing order."""
        self.logger.debug("Generating list of unmapped folders")
        if not path:
            raise InvalidPathError(path, solution="Provide the path of a root folder")

        results: list[UnmappedFolder] = []

        if not self.disk_provider.folder_exists(path):
            self.logger.debug("Path supplied does not exist: %s", path)
            return results

        for series_folder in self.disk_provider.get_directories(path):
            if not self.catalog.series_path_exists(series_folder):
                full_path = os.path.abspath(unicodedata.normalize("NFC", series_folder))
                results.append(
                    UnmappedFolder(name=os.path.basename(full_path), path=full_path),
                )

        self.logger.debug("%s unmapped folders detected.", len(results))
        return results

    def free_space_on_drives(self) -> dict[str, int]:
        """Free bytes per drive root, querying each drive once.

        Only stored paths are needed, so folders are not enriched first. A drive
        whose query fails is left out of the result.
        """
        free_space: dict[str, int] = {}

        for root_folder in self.repository.all():
            path_root = self.disk_provider.get_path_root(root_folder.path)

            if path_root in free_space:
                continue

            try:
                free_space[path_root] = self.disk_provider.free_disk_space(root_folder.path)
            except Exception:
                self.logger.warning(
                    "Error getting free space for: %s",
                    path_root,
                    exc_info=True,
                )

        return free_space

    def _enrich(self, root_folder: RootFolder) -> None:
        root_folder.free_space = self.disk_provider.free_disk_space(root_folder.path)
        root_folder.unmapped_folders = self.get_unmapped_folders(root_folder.path)
