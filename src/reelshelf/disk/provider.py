"""Filesystem inspection used by the root folder service."""

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class DiskProvider:
    """Thin wrapper over os/shutil so callers can be tested without real disks."""

    def __init__(self, *, case_insensitive: bool = False):
        self.case_insensitive = case_insensitive

    def folder_exists(self, path: str) -> bool:
        """Check whether ``path`` is an existing directory."""
        return os.path.isdir(path)

    def free_disk_space(self, path: str) -> int:
        """Free bytes available on the volume holding ``path``.

        Raises:
            OSError: the path cannot be queried
        """
        return shutil.disk_usage(path).free

    def get_directories(self, path: str) -> list[str]:
        """Immediate subdirectories of ``path`` as absolute paths, in listing order."""
        base = os.path.abspath(path)
        with os.scandir(base) as entries:
            return [
                os.path.join(base, entry.name)
                for entry in entries
                if entry.is_dir()
            ]

    def normalize_path(self, path: str) -> str:
        """Normalize a path for comparison."""
        normalized = os.path.normcase(os.path.normpath(path))
        anchor = Path(normalized).anchor
        if normalized != anchor:
            normalized = normalized.rstrip("/\\")
        if self.case_insensitive:
            normalized = normalized.casefold()
        return normalized

    def paths_equal(self, first: str, second: str) -> bool:
        """Compare two paths after normalization."""
        return self.normalize_path(first) == self.normalize_path(second)

    def get_path_root(self, path: str) -> str:
        """Mount point (or drive anchor on Windows) that holds ``path``."""
        current = Path(os.path.abspath(path))

        if os.name == "nt":
            return current.anchor

        while not os.path.ismount(current):
            if current.parent == current:
                break
            current = current.parent

        logger.debug("Path root for %s is %s", path, current)
        return str(current)
