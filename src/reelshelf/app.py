"""Wires configuration into concrete services."""

import logging

from .catalog.plex import PlexCatalog
from .catalog.store import CatalogStore
from .config import ReelshelfConfig
from .contracts import LibraryCatalogQuery
from .convert.atomicparsley import AtomicParsleyProvider
from .convert.handbrake import HandbrakeProvider
from .disk.provider import DiskProvider
from .jobs.commands import ConvertEpisodeCommand
from .jobs.convert_episode import ConvertEpisodeJob
from .jobs.runner import JobRunner
from .rootfolders.repository import RootFolderRepository
from .rootfolders.service import RootFolderService
from .storage.database import Database

logger = logging.getLogger(__name__)


class Reelshelf:
    """Holds the services built from one configuration."""

    def __init__(self, config: ReelshelfConfig):
        self.config = config
        config.ensure_directories()
        self.database = Database(config.database_path)
        self.disk_provider = DiskProvider(case_insensitive=config.case_insensitive_paths)
        self.catalog_store = CatalogStore(self.database, self.disk_provider)
        self.catalog = self._build_catalog_query()
        self.root_folders = RootFolderService(
            RootFolderRepository(self.database),
            self.catalog,
            self.disk_provider,
        )
        self.handbrake = HandbrakeProvider(config)
        self.atomic_parsley = AtomicParsleyProvider(config)
        self.job_runner = JobRunner()
        self.job_runner.register(
            ConvertEpisodeCommand().name,
            ConvertEpisodeJob(
                self.handbrake,
                self.atomic_parsley,
                self.catalog_store,
                stop_on_failure=config.stop_on_conversion_failure,
            ),
        )

    def _build_catalog_query(self) -> LibraryCatalogQuery:
        if self.config.catalog_source == "plex":
            logger.debug("Using Plex library '%s' as catalog", self.config.tv_library)
            return PlexCatalog(self.config, self.disk_provider)
        return self.catalog_store
