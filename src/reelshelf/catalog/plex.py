"""Plex-backed catalog query."""

import logging

from plexapi.server import PlexServer  # type: ignore[import-untyped]

from reelshelf.config import ReelshelfConfig
from reelshelf.contracts import DiskInspector

logger = logging.getLogger(__name__)


class PlexCatalog:
    """Treats folders already known to a Plex TV library as claimed."""

    def __init__(self, config: ReelshelfConfig, disk_provider: DiskInspector):
        self.config = config
        self.disk_provider = disk_provider
        self.plex_server: PlexServer | None = None

        if config.plex_url and config.plex_token:
            try:
                self.plex_server = PlexServer(config.plex_url, config.plex_token)
                logger.info(
                    "Connected to Plex server: %s",
                    self.plex_server.friendlyName,
                )
            except Exception as e:
                logger.warning("Failed to connect to Plex server: %s", e)
                self.plex_server = None
        else:
            logger.warning("Plex URL or token not configured, no folders will be claimed")

    def show_locations(self) -> list[str]:
        """Folders of every show in the configured TV library."""
        if not self.plex_server:
            return []

        try:
            section = self.plex_server.library.section(self.config.tv_library)
            locations: list[str] = []
            for show in section.all():
                locations.extend(show.locations)
            return locations
        except Exception:
            logger.exception(
                "Failed to read shows from Plex library '%s'",
                self.config.tv_library,
            )
            return []

    def series_path_exists(self, path: str) -> bool:
        """Whether a Plex show lives in ``path``."""
        return any(
            self.disk_provider.paths_equal(location, path)
            for location in self.show_locations()
        )

    def verify_connection(self) -> bool:
        """Verify that Plex connection is working."""
        if not self.plex_server:
            return False

        try:
            _ = self.plex_server.friendlyName
            return True
        except Exception as e:
            logger.error("Plex connection verification failed: %s", e)
            return False
