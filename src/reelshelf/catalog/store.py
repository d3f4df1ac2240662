"""Local SQLite catalog of series and episodes."""

import logging
import sqlite3

from reelshelf.contracts import DiskInspector
from reelshelf.error_handling import EpisodeNotFoundError
from reelshelf.storage import Database

from .models import Episode, Series

logger = logging.getLogger(__name__)


class CatalogStore:
    """Series and episode records kept in the Reelshelf database."""

    def __init__(self, database: Database, disk_provider: DiskInspector):
        self.database = database
        self.disk_provider = disk_provider
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with self.database.connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS series (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    path TEXT NOT NULL
                )
                """,
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS episodes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    series_id INTEGER NOT NULL REFERENCES series(id) ON DELETE CASCADE,
                    season_number INTEGER NOT NULL,
                    episode_number INTEGER NOT NULL,
                    title TEXT,
                    path TEXT NOT NULL
                )
                """,
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_episodes_series ON episodes(series_id)",
            )

    def add_series(self, series: Series) -> Series:
        """Insert a series and assign its id in place."""
        with self.database.connection() as conn:
            cursor = conn.execute(
                "INSERT INTO series (title, path) VALUES (?, ?)",
                (series.title, series.path),
            )
            series.id = cursor.lastrowid

        logger.info("Added series to catalog: %s (%s)", series.title, series.path)
        return series

    def all_series(self) -> list[Series]:
        """Return every series ordered by title."""
        with self.database.connection() as conn:
            cursor = conn.execute("SELECT id, title, path FROM series ORDER BY title")
            return [
                Series(id=row["id"], title=row["title"], path=row["path"])
                for row in cursor.fetchall()
            ]

    def series_path_exists(self, path: str) -> bool:
        """Whether any series already owns ``path``."""
        return any(
            self.disk_provider.paths_equal(series.path, path)
            for series in self.all_series()
        )

    def add_episode(self, episode: Episode) -> Episode:
        """Insert an episode and assign its id in place."""
        with self.database.connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO episodes (series_id, season_number, episode_number, title, path)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    episode.series_id,
                    episode.season_number,
                    episode.episode_number,
                    episode.title,
                    episode.path,
                ),
            )
            episode.id = cursor.lastrowid

        logger.info("Added episode to catalog: %s", episode)
        return episode

    def get_episode(self, episode_id: int) -> Episode:
        """Look up an episode with its series title.

        Raises:
            EpisodeNotFoundError: no episode has this id
        """
        with self.database.connection() as conn:
            row = conn.execute(
                """
                SELECT e.id, e.series_id, e.season_number, e.episode_number,
                       e.title, e.path, s.title AS series_title
                FROM episodes e JOIN series s ON s.id = e.series_id
                WHERE e.id = ?
                """,
                (episode_id,),
            ).fetchone()

        if row is None:
            raise EpisodeNotFoundError(episode_id)

        return self._row_to_episode(row)

    def _row_to_episode(self, row: sqlite3.Row) -> Episode:
        return Episode(
            id=row["id"],
            series_id=row["series_id"],
            season_number=row["season_number"],
            episode_number=row["episode_number"],
            title=row["title"] or "",
            path=row["path"],
            series_title=row["series_title"],
        )
