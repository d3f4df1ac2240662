"""SQLite-backed root folder store."""

import logging

from reelshelf.storage import Database

from .models import RootFolder

logger = logging.getLogger(__name__)


class RootFolderRepository:
    """Persists root folder ids and paths.

    Derived fields (free space, unmapped folders) are never written.
    """

    def __init__(self, database: Database):
        self.database = database
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with self.database.connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS root_folders (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    path TEXT NOT NULL
                )
                """,
            )

    def all(self) -> list[RootFolder]:
        """Return every stored root folder ordered by id."""
        with self.database.connection() as conn:
            cursor = conn.execute("SELECT id, path FROM root_folders ORDER BY id")
            return [RootFolder(id=row["id"], path=row["path"]) for row in cursor.fetchall()]

    def add(self, root_folder: RootFolder) -> RootFolder:
        """Insert a root folder and assign its id in place."""
        with self.database.connection() as conn:
            cursor = conn.execute(
                "INSERT INTO root_folders (path) VALUES (?)",
                (root_folder.path,),
            )
            root_folder.id = cursor.lastrowid

        logger.debug("Stored root folder %s as id %s", root_folder.path, root_folder.id)
        return root_folder

    def delete(self, root_folder_id: int) -> None:
        """Delete a root folder by id. Unknown ids are ignored."""
        with self.database.connection() as conn:
            cursor = conn.execute(
                "DELETE FROM root_folders WHERE id = ?",
                (root_folder_id,),
            )
            if cursor.rowcount > 0:
                logger.info("Removed root folder %s", root_folder_id)
            else:
                logger.debug("Root folder %s was not stored", root_folder_id)
