"""Root folder registry and reconciliation against the filesystem."""

from .models import RootFolder, UnmappedFolder
from .repository import RootFolderRepository
from .service import RootFolderService

__all__ = [
    "RootFolder",
    "RootFolderRepository",
    "RootFolderService",
    "UnmappedFolder",
]
