"""Series and episode catalog backends."""

from .models import Episode, Series
from .store import CatalogStore

__all__ = ["CatalogStore", "Episode", "Series"]
