"""Catalog entries."""

from dataclasses import dataclass


@dataclass
class Series:
    """A TV series and the folder its episodes live in."""

    title: str
    path: str
    id: int = 0

    def __str__(self) -> str:
        return self.title


@dataclass
class Episode:
    """A single episode file belonging to a series."""

    series_id: int
    season_number: int
    episode_number: int
    title: str
    path: str
    series_title: str = ""
    id: int = 0

    @property
    def code(self) -> str:
        """Season/episode code such as S01E02."""
        return f"S{self.season_number:02d}E{self.episode_number:02d}"

    def __str__(self) -> str:
        name = f"{self.series_title} - {self.code}" if self.series_title else self.code
        if self.title:
            name += f" - {self.title}"
        return name
