"""Root folder records."""

from dataclasses import dataclass, field


@dataclass
class UnmappedFolder:
    """A directory under a root folder that no series claims yet."""

    name: str
    path: str


@dataclass
class RootFolder:
    """A top-level library directory.

    Only ``id`` and ``path`` are stored. ``free_space`` and
    ``unmapped_folders`` are filled in each time the folder is read.
    """

    path: str
    id: int = 0
    free_space: int = 0
    unmapped_folders: list[UnmappedFolder] = field(default_factory=list)

    def __str__(self) -> str:
        return self.path
