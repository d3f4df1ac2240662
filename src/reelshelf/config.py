"""Configuration management for Reelshelf."""

from pathlib import Path
from typing import Literal

import tomli
from pydantic import BaseModel, Field, field_validator


class ReelshelfConfig(BaseModel):
    """Main configuration for Reelshelf."""

    # Paths
    data_dir: Path = Field(default=Path("~/.local/share/reelshelf"))
    log_dir: Path = Field(default=Path("~/.local/share/reelshelf/logs"))
    conversion_dir: Path = Field(default=Path("~/.local/share/reelshelf/converted"))

    # HandBrake integration
    handbrake_binary: str = Field(default="HandBrakeCLI")
    handbrake_preset: str = Field(default="Apple 1080p30 Surround")
    output_extension: str = Field(default="m4v")

    # AtomicParsley integration
    atomicparsley_binary: str = Field(default="AtomicParsley")

    # Timeout Settings (seconds)
    handbrake_timeout: int = Field(default=14400)  # 4 hours
    atomicparsley_timeout: int = Field(default=120)  # 2 minutes
    tool_version_timeout: int = Field(default=10)  # 10 seconds

    # Conversion behavior
    stop_on_conversion_failure: bool = Field(default=False)

    # Root folders
    case_insensitive_paths: bool = Field(default=False)

    # Catalog
    catalog_source: Literal["local", "plex"] = Field(default="local")
    plex_url: str | None = None
    plex_token: str | None = None
    tv_library: str = Field(default="TV Shows")

    @field_validator("data_dir", "log_dir", "conversion_dir", mode="before")
    @classmethod
    def expand_paths(cls, v: Path | str) -> Path:
        """Expand user home directory in paths."""
        if isinstance(v, str):
            v = Path(v)
        return v.expanduser().resolve()

    @field_validator("output_extension", mode="after")
    @classmethod
    def strip_extension_dot(cls, v: str) -> str:
        """Store the output extension without a leading dot."""
        v = v.lstrip(".")
        if not v:
            msg = "output_extension must not be empty"
            raise ValueError(msg)
        return v

    @property
    def database_path(self) -> Path:
        """SQLite database holding root folders and the local catalog."""
        return self.data_dir / "reelshelf.db"

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        for dir_path in [self.data_dir, self.log_dir, self.conversion_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)


def load_config(config_path: Path | None = None) -> ReelshelfConfig:
    """Load configuration from file or defaults."""
    if config_path is None:
        # User config first, then current directory
        possible_paths = [
            Path.home() / ".config" / "reelshelf" / "config.toml",
            Path.cwd() / "reelshelf.toml",
        ]

        for path in possible_paths:
            if path.exists():
                config_path = path
                break

    if config_path and config_path.exists():
        with open(config_path, "rb") as f:
            config_data = tomli.load(f)
        return ReelshelfConfig(**config_data)
    return ReelshelfConfig()


def create_sample_config(path: Path) -> None:
    """Create a sample configuration file."""
    sample_config = """# Reelshelf Configuration
# =======================

# ============================================================================
# DIRECTORIES
# ============================================================================

data_dir = "~/.local/share/reelshelf"                 # Root folder registry and catalog database
log_dir = "~/.local/share/reelshelf/logs"             # Log files
conversion_dir = "~/.local/share/reelshelf/converted" # HandBrake output files

# ============================================================================
# CONVERSION
# ============================================================================

handbrake_binary = "HandBrakeCLI"                     # HandBrake command-line executable
handbrake_preset = "Apple 1080p30 Surround"           # HandBrake preset name
output_extension = "m4v"                              # Container for converted episodes
atomicparsley_binary = "AtomicParsley"                # Metadata tagger executable

# Stop before tagging when HandBrake produces no output file.
# Off by default: the tagger still runs and the job reports completion.
stop_on_conversion_failure = false

# ============================================================================
# ROOT FOLDERS & CATALOG
# ============================================================================

case_insensitive_paths = false                        # Treat /Media/TV and /media/tv as the same root folder
catalog_source = "local"                              # "local" (built-in database) or "plex"

# Plex catalog (only used when catalog_source = "plex")
# plex_url = "http://localhost:32400"
# plex_token = "your_plex_token_here"
tv_library = "TV Shows"

# ============================================================================
# ADVANCED SETTINGS
# ============================================================================

handbrake_timeout = 14400                             # HandBrake conversion timeout (4 hours)
atomicparsley_timeout = 120                           # AtomicParsley tagging timeout
tool_version_timeout = 10                             # Version/availability checks
"""

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(sample_config)
