"""Log file listing."""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass
class LogFile:
    """A log file in the log directory and where clients can fetch it."""

    filename: str
    last_write_time: datetime
    contents_url: str
    download_url: str


def list_log_files(log_dir: Path, base_url: str = "/api/log/file") -> list[LogFile]:
    """List log files (including rotated ones), newest first."""
    if not log_dir.is_dir():
        return []

    log_files = []
    for path in log_dir.glob("*.log*"):
        if not path.is_file():
            continue
        log_files.append(
            LogFile(
                filename=path.name,
                last_write_time=datetime.fromtimestamp(path.stat().st_mtime, tz=UTC),
                contents_url=f"{base_url.rstrip('/')}/{path.name}",
                download_url=f"/logfile/{path.name}",
            ),
        )

    return sorted(log_files, key=lambda f: f.last_write_time, reverse=True)
