"""Wrapper for AtomicParsley metadata tagging."""

import logging
import subprocess

from reelshelf.catalog.models import Episode
from reelshelf.config import ReelshelfConfig

logger = logging.getLogger(__name__)


class AtomicParsleyProvider:
    """Writes TV episode metadata into converted files."""

    def __init__(self, config: ReelshelfConfig):
        self.config = config
        self.atomicparsley_binary = config.atomicparsley_binary

    def build_command(self, episode: Episode, output_file: str | None) -> list[str]:
        """Build the AtomicParsley command line."""
        return [
            self.atomicparsley_binary,
            output_file or "",
            "--overWrite",
            "--TVShowName",
            episode.series_title,
            "--TVSeasonNum",
            str(episode.season_number),
            "--TVEpisodeNum",
            str(episode.episode_number),
            "--title",
            episode.title,
            "--stik",
            "TV Show",
        ]

    def run_atomic_parsley(self, episode: Episode, output_file: str | None) -> bool:
        """Tag ``output_file`` with the metadata of ``episode``.

        The file is passed through as given, even when empty. Failures are
        logged and reported through the return value.
        """
        if not output_file:
            logger.warning(f"Tagging {episode} without an output file")

        cmd = self.build_command(episode, output_file)
        logger.debug("Running: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.config.atomicparsley_timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error(
                f"AtomicParsley timed out after {self.config.atomicparsley_timeout}s tagging {episode}",
            )
            return False
        except OSError as e:
            logger.exception(f"Failed to launch AtomicParsley: {e}")
            return False

        if result.returncode != 0:
            logger.error(
                f"AtomicParsley exited with code {result.returncode} tagging {episode}: "
                f"{(result.stderr or result.stdout).strip()}",
            )
            return False

        logger.info(f"Tagged {output_file} for {episode}")
        return True

    def get_version(self) -> str | None:
        """Get the version of AtomicParsley being used."""
        try:
            result = subprocess.run(
                [self.atomicparsley_binary, "--version"],
                check=False,
                capture_output=True,
                text=True,
                timeout=self.config.tool_version_timeout,
            )

            if result.returncode == 0:
                return result.stdout.strip() or None
        except Exception as e:
            logger.warning(f"Could not get AtomicParsley version: {e}")

        return None
