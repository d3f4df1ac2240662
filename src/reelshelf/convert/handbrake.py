"""Wrapper for HandBrakeCLI conversions."""

import logging
import re
import subprocess
import threading
from pathlib import Path

from reelshelf.catalog.models import Episode
from reelshelf.config import ReelshelfConfig
from reelshelf.jobs.notification import ProgressNotification

logger = logging.getLogger(__name__)

PROGRESS_PATTERN = re.compile(r"Encoding: task \d+ of \d+, (?P<percent>\d+(?:\.\d+)?) %")


class HandbrakeProvider:
    """Runs HandBrakeCLI for one episode and streams its progress."""

    def __init__(self, config: ReelshelfConfig):
        self.config = config
        self.handbrake_binary = config.handbrake_binary

    def output_path(self, episode: Episode) -> Path:
        """Where the converted file for ``episode`` is written."""
        source = Path(episode.path)
        return self.config.conversion_dir / f"{source.stem}.{self.config.output_extension}"

    def build_command(self, input_file: Path, output_file: Path) -> list[str]:
        """Build the HandBrakeCLI command line."""
        return [
            self.handbrake_binary,
            "-i",
            str(input_file),
            "-o",
            str(output_file),
            "--preset",
            self.config.handbrake_preset,
        ]

    def convert_file(
        self,
        episode: Episode,
        notification: ProgressNotification,
    ) -> str | None:
        """Convert ``episode`` and return the output path, or None on failure.

        Progress is written to ``notification.current_message`` as HandBrake
        reports it.
        """
        input_file = Path(episode.path)

        try:
            input_exists = input_file.exists()
        except OSError as e:
            logger.exception(f"Failed to check if input file exists {input_file}: {e}")
            return None

        if not input_exists:
            logger.error(f"Input file does not exist: {input_file}")
            return None

        output_file = self.output_path(episode)
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.exception(f"Failed to create output directory {output_file.parent}: {e}")
            return None

        cmd = self.build_command(input_file, output_file)
        logger.info(f"Starting HandBrake conversion of {input_file.name}")
        logger.debug("Running: %s", " ".join(cmd))

        try:
            returncode, output = self._run_with_progress(cmd, episode, notification)
        except subprocess.TimeoutExpired:
            logger.error(
                f"HandBrake timed out after {self.config.handbrake_timeout}s converting {episode}",
            )
            return None
        except OSError as e:
            logger.exception(f"Failed to launch HandBrake: {e}")
            return None

        if returncode != 0:
            logger.error(f"HandBrake exited with code {returncode}: {output[-500:]}")
            return None

        if not output_file.exists():
            logger.error(f"HandBrake reported success but {output_file} is missing")
            return None

        logger.info(f"Successfully converted {input_file.name} -> {output_file.name}")
        return str(output_file)

    def _run_with_progress(
        self,
        cmd: list[str],
        episode: Episode,
        notification: ProgressNotification,
    ) -> tuple[int, str]:
        """Run HandBrake, turning its progress lines into notification messages."""
        output_lines: list[str] = []
        last_reported = [-1.0]

        def read_output(process: subprocess.Popen) -> None:
            if process.stdout is None:
                return
            for line in process.stdout:
                line_str = line.strip()
                if not line_str:
                    continue
                output_lines.append(line_str)

                match = PROGRESS_PATTERN.search(line_str)
                if not match:
                    continue

                percent = round(float(match.group("percent")), 1)
                if percent != last_reported[0]:
                    last_reported[0] = percent
                    notification.current_message = f"Converting {episode}: {percent}%"

        with subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
        ) as process:
            output_thread = threading.Thread(target=read_output, args=(process,))
            output_thread.start()

            try:
                returncode = process.wait(timeout=self.config.handbrake_timeout)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
                raise
            finally:
                output_thread.join()

        return returncode, "\n".join(output_lines)

    def get_version(self) -> str | None:
        """Get the version of HandBrakeCLI being used."""
        try:
            result = subprocess.run(
                [self.handbrake_binary, "--version"],
                check=False,
                capture_output=True,
                text=True,
                timeout=self.config.tool_version_timeout,
            )

            if result.returncode == 0:
                return result.stdout.strip().splitlines()[0] if result.stdout.strip() else None
        except Exception as e:
            logger.warning(f"Could not get HandBrake version: {e}")

        return None

    def check_availability(self) -> bool:
        """Check if HandBrakeCLI is available and working."""
        return self.get_version() is not None
