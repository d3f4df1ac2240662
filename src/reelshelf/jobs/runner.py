"""Dispatches commands to registered jobs."""

import logging

from reelshelf.error_handling import UnknownCommandError

from .base import Job
from .commands import Command
from .notification import ProgressNotification

logger = logging.getLogger(__name__)


class JobRunner:
    """Runs the job registered for a command with a fresh notification."""

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}

    def register(self, command_name: str, job: Job) -> None:
        """Route commands named ``command_name`` to ``job``."""
        self._jobs[command_name] = job
        logger.debug("Registered job '%s' for %s commands", job.name, command_name)

    def registered_jobs(self) -> dict[str, Job]:
        return dict(self._jobs)

    def execute(self, command: Command) -> ProgressNotification:
        """Run the job for ``command`` and return its notification.

        Raises:
            UnknownCommandError: no job is registered for the command
        """
        job = self._jobs.get(command.name)
        if job is None:
            raise UnknownCommandError(command.name)

        notification = ProgressNotification(title=job.name)
        logger.info("Running job '%s'", job.name)

        job.start(
            notification,
            getattr(command, "target_id", 0),
            getattr(command, "secondary_target_id", 0),
        )

        logger.info("%s: %s", job.name, notification.current_message)
        if command.send_updates_to_client:
            logger.info(command.completion_message)
        return notification
