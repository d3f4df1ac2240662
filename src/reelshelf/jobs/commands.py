"""Commands that ask for a job to run now."""

from dataclasses import dataclass


@dataclass
class Command:
    """Base trigger message.

    Subclasses override the class attributes to describe how a runner should
    treat them.
    """

    send_updates_to_client = False
    requires_disk_access = False
    completion_message = "Completed"

    @property
    def name(self) -> str:
        """Command name without the ``Command`` suffix."""
        class_name = type(self).__name__
        return class_name.removesuffix("Command") or class_name


@dataclass
class ConvertEpisodeCommand(Command):
    """Run the episode conversion job for ``target_id``."""

    target_id: int = 0
    secondary_target_id: int = 0

    send_updates_to_client = True
    requires_disk_access = True
    completion_message = "Episode conversion finished"


@dataclass
class ApplicationUpdateCommand(Command):
    """Install a downloaded update and restart."""

    send_updates_to_client = True
    requires_disk_access = True
    completion_message = "Restarting Reelshelf to apply updates"
