"""Job definitions and dispatch."""

from .base import Job
from .commands import ApplicationUpdateCommand, Command, ConvertEpisodeCommand
from .convert_episode import ConvertEpisodeJob
from .notification import ConversionStage, ProgressNotification
from .runner import JobRunner

__all__ = [
    "ApplicationUpdateCommand",
    "Command",
    "ConversionStage",
    "ConvertEpisodeCommand",
    "ConvertEpisodeJob",
    "Job",
    "JobRunner",
    "ProgressNotification",
]
