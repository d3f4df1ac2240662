"""Job interface shared by every schedulable task."""

from abc import ABC, abstractmethod
from datetime import timedelta

from .notification import ProgressNotification


class Job(ABC):
    """A task the scheduler can trigger on demand or on an interval.

    A ``default_interval`` of zero means the job only runs when triggered.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def default_interval(self) -> timedelta: ...

    @abstractmethod
    def start(
        self,
        notification: ProgressNotification,
        target_id: int,
        secondary_target_id: int = 0,
    ) -> None: ...
