"""Progress reporting for long-running jobs."""

from enum import Enum


class ConversionStage(Enum):
    """Stages of a single conversion job."""

    NOT_STARTED = "not_started"
    STARTING = "starting"
    TRANSCODING = "transcoding"
    FAILED = "failed"
    TRANSCODED = "transcoded"
    TAGGING = "tagging"
    COMPLETED = "completed"


class ProgressNotification:
    """Caller-owned progress sink that a job and its tools write into.

    ``current_message`` is the human readable progress line. Every message and
    stage set is also recorded in ``history`` and ``stage_history`` so the full
    sequence can be inspected once the job returns. One notification belongs
    to exactly one job run.
    """

    def __init__(self, title: str = ""):
        self.title = title
        self.history: list[str] = []
        self.stage_history: list[ConversionStage] = []
        self._current_message = ""
        self._stage = ConversionStage.NOT_STARTED

    @property
    def current_message(self) -> str:
        return self._current_message

    @current_message.setter
    def current_message(self, message: str) -> None:
        self._current_message = message
        self.history.append(message)

    @property
    def stage(self) -> ConversionStage:
        return self._stage

    @stage.setter
    def stage(self, stage: ConversionStage) -> None:
        self._stage = stage
        self.stage_history.append(stage)

    @property
    def failed(self) -> bool:
        """Whether a failure was reported at any point, even if later masked."""
        return ConversionStage.FAILED in self.stage_history

    def __str__(self) -> str:
        if self.title:
            return f"{self.title}: {self.current_message}"
        return self.current_message
