"""Episode conversion: HandBrake then AtomicParsley."""

import logging
from datetime import timedelta

from reelshelf.contracts import EpisodeLookup, Tagger, Transcoder
from reelshelf.error_handling import InvalidTargetError

from .base import Job
from .notification import ConversionStage, ProgressNotification


class ConvertEpisodeJob(Job):
    """Converts one episode and tags the result.

    A failed conversion is reported on the notification but, unless
    ``stop_on_failure`` is set, tagging still runs and the final message
    still reads "Conversion completed".
    """

    def __init__(
        self,
        handbrake: Transcoder,
        atomic_parsley: Tagger,
        episodes: EpisodeLookup,
        *,
        stop_on_failure: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.handbrake = handbrake
        self.atomic_parsley = atomic_parsley
        self.episodes = episodes
        self.stop_on_failure = stop_on_failure
        self.logger = logger or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return "Convert Episode"

    @property
    def default_interval(self) -> timedelta:
        return timedelta(0)

    def start(
        self,
        notification: ProgressNotification,
        target_id: int,
        secondary_target_id: int = 0,
    ) -> None:
        """Convert episode ``target_id``. ``secondary_target_id`` is not used."""
        if target_id <= 0:
            raise InvalidTargetError(target_id)

        # Lookup errors propagate to the caller unchanged
        episode = self.episodes.get_episode(target_id)

        notification.stage = ConversionStage.STARTING
        notification.current_message = f"Starting Conversion for {episode}"
        self.logger.info("Starting conversion for %s", episode)

        notification.stage = ConversionStage.TRANSCODING
        output_file = self.handbrake.convert_file(episode, notification)

        if not output_file:
            notification.stage = ConversionStage.FAILED
            notification.current_message = f"Conversion failed for {episode}"
            self.logger.error("Conversion failed for %s", episode)
            if self.stop_on_failure:
                return
        else:
            notification.stage = ConversionStage.TRANSCODED

        notification.stage = ConversionStage.TAGGING
        self.atomic_parsley.run_atomic_parsley(episode, output_file)

        notification.stage = ConversionStage.COMPLETED
        notification.current_message = f"Conversion completed for {episode}"
        self.logger.info("Conversion completed for %s", episode)
