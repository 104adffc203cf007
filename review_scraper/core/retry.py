"""
Whole-run retries with exponential backoff and a single checkpoint flush.

A failed pass is retried against the same `WorkState`, so committed entities
are never scraped twice; an entity that failed midway starts over from its
first review page. When the attempt budget runs out, the results collected so
far are flushed and `RetryExhaustedError` is raised.
"""
import asyncio
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from review_scraper.core.exceptions import RetryExhaustedError
from review_scraper.core.logger import get_logger
from review_scraper.core.orchestrator import ScrapeOrchestrator
from review_scraper.core.settings import ScraperSettings
from review_scraper.core.state import WorkState
from review_scraper.models.records import EntityReviews

logger = get_logger(__name__)

CheckpointWriter = Callable[[List[EntityReviews]], Any]


def compute_backoff_seconds(attempt: int, base: float = 3) -> float:
    """Delay before retrying after failed attempt `attempt` (1-based): base ** attempt."""
    return float(base ** attempt)


class RetryCoordinator:
    """
    Drives `ScrapeOrchestrator` passes until one completes or `max_attempts` fail.

    Attributes:
        checkpoint (CheckpointWriter): Called exactly once per `run()` with the
            committed records, on success or on exhaustion.
        sleep (Callable[[float], Awaitable[None]]): Backoff sleep, `asyncio.sleep` by default.
    """

    def __init__(
        self,
        orchestrator: ScrapeOrchestrator,
        checkpoint: CheckpointWriter,
        max_attempts: int = 5,
        backoff_base: float = 3,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.orchestrator = orchestrator
        self.checkpoint = checkpoint
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self.sleep = sleep or asyncio.sleep

    @classmethod
    def from_settings(
        cls,
        orchestrator: ScrapeOrchestrator,
        checkpoint: CheckpointWriter,
        settings: ScraperSettings,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> "RetryCoordinator":
        return cls(
            orchestrator,
            checkpoint,
            max_attempts=settings.max_attempts,
            backoff_base=settings.backoff_base,
            sleep=sleep,
        )

    @property
    def state(self) -> WorkState:
        return self.orchestrator.state

    async def run(self) -> Mapping[str, EntityReviews]:
        """
        Returns:
            Mapping[str, EntityReviews]: The final results map, keyed by entity url.

        Raises:
            RetryExhaustedError: After the last allowed attempt failed and the checkpoint was written.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                await self.orchestrator.run()
                break
            except Exception as e:
                logger.error(f"Scrape attempt {attempt}/{self.max_attempts} failed: {e}", exc_info=True)
                if attempt >= self.max_attempts:
                    logger.critical(
                        f"Giving up after {attempt} attempts; saving {self.state.committed_count} "
                        f"completed restaurants, {self.state.remaining_count} left unscraped."
                    )
                    self._flush()
                    raise RetryExhaustedError(attempt, e) from e

                delay = compute_backoff_seconds(attempt, self.backoff_base)
                logger.warning(
                    f"Retrying in {delay:.0f}s; {self.state.remaining_count} restaurants remaining."
                )
                await self.sleep(delay)

        skipped = self.state.skipped()
        if skipped:
            logger.info(f"{len(skipped)} restaurants had no reviews and were skipped: "
                        f"{', '.join(entity.name for entity in skipped)}")
        logger.info("Scraping is over :)")
        self._flush()
        return self.state.snapshot()

    def _flush(self) -> None:
        records = self.state.to_records()
        logger.info(f"Writing checkpoint with {len(records)} restaurants.")
        self.checkpoint(records)
