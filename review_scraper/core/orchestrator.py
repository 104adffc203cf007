"""Runs the entity pipeline over every entity still queued in a `WorkState`."""
from review_scraper.core.logger import get_logger
from review_scraper.core.pipeline import EntityPipeline
from review_scraper.core.state import WorkState

logger = get_logger(__name__)


class ScrapeOrchestrator:
    """
    One pass over the remaining queue.

    Each entity is committed as soon as its pipeline finishes. The first hard
    failure aborts the pass; whatever was committed before it stays committed,
    so a later pass resumes with the entities that are still queued.
    """

    def __init__(self, pipeline: EntityPipeline, state: WorkState):
        self.pipeline = pipeline
        self.state = state

    async def run(self) -> WorkState:
        """
        Raises:
            ReviewScraperError: Any hard failure raised by the pipeline, unchanged.
        """
        queue = self.state.remaining()
        logger.info(f"Scraping reviews for {len(queue)} restaurants")

        for entity in queue:
            logger.info(f"Scraping restaurant {entity.name} ranked: {entity.ranking}")
            outcome = await self.pipeline.run(entity)
            if outcome.skipped:
                self.state.mark_skipped(outcome.entity)
                continue

            self.state.commit(outcome.entity, outcome.reviews)
            logger.info(
                f"Committed '{entity.name}' ({len(outcome.reviews)} reviews); "
                f"{self.state.committed_count} done, {self.state.remaining_count} remaining."
            )
        return self.state
