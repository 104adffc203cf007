"""
Per-entity scraping steps: open the entity page, clear the consent banner,
read the address, switch the listing to all languages, then paginate.
"""
from dataclasses import dataclass
from typing import List, Optional

from review_scraper.components.extractor.delays import DelayProvider, JitterDelay
from review_scraper.components.extractor.pagination import PaginationEngine
from review_scraper.components.extractor.selectors import REVIEW_PAGE_SELECTORS, ReviewPageSelectors
from review_scraper.components.renderer.page_driver import ATTACHED, HIDDEN, VISIBLE, PageDriver
from review_scraper.core.exceptions import ExtractorError, RendererError, SelectorTimeoutError
from review_scraper.core.logger import get_logger
from review_scraper.core.settings import ScraperSettings
from review_scraper.models.records import Entity, Review

logger = get_logger(__name__)


@dataclass(frozen=True)
class PipelineOutcome:
    """Result of one entity run. `reviews` is None when the entity was skipped."""
    entity: Entity
    reviews: Optional[List[Review]] = None

    @property
    def skipped(self) -> bool:
        return self.reviews is None


class EntityPipeline:
    """
    Runs the scraping steps for one entity at a time on a shared page.

    Soft failures (no consent banner, no language filter) are handled here.
    Navigation, address and decoding failures propagate to the caller.
    """

    def __init__(
        self,
        driver: PageDriver,
        settings: Optional[ScraperSettings] = None,
        delays: Optional[DelayProvider] = None,
        selectors: ReviewPageSelectors = REVIEW_PAGE_SELECTORS,
    ):
        self.driver = driver
        self.settings = settings or ScraperSettings()
        self.delays = delays or JitterDelay(self.settings.jitter_seed)
        self.selectors = selectors

    async def run(self, entity: Entity) -> PipelineOutcome:
        """
        Scrapes `entity`.

        Returns:
            PipelineOutcome: The entity with its address filled in, plus its reviews,
                             or no reviews when the language filter is absent.

        Raises:
            RendererError: If navigation or a required browser action fails.
            ExtractorError: If the address or a review cannot be read.
        """
        await self.driver.navigate(entity.url)
        await self.dismiss_consent_banner()
        entity = entity.with_address(await self.read_address())

        if not await self.apply_language_filter():
            logger.info(f"No language button found, '{entity.name}' has no reviews; skipping.")
            return PipelineOutcome(entity=entity)

        pagination = PaginationEngine(self.driver, self.settings, self.delays, self.selectors)
        reviews = await pagination.collect()
        logger.info(f"Extracted {len(reviews)} reviews for '{entity.name}'.")
        return PipelineOutcome(entity=entity, reviews=reviews)

    async def dismiss_consent_banner(self) -> bool:
        """Accepts the cookie banner if it shows up. Returns whether it was clicked; never raises."""
        try:
            accept = await self.driver.find(
                self.selectors.consent_accept, self.settings.consent_timeout_ms, state=VISIBLE
            )
            if accept is None:
                logger.info("Cookie policy already accepted.")
                return False
            await self.driver.click(accept)
            await self.driver.sleep(self.settings.consent_settle_ms)
        except RendererError as e:
            logger.info(f"Could not dismiss cookie banner, continuing: {e.message}")
            return False
        return True

    async def read_address(self) -> str:
        """
        Raises:
            ExtractorError: If the address element is missing.
        """
        element = await self.driver.query_selector(self.selectors.address)
        if element is None:
            raise ExtractorError(f"Address element '{self.selectors.address}' not found")
        return await self.driver.get_text(element)

    async def apply_language_filter(self) -> bool:
        """
        Switches the review listing to all languages.

        Returns:
            bool: False if the filter never appears or the listing never finishes
                  reloading after the click (the entity has no reviews).
        """
        logger.debug("Waiting for language selector.")
        all_languages = await self.driver.find(
            self.selectors.all_languages_filter, self.settings.language_filter_timeout_ms, state=ATTACHED
        )
        if all_languages is None:
            return False

        await self.driver.click(all_languages)
        await self.driver.sleep(self.settings.language_settle_ms)
        try:
            await self.driver.wait_for_selector(
                self.selectors.loading_indicator, self.settings.loader_hidden_timeout_ms, state=HIDDEN
            )
        except SelectorTimeoutError as e:
            logger.info(f"Review listing did not reload after the language click: {e.message}")
            return False
        return True
