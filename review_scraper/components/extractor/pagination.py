"""
Walks an entity's review listing page by page.

Per page: expand truncated reviews, decode every fragment, then try to move to
the next page. A missing or disabled "next" control ends the listing; so does
any browser failure while handling that control.
"""
from typing import List, Optional

from review_scraper.components.extractor.delays import DelayProvider, JitterDelay
from review_scraper.components.extractor.review_decoder import decode_review
from review_scraper.components.extractor.selectors import REVIEW_PAGE_SELECTORS, ReviewPageSelectors
from review_scraper.components.renderer.page_driver import ATTACHED, HIDDEN, PageDriver
from review_scraper.core.exceptions import RendererError
from review_scraper.core.logger import get_logger
from review_scraper.core.settings import ScraperSettings
from review_scraper.models.records import Review

logger = get_logger(__name__)

DISABLED_MARKER = "disabled"


class PaginationEngine:
    """
    Collects the reviews of one entity across all listing pages.

    Expects the driver to be positioned on the first page of the listing.
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

    async def collect(self) -> List[Review]:
        """
        Returns every review, pages in ascending order and on-page document order within a page.

        Raises:
            ExtractorError: If a fragment cannot be decoded.
            RendererError: If the page fails while reading reviews.
        """
        reviews: List[Review] = []
        page_number = 1
        while True:
            reviews.extend(await self.read_page())
            logger.info(f"scraping review page: {page_number}")

            if self.settings.max_pages is not None and page_number >= self.settings.max_pages:
                logger.warning(f"Reached the {self.settings.max_pages}-page limit; stopping pagination.")
                break
            if not await self.advance():
                break
            page_number += 1
        return reviews

    async def read_page(self) -> List[Review]:
        """Expands truncated text on the current page and decodes its review fragments."""
        fragments = await self.driver.query_selector_all(self.selectors.review_container)

        if await self.driver.query_selector(self.selectors.show_more) is not None:
            await self.driver.evaluate(self.selectors.show_more_script)
            await self.driver.sleep(self.delays.jitter(*self.settings.expand_jitter_ms))

        return [await decode_review(self.driver, fragment, self.selectors) for fragment in fragments]

    async def advance(self) -> bool:
        """
        Moves to the next listing page.

        Returns:
            bool: False when there is no further page (control absent, disabled,
                  or unusable); True once the next page has loaded.
        """
        try:
            next_button = await self.driver.find(
                self.selectors.next_page, self.settings.next_button_timeout_ms, state=ATTACHED
            )
            if next_button is None:
                logger.debug("No next-page control; last page reached.")
                return False

            classes = await self.driver.get_attribute(next_button, "class") or ""
            if DISABLED_MARKER in classes:
                logger.debug("Next-page control is disabled; last page reached.")
                return False

            await self.driver.click(next_button)
            await self.driver.wait_for_selector(
                self.selectors.loading_indicator,
                self.settings.loader_hidden_timeout_ms,
                state=HIDDEN,
            )
        except RendererError as e:
            logger.info(f"Stopping pagination, next page unavailable: {e.message}")
            return False

        await self.driver.sleep(self.delays.jitter(*self.settings.advance_jitter_ms))
        return True
