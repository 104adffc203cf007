"""
Playwright-backed browser session.

`PlaywrightManager` is an asynchronous context manager that starts Playwright,
launches the configured browser, opens the single page used for the whole run
and exposes it as a `PlaywrightPageDriver`.
"""
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from review_scraper.components.renderer.page_driver import ElementHandle, PageDriver, VISIBLE
from review_scraper.core.exceptions import RendererError, SelectorTimeoutError
from review_scraper.core.logger import get_logger

if TYPE_CHECKING:
    from review_scraper.core.config import ConfigurationManager

logger = get_logger(__name__)


class PlaywrightPageDriver(PageDriver):
    """
    `PageDriver` over a Playwright `Page`.

    Playwright timeouts on selector waits become `SelectorTimeoutError`; any
    other Playwright failure becomes `RendererError`.
    """

    def __init__(self, page: Page, navigation_timeout_ms: int = 30000):
        self.page = page
        self.navigation_timeout_ms = navigation_timeout_ms

    async def navigate(self, url: str) -> None:
        logger.debug(f"Navigating to {url} (timeout {self.navigation_timeout_ms}ms).")
        try:
            await self.page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
        except PlaywrightError as e:
            raise RendererError(f"Failed to navigate to '{url}': {e}")

    async def query_selector(self, selector: str, within: Optional[ElementHandle] = None) -> Optional[ElementHandle]:
        root = within if within is not None else self.page
        try:
            return await root.query_selector(selector)
        except PlaywrightError as e:
            raise RendererError(f"Query for '{selector}' failed: {e}")

    async def query_selector_all(self, selector: str, within: Optional[ElementHandle] = None) -> List[ElementHandle]:
        root = within if within is not None else self.page
        try:
            return await root.query_selector_all(selector)
        except PlaywrightError as e:
            raise RendererError(f"Query for '{selector}' failed: {e}")

    async def wait_for_selector(self, selector: str, timeout_ms: int, state: str = VISIBLE) -> Optional[ElementHandle]:
        try:
            return await self.page.wait_for_selector(selector, timeout=timeout_ms, state=state)
        except PlaywrightTimeoutError:
            raise SelectorTimeoutError(selector, timeout_ms)
        except PlaywrightError as e:
            raise RendererError(f"Waiting for '{selector}' failed: {e}")

    async def click(self, handle: ElementHandle) -> None:
        try:
            await handle.click()
        except PlaywrightError as e:
            raise RendererError(f"Click failed: {e}")

    async def get_text(self, handle: ElementHandle) -> str:
        try:
            return await handle.inner_text()
        except PlaywrightError as e:
            raise RendererError(f"Reading element text failed: {e}")

    async def get_attribute(self, handle: ElementHandle, name: str) -> Optional[str]:
        try:
            return await handle.get_attribute(name)
        except PlaywrightError as e:
            raise RendererError(f"Reading attribute '{name}' failed: {e}")

    async def evaluate(self, script: str) -> Any:
        try:
            return await self.page.evaluate(script)
        except PlaywrightError as e:
            raise RendererError(f"Script evaluation failed: {e}")

    async def sleep(self, ms: int) -> None:
        await self.page.wait_for_timeout(ms)


class PlaywrightManager:
    """
    Asynchronous context manager owning the Playwright engine, the browser and
    the page used by the scraper.

    Attributes:
        browser_type (str): 'chromium', 'firefox' or 'webkit'.
        headless (bool): Whether the browser runs without a window.
        executable_path (Optional[str]): Custom browser binary, if any.
        extra_headers (Dict[str, str]): HTTP headers sent with every request.
        driver (Optional[PlaywrightPageDriver]): Available inside the `async with` block.
    """
    DEFAULT_BROWSER_TYPE = 'chromium'
    DEFAULT_NAVIGATION_TIMEOUT = 30000  # Milliseconds
    DEFAULT_EXTRA_HEADERS = {"Referer": "https://www.google.com/"}

    def __init__(self, config: Optional['ConfigurationManager'] = None, headless: Optional[bool] = None):
        """
        Args:
            config (Optional[ConfigurationManager]): Source of `components.playwright_manager.*`
                settings. Defaults are used when None.
            headless (Optional[bool]): Overrides the configured headless flag.

        Raises:
            RendererError: If the configured browser type is not supported.
        """
        prefix = 'components.playwright_manager'
        if config:
            self.browser_type = config.get(f'{prefix}.browser_type', self.DEFAULT_BROWSER_TYPE)
            configured_headless = config.get(f'{prefix}.headless', True)
            self.executable_path = config.get(f'{prefix}.executable_path')
            self.navigation_timeout_ms = int(config.get(f'{prefix}.navigation_timeout_ms', self.DEFAULT_NAVIGATION_TIMEOUT))
            self.extra_headers: Dict[str, str] = dict(config.get(f'{prefix}.extra_headers', self.DEFAULT_EXTRA_HEADERS) or {})
        else:
            self.browser_type = self.DEFAULT_BROWSER_TYPE
            configured_headless = True
            self.executable_path = None
            self.navigation_timeout_ms = self.DEFAULT_NAVIGATION_TIMEOUT
            self.extra_headers = dict(self.DEFAULT_EXTRA_HEADERS)
        self.headless = configured_headless if headless is None else headless

        if self.browser_type not in ['chromium', 'firefox', 'webkit']:
            logger.error(f"Unsupported browser type configured: {self.browser_type}")
            raise RendererError(f"Unsupported browser type: {self.browser_type}. Must be 'chromium', 'firefox', or 'webkit'.")

        logger.info(f"PlaywrightManager configured to use browser: {self.browser_type} (headless={self.headless})")

        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.page: Optional[Page] = None
        self.driver: Optional[PlaywrightPageDriver] = None

    async def __aenter__(self) -> 'PlaywrightManager':
        """
        Starts Playwright, launches the browser and opens the scraping page.

        Raises:
            RendererError: If Playwright or the browser fails to start (e.g. binaries missing).
        """
        logger.debug(f"Starting Playwright and launching {self.browser_type}.")
        try:
            self.playwright = await async_playwright().start()
            launcher = getattr(self.playwright, self.browser_type)
            launch_options: Dict[str, Any] = {"headless": self.headless}
            if self.executable_path:
                launch_options["executable_path"] = self.executable_path
            self.browser = await launcher.launch(**launch_options)
            self.page = await self.browser.new_page()
            if self.extra_headers:
                await self.page.set_extra_http_headers(self.extra_headers)
            self.driver = PlaywrightPageDriver(self.page, navigation_timeout_ms=self.navigation_timeout_ms)
            logger.info(f"{self.browser_type} browser launched successfully.")
        except Exception as e:
            logger.error(f"Failed to initialize Playwright or launch browser {self.browser_type}: {e}", exc_info=True)
            await self._shutdown()
            raise RendererError(f"Failed to initialize Playwright or launch browser {self.browser_type}: {e}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        logger.debug("Closing browser and stopping Playwright.")
        await self._shutdown()

    async def _shutdown(self) -> None:
        if self.browser:
            try:
                await self.browser.close()
                logger.info("Browser closed successfully.")
            except Exception as e:
                logger.error(f"Error closing browser: {e}", exc_info=True)
        if self.playwright:
            try:
                await self.playwright.stop()
                logger.info("Playwright stopped successfully.")
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}", exc_info=True)

        self.driver = None
        self.page = None
        self.browser = None
        self.playwright = None
