"""
Browser capability consumed by the scraping core.

The core never touches a browser automation library directly; it talks to a
`PageDriver`. Element handles are opaque to the core and are only passed back
into the driver that produced them.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from review_scraper.core.exceptions import SelectorTimeoutError

# Element handle as produced by a concrete driver.
ElementHandle = Any

VISIBLE = "visible"
HIDDEN = "hidden"
ATTACHED = "attached"


class PageDriver(ABC):
    """
    Abstract browser page. One driver wraps one page that is reused for the whole run.

    Implementations raise `SelectorTimeoutError` from `wait_for_selector` when the
    selector does not reach the requested state in time, and `RendererError` for
    any other browser failure.
    """

    @abstractmethod
    async def navigate(self, url: str) -> None:
        """Loads `url` and waits until the network is idle."""

    @abstractmethod
    async def query_selector(self, selector: str, within: Optional[ElementHandle] = None) -> Optional[ElementHandle]:
        """Returns the first match of `selector` (inside `within` if given) or None."""

    @abstractmethod
    async def query_selector_all(self, selector: str, within: Optional[ElementHandle] = None) -> List[ElementHandle]:
        """Returns every match of `selector` in document order."""

    @abstractmethod
    async def wait_for_selector(self, selector: str, timeout_ms: int, state: str = VISIBLE) -> Optional[ElementHandle]:
        """
        Waits for `selector` to reach `state` ('visible', 'hidden' or 'attached').

        Returns the element (None when waiting for 'hidden').

        Raises:
            SelectorTimeoutError: If the state is not reached within `timeout_ms`.
        """

    @abstractmethod
    async def click(self, handle: ElementHandle) -> None:
        ...

    @abstractmethod
    async def get_text(self, handle: ElementHandle) -> str:
        """Returns the rendered (visible) text of the element."""

    @abstractmethod
    async def get_attribute(self, handle: ElementHandle, name: str) -> Optional[str]:
        ...

    @abstractmethod
    async def evaluate(self, script: str) -> Any:
        """Runs an inline script in the page and returns its result."""

    @abstractmethod
    async def sleep(self, ms: int) -> None:
        ...

    async def find(self, selector: str, timeout_ms: int, state: str = VISIBLE) -> Optional[ElementHandle]:
        """
        Like `wait_for_selector`, but an expired wait yields None instead of an error.

        Used for elements whose absence is a normal outcome (consent banner,
        language filter, next-page control).
        """
        try:
            return await self.wait_for_selector(selector, timeout_ms, state=state)
        except SelectorTimeoutError:
            return None
