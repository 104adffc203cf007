"""
Renderer component for the review scraper.

Defines the `PageDriver` capability the core depends on, and its Playwright
implementation that drives a real (headless) browser.
"""
from .page_driver import PageDriver, VISIBLE, HIDDEN, ATTACHED
from .playwright_manager import PlaywrightManager, PlaywrightPageDriver

__all__ = [
    "PageDriver",
    "VISIBLE",
    "HIDDEN",
    "ATTACHED",
    "PlaywrightManager",
    "PlaywrightPageDriver",
]
