"""
Components sub-package for the review scraper.

This package contains the pieces the scraping core is assembled from:
the browser page driver, the review extraction logic, and the input/output files.

The `__all__` variable defines the public API of this sub-package,
making key components directly importable from `review_scraper.components`.
"""

# Re-export key components for easier access.
from .renderer.page_driver import PageDriver
from .renderer.playwright_manager import PlaywrightManager, PlaywrightPageDriver
from .extractor.pagination import PaginationEngine
from .storage.file_storage import (
    FileStorage,
    FilePathError,
    SerializationError
)
from .storage.input_loader import load_entities

__all__ = [
    "PageDriver",
    "PlaywrightManager",
    "PlaywrightPageDriver",
    "PaginationEngine",
    "FileStorage",
    "FilePathError",        # Storage-specific exceptions, useful to callers of FileStorage
    "SerializationError",
    "load_entities",
]
