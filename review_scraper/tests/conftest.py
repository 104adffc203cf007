import pytest

from review_scraper.components.extractor.delays import NoDelay
from review_scraper.core.settings import ScraperSettings
from review_scraper.models.records import Entity


@pytest.fixture
def settings():
    """Default timeouts and retry budget; pacing delays come from `no_delay`."""
    return ScraperSettings()


@pytest.fixture
def no_delay():
    return NoDelay()


@pytest.fixture
def entities():
    """Three restaurants in input order, as read from the CSV."""
    return [
        Entity(name="A", ranking="1", url="https://example.test/a"),
        Entity(name="B", ranking="2", url="https://example.test/b"),
        Entity(name="C", ranking="3", url="https://example.test/c"),
    ]
