"""
Turns one rendered review fragment into a `Review`.

The string helpers (`clean_date`, `merge_review_text`, `parse_rating`) are pure
and hold the site-specific decoding rules; `decode_review` only reads the raw
values through the `PageDriver` and hands them over.
"""
from typing import Optional

from review_scraper.components.extractor.selectors import REVIEW_PAGE_SELECTORS, ReviewPageSelectors
from review_scraper.components.renderer.page_driver import ElementHandle, PageDriver
from review_scraper.core.exceptions import ExtractorError
from review_scraper.models.records import Review

HANDLE_PREFIX = "JSHandle:"
ELLIPSIS = "..."


def clean_date(raw: Optional[str]) -> str:
    """Strips the handle-serialization prefix some drivers put in front of property values."""
    if not raw:
        return ""
    if raw.startswith(HANDLE_PREFIX):
        return raw[len(HANDLE_PREFIX):]
    return raw


def merge_review_text(visible: str, hidden: Optional[str]) -> str:
    """
    Rebuilds the full review text.

    When the review is truncated, `visible` ends with "..." followed by a
    "more" toggle, and the rest of the text sits in a hidden element. The
    visible part is cut at its last "..." and joined to the hidden part with a
    single space.

    >>> merge_review_text("Great food was...", "amazing and fresh")
    'Great food was amazing and fresh'
    """
    if hidden is None:
        return visible
    cut = visible.rfind(ELLIPSIS)
    head = visible[:cut] if cut >= 0 else visible
    return " ".join([head, hidden])


def parse_rating(class_attr: Optional[str]) -> int:
    """
    Decodes the bubble rating from the rating element's class list.

    The last class token ends in two digits holding rating x 10
    (`ui_bubble_rating bubble_40` -> 4).

    Raises:
        ExtractorError: If the token does not end in two digits or the rating is outside 1..5.
    """
    classes = (class_attr or "").strip()
    token = classes.rsplit(" ", 1)[-1]
    digits = token[-2:]
    if len(digits) != 2 or not digits.isdigit():
        raise ExtractorError(f"Cannot read rating from class attribute '{class_attr}'")
    rating = int(digits) // 10
    if not 1 <= rating <= 5:
        raise ExtractorError(f"Rating {rating} out of range in class attribute '{class_attr}'")
    return rating


async def _required(driver: PageDriver, selector: str, fragment: ElementHandle) -> ElementHandle:
    element = await driver.query_selector(selector, within=fragment)
    if element is None:
        raise ExtractorError(f"Review fragment has no '{selector}' element")
    return element


async def decode_review(
    driver: PageDriver,
    fragment: ElementHandle,
    selectors: ReviewPageSelectors = REVIEW_PAGE_SELECTORS,
) -> Review:
    """
    Decodes a `.review-container` fragment.

    Raises:
        ExtractorError: If a required sub-element is missing or the rating cannot be parsed.
    """
    title_el = await _required(driver, selectors.review_title, fragment)
    date_el = await _required(driver, selectors.review_date, fragment)
    text_el = await _required(driver, selectors.review_text, fragment)
    rating_el = await _required(driver, selectors.review_rating, fragment)

    visible_text = await driver.get_text(text_el)
    hidden_el = await driver.query_selector(selectors.review_hidden_text, within=text_el)
    hidden_text = await driver.get_text(hidden_el) if hidden_el is not None else None

    return Review(
        title=await driver.get_text(title_el),
        date=clean_date(await driver.get_attribute(date_el, "title")),
        text=merge_review_text(visible_text, hidden_text),
        rating=parse_rating(await driver.get_attribute(rating_el, "class")),
    )
