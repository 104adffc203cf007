"""
Extractor component for the review scraper.

Reads reviews off the rendered listing: fragment decoding, pagination and the
pacing delays between page actions.
"""
from .delays import DelayProvider, JitterDelay, NoDelay
from .pagination import PaginationEngine
from .review_decoder import clean_date, decode_review, merge_review_text, parse_rating
from .selectors import REVIEW_PAGE_SELECTORS, ReviewPageSelectors

__all__ = [
    "DelayProvider",
    "JitterDelay",
    "NoDelay",
    "PaginationEngine",
    "clean_date",
    "decode_review",
    "merge_review_text",
    "parse_rating",
    "REVIEW_PAGE_SELECTORS",
    "ReviewPageSelectors",
]
