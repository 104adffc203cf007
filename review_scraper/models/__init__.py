"""
Models sub-package for the review scraper.

Holds the pydantic record types passed between the pipeline stages.
"""

from .records import Entity, EntityReviews, Review

__all__ = [
    "Entity",
    "EntityReviews",
    "Review",
]
