"""
Record types shared across the scraper.

`Entity` is one scrape target read from the input file, `Review` is one decoded
review, and `EntityReviews` is the committed pairing of both that ends up in
the JSON output.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """
    A scrape target (e.g. a restaurant). `url` is the identity key.

    `address` is empty when the entity is loaded and filled in by the entity
    pipeline through `with_address`, which returns a new instance.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    ranking: str
    url: str
    address: Optional[str] = None

    @property
    def key(self) -> str:
        return self.url

    def with_address(self, address: str) -> "Entity":
        return self.model_copy(update={"address": address})


class Review(BaseModel):
    """A single review as shown on the listing page."""
    model_config = ConfigDict(frozen=True)

    title: str
    date: str  # raw display form, e.g. "Reviewed 3 March 2021"
    text: str
    rating: int = Field(ge=1, le=5)


class EntityReviews(BaseModel):
    """An entity together with every review extracted for it."""
    model_config = ConfigDict(frozen=True)

    entity: Entity
    reviews: List[Review] = Field(default_factory=list)

    def to_output(self) -> Dict[str, Any]:
        """Returns the output record: `{Name, Ranking, Url, Address, Reviews}`."""
        return {
            "Name": self.entity.name,
            "Ranking": self.entity.ranking,
            "Url": self.entity.url,
            "Address": self.entity.address,
            "Reviews": [review.model_dump() for review in self.reviews],
        }
