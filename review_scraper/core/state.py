"""
Shared state of a scrape run: the entities still to do and the results so far.

The same `WorkState` survives whole-run retries, so a retried run only sees
the entities that were not committed yet. Results are committed one entity at
a time, after that entity's reviews were fully extracted; partial page data
never reaches the results.
"""
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from review_scraper.core.exceptions import StateError
from review_scraper.models.records import Entity, EntityReviews, Review


class WorkState:
    """
    Remaining queue plus results map, keyed by entity url.

    Only the orchestrator calls `commit`; everything else reads snapshots.
    """

    def __init__(self, entities: Iterable[Entity]):
        self._remaining: Dict[str, Entity] = {}
        for entity in entities:
            self._remaining.setdefault(entity.key, entity)
        self._results: Dict[str, EntityReviews] = {}
        self._skipped: Dict[str, Entity] = {}

    def remaining(self) -> Tuple[Entity, ...]:
        """Entities not yet committed, in input order."""
        return tuple(self._remaining.values())

    def commit(self, entity: Entity, reviews: Sequence[Review]) -> EntityReviews:
        """
        Records `reviews` for `entity` and removes it from the remaining queue.

        `entity` may be an enriched copy (e.g. with its address) of the queued one;
        entities are matched by url.

        Raises:
            StateError: If the entity was already committed or is not queued.
        """
        key = entity.key
        if key in self._results:
            raise StateError(f"Entity '{key}' has already been committed")
        if key not in self._remaining:
            raise StateError(f"Entity '{key}' is not in the remaining queue")

        record = EntityReviews(entity=entity, reviews=list(reviews))
        self._results[key] = record
        del self._remaining[key]
        self._skipped.pop(key, None)
        return record

    def mark_skipped(self, entity: Entity) -> None:
        """Notes that `entity` was skipped for lack of reviews. It stays in the remaining queue."""
        self._skipped[entity.key] = entity

    def skipped(self) -> Tuple[Entity, ...]:
        return tuple(self._skipped.values())

    def snapshot(self) -> Mapping[str, EntityReviews]:
        """Read-only copy of the results map, in commit order."""
        return MappingProxyType(dict(self._results))

    def to_records(self) -> List[EntityReviews]:
        return list(self._results.values())

    @property
    def committed_count(self) -> int:
        return len(self._results)

    @property
    def remaining_count(self) -> int:
        return len(self._remaining)

    @property
    def is_complete(self) -> bool:
        return not self._remaining
