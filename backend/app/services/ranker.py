# services/ranker.py
"""
Ordering of scored candidates by the requested sort key
"""
import logging
from typing import Callable, Dict, List, Sequence, Tuple, Union

from ..models.search import ScoredCandidate, SortBy

logger = logging.getLogger(__name__)


def _created_at_key(course: ScoredCandidate) -> float:
    if course.created_at is None:
        return float("-inf")
    return course.created_at.timestamp()


# sort key -> (key function, descending)
_SORT_STRATEGIES: Dict[SortBy, Tuple[Callable[[ScoredCandidate], float], bool]] = {
    SortBy.RELEVANCE: (lambda course: course.composite_score or 0.0, True),
    SortBy.PRICE_LOW: (lambda course: course.price or 0.0, False),
    SortBy.PRICE_HIGH: (lambda course: course.price or 0.0, True),
    SortBy.POPULARITY: (lambda course: course.enrolled_count or 0, True),
    SortBy.NEWEST: (_created_at_key, True),
}


def sort_results(
    courses: Sequence[ScoredCandidate], sort_by: Union[SortBy, str] = SortBy.RELEVANCE
) -> List[ScoredCandidate]:
    """
    Return a new list ordered by ``sort_by``.

    The sort is stable, so courses with equal keys keep their input order.
    Unknown sort keys fall back to relevance.
    """
    if not courses:
        return []

    strategy = _SORT_STRATEGIES.get(sort_by)
    if strategy is None:
        logger.debug(f"Unknown sort key {sort_by!r}, sorting by relevance")
        strategy = _SORT_STRATEGIES[SortBy.RELEVANCE]

    key, descending = strategy
    return sorted(courses, key=key, reverse=descending)
