# services/insights.py
"""
Search insights and query refinement suggestions
"""
from typing import Any, Iterable, List, Optional, Sequence

from .relevance_scorer import round_half_up
from ..models.search import Recommendation, ScoredCandidate, SearchInsights

NO_RESULTS_SUMMARY = "No courses found matching your search criteria"
NO_RESULTS_SUGGESTIONS = [
    "Try using broader search terms",
    "Check your spelling",
    "Remove filters to see more results",
]

REASON_SEPARATOR = " • "
DEFAULT_REASON = "Good overall match"

# Breakdown thresholds that earn a recommendation reason
TITLE_MATCH_THRESHOLD = 0.3
DESCRIPTION_THRESHOLD = 0.2
POPULARITY_THRESHOLD = 0.03

MAX_RECOMMENDATIONS = 3
MAX_CATEGORIES = 5
DEFAULT_SUGGESTION_LIMIT = 5


def empty_insights() -> SearchInsights:
    """Canned guidance returned when nothing matched"""
    return SearchInsights(
        summary=NO_RESULTS_SUMMARY, suggestions=list(NO_RESULTS_SUGGESTIONS)
    )


def unique_in_order(values: Iterable[Any]) -> List[Any]:
    """Distinct truthy values in order of first appearance"""
    seen = set()
    unique = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def get_recommendation_reason(course: ScoredCandidate) -> str:
    breakdown = course.score_breakdown
    reasons = []

    if breakdown.title_match > TITLE_MATCH_THRESHOLD:
        reasons.append("Strong title match")
    if breakdown.description_relevance > DESCRIPTION_THRESHOLD:
        reasons.append("Relevant content")
    if breakdown.popularity_boost > POPULARITY_THRESHOLD:
        reasons.append("Popular among students")
    if course.matched_terms:
        reasons.append(f"Matches: {', '.join(course.matched_terms)}")

    return REASON_SEPARATOR.join(reasons) or DEFAULT_REASON


def generate_search_insights(courses: Sequence[ScoredCandidate]) -> SearchInsights:
    """Summarize a ranked result set; ``courses[0]`` is the top match"""
    if not courses:
        return empty_insights()

    average_price = sum(course.price or 0.0 for course in courses) / len(courses)
    top_match = courses[0]

    return SearchInsights(
        summary=(
            f"Found {len(courses)} relevant courses with "
            f"{top_match.relevance_percentage}% match"
        ),
        average_price=round_half_up(average_price),
        available_levels=unique_in_order(course.level for course in courses),
        popular_categories=unique_in_order(course.category for course in courses)[
            :MAX_CATEGORIES
        ],
        top_match_title=top_match.title or "Unknown",
        top_match_relevance=top_match.relevance_percentage,
        recommendations=[
            Recommendation(
                title=course.title or "Unknown",
                relevance=course.relevance_percentage,
                reason=get_recommendation_reason(course),
            )
            for course in courses[:MAX_RECOMMENDATIONS]
        ],
    )


def generate_search_suggestions(
    query: Optional[str],
    results: Optional[Sequence[ScoredCandidate]],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> List[str]:
    """
    Query refinements: categories first, then levels, then fixed templates.

    Duplicates are removed before truncating to ``limit``.
    """
    if not query or not isinstance(query, str):
        return []

    suggestions = []
    if results:
        suggestions.extend(
            f"{query} in {category}"
            for category in unique_in_order(course.category for course in results)
        )
        suggestions.extend(
            f"{level} {query}"
            for level in unique_in_order(course.level for course in results)
        )

    suggestions.extend(
        [
            f"{query} tutorial",
            f"{query} beginner",
            f"{query} advanced",
            f"{query} course",
            f"learn {query}",
        ]
    )

    return unique_in_order(suggestions)[:limit]
