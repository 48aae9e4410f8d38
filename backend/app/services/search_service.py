# services/search_service.py
"""
Course search service - orchestrates fetch, scoring, ranking and insights
"""
import time
from datetime import timedelta
from typing import List, Optional
import logging

from .insights import (
    empty_insights,
    generate_search_insights,
    generate_search_suggestions,
    unique_in_order,
)
from .interfaces.cache_service import CacheServiceInterface
from .keywords import DEFAULT_KEYWORD_TABLE, KeywordTable
from .ranker import sort_results
from .relevance_scorer import apply_scoring
from ..core.exceptions import SearchValidationError
from ..repositories.interfaces.course_repository import CourseRepositoryInterface
from ..models.requests import SearchData
from ..models.search import CategoryAnalytics, QueryContext, ScoringWeights

logger = logging.getLogger(__name__)

ANALYTICS_CACHE_KEY = "search:analytics"


class CourseSearchService:
    """Core service that answers search, autocomplete and analytics requests"""

    def __init__(
        self,
        course_repository: CourseRepositoryInterface,
        cache_service: CacheServiceInterface,
        weights: Optional[ScoringWeights] = None,
        keyword_table: KeywordTable = DEFAULT_KEYWORD_TABLE,
        min_query_length: int = 2,
        suggestion_limit: int = 5,
        autocomplete_min_length: int = 2,
        autocomplete_match_limit: int = 10,
        autocomplete_result_limit: int = 8,
        analytics_ttl: Optional[timedelta] = None,
    ):
        self.course_repository = course_repository
        self.cache_service = cache_service
        self.weights = weights or ScoringWeights()
        self.keyword_table = keyword_table
        self.min_query_length = min_query_length
        self.suggestion_limit = suggestion_limit
        self.autocomplete_min_length = autocomplete_min_length
        self.autocomplete_match_limit = autocomplete_match_limit
        self.autocomplete_result_limit = autocomplete_result_limit
        self.analytics_ttl = analytics_ttl

    def validate_query(self, query: Optional[str]) -> str:
        """Reject queries shorter than the minimum length"""
        if not isinstance(query, str) or len(query.strip()) < self.min_query_length:
            raise SearchValidationError(
                f"Search query must be at least {self.min_query_length} characters long"
            )
        return query

    async def search(self, context: QueryContext) -> SearchData:
        """Score and rank published courses for a query"""
        start_time = time.time()
        query = self.validate_query(context.query)

        candidates = await self.course_repository.fetch_published_candidates(
            context.to_filter()
        )
        logger.info(
            f"Fetched {len(candidates)} candidates in "
            f"{(time.time() - start_time) * 1000:.1f}ms"
        )

        if not candidates:
            return SearchData(
                courses=[],
                total_results=0,
                search_query=query,
                insights=empty_insights(),
                suggestions=[],
            )

        scored = apply_scoring(candidates, query, self.weights, self.keyword_table)
        ranked = sort_results(scored, context.sort_by)

        insights = generate_search_insights(ranked)
        suggestions = generate_search_suggestions(
            query, ranked, limit=self.suggestion_limit
        )

        logger.info(
            f"Ranked {len(ranked)} courses by {context.sort_by.value} in "
            f"{int((time.time() - start_time) * 1000)}ms"
        )

        return SearchData(
            courses=ranked,
            total_results=len(ranked),
            search_query=query,
            insights=insights,
            suggestions=suggestions,
        )

    async def get_suggestions(self, partial: Optional[str]) -> List[str]:
        """Typeahead over course titles and categories"""
        if not partial or len(partial) < self.autocomplete_min_length:
            return []

        matches = await self.course_repository.find_autocomplete_matches(
            partial, limit=self.autocomplete_match_limit
        )

        titles = [match.title for match in matches]
        categories = [match.category for match in matches]
        return unique_in_order(titles + categories)[: self.autocomplete_result_limit]

    async def get_analytics(self) -> List[CategoryAnalytics]:
        """Per-category aggregates, cached between requests"""
        cached = await self.cache_service.get(ANALYTICS_CACHE_KEY)
        if cached is not None:
            return [CategoryAnalytics.model_validate(item) for item in cached]

        analytics = await self.course_repository.aggregate_category_analytics()

        await self.cache_service.set(
            ANALYTICS_CACHE_KEY,
            [item.model_dump(mode="json") for item in analytics],
            expire=self.analytics_ttl,
        )
        return analytics
