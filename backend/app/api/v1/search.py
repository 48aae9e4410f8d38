# api/v1/search.py
"""
Course search API endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from typing import Optional
import math
import logging

from ...core.dependencies import get_search_service, get_logging_context
from ...core.exceptions import SearchValidationError
from ...models.requests import (
    AnalyticsResponse,
    FailureResponse,
    SearchResponse,
    SuggestionResponse,
)
from ...models.search import QueryContext, SortBy
from ...services.search_service import CourseSearchService

router = APIRouter()
logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=FailureResponse(message=message).model_dump(by_alias=True),
    )


def _parse_price(value: Optional[str], name: str) -> Optional[float]:
    """Numeric query string, empty treated as absent"""
    if value is None or not value.strip():
        return None
    try:
        price = float(value)
    except ValueError:
        raise SearchValidationError(f"{name} must be a number")
    if not math.isfinite(price):
        raise SearchValidationError(f"{name} must be a number")
    return price


def _parse_sort(value: Optional[str]) -> SortBy:
    """Unknown sort keys fall back to relevance"""
    try:
        return SortBy(value) if value else SortBy.RELEVANCE
    except ValueError:
        logger.debug(f"Ignoring unknown sortBy {value!r}")
        return SortBy.RELEVANCE


@router.get("", response_model=SearchResponse, response_model_exclude_none=True)
async def search_courses(
    query: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    search_service: CourseSearchService = Depends(get_search_service),
    logging_context: dict = Depends(get_logging_context),
):
    """
    Search published courses with relevance scoring

    - **query**: search text, at least 2 characters
    - **category**: case-insensitive category filter
    - **level**: exact course level filter
    - **minPrice** / **maxPrice**: inclusive price range
    - **sortBy**: relevance, price_low, price_high, popularity or newest
    """
    try:
        context = QueryContext(
            query=search_service.validate_query(query),
            category=category or None,
            level=level or None,
            min_price=_parse_price(min_price, "minPrice"),
            max_price=_parse_price(max_price, "maxPrice"),
            sort_by=_parse_sort(sort_by),
        )

        logger.info(f"Search request: {context.query[:100]}", extra=logging_context)

        data = await search_service.search(context)

        if data.total_results == 0:
            message = "No courses found matching your search criteria"
        else:
            message = f"Found {data.total_results} courses matching your search"

        return SearchResponse(message=message, data=data)

    except SearchValidationError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.error(f"AI search error: {e}", exc_info=True, extra=logging_context)
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to perform AI search"
        )


@router.get("/suggestions", response_model=SuggestionResponse)
async def get_search_suggestions(
    q: Optional[str] = Query(None),
    search_service: CourseSearchService = Depends(get_search_service),
    logging_context: dict = Depends(get_logging_context),
):
    """Autocomplete suggestions from course titles and categories"""
    try:
        suggestions = await search_service.get_suggestions(q)
        return SuggestionResponse(suggestions=suggestions)

    except Exception as e:
        logger.error(f"Suggestion error: {e}", exc_info=True, extra=logging_context)
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to get suggestions"
        )


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_search_analytics(
    search_service: CourseSearchService = Depends(get_search_service),
    logging_context: dict = Depends(get_logging_context),
):
    """Course count, average price and enrollments per category"""
    try:
        analytics = await search_service.get_analytics()
        return AnalyticsResponse(analytics=analytics)

    except Exception as e:
        logger.error(f"Analytics error: {e}", exc_info=True, extra=logging_context)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to get analytics")
