"""
Dependency injection setup for the course search service
Manages service lifecycle and provides clean dependency injection
"""

from functools import lru_cache
from datetime import timedelta
from uuid import uuid4
from fastapi import Depends, Request
import redis.asyncio as redis
import logging

from .config import get_settings
from ..services.interfaces import CacheServiceInterface
from ..services.cache_service import RedisCacheService
from ..services.memory_cache_service import MemoryCacheService
from ..services.keywords import DEFAULT_KEYWORD_TABLE, KeywordTable
from ..services.search_service import CourseSearchService

# Import repositories
from ..repositories.interfaces import CourseRepositoryInterface
from ..repositories.memory_course_repository import MemoryCourseRepository

logger = logging.getLogger(__name__)


# Database Dependencies
@lru_cache()
def get_redis_pool():
    """Get Redis connection pool"""
    settings = get_settings()
    if settings.redis_url.startswith("redis://"):
        return redis.from_url(settings.redis_url)
    else:
        # For testing or memory-based scenarios
        return None


# Repository Dependencies
@lru_cache()
def get_course_repository() -> CourseRepositoryInterface:
    """Get course repository instance"""
    # In production, this could be a database repository
    settings = get_settings()
    return MemoryCourseRepository(catalog_path=settings.course_catalog_path)


# Service Dependencies
@lru_cache()
def get_cache_service() -> CacheServiceInterface:
    """Get cache service instance"""
    redis_pool = get_redis_pool()
    settings = get_settings()
    if redis_pool is None:
        return MemoryCacheService(settings)
    return RedisCacheService(redis_pool, settings)


@lru_cache()
def get_keyword_table() -> KeywordTable:
    """Get the keyword associations used for semantic scoring"""
    return DEFAULT_KEYWORD_TABLE


@lru_cache()
def get_search_service() -> CourseSearchService:
    """Get the search service with all its dependencies"""
    settings = get_settings()
    return CourseSearchService(
        course_repository=get_course_repository(),
        cache_service=get_cache_service(),
        weights=settings.search_weights,
        keyword_table=get_keyword_table(),
        min_query_length=settings.min_query_length,
        suggestion_limit=settings.suggestion_limit,
        autocomplete_min_length=settings.autocomplete_min_length,
        autocomplete_match_limit=settings.autocomplete_match_limit,
        autocomplete_result_limit=settings.autocomplete_result_limit,
        analytics_ttl=timedelta(seconds=settings.cache_ttl_seconds),
    )


# Health Check Dependencies
async def get_service_health() -> dict:
    """Get health status of all services"""
    health_status = {
        "course_repository": "unknown",
        "cache": "unknown",
    }

    try:
        course_count = await get_course_repository().get_course_count(
            published_only=True
        )
        health_status["course_repository"] = f"healthy ({course_count} published)"
    except Exception as e:
        health_status["course_repository"] = f"unhealthy: {str(e)}"

    health_status["cache"] = await get_cache_service().ping()

    return health_status


# Cleanup function for application shutdown
async def cleanup_resources():
    """Cleanup resources on application shutdown"""
    try:
        redis_pool = get_redis_pool()
        if redis_pool:
            await redis_pool.aclose()
    except Exception as e:
        logger.error(f"Error cleaning up Redis: {e}")

    # Clear caches
    get_redis_pool.cache_clear()
    get_course_repository.cache_clear()
    get_cache_service.cache_clear()
    get_keyword_table.cache_clear()
    get_search_service.cache_clear()


async def get_request_id(request: Request) -> str:
    """Generate or get request ID for tracking"""
    request_id = request.headers.get("X-Request-ID")
    if not request_id:
        request_id = str(uuid4())
    return request_id


# Logging context dependency
async def get_logging_context(request_id: str = Depends(get_request_id)) -> dict:
    """Get logging context for request tracking"""
    return {"request_id": request_id}
