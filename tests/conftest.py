"""Pytest configuration and fixtures for the course search service.

Uses app.main:app for HTTP tests with the search service dependency
overridden by an empty in-memory repository per test.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import get_settings
from app.core.dependencies import get_search_service
from app.main import app
from app.repositories.memory_course_repository import MemoryCourseRepository
from app.services.memory_cache_service import MemoryCacheService
from app.services.search_service import CourseSearchService


@pytest.fixture
def repository() -> MemoryCourseRepository:
    """Empty repository; tests add the courses they need."""
    return MemoryCourseRepository(seed_samples=False)


@pytest.fixture
def cache_service() -> MemoryCacheService:
    return MemoryCacheService(get_settings())


@pytest.fixture
def search_service(
    repository: MemoryCourseRepository, cache_service: MemoryCacheService
) -> CourseSearchService:
    return CourseSearchService(course_repository=repository, cache_service=cache_service)


@pytest.fixture
async def client(search_service: CourseSearchService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    app.dependency_overrides[get_search_service] = lambda: search_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
