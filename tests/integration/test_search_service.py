"""Integration test: search service over the in-memory repository."""

from datetime import datetime
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import SearchValidationError
from app.models.course import CourseRecord, LectureSummary
from app.models.search import QueryContext, SortBy
from app.repositories.memory_course_repository import MemoryCourseRepository
from app.services.insights import NO_RESULTS_SUMMARY
from app.services.search_service import ANALYTICS_CACHE_KEY, CourseSearchService


def _record(
    id: str,
    *,
    title: str,
    subtitle: Optional[str] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
    level: Optional[str] = "Beginner",
    price: Optional[float] = None,
    enrolled: int = 0,
    lectures: int = 0,
    created_at: Optional[datetime] = None,
    is_published: bool = True,
) -> CourseRecord:
    return CourseRecord(
        id=id,
        title=title,
        subtitle=subtitle,
        description=description,
        category=category,
        level=level,
        price=price,
        is_published=is_published,
        enrolled_students=[f"s{i}" for i in range(enrolled)],
        lectures=[LectureSummary(title=f"Lecture {i}") for i in range(lectures)],
        created_at=created_at,
    )


REACT_COURSE = _record(
    "react",
    title="Intro to React",
    subtitle="Learn frontend",
    category="Web",
    price=50,
    enrolled=60,
    lectures=10,
)


@pytest.fixture
async def seeded(repository: MemoryCourseRepository) -> MemoryCourseRepository:
    await repository.create_course(REACT_COURSE)
    await repository.create_course(
        _record(
            "python",
            title="Python for Data Science",
            description="pandas numpy and machine learning",
            category="Data",
            level="Medium",
            price=80,
            enrolled=200,
            created_at=datetime(2024, 6, 1),
        )
    )
    await repository.create_course(
        _record(
            "design",
            title="Visual Design Basics",
            category="Design",
            price=0,
            enrolled=5,
            created_at=datetime(2023, 1, 1),
        )
    )
    return repository


class TestSearch:
    async def test_react_scenario(self, repository, search_service: CourseSearchService) -> None:
        await repository.create_course(REACT_COURSE)
        data = await search_service.search(QueryContext(query="react"))

        assert data.total_results == 1
        top = data.courses[0]
        assert top.id == "react"
        assert top.score_breakdown.title_match == pytest.approx(0.40)
        assert top.composite_score >= 0.40
        assert "react" in top.matched_terms
        assert data.search_query == "react"
        assert data.insights.top_match_title == "Intro to React"

    async def test_relevance_ranking(self, seeded, search_service: CourseSearchService) -> None:
        data = await search_service.search(QueryContext(query="python data"))
        assert data.courses[0].id == "python"
        scores = [course.composite_score for course in data.courses]
        assert scores == sorted(scores, reverse=True)

    async def test_sort_by_price_low(self, seeded, search_service: CourseSearchService) -> None:
        data = await search_service.search(
            QueryContext(query="course", sort_by=SortBy.PRICE_LOW)
        )
        assert [course.id for course in data.courses] == ["design", "react", "python"]

    async def test_sort_by_popularity(self, seeded, search_service: CourseSearchService) -> None:
        data = await search_service.search(
            QueryContext(query="course", sort_by=SortBy.POPULARITY)
        )
        assert [course.id for course in data.courses] == ["python", "react", "design"]

    async def test_sort_by_newest(self, seeded, search_service: CourseSearchService) -> None:
        data = await search_service.search(QueryContext(query="course", sort_by=SortBy.NEWEST))
        assert [course.id for course in data.courses] == ["python", "design", "react"]

    async def test_filters_applied(self, seeded, search_service: CourseSearchService) -> None:
        data = await search_service.search(
            QueryContext(query="course", category="dat", min_price=10)
        )
        assert [course.id for course in data.courses] == ["python"]

    async def test_insights_and_suggestions(self, seeded, search_service: CourseSearchService) -> None:
        data = await search_service.search(QueryContext(query="react"))
        assert data.insights.average_price == 43
        assert data.insights.summary.startswith("Found 3 relevant courses with ")
        assert len(data.insights.recommendations) == 3
        assert data.suggestions[0] == "react in Web"
        assert set(data.suggestions[:3]) == {"react in Web", "react in Data", "react in Design"}
        assert len(data.suggestions) == 5

    async def test_empty_corpus(self, search_service: CourseSearchService) -> None:
        data = await search_service.search(QueryContext(query="react"))
        assert data.total_results == 0
        assert data.courses == []
        assert data.suggestions == []
        assert data.insights.summary == NO_RESULTS_SUMMARY
        assert len(data.insights.suggestions) == 3

    async def test_empty_after_filters(self, seeded, search_service: CourseSearchService) -> None:
        data = await search_service.search(QueryContext(query="react", max_price=-1))
        assert data.total_results == 0

    @pytest.mark.parametrize("query", ["", "a", "  b  "])
    async def test_short_query_rejected(self, query: str, search_service) -> None:
        with pytest.raises(SearchValidationError):
            await search_service.search(QueryContext(query=query))

    async def test_short_query_never_reaches_store(self, cache_service) -> None:
        repository = AsyncMock()
        service = CourseSearchService(course_repository=repository, cache_service=cache_service)
        with pytest.raises(SearchValidationError):
            await service.search(QueryContext(query="x"))
        repository.fetch_published_candidates.assert_not_awaited()

    async def test_stored_records_not_mutated(self, seeded, search_service) -> None:
        before = [course.model_copy(deep=True) for course in seeded.courses.values()]
        await search_service.search(QueryContext(query="react", sort_by=SortBy.PRICE_HIGH))
        assert list(seeded.courses.values()) == before


class TestSuggestions:
    async def test_titles_then_categories(self, seeded, search_service) -> None:
        suggestions = await search_service.get_suggestions("de")
        assert suggestions == ["Visual Design Basics", "Design"]

    async def test_short_input(self, seeded, search_service) -> None:
        assert await search_service.get_suggestions("d") == []
        assert await search_service.get_suggestions(None) == []

    async def test_capped_at_eight(self, repository, search_service) -> None:
        for i in range(12):
            await repository.create_course(
                _record(str(i), title=f"Python {i}", category=f"Cat {i}")
            )
        suggestions = await search_service.get_suggestions("python")
        assert suggestions == [f"Python {i}" for i in range(8)]

    async def test_deduplicated(self, repository, search_service) -> None:
        await repository.create_course(_record("1", title="Web", category="Web"))
        await repository.create_course(_record("2", title="Web", category=None))
        assert await search_service.get_suggestions("web") == ["Web"]


class TestAnalytics:
    async def test_aggregates(self, seeded, search_service) -> None:
        analytics = await search_service.get_analytics()
        assert {a.category for a in analytics} == {"Web", "Data", "Design"}
        assert all(a.course_count == 1 for a in analytics)

    async def test_cached_between_calls(self, seeded, search_service, cache_service) -> None:
        first = await search_service.get_analytics()
        assert await cache_service.get(ANALYTICS_CACHE_KEY) is not None

        await seeded.create_course(_record("new", title="New", category="Web"))
        second = await search_service.get_analytics()
        assert second == first

    async def test_cache_reads_rebuild_models(self, seeded) -> None:
        cache = AsyncMock()
        cache.get.return_value = [
            {"category": "Web", "courseCount": 2, "averagePrice": 5.0, "totalEnrollments": 3}
        ]
        service = CourseSearchService(course_repository=seeded, cache_service=cache)
        analytics = await service.get_analytics()
        assert analytics[0].course_count == 2
        assert analytics[0].total_enrollments == 3
