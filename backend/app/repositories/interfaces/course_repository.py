# repositories/interfaces/course_repository.py
"""
Course repository interface
"""
from abc import ABC, abstractmethod
from typing import Optional, List
from ...models.course import (
    AutocompleteMatch,
    CourseCandidate,
    CourseFilter,
    CourseRecord,
)
from ...models.search import CategoryAnalytics


class CourseRepositoryInterface(ABC):
    """Abstract interface for course data operations"""

    @abstractmethod
    async def create_course(self, course: CourseRecord) -> CourseRecord:
        """Create a new course"""
        pass

    @abstractmethod
    async def get_course_count(self, published_only: bool = False) -> int:
        """Get total count of stored courses"""
        pass

    @abstractmethod
    async def fetch_published_candidates(
        self, filters: Optional[CourseFilter] = None
    ) -> List[CourseCandidate]:
        """Published courses matching the filters, joined and featurized"""
        pass

    @abstractmethod
    async def find_autocomplete_matches(
        self, partial: str, limit: int = 10
    ) -> List[AutocompleteMatch]:
        """Published courses whose title, category or description contains the text"""
        pass

    @abstractmethod
    async def aggregate_category_analytics(self) -> List[CategoryAnalytics]:
        """Per-category course count, average price and enrollments"""
        pass
