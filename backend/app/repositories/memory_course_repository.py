# repositories/memory_course_repository.py
"""
In-memory course repository implementation for development/testing
"""
import pandas as pd
import os
import logging
from typing import Optional, List, Dict
from datetime import datetime
import threading

from .interfaces.course_repository import CourseRepositoryInterface
from ..models.course import (
    AutocompleteMatch,
    CourseCandidate,
    CourseFilter,
    CourseRecord,
    CreatorSummary,
    LectureSummary,
)
from ..models.search import CategoryAnalytics

logger = logging.getLogger(__name__)


class MemoryCourseRepository(CourseRepositoryInterface):
    """In-memory implementation of course repository"""

    def __init__(self, catalog_path: Optional[str] = None, seed_samples: bool = True):
        self.courses: Dict[str, CourseRecord] = {}
        self.lock = threading.RLock()

        if catalog_path:
            self._load_courses_from_catalog(catalog_path)
        elif seed_samples:
            self._create_sample_courses()

    def _load_courses_from_catalog(self, catalog_path: str):
        """Load courses from a JSON catalog of course records"""
        if not os.path.exists(catalog_path):
            logger.warning(f"Course catalog {catalog_path} not found, using samples")
            self._create_sample_courses()
            return

        df = pd.read_json(catalog_path, orient="records", dtype=False, convert_dates=False)
        df = df.astype(object).where(df.notna(), None)

        for idx, row in enumerate(df.to_dict(orient="records")):
            # ids become floats when pandas fills a missing id with NaN
            raw_id = row.get("id")
            if raw_id is None:
                raw_id = idx
            elif isinstance(raw_id, float) and raw_id.is_integer():
                raw_id = int(raw_id)
            row["id"] = str(raw_id)
            course = CourseRecord.model_validate(
                {key: value for key, value in row.items() if value is not None}
            )
            self.courses[course.id] = course

        logger.info(f"Loaded {len(self.courses)} courses from {catalog_path}")

    def _create_sample_courses(self):
        """Create some sample courses for development"""
        sample_courses = [
            CourseRecord(
                id="1",
                title="Complete React Developer",
                subtitle="Build modern frontend applications",
                description="Learn React hooks, state management, routing and testing while building real web applications with JavaScript.",
                category="Web Development",
                level="Beginner",
                price=49.0,
                is_published=True,
                creator=CreatorSummary(id="u1", name="Ana Torres"),
                enrolled_students=[f"s{i}" for i in range(120)],
                lectures=[
                    LectureSummary(title="Introduction to React", is_preview_free=True),
                    LectureSummary(title="React Hooks in depth"),
                    LectureSummary(title="Routing and data fetching"),
                ],
                created_at=datetime(2024, 3, 1),
            ),
            CourseRecord(
                id="2",
                title="Python for Data Science",
                subtitle="Analytics with pandas and NumPy",
                description="Clean, explore and visualize data, then build your first machine learning models with Python.",
                category="Data Science",
                level="Medium",
                price=79.0,
                is_published=True,
                creator=CreatorSummary(id="u2", name="Raj Patel"),
                enrolled_students=[f"s{i}" for i in range(45)],
                lectures=[
                    LectureSummary(title="Python refresher", is_preview_free=True),
                    LectureSummary(title="Data wrangling with pandas"),
                ],
                created_at=datetime(2024, 6, 15),
            ),
            CourseRecord(
                id="3",
                title="UI/UX Design Fundamentals",
                subtitle="Design visual interfaces people enjoy",
                description="Wireframing, prototyping, typography and colour theory for creative product design.",
                category="Design",
                level="Beginner",
                price=0.0,
                is_published=True,
                creator=CreatorSummary(id="u3", name="Mia Chen"),
                enrolled_students=[f"s{i}" for i in range(300)],
                lectures=[LectureSummary(title="Design thinking", is_preview_free=True)],
                created_at=datetime(2023, 11, 20),
            ),
            CourseRecord(
                id="4",
                title="Advanced Node.js Backend",
                subtitle="Scalable APIs with Express and MongoDB",
                description="Authentication, caching, queues and deployment for production backend services.",
                category="Web Development",
                level="Advance",
                price=99.0,
                is_published=False,
                creator=CreatorSummary(id="u1", name="Ana Torres"),
            ),
        ]

        for course in sample_courses:
            self.courses[course.id] = course

    async def create_course(self, course: CourseRecord) -> CourseRecord:
        """Create a new course"""
        with self.lock:
            if course.id in self.courses:
                raise ValueError(f"Course with ID {course.id} already exists")

            self.courses[course.id] = course
            return course

    async def get_course_count(self, published_only: bool = False) -> int:
        """Get total count of stored courses"""
        with self.lock:
            if published_only:
                return len(self._published())
            return len(self.courses)

    def _published(self) -> List[CourseRecord]:
        return [course for course in self.courses.values() if course.is_published]

    @staticmethod
    def _matches_filter(course: CourseRecord, filters: CourseFilter) -> bool:
        """Category is a case-insensitive substring, level is exact, price inclusive"""
        if filters.category:
            if not course.category or filters.category.lower() not in course.category.lower():
                return False

        if filters.level and course.level != filters.level:
            return False

        price = course.price or 0.0
        if filters.min_price is not None and price < filters.min_price:
            return False
        if filters.max_price is not None and price > filters.max_price:
            return False

        return True

    async def fetch_published_candidates(
        self, filters: Optional[CourseFilter] = None
    ) -> List[CourseCandidate]:
        """Published courses matching the filters, joined and featurized"""
        filters = filters or CourseFilter()
        with self.lock:
            return [
                CourseCandidate.from_record(course)
                for course in self._published()
                if self._matches_filter(course, filters)
            ]

    async def find_autocomplete_matches(
        self, partial: str, limit: int = 10
    ) -> List[AutocompleteMatch]:
        """Published courses whose title, category or description contains the text"""
        needle = partial.lower()
        matches = []

        with self.lock:
            for course in self._published():
                fields = (course.title, course.category, course.description)
                if any(field and needle in field.lower() for field in fields):
                    matches.append(
                        AutocompleteMatch(title=course.title, category=course.category)
                    )
                    if len(matches) >= limit:
                        break

        return matches

    async def aggregate_category_analytics(self) -> List[CategoryAnalytics]:
        """Per-category course count, average price and enrollments"""
        with self.lock:
            rows = [
                {
                    "category": course.category,
                    "price": course.price,
                    "enrollments": len(course.enrolled_students),
                }
                for course in self._published()
            ]

        if not rows:
            return []

        df = pd.DataFrame(rows)
        df["price"] = pd.to_numeric(df["price"], errors="coerce")

        grouped = (
            df.groupby("category", dropna=False, sort=False)
            .agg(
                course_count=("enrollments", "size"),
                average_price=("price", "mean"),
                total_enrollments=("enrollments", "sum"),
            )
            .reset_index()
            .sort_values("course_count", ascending=False, kind="stable")
        )

        return [
            CategoryAnalytics(
                category=None if pd.isna(row.category) else row.category,
                course_count=int(row.course_count),
                average_price=None if pd.isna(row.average_price) else float(row.average_price),
                total_enrollments=int(row.total_enrollments),
            )
            for row in grouped.itertuples(index=False)
        ]
