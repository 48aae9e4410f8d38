# models/course.py
"""
Course-related data models
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LectureSummary(CamelModel):
    """Lecture projection joined into a course"""

    title: Optional[str] = None
    is_preview_free: bool = False


class CreatorSummary(CamelModel):
    """Identity of the course owner"""

    id: Optional[str] = None
    name: Optional[str] = None
    photo_url: Optional[str] = None


class CourseRecord(CamelModel):
    """Stored course as owned by the persistence layer"""

    id: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    level: Optional[str] = None  # Beginner, Medium, Advance
    price: Optional[float] = None
    is_published: bool = False

    creator: Optional[CreatorSummary] = None
    enrolled_students: List[str] = Field(default_factory=list)
    lectures: List[LectureSummary] = Field(default_factory=list)

    created_at: Optional[datetime] = None


class CourseFilter(BaseModel):
    """Structural filters applied before scoring"""

    category: Optional[str] = None
    level: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class CourseCandidate(CamelModel):
    """Denormalized published course considered for one search request"""

    id: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    level: Optional[str] = None
    price: float = 0.0
    creator_name: Optional[str] = None
    enrolled_count: int = 0
    lecture_count: int = 0
    created_at: Optional[datetime] = None
    lectures: List[LectureSummary] = Field(default_factory=list)
    searchable_text: str = ""

    @classmethod
    def from_record(cls, record: CourseRecord) -> "CourseCandidate":
        """Join creator/lecture data and derive the per-course features"""
        creator_name = record.creator.name if record.creator else None
        searchable_text = " ".join(
            part or ""
            for part in (
                record.title,
                record.subtitle,
                record.description,
                record.category,
                record.level,
                creator_name,
            )
        )

        return cls(
            id=record.id,
            title=record.title,
            subtitle=record.subtitle,
            description=record.description,
            category=record.category,
            level=record.level,
            price=record.price or 0.0,
            creator_name=creator_name,
            enrolled_count=len(record.enrolled_students),
            lecture_count=len(record.lectures),
            created_at=record.created_at,
            lectures=[lecture.model_copy() for lecture in record.lectures],
            searchable_text=searchable_text,
        )


class AutocompleteMatch(BaseModel):
    """Title/category projection used for typeahead"""

    title: Optional[str] = None
    category: Optional[str] = None
