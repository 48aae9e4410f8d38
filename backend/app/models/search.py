# models/search.py
"""
Search scoring, ranking and insight models
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum

from .course import CamelModel, CourseCandidate, CourseFilter


class SortBy(str, Enum):
    RELEVANCE = "relevance"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
    POPULARITY = "popularity"
    NEWEST = "newest"


class ScoringWeights(BaseModel):
    """Signal weights and bonus caps for relevance scoring"""

    title_weight: float = 0.40
    subtitle_weight: float = 0.25
    description_weight: float = 0.20
    category_weight: float = 0.10
    popularity_weight: float = 0.05

    # Additive bonuses on top of the weighted terms
    lecture_cap: float = 0.10
    semantic_cap: float = 0.20


class QueryContext(BaseModel):
    """Raw query plus structural filters and sort key"""

    query: str
    category: Optional[str] = None
    level: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: SortBy = SortBy.RELEVANCE

    def to_filter(self) -> CourseFilter:
        return CourseFilter(
            category=self.category,
            level=self.level,
            min_price=self.min_price,
            max_price=self.max_price,
        )


class ScoreBreakdown(CamelModel):
    """Per-signal contributions to the composite score"""

    title_match: float = 0.0
    subtitle_match: float = 0.0
    description_relevance: float = 0.0
    category_match: float = 0.0
    popularity_boost: float = 0.0
    lecture_relevance: float = 0.0
    semantic_similarity: float = 0.0

    def total(self) -> float:
        return (
            self.title_match
            + self.subtitle_match
            + self.description_relevance
            + self.category_match
            + self.popularity_boost
            + self.lecture_relevance
            + self.semantic_similarity
        )


class ScoredCandidate(CourseCandidate):
    """Candidate with its relevance score attached"""

    composite_score: float = Field(0.0, ge=0.0, le=1.0)
    score_breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    relevance_percentage: int = Field(0, ge=0, le=100)
    matched_terms: List[str] = Field(default_factory=list)


class Recommendation(CamelModel):
    """Top result explanation"""

    title: str
    relevance: int
    reason: str


class SearchInsights(CamelModel):
    """Summary over a ranked result set"""

    summary: str
    average_price: Optional[int] = None
    available_levels: Optional[List[str]] = None
    popular_categories: Optional[List[str]] = None
    top_match_title: Optional[str] = None
    top_match_relevance: Optional[int] = None
    recommendations: Optional[List[Recommendation]] = None

    # Only set on the empty-result variant
    suggestions: Optional[List[str]] = None


class CategoryAnalytics(CamelModel):
    """Per-category aggregate over published courses"""

    category: Optional[str] = None
    course_count: int
    average_price: Optional[float] = None
    total_enrollments: int
