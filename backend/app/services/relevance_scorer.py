# services/relevance_scorer.py
"""
Multi-signal relevance scoring for course candidates

Five weighted signals (title, subtitle, description, category, popularity)
sum to at most 1.0. Lecture and semantic bonuses are added on top and the
total is clamped to 1.0 afterwards; the total is never renormalized.
"""
import math
from typing import Any, List, Optional, Sequence

from .keywords import DEFAULT_KEYWORD_TABLE, KeywordTable
from .query_normalizer import normalize_query
from .similarity import calculate_similarity
from ..models.course import CourseCandidate, LectureSummary
from ..models.search import ScoreBreakdown, ScoredCandidate, ScoringWeights

SEMANTIC_INCREMENT = 0.1

ENROLLMENT_SATURATION = 100
LECTURE_SATURATION = 20
ENROLLMENT_SHARE = 0.7
CONTENT_SHARE = 0.3


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def description_relevance(description: Any, query_terms: Sequence[str]) -> float:
    """Share of description words matching each term, summed and capped at 1"""
    if not isinstance(description, str) or not query_terms:
        return 0.0

    words = description.lower().split()
    if not words:
        return 0.0

    score = 0.0
    for term in query_terms:
        matches = sum(1 for word in words if term in word or word in term)
        score += matches / len(words)

    return min(score, 1.0)


def popularity_score(enrolled_count: Optional[int], lecture_count: Optional[int]) -> float:
    """Enrollment and content volume, both saturating"""
    enrolled = max(0, enrolled_count or 0)
    lectures = max(0, lecture_count or 0)

    enrollment_score = min(enrolled / ENROLLMENT_SATURATION, 1.0)
    content_score = min(lectures / LECTURE_SATURATION, 1.0)
    return enrollment_score * ENROLLMENT_SHARE + content_score * CONTENT_SHARE


def lecture_relevance(
    lectures: Optional[Sequence[LectureSummary]],
    query_terms: Sequence[str],
    cap: float,
) -> float:
    """Average share of terms found in each lecture title, capped"""
    if not lectures or not query_terms:
        return 0.0

    total = 0.0
    for lecture in lectures:
        title = getattr(lecture, "title", None)
        if not isinstance(title, str) or not title:
            continue
        title = title.lower()
        hits = sum(1 for term in query_terms if term in title)
        total += hits / len(query_terms)

    return min(total / len(lectures), cap)


def semantic_similarity(
    course_text: str,
    query_terms: Sequence[str],
    keyword_table: KeywordTable,
    cap: float,
) -> float:
    """
    Flat bonus per (term, bucket) pair where the term names the bucket or one
    of its synonyms and the course text mentions the bucket as well.

    Matching is plain substring containment, so this only gives a coarse
    topical boost. Short synonyms such as "ai" or "ui" also fire inside
    unrelated words.
    """
    if not course_text or not query_terms:
        return 0.0

    score = 0.0
    for term in query_terms:
        for bucket, synonyms in keyword_table.items():
            if bucket not in term and not any(synonym in term for synonym in synonyms):
                continue
            if bucket in course_text or any(synonym in course_text for synonym in synonyms):
                score += SEMANTIC_INCREMENT

    return min(score, cap)


def find_matched_terms(candidate: CourseCandidate, query_terms: Sequence[str]) -> List[str]:
    """Terms that appear in the title, subtitle or description"""
    if not query_terms:
        return []

    text = _joined_text(candidate.title, candidate.subtitle, candidate.description)
    return [term for term in query_terms if term and term in text]


def score_breakdown(
    candidate: CourseCandidate,
    query: str,
    query_terms: Sequence[str],
    weights: ScoringWeights,
    keyword_table: KeywordTable = DEFAULT_KEYWORD_TABLE,
) -> ScoreBreakdown:
    """Compute every signal for one candidate"""
    course_text = _joined_text(
        candidate.title, candidate.subtitle, candidate.description, candidate.category
    )

    return ScoreBreakdown(
        title_match=calculate_similarity(candidate.title, query) * weights.title_weight,
        subtitle_match=calculate_similarity(candidate.subtitle, query)
        * weights.subtitle_weight,
        description_relevance=description_relevance(candidate.description, query_terms)
        * weights.description_weight,
        category_match=calculate_similarity(candidate.category, query)
        * weights.category_weight,
        popularity_boost=popularity_score(
            candidate.enrolled_count, candidate.lecture_count
        )
        * weights.popularity_weight,
        lecture_relevance=lecture_relevance(
            candidate.lectures, query_terms, weights.lecture_cap
        ),
        semantic_similarity=semantic_similarity(
            course_text, query_terms, keyword_table, weights.semantic_cap
        ),
    )


def score_candidate(
    candidate: CourseCandidate,
    query: str,
    query_terms: Sequence[str],
    weights: ScoringWeights,
    keyword_table: KeywordTable = DEFAULT_KEYWORD_TABLE,
) -> ScoredCandidate:
    """Attach the composite score, breakdown and matched terms to a candidate"""
    breakdown = score_breakdown(candidate, query, query_terms, weights, keyword_table)
    composite = min(breakdown.total(), 1.0)

    return ScoredCandidate(
        **candidate.model_dump(),
        composite_score=composite,
        score_breakdown=breakdown,
        relevance_percentage=round_half_up(composite * 100),
        matched_terms=find_matched_terms(candidate, query_terms),
    )


def apply_scoring(
    candidates: Sequence[CourseCandidate],
    query: str,
    weights: ScoringWeights,
    keyword_table: KeywordTable = DEFAULT_KEYWORD_TABLE,
) -> List[ScoredCandidate]:
    """Score every candidate in pipeline order"""
    if not candidates:
        return []

    query_terms = normalize_query(query)
    return [
        score_candidate(candidate, query, query_terms, weights, keyword_table)
        for candidate in candidates
    ]


def _joined_text(*parts: Optional[str]) -> str:
    return " ".join(part if isinstance(part, str) else "" for part in parts).lower()
