# services/keywords.py
"""
Topical keyword associations used for the semantic similarity bonus
"""
from types import MappingProxyType
from typing import Iterable, Mapping, FrozenSet

KeywordTable = Mapping[str, FrozenSet[str]]

DEFAULT_KEYWORD_ASSOCIATIONS = {
    "programming": ["coding", "development", "software", "computer", "tech"],
    "web": ["html", "css", "javascript", "react", "frontend", "backend"],
    "data": ["analytics", "science", "machine learning", "ai", "statistics"],
    "design": ["ui", "ux", "graphic", "creative", "visual"],
    "business": ["management", "marketing", "finance", "entrepreneurship"],
    "language": ["english", "communication", "writing", "speaking"],
}


def build_keyword_table(associations: Mapping[str, Iterable[str]]) -> KeywordTable:
    """Freeze a bucket -> synonyms mapping into a read-only lookup"""
    return MappingProxyType(
        {
            bucket.lower(): frozenset(synonym.lower() for synonym in synonyms)
            for bucket, synonyms in associations.items()
        }
    )


DEFAULT_KEYWORD_TABLE = build_keyword_table(DEFAULT_KEYWORD_ASSOCIATIONS)
