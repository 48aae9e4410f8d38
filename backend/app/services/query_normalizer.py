# services/query_normalizer.py
"""
Turns a raw search query into ordered search terms
"""
import re
from typing import Any, List

_NON_WORD = re.compile(r"[^\w\s]+")


def normalize_query(query: Any) -> List[str]:
    """
    Lower-case the query, strip punctuation and split it into terms.

    Terms of a single character are dropped. Order is preserved and duplicates
    are kept. Anything that is not a string yields no terms.
    """
    if not query or not isinstance(query, str):
        return []

    cleaned = _NON_WORD.sub(" ", query.lower())
    return [term for term in cleaned.split() if len(term) > 1]
