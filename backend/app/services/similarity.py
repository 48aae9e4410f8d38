# services/similarity.py
"""
String similarity primitives used by the relevance scorer
"""
from typing import Any

# Scale applied to the edit-distance similarity
LEVENSHTEIN_FACTOR = 0.7


def levenshtein_distance(source: str, target: str) -> int:
    """Edit distance with unit cost insert, delete and substitute"""
    if not source:
        return len(target)
    if not target:
        return len(source)

    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            if source_char == target_char:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], current[j - 1], previous[j]) + 1)
        previous = current

    return previous[-1]


def word_overlap(text: str, query: str) -> float:
    """
    Fraction of query words that contain, or are contained in, a text word,
    divided by the larger word count of the two strings.
    """
    text_words = text.split()
    query_words = query.split()
    denominator = max(len(text_words), len(query_words))
    if denominator == 0:
        return 0.0

    common = sum(
        1
        for query_word in query_words
        if any(
            query_word in text_word or text_word in query_word
            for text_word in text_words
        )
    )
    return common / denominator


def calculate_similarity(text: Any, query: Any) -> float:
    """
    Similarity in [0, 1] between a course field and the raw query.

    Containment in either direction scores 1.0. Otherwise the better of the
    word overlap and the scaled normalized edit distance is returned.
    """
    if not isinstance(text, str) or not isinstance(query, str):
        return 0.0
    if not text or not query:
        return 0.0

    text = text.lower()
    query = query.lower()

    if query in text or text in query:
        return 1.0

    overlap_score = word_overlap(text, query)
    longest = max(len(text), len(query))
    levenshtein_score = 1 - levenshtein_distance(text, query) / longest

    return max(overlap_score, levenshtein_score * LEVENSHTEIN_FACTOR)
