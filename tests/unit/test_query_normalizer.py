"""Tests for query normalization."""

from app.services.query_normalizer import normalize_query


class TestNormalizeQuery:
    def test_punctuation_and_case(self) -> None:
        assert normalize_query("Learn   React.js!!") == ["learn", "react", "js"]

    def test_single_character_tokens_dropped(self) -> None:
        assert normalize_query("a b python c") == ["python"]

    def test_order_preserved_and_duplicates_kept(self) -> None:
        assert normalize_query("web design web") == ["web", "design", "web"]

    def test_underscore_is_a_word_character(self) -> None:
        assert normalize_query("snake_case tips") == ["snake_case", "tips"]

    def test_unicode_letters_kept(self) -> None:
        assert normalize_query("Café français") == ["café", "français"]

    def test_empty_string(self) -> None:
        assert normalize_query("") == []

    def test_only_punctuation(self) -> None:
        assert normalize_query("?!. ,;") == []

    def test_none_and_non_string(self) -> None:
        assert normalize_query(None) == []
        assert normalize_query(42) == []
        assert normalize_query(["react"]) == []
