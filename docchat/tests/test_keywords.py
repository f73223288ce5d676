"""Tests for the keyword extraction heuristic"""

import pytest


class TestExtractKeywords:
    def test_drops_stop_words_digits_and_duplicates(self):
        from docchat.analyzer.keywords import extract_keywords

        keywords = extract_keywords("Revenue increased in 2024. Revenue, margins!")

        assert keywords == ["revenue", "increased", "margins"]

    def test_keep_case_and_duplicates(self):
        from docchat.analyzer.keywords import extract_keywords

        keywords = extract_keywords(
            "Revenue revenue",
            return_changed_case=False,
            remove_duplicates=False,
        )

        assert keywords == ["Revenue", "revenue"]

    def test_keep_digits(self):
        from docchat.analyzer.keywords import extract_keywords

        assert extract_keywords("Budget 2024", remove_digits=False) == ["budget", "2024"]

    def test_empty_text(self):
        from docchat.analyzer.keywords import extract_keywords

        assert extract_keywords("") == []

    def test_unsupported_language(self):
        from docchat.analyzer.keywords import extract_keywords

        with pytest.raises(ValueError, match="Unsupported keyword language"):
            extract_keywords("some text", language="klingon")
