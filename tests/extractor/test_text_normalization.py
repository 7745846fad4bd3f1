"""
Unit Tests for Text Normalization
"""

import pytest

from provas_toolkit.extractor.utils import normalize_text, split_lines


class TestNormalizeText:
    """Tests for normalize_text()."""

    def test_normalize_when_empty_then_returns_empty(self):
        assert normalize_text("") == ""

    @pytest.mark.parametrize("raw", ["a\r\nb", "a\rb", "a\u2028b", "a\u2029b", "a\x0cb"])
    def test_normalize_when_line_break_variant_then_unified(self, raw):
        assert normalize_text(raw) == "a\nb"

    def test_normalize_when_space_runs_then_collapsed(self):
        assert normalize_text("QUESTÃO   1\t\tTexto") == "QUESTÃO 1 Texto"

    def test_normalize_when_space_runs_then_lines_kept(self):
        """Only horizontal whitespace collapses; line structure survives."""
        assert normalize_text("A) um  \nB) dois") == "A) um\nB) dois"

    def test_normalize_when_page_number_line_then_neighbours_joined(self):
        assert normalize_text("Texto\n12\nMais") == "Texto\nMais"

    def test_normalize_when_page_number_inside_alternative_then_no_blank_line(self):
        result = normalize_text("A) primeira parte\n12\ncontinua aqui\nB) dois")

        assert result == "A) primeira parte\ncontinua aqui\nB) dois"

    def test_normalize_when_page_number_last_line_then_removed(self):
        assert normalize_text("Texto\n 37 ") == "Texto"

    def test_normalize_when_page_numbers_kept_then_digit_lines_survive(self):
        assert normalize_text("1\nA\n2\nB", strip_page_numbers=False) == "1\nA\n2\nB"

    def test_normalize_when_many_newlines_then_at_most_two(self):
        assert normalize_text("a\n\n\n\n\nb") == "a\n\nb"

    def test_normalize_when_mixed_artifacts_then_all_rules_applied(self):
        # Arrange
        raw = "QUESTÃO  1\r\n\r\n\r\n\r\n12\r\nTexto"

        # Act
        result = normalize_text(raw)

        # Assert
        assert result == "QUESTÃO 1\n\nTexto"

    def test_normalize_when_applied_twice_then_unchanged(self, vestibular_text):
        once = normalize_text(vestibular_text + "\r\n\r\n\r\n  7  \r\n")

        assert normalize_text(once) == once


class TestSplitLines:
    def test_split_when_indented_then_stripped(self):
        assert split_lines("  a\n\n b ") == ["a", "", "b"]
