#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/printers/test_numbering.py
"""Unit tests for list markers and appendix letters."""

import pytest

from mdprinters.constants import DEFAULT_APPLICATION_LETTERS
from mdprinters.printers.numbering import (
    application_letter,
    format_list_marker,
    level_format,
    to_letters,
    to_roman,
)


@pytest.mark.unit
class TestNumberFormats:
    """Tests for number formatting helpers."""

    @pytest.mark.parametrize("number,expected", [(1, "I"), (4, "IV"), (9, "IX"), (14, "XIV"), (1994, "MCMXCIV")])
    def test_roman(self, number, expected):
        """Test Roman numerals."""
        assert to_roman(number) == expected

    @pytest.mark.parametrize("number,expected", [(1, "a"), (26, "z"), (27, "aa"), (28, "ab"), (53, "ba")])
    def test_letters(self, number, expected):
        """Test letter numbering past the alphabet."""
        assert to_letters(number) == expected

    def test_non_positive_rejected(self):
        """Test that zero cannot be formatted."""
        with pytest.raises(ValueError):
            to_roman(0)
        with pytest.raises(ValueError):
            to_letters(0)


@pytest.mark.unit
class TestListMarkers:
    """Tests for list markers by depth and ordered-ness."""

    @pytest.mark.parametrize(
        "index,depth,ordered,expected",
        [
            (0, 1, True, "a)"),
            (2, 1, True, "c)"),
            (1, 2, True, "2)"),
            (3, 3, True, "IV)"),
            (5, 1, False, "–"),
            (0, 2, False, "a)"),
            (1, 3, False, "2)"),
            (0, 7, True, "I)"),
        ],
    )
    def test_markers(self, index, depth, ordered, expected):
        """Test markers for every level kind."""
        assert format_list_marker(index, depth, ordered) == expected

    def test_deep_levels_reuse_last(self):
        """Test that levels past the table reuse the deepest format."""
        assert level_format(9, True) == level_format(3, True)


@pytest.mark.unit
class TestApplicationLetter:
    """Tests for appendix letters."""

    def test_in_range(self):
        """Test the first and last letters."""
        assert application_letter(0, DEFAULT_APPLICATION_LETTERS) == "A"
        assert application_letter(len(DEFAULT_APPLICATION_LETTERS) - 1, DEFAULT_APPLICATION_LETTERS) == "Z"

    def test_confusable_letters_skipped(self):
        """Test that I and O are not used."""
        assert "I" not in DEFAULT_APPLICATION_LETTERS
        assert "O" not in DEFAULT_APPLICATION_LETTERS

    def test_out_of_range(self):
        """Test that indices past the alphabet have no letter."""
        assert application_letter(len(DEFAULT_APPLICATION_LETTERS), DEFAULT_APPLICATION_LETTERS) is None
        assert application_letter(-1, DEFAULT_APPLICATION_LETTERS) is None
