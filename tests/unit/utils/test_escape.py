#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_escape.py
"""Unit tests for text escaping helpers."""

import pytest

from mdprinters.utils.escape import (
    escape_latex,
    escape_latex_url,
    prepare_latex_text,
    prepare_raw_text,
    remove_unnecessary_line_breaks,
)


@pytest.mark.unit
class TestEscapeLatex:
    """Tests for LaTeX escaping."""

    def test_special_characters(self):
        """Test that every special character is escaped once."""
        assert escape_latex("50% of $x_1$") == r"50\% of \$x\_1\$"
        assert escape_latex("a & b # c") == r"a \& b \# c"

    def test_backslash_is_not_re_escaped(self):
        """Test that braces produced by a replacement are kept."""
        assert escape_latex("a\\b") == r"a\textbackslash{}b"

    def test_extra_escapes(self):
        """Test that extra escapes apply next to the defaults."""
        assert escape_latex("a-b_c", {"-": "--"}) == r"a--b\_c"

    def test_defaults_disabled(self):
        """Test that default escapes can be switched off."""
        assert escape_latex("50%", default_escapes=False) == "50%"

    def test_url(self):
        """Test URL escaping for href."""
        assert escape_latex_url("http://x.org/a_b#top%20") == r"http://x.org/a_b\#top\%20"


@pytest.mark.unit
class TestPrepareText:
    """Tests for text normalization."""

    def test_prepare_latex_text_decodes_entities(self):
        """Test entity decoding and horizontal space collapsing."""
        assert prepare_latex_text("Tom &amp;  Jerry") == r"Tom \& Jerry"

    def test_prepare_latex_text_keeps_newlines(self):
        """Test that newlines survive."""
        assert prepare_latex_text("a\nb") == "a\nb"

    def test_prepare_raw_text(self):
        """Test whitespace collapsing and dash replacement."""
        assert prepare_raw_text("a  b --\n c") == "a b – c"
        assert prepare_raw_text("it&#39;s") == "it's"


@pytest.mark.unit
class TestRemoveUnnecessaryLineBreaks:
    """Tests for blank line collapsing."""

    def test_collapses_runs(self):
        """Test leading, inner and trailing runs."""
        assert remove_unnecessary_line_breaks("\n\na\n\n\n\nb\n\n\n") == "a\n\nb\n"

    def test_keeps_single_breaks(self):
        """Test that single and double breaks inside text are kept."""
        assert remove_unnecessary_line_breaks("a\nb\n\nc") == "a\nb\n\nc"
