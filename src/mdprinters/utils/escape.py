#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/utils/escape.py
"""Format-specific text escaping and normalization.

Text nodes arrive with HTML entities produced by the Markdown tokenizer
(``&#39;``, ``&quot;``...) and with the author's spacing. The helpers here
undo the entities, normalize whitespace, and escape characters that are
special in the target format.

"""

from __future__ import annotations

import html
import re
from typing import Mapping

# LaTeX special characters that need escaping in running text
LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "#": r"\#",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    "<": r"\textless{}",
    ">": r"\textgreater{}",
}

# Characters hyperref cannot take verbatim in the URL argument of \href
LATEX_URL_SPECIAL_CHARS = {
    "#": r"\#",
    "%": r"\%",
    "&": r"\&",
}

_SPACE_RUN = re.compile(r"[ \t\r\n]+")
_HORIZONTAL_SPACE_RUN = re.compile(r"[ \t]+")


def _replace_all(text: str, mapping: Mapping[str, str]) -> str:
    if not text or not mapping:
        return text
    # Longest keys first; a single pass keeps replacements from being re-escaped
    pattern = re.compile("|".join(re.escape(key) for key in sorted(mapping, key=len, reverse=True)))
    return pattern.sub(lambda match: mapping[match.group(0)], text)


def escape_latex(
    text: str,
    extra_escapes: Mapping[str, str] | None = None,
    default_escapes: bool = True,
) -> str:
    r"""Escape LaTeX special characters in text content.

    Parameters
    ----------
    text : str
        Text to escape
    extra_escapes : mapping, optional
        Additional literal replacements; they win over the defaults
    default_escapes : bool, default True
        Apply :data:`LATEX_SPECIAL_CHARS`

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_latex("50% of $x_1$")
        '50\\% of \\$x\\_1\\$'

    """
    mapping: dict[str, str] = dict(LATEX_SPECIAL_CHARS) if default_escapes else {}
    if extra_escapes:
        mapping.update(extra_escapes)
    return _replace_all(text, mapping)


def escape_latex_url(url: str) -> str:
    """Escape a URL for the first argument of ``\\href``."""
    return _replace_all(url, LATEX_URL_SPECIAL_CHARS)


def prepare_latex_text(
    text: str,
    extra_escapes: Mapping[str, str] | None = None,
    default_escapes: bool = True,
) -> str:
    """Decode entities, collapse horizontal space runs and escape for LaTeX."""
    text = _HORIZONTAL_SPACE_RUN.sub(" ", html.unescape(text))
    return escape_latex(text, extra_escapes, default_escapes)


def prepare_raw_text(text: str) -> str:
    """Normalize text for a DOCX run.

    Entities are decoded, every whitespace run becomes a single space and
    a spaced double hyphen becomes an en-dash.

    Examples
    --------
        >>> prepare_raw_text("a  b --\\n c")
        'a b – c'

    """
    text = _SPACE_RUN.sub(" ", html.unescape(text))
    return text.replace(" --", " –")


def remove_unnecessary_line_breaks(text: str) -> str:
    """Collapse blank line runs in printed LaTeX.

    Three or more newlines become two, leading newlines are dropped and a
    trailing run of newlines becomes a single one.
    """
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"^\n+", "", text)
    return re.sub(r"\n{2,}$", "\n", text)
