#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/numbering.py
"""Marker formats shared by list and appendix numbering.

Both printers number nested lists the same way. Ordered lists go letters,
digits, Roman numerals; unordered lists start with a dash and then continue
like an ordered list one level down. The DOCX printer turns the level table
into numbering definitions, the LaTeX printer formats markers itself.

"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase


@dataclass(frozen=True)
class LevelFormat:
    """One nesting level of a list numbering scheme.

    Attributes
    ----------
    num_fmt : str
        WordprocessingML number format (``lowerLetter``, ``decimal``, ...)
    template : str
        Marker text where ``{n}`` stands for the item number; in DOCX the
        current level number is ``%<level + 1>``.

    """

    num_fmt: str
    template: str


ORDERED_LEVELS = (
    LevelFormat("lowerLetter", "{n})"),
    LevelFormat("decimal", "{n})"),
    LevelFormat("upperRoman", "{n})"),
)

UNORDERED_LEVELS = (
    LevelFormat("bullet", "–"),
    LevelFormat("lowerLetter", "{n})"),
    LevelFormat("decimal", "{n})"),
)

# Headings: chapter titles unnumbered, then "1", then "1.1"
HEADING_LEVELS = (
    LevelFormat("none", ""),
    LevelFormat("decimal", "%2"),
    LevelFormat("decimal", "%2.%3"),
)

_ROMAN = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"), (100, "C"), (90, "XC"),
    (50, "L"), (40, "XL"), (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)  # fmt: skip


def to_roman(number: int) -> str:
    """Format a positive integer as an upper-case Roman numeral."""
    if number <= 0:
        raise ValueError(f"Roman numerals need a positive number, got {number}")
    parts = []
    for value, symbol in _ROMAN:
        count, number = divmod(number, value)
        parts.append(symbol * count)
    return "".join(parts)


def to_letters(number: int, alphabet: str = ascii_lowercase) -> str:
    """Format a positive integer as letters: a, b, ..., z, aa, ab, ..."""
    if number <= 0:
        raise ValueError(f"Letter numbering needs a positive number, got {number}")
    letters = []
    while number > 0:
        number, remainder = divmod(number - 1, len(alphabet))
        letters.append(alphabet[remainder])
    return "".join(reversed(letters))


def level_format(depth: int, is_ordered: bool) -> LevelFormat:
    """Return the format of a list nesting depth (1 based); deeper levels reuse the last one."""
    levels = ORDERED_LEVELS if is_ordered else UNORDERED_LEVELS
    return levels[min(depth, len(levels)) - 1]


def format_list_marker(index: int, depth: int, is_ordered: bool) -> str:
    """Marker text for the item at zero based ``index`` and 1 based ``depth``."""
    fmt = level_format(depth, is_ordered)
    number = index + 1
    if fmt.num_fmt == "lowerLetter":
        value = to_letters(number)
    elif fmt.num_fmt == "upperRoman":
        value = to_roman(number)
    else:
        value = str(number)
    return fmt.template.format(n=value)


def application_letter(index: int, letters: str) -> str | None:
    """Letter of the appendix at zero based ``index``, None past the alphabet."""
    if 0 <= index < len(letters):
        return letters[index]
    return None
