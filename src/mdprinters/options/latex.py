#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/options/latex.py
"""Configuration options for AST-to-LaTeX printing."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdprinters.constants import (
    DEFAULT_LATEX_AUTO_ESCAPES,
    DEFAULT_LATEX_CAPTION_SEPARATOR,
    DEFAULT_LATEX_CODE_ABOVE_CAPTION_SKIP,
    DEFAULT_LATEX_CODE_BELOW_CAPTION_SKIP,
    DEFAULT_LATEX_CODE_INNER_TEXT_SEP,
    DEFAULT_LATEX_CODE_LANGUAGE,
    DEFAULT_LATEX_CODE_REMOVED_BELOW_CAPTION_SKIP,
    DEFAULT_LATEX_IMAGE_ABOVE_CAPTION_SKIP,
    DEFAULT_LATEX_IMAGE_BELOW_CAPTION_SKIP,
    DEFAULT_LATEX_IMAGE_INNER_TEXT_SEP,
    DEFAULT_LATEX_IMAGE_REMOVED_BELOW_CAPTION_SKIP,
    DEFAULT_LATEX_LIST_INDENT,
    DEFAULT_LATEX_MATH_ABOVE_DISPLAY_SHORT_SKIP,
    DEFAULT_LATEX_MATH_ABOVE_DISPLAY_SKIP,
    DEFAULT_LATEX_MATH_BELOW_DISPLAY_SHORT_SKIP,
    DEFAULT_LATEX_MATH_BELOW_DISPLAY_SKIP,
    DEFAULT_LATEX_TABLE_ABOVE_CAPTION_SKIP,
    DEFAULT_LATEX_TABLE_BELOW_CAPTION_SKIP,
    DEFAULT_LATEX_TABLE_POST,
    DEFAULT_LATEX_TABLE_PRE,
    DEFAULT_LATEX_TABLE_REMOVED_POST,
)
from mdprinters.options.base import BasePrinterOptions, CloneFrozenMixin


@dataclass(frozen=True)
class LatexMarginOptions(CloneFrozenMixin):
    """Vertical spacing applied around boxed blocks and display math.

    Every value is a LaTeX length. The ``removed_*`` variants replace the
    regular spacing when a block is directly followed by another boxed block.
    """

    image_inner_text_sep: str = DEFAULT_LATEX_IMAGE_INNER_TEXT_SEP
    image_below_caption_skip: str = DEFAULT_LATEX_IMAGE_BELOW_CAPTION_SKIP
    image_removed_below_caption_skip: str = DEFAULT_LATEX_IMAGE_REMOVED_BELOW_CAPTION_SKIP
    image_above_caption_skip: str = DEFAULT_LATEX_IMAGE_ABOVE_CAPTION_SKIP

    code_inner_text_sep: str = DEFAULT_LATEX_CODE_INNER_TEXT_SEP
    code_below_caption_skip: str = DEFAULT_LATEX_CODE_BELOW_CAPTION_SKIP
    code_removed_below_caption_skip: str = DEFAULT_LATEX_CODE_REMOVED_BELOW_CAPTION_SKIP
    code_above_caption_skip: str = DEFAULT_LATEX_CODE_ABOVE_CAPTION_SKIP

    table_below_caption_skip: str = DEFAULT_LATEX_TABLE_BELOW_CAPTION_SKIP
    table_above_caption_skip: str = DEFAULT_LATEX_TABLE_ABOVE_CAPTION_SKIP
    table_pre: str = DEFAULT_LATEX_TABLE_PRE
    table_post: str = DEFAULT_LATEX_TABLE_POST
    table_removed_post: str = DEFAULT_LATEX_TABLE_REMOVED_POST

    math_above_display_skip: str = DEFAULT_LATEX_MATH_ABOVE_DISPLAY_SKIP
    math_below_display_skip: str = DEFAULT_LATEX_MATH_BELOW_DISPLAY_SKIP
    math_above_display_short_skip: str = DEFAULT_LATEX_MATH_ABOVE_DISPLAY_SHORT_SKIP
    math_below_display_short_skip: str = DEFAULT_LATEX_MATH_BELOW_DISPLAY_SHORT_SKIP


@dataclass(frozen=True)
class LatexPrinterOptions(BasePrinterOptions):
    r"""Configuration options for AST-to-LaTeX printing.

    Parameters
    ----------
    margin : LatexMarginOptions
        Spacing table per block kind (figures, listings, tables, math).
    default_auto_escapes : bool, default True
        Escape LaTeX special characters (``%``, ``$``, ``_``...) in text.
    extend_auto_escapes : dict[str, str]
        Extra literal replacements applied to text on top of the defaults,
        for example ``{'"': "''"}``.
    caption_separator : str, default " -- "
        Separator between "Figure N" and the caption title.
    default_code_language : str, default "text"
        Lexer passed to minted when a listing has no language.
    list_indent : str, default "1.25cm"
        Horizontal indent added per list nesting level.

    """

    margin: LatexMarginOptions = field(
        default_factory=LatexMarginOptions,
        metadata={"help": "Spacing margins per block kind", "importance": "advanced"},
    )
    default_auto_escapes: bool = field(
        default=DEFAULT_LATEX_AUTO_ESCAPES,
        metadata={"help": "Escape LaTeX special characters in text", "importance": "core"},
    )
    extend_auto_escapes: dict[str, str] = field(
        default_factory=dict,
        metadata={"help": "Additional literal replacements applied to text", "importance": "advanced"},
    )
    caption_separator: str = field(
        default=DEFAULT_LATEX_CAPTION_SEPARATOR,
        metadata={"help": "Separator between caption number and title"},
    )
    default_code_language: str = field(
        default=DEFAULT_LATEX_CODE_LANGUAGE,
        metadata={"help": "Lexer used for listings without a language"},
    )
    list_indent: str = field(
        default=DEFAULT_LATEX_LIST_INDENT,
        metadata={"help": "Indent added per list nesting level"},
    )

    def __post_init__(self) -> None:
        """Validate LaTeX options.

        Raises
        ------
        ValueError
            If an escape mapping key is empty.

        """
        super().__post_init__()
        if any(not key for key in self.extend_auto_escapes):
            raise ValueError("extend_auto_escapes keys must be non-empty strings")
