#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/options/docx.py
"""Configuration options for AST-to-DOCX printing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import get_args

from mdprinters.constants import (
    DEFAULT_DOCX_BLOCK_SPACING_MM,
    DEFAULT_DOCX_CAPTION_SEPARATOR,
    DEFAULT_DOCX_CODE_FONT,
    DEFAULT_DOCX_CODE_FONT_SIZE,
    DEFAULT_DOCX_FIRST_LINE_INDENT_CM,
    DEFAULT_DOCX_FONT,
    DEFAULT_DOCX_FONT_SIZE,
    DEFAULT_DOCX_LINE_SPACING,
    DEFAULT_DOCX_LIST_LEVEL_STEP_MM,
    DEFAULT_DOCX_LIST_TAB_OFFSET_MM,
    DEFAULT_DOCX_MARGIN_BOTTOM_MM,
    DEFAULT_DOCX_MARGIN_LEFT_MM,
    DEFAULT_DOCX_MARGIN_RIGHT_MM,
    DEFAULT_DOCX_MARGIN_TOP_MM,
    DEFAULT_DOCX_MATH_RENDER_MODE,
    DEFAULT_FORMULA_PX_PER_EX,
    DocxMathRenderMode,
)
from mdprinters.options.base import BasePrinterOptions


@dataclass(frozen=True)
class DocxPrinterOptions(BasePrinterOptions):
    """Configuration options for AST-to-DOCX printing.

    Parameters
    ----------
    render_math_as : {"docx_math", "picture"}, default "docx_math"
        Inline formulas as native OMML math or as rasterized pictures.
    template_path : str or None
        Optional .docx template. Uses the python-docx default when None.
    default_font, default_font_size : str, int
        Body text font and size in points.
    code_font, code_font_size : str, int
        Font used by code listings and monospace spans.
    first_line_indent_cm : float
        First line indent of body paragraphs.
    line_spacing : float
        Line spacing multiple of body paragraphs.
    block_spacing_mm : float
        Space above and below pictures; tables use one and a half times this.
    margin_top_mm, margin_bottom_mm, margin_left_mm, margin_right_mm : float
        Page margins of every section.
    list_level_step_mm, list_tab_offset_mm : float
        Nested list geometry: the marker tab stop sits at
        ``level * step + offset`` and the first line indent at ``level * step``.
    formula_px_per_ex : int
        Magnification used to turn the ex-based size of a rendered formula
        into pixels.

    """

    render_math_as: DocxMathRenderMode = field(
        default=DEFAULT_DOCX_MATH_RENDER_MODE,
        metadata={"help": "Inline formulas as OMML math or pictures", "importance": "core"},
    )
    template_path: str | None = field(
        default=None,
        metadata={"help": "Path to a .docx template", "importance": "core"},
    )
    caption_separator: str = field(
        default=DEFAULT_DOCX_CAPTION_SEPARATOR,
        metadata={"help": "Separator between caption number and title"},
    )
    default_font: str = field(default=DEFAULT_DOCX_FONT, metadata={"help": "Body font"})
    default_font_size: int = field(default=DEFAULT_DOCX_FONT_SIZE, metadata={"help": "Body font size in points"})
    code_font: str = field(default=DEFAULT_DOCX_CODE_FONT, metadata={"help": "Monospace font"})
    code_font_size: int = field(default=DEFAULT_DOCX_CODE_FONT_SIZE, metadata={"help": "Code font size in points"})
    first_line_indent_cm: float = field(default=DEFAULT_DOCX_FIRST_LINE_INDENT_CM)
    line_spacing: float = field(default=DEFAULT_DOCX_LINE_SPACING)
    block_spacing_mm: float = field(default=DEFAULT_DOCX_BLOCK_SPACING_MM)
    margin_top_mm: float = field(default=DEFAULT_DOCX_MARGIN_TOP_MM)
    margin_bottom_mm: float = field(default=DEFAULT_DOCX_MARGIN_BOTTOM_MM)
    margin_left_mm: float = field(default=DEFAULT_DOCX_MARGIN_LEFT_MM)
    margin_right_mm: float = field(default=DEFAULT_DOCX_MARGIN_RIGHT_MM)
    list_level_step_mm: float = field(default=DEFAULT_DOCX_LIST_LEVEL_STEP_MM)
    list_tab_offset_mm: float = field(default=DEFAULT_DOCX_LIST_TAB_OFFSET_MM)
    formula_px_per_ex: int = field(
        default=DEFAULT_FORMULA_PX_PER_EX,
        metadata={"help": "Pixels per ex when sizing formula pictures", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate DOCX options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()
        if self.render_math_as not in get_args(DocxMathRenderMode):
            raise ValueError(f"render_math_as must be one of {get_args(DocxMathRenderMode)}, got {self.render_math_as!r}")
        if self.default_font_size <= 0 or self.code_font_size <= 0:
            raise ValueError("font sizes must be positive")
        if self.line_spacing <= 0:
            raise ValueError(f"line_spacing must be positive, got {self.line_spacing}")
        if self.formula_px_per_ex <= 0:
            raise ValueError(f"formula_px_per_ex must be positive, got {self.formula_px_per_ex}")
        for name in ("margin_top_mm", "margin_bottom_mm", "margin_left_mm", "margin_right_mm", "block_spacing_mm"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
