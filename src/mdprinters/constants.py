#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/constants.py
"""Constants and default values for the mdprinters library.

Constants are organized by category:
1. Type Definitions - Literal types shared by options and printers
2. Shared Printer Defaults - Captions, appendix letters, assets
3. LaTeX Defaults - Spacing margins per block kind
4. DOCX Defaults - Fonts, page layout, list and formula geometry
5. Dependencies - Package requirements checked at render time
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

# How links and inline code spans are displayed
TextInterpretation = Literal["default", "monospace", "bold", "underline", "italic", "quotes"]

# How inline formulas are emitted into DOCX output
DocxMathRenderMode = Literal["docx_math", "picture"]

# =============================================================================
# Shared Printer Defaults
# =============================================================================

DEFAULT_USE_LINK_AS: TextInterpretation = "default"
DEFAULT_USE_CODE_SPAN_AS: TextInterpretation = "quotes"
DEFAULT_FAIL_ON_RESOURCE_ERRORS = False
DEFAULT_MAX_ASSET_SIZE_BYTES = 50 * 1024 * 1024  # 50MB
DEFAULT_ROOT_DIR = "."

DEFAULT_PICTURE_LABEL = "Figure"
DEFAULT_TABLE_LABEL = "Table"
DEFAULT_CODE_LABEL = "Listing"
DEFAULT_APPLICATION_LABEL = "Appendix"

# Appendix letters skip characters easily confused with digits
DEFAULT_APPLICATION_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"

# =============================================================================
# LaTeX Defaults
# =============================================================================

DEFAULT_LATEX_CAPTION_SEPARATOR = " -- "
DEFAULT_LATEX_AUTO_ESCAPES = True
DEFAULT_LATEX_CODE_LANGUAGE = "text"
DEFAULT_LATEX_LIST_INDENT = "1.25cm"

DEFAULT_LATEX_IMAGE_INNER_TEXT_SEP = "3em"
DEFAULT_LATEX_IMAGE_BELOW_CAPTION_SKIP = "-4ex"
DEFAULT_LATEX_IMAGE_REMOVED_BELOW_CAPTION_SKIP = "-1.6em"
DEFAULT_LATEX_IMAGE_ABOVE_CAPTION_SKIP = "0.5em"

DEFAULT_LATEX_CODE_INNER_TEXT_SEP = "3em"
DEFAULT_LATEX_CODE_BELOW_CAPTION_SKIP = "-4ex"
DEFAULT_LATEX_CODE_REMOVED_BELOW_CAPTION_SKIP = "-1.6em"
DEFAULT_LATEX_CODE_ABOVE_CAPTION_SKIP = "-0.5em"

DEFAULT_LATEX_TABLE_BELOW_CAPTION_SKIP = "0em"
DEFAULT_LATEX_TABLE_ABOVE_CAPTION_SKIP = "0em"
DEFAULT_LATEX_TABLE_PRE = "2em"
DEFAULT_LATEX_TABLE_POST = "2em"
DEFAULT_LATEX_TABLE_REMOVED_POST = "0em"

DEFAULT_LATEX_MATH_ABOVE_DISPLAY_SKIP = "-0.9em"
DEFAULT_LATEX_MATH_BELOW_DISPLAY_SKIP = "0pt"
DEFAULT_LATEX_MATH_ABOVE_DISPLAY_SHORT_SKIP = "0pt"
DEFAULT_LATEX_MATH_BELOW_DISPLAY_SHORT_SKIP = "0pt"

# =============================================================================
# DOCX Defaults
# =============================================================================

DEFAULT_DOCX_CAPTION_SEPARATOR = " – "
DEFAULT_DOCX_MATH_RENDER_MODE: DocxMathRenderMode = "docx_math"
DEFAULT_DOCX_FONT = "Times New Roman"
DEFAULT_DOCX_FONT_SIZE = 14
DEFAULT_DOCX_CODE_FONT = "Courier New"
DEFAULT_DOCX_CODE_FONT_SIZE = 12
DEFAULT_DOCX_FIRST_LINE_INDENT_CM = 1.25
DEFAULT_DOCX_LINE_SPACING = 1.5
DEFAULT_DOCX_BLOCK_SPACING_MM = 6.0

DEFAULT_DOCX_MARGIN_TOP_MM = 20.0
DEFAULT_DOCX_MARGIN_BOTTOM_MM = 20.0
DEFAULT_DOCX_MARGIN_LEFT_MM = 30.0
DEFAULT_DOCX_MARGIN_RIGHT_MM = 15.0

# Nested list geometry: tab stop at level * step + offset, first line at level * step
DEFAULT_DOCX_LIST_LEVEL_STEP_MM = 15.0
DEFAULT_DOCX_LIST_TAB_OFFSET_MM = 10.0

# Pixels per ex unit used when sizing rasterized formulas
DEFAULT_FORMULA_PX_PER_EX = 8
DEFAULT_FORMULA_RASTER_SCALE = 10.0
DEFAULT_FORMULA_COMMAND = ("tex2svg",)
DEFAULT_FORMULA_TIMEOUT_SECONDS = 30.0
FORMULA_NUMBER_CELL_WIDTH_DXA = 510
INLINE_FORMULA_PICTURE_POSITION = -6

# Intrinsic image sizes are treated as 96 DPI
EMU_PER_PIXEL = 9525
EMU_PER_CM = 360000

# =============================================================================
# Dependencies
# =============================================================================

DEPS_DOCX_RENDER = [("python-docx", "docx", ">=1.2.0")]
DEPS_IMAGE_SIZE = [("Pillow", "PIL", ">=9.0.0")]
DEPS_FORMULA_RASTER = [("cairosvg", "cairosvg", ">=2.7.0")]
