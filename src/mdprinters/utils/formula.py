#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/utils/formula.py
"""TeX formula to picture conversion.

Formulas are typeset to SVG by an external MathJax process and rasterized
with cairosvg. The SVG reports its size in ``ex`` units; multiplying by a
fixed pixels-per-ex factor gives the size of the embedded picture. Both
steps sit behind the :class:`FormulaRenderer` protocol so printers can be
tested with a stub.

"""

from __future__ import annotations

import logging
import math
import re
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from mdprinters.constants import (
    DEFAULT_FORMULA_COMMAND,
    DEFAULT_FORMULA_RASTER_SCALE,
    DEFAULT_FORMULA_TIMEOUT_SECONDS,
    DEPS_FORMULA_RASTER,
)
from mdprinters.exceptions import FormulaRenderError
from mdprinters.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

SVG_ERROR_RE = re.compile(r'data-mjx-error="([^"]+)"')
SVG_WIDTH_RE = re.compile(r'<svg\b[^>]*\swidth="([0-9.]+)ex"[^>]*>')
SVG_HEIGHT_RE = re.compile(r'<svg\b[^>]*\sheight="([0-9.]+)ex"[^>]*>')


@dataclass(frozen=True)
class SvgSize:
    """Size of a MathJax SVG in ex units."""

    width_ex: float
    height_ex: float


@dataclass(frozen=True)
class FormulaPicture:
    """Rasterized formula and the pixel size it should be displayed at."""

    png: bytes
    width_px: int
    height_px: int


def extract_error_excerpt(text: str) -> Optional[str]:
    """Return the message of the first MathJax error marker in ``text``."""
    match = SVG_ERROR_RE.search(text)
    return match.group(1) if match else None


def get_svg_size_ex(svg: str) -> SvgSize:
    """Read the ex-based width and height from the root ``<svg>`` tag.

    Raises
    ------
    FormulaRenderError
        If either attribute is missing

    """
    width = SVG_WIDTH_RE.search(svg)
    if width is None:
        raise FormulaRenderError("Unable to get width of formula SVG")
    height = SVG_HEIGHT_RE.search(svg)
    if height is None:
        raise FormulaRenderError("Unable to get height of formula SVG")
    return SvgSize(float(width.group(1)), float(height.group(1)))


class FormulaRenderer(Protocol):
    """Port for the two external formula services."""

    def tex_to_svg(self, tex: str) -> str:
        """Typeset TeX math source to SVG markup."""
        ...

    def svg_to_png(self, svg: str) -> bytes:
        """Rasterize SVG markup to PNG data."""
        ...


class MathJaxFormulaRenderer:
    """Typeset with the MathJax ``tex2svg`` command line tool, rasterize with cairosvg.

    Parameters
    ----------
    command : sequence of str
        Command prefix; the TeX source is appended as the last argument
    timeout : float
        Seconds to wait for the typesetting process
    raster_scale : float
        cairosvg scale factor, controls the resolution of the PNG

    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_FORMULA_COMMAND,
        timeout: float = DEFAULT_FORMULA_TIMEOUT_SECONDS,
        raster_scale: float = DEFAULT_FORMULA_RASTER_SCALE,
    ):
        self.command = tuple(command)
        self.timeout = timeout
        self.raster_scale = raster_scale

    def tex_to_svg(self, tex: str) -> str:
        """Run the typesetting command and return its SVG output.

        Raises
        ------
        FormulaRenderError
            If the command is missing, fails, times out or embeds an error
            marker in its output

        """
        try:
            completed = subprocess.run(
                [*self.command, tex],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError as e:
            raise FormulaRenderError(f"Formula command not found: {self.command[0]}", original_error=e) from e
        except subprocess.TimeoutExpired as e:
            raise FormulaRenderError(f"Formula command timed out after {self.timeout}s", original_error=e) from e
        except subprocess.CalledProcessError as e:
            output = f"{e.stdout or ''}{e.stderr or ''}"
            excerpt = extract_error_excerpt(output) or output.strip()[:200] or None
            raise FormulaRenderError("Unable to convert tex to svg", excerpt=excerpt, original_error=e) from e

        svg = completed.stdout
        excerpt = extract_error_excerpt(svg)
        if excerpt:
            raise FormulaRenderError("Unable to convert tex to svg", excerpt=excerpt)
        return svg

    @requires_dependencies("formula", DEPS_FORMULA_RASTER)
    def svg_to_png(self, svg: str) -> bytes:
        """Rasterize SVG markup with cairosvg.

        Raises
        ------
        FormulaRenderError
            If cairosvg cannot parse or draw the SVG

        """
        import cairosvg

        try:
            return cairosvg.svg2png(bytestring=svg.encode("utf-8"), scale=self.raster_scale)
        except (ValueError, OSError, SyntaxError) as e:
            raise FormulaRenderError("Unable to convert svg to png", excerpt=str(e), original_error=e) from e


def render_formula_picture(renderer: FormulaRenderer, tex: str, px_per_ex: int) -> FormulaPicture:
    """Turn TeX source into a PNG with its display size.

    Parameters
    ----------
    renderer : FormulaRenderer
        Typesetting and rasterization services
    tex : str
        Math source without delimiters
    px_per_ex : int
        Magnification applied to the ex-based SVG size

    Raises
    ------
    FormulaRenderError
        If any step fails

    """
    svg = renderer.tex_to_svg(tex)
    size = get_svg_size_ex(svg)
    png = renderer.svg_to_png(svg)
    width_px = math.ceil(size.width_ex * px_per_ex)
    height_px = math.ceil(size.height_ex * px_per_ex)
    logger.debug("Rendered formula %r at %dx%d px", tex, width_px, height_px)
    return FormulaPicture(png=png, width_px=width_px, height_px=height_px)
