#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/utils/images.py
"""Picture sizing and loading.

Pictures may carry an explicit width and/or height such as ``"10cm"``.
:func:`compute_picture_size` combines them with the intrinsic pixel size so
the aspect ratio is preserved when only one side is given. Loading goes
through the :class:`ImageLoader` protocol so printers can be tested without
touching the file system.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional, Protocol

from mdprinters.constants import DEFAULT_MAX_ASSET_SIZE_BYTES, DEPS_IMAGE_SIZE, EMU_PER_CM, EMU_PER_PIXEL
from mdprinters.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

# The only unit authors are expected to use; others convert but are flagged
PREFERRED_UNIT = "cm"

UNIT_TO_EMU = {
    "cm": EMU_PER_CM,
    "mm": EMU_PER_CM // 10,
    "in": 914400,
    "pt": 12700,
    "px": EMU_PER_PIXEL,
}

_DIMENSION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*([a-zA-Z]+)\s*$")


@dataclass(frozen=True)
class Dimension:
    """A length with its unit as written by the author."""

    value: float
    unit: str

    @property
    def emu(self) -> int:
        """Length in English Metric Units."""
        return round(self.value * UNIT_TO_EMU[self.unit])

    def __str__(self) -> str:
        return f"{self.value:g}{self.unit}"


def parse_dimension(text: str) -> Dimension:
    """Parse a length such as ``"10cm"`` or ``"2.5 in"``.

    Raises
    ------
    ValueError
        If the text is not a positive number followed by a known unit

    """
    match = _DIMENSION_RE.match(text)
    if not match:
        raise ValueError(f"Invalid dimension {text!r}: expected a number followed by a unit")
    value, unit = float(match.group(1)), match.group(2).lower()
    if unit not in UNIT_TO_EMU:
        raise ValueError(f"Invalid dimension {text!r}: unknown unit {unit!r}")
    if value <= 0:
        raise ValueError(f"Invalid dimension {text!r}: must be positive")
    return Dimension(value, unit)


@dataclass(frozen=True)
class PictureSize:
    """Final rendered size in EMU."""

    width: int
    height: int


def compute_picture_size(
    intrinsic_px: tuple[int, int],
    width: Optional[Dimension] = None,
    height: Optional[Dimension] = None,
) -> PictureSize:
    """Compute the rendered size of a picture.

    Parameters
    ----------
    intrinsic_px : tuple of int
        Pixel width and height of the image file
    width, height : Dimension, optional
        Explicit dimensions

    Returns
    -------
    PictureSize
        Both explicit dimensions are used as-is; a single explicit dimension
        derives the other from the intrinsic aspect ratio; with neither, the
        intrinsic size is converted at 96 DPI.

    Examples
    --------
        >>> size = compute_picture_size((800, 600), width=Dimension(10, "cm"))
        >>> size.height / EMU_PER_CM
        7.5

    """
    px_width, px_height = intrinsic_px
    if width is not None and height is not None:
        return PictureSize(width.emu, height.emu)
    if px_width <= 0 or px_height <= 0:
        raise ValueError(f"Invalid intrinsic image size {px_width}x{px_height}")
    if width is not None:
        return PictureSize(width.emu, round(width.emu * px_height / px_width))
    if height is not None:
        return PictureSize(round(height.emu * px_width / px_height), height.emu)
    return PictureSize(px_width * EMU_PER_PIXEL, px_height * EMU_PER_PIXEL)


def detect_image_format_from_bytes(data: bytes) -> str | None:
    r"""Detect the raster format of image data from its magic bytes.

    Returns
    -------
    str or None
        ``png``, ``jpg``, ``gif``, ``bmp`` or ``tiff``; None for anything
        else, including SVG which cannot be embedded as a raster picture

    """
    if not data or len(data) < 4:
        return None
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if data.startswith(b"\xff\xd8\xff"):
        return "jpg"
    if data.startswith(b"GIF87a") or data.startswith(b"GIF89a"):
        return "gif"
    if data.startswith(b"BM"):
        return "bmp"
    if data.startswith(b"II*\x00") or data.startswith(b"MM\x00*"):
        return "tiff"
    return None


@dataclass(frozen=True)
class ImageAsset:
    """Image bytes with their intrinsic pixel size."""

    data: bytes
    width_px: int
    height_px: int


class ImageLoader(Protocol):
    """Port used by printers to read pictures."""

    def load(self, path: Path) -> ImageAsset:
        """Read ``path`` and measure its size.

        Raises
        ------
        OSError
            If the file cannot be read
        ValueError
            If the data is not a supported raster image

        """
        ...


class PillowImageLoader:
    """Read images from disk and measure their size with Pillow.

    Parameters
    ----------
    max_size_bytes : int
        Files larger than this are rejected

    """

    def __init__(self, max_size_bytes: int = DEFAULT_MAX_ASSET_SIZE_BYTES):
        self.max_size_bytes = max_size_bytes

    @requires_dependencies("image", DEPS_IMAGE_SIZE)
    def load(self, path: Path) -> ImageAsset:
        from PIL import Image

        size = path.stat().st_size
        if size > self.max_size_bytes:
            raise ValueError(f"Image {path} is {size} bytes, over the {self.max_size_bytes} byte limit")

        data = path.read_bytes()
        if detect_image_format_from_bytes(data) is None:
            raise ValueError(f"Unsupported image format: {path}")

        try:
            with Image.open(BytesIO(data)) as image:
                width, height = image.size
        except Image.DecompressionBombError as e:
            raise ValueError(f"Image {path} is too large to decode: {e}") from e
        logger.debug("Loaded image %s (%dx%d px)", path, width, height)
        return ImageAsset(data=data, width_px=width, height_px=height)
