"""Pytest configuration and shared fixtures for the mdprinters test suite.

This module provides the markers used across the suite, small PNG images
made with Pillow, and fakes for the image loading and formula rendering
ports so printer tests never touch external tools.
"""

import struct
import zlib
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from mdprinters.exceptions import FormulaRenderError
from mdprinters.utils.images import ImageAsset


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "docx: Tests requiring python-docx")


def make_png(width: int, height: int, color: str = "red") -> bytes:
    """Create PNG bytes of the given size."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_png_header(width: int, height: int) -> bytes:
    """Create a minimal PNG whose header claims the given size.

    Only the header is valid; the pixel data is a single empty scanline, so
    very large sizes cost a few dozen bytes.
    """

    def chunk(kind: bytes, payload: bytes) -> bytes:
        return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", zlib.crc32(kind + payload))

    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IDAT", zlib.compress(b"\x00")) + chunk(b"IEND", b"")


class FakeImageLoader:
    """Image loader returning a fixed picture, or failing for unknown paths."""

    def __init__(self, width_px: int = 800, height_px: int = 600, missing: tuple = ()):
        self.width_px = width_px
        self.height_px = height_px
        self.missing = set(missing)
        self.loaded: list[Path] = []
        self._data = make_png(8, 6)

    def load(self, path: Path) -> ImageAsset:
        self.loaded.append(path)
        if path.name in self.missing:
            raise FileNotFoundError(f"No such file: {path}")
        return ImageAsset(data=self._data, width_px=self.width_px, height_px=self.height_px)


class FakeFormulaRenderer:
    """Formula renderer producing a fixed size SVG; TeX containing ``\\fail`` is rejected."""

    def __init__(self, width_ex: float = 10.5, height_ex: float = 2.25):
        self.width_ex = width_ex
        self.height_ex = height_ex
        self.rendered: list[str] = []
        self._png = make_png(4, 2, "black")

    def tex_to_svg(self, tex: str) -> str:
        if "\\fail" in tex:
            raise FormulaRenderError("Unable to convert tex to svg", excerpt="Undefined control sequence \\fail")
        self.rendered.append(tex)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width_ex}ex" '
            f'height="{self.height_ex}ex" viewBox="0 0 100 20"></svg>'
        )

    def svg_to_png(self, svg: str) -> bytes:
        return self._png


@pytest.fixture
def png_bytes() -> bytes:
    """PNG image of 800x600 pixels."""
    return make_png(800, 600)


@pytest.fixture
def png_file(tmp_path: Path, png_bytes: bytes) -> Path:
    """PNG image of 800x600 pixels written to a temporary file."""
    path = tmp_path / "picture.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def oversized_png_file(tmp_path: Path) -> Path:
    """PNG claiming 20000x20000 pixels, over Pillow's decompression bomb limit."""
    path = tmp_path / "scan.png"
    path.write_bytes(make_png_header(20000, 20000))
    return path


@pytest.fixture
def broken_native_module(tmp_path: Path, monkeypatch) -> str:
    """Name of an importable module that fails like a package missing its native library."""
    module_dir = tmp_path / "native"
    module_dir.mkdir()
    (module_dir / "broken_native_ext.py").write_text(
        "raise OSError('no library called \"cairo-2\" was found')\n", encoding="utf-8"
    )
    monkeypatch.syspath_prepend(str(module_dir))
    return "broken_native_ext"


@pytest.fixture
def image_loader() -> FakeImageLoader:
    """Fake image loader reporting 800x600 pixel pictures; ``missing.png`` fails."""
    return FakeImageLoader(missing=("missing.png",))


@pytest.fixture
def formula_renderer() -> FakeFormulaRenderer:
    """Fake formula renderer reporting 10.5ex x 2.25ex formulas."""
    return FakeFormulaRenderer()
