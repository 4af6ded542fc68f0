#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/options/__init__.py
"""Printer configuration dataclasses."""

from mdprinters.options.base import BasePrinterOptions, CloneFrozenMixin
from mdprinters.options.docx import DocxPrinterOptions
from mdprinters.options.latex import LatexMarginOptions, LatexPrinterOptions

__all__ = [
    "BasePrinterOptions",
    "CloneFrozenMixin",
    "DocxPrinterOptions",
    "LatexMarginOptions",
    "LatexPrinterOptions",
]
