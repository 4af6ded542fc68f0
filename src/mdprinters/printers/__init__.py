#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/__init__.py
"""AST printers.

- LatexPrinter: print to LaTeX source (always available)
- DocxPrinter: print to a Word .docx document (requires python-docx)

The DOCX printer is imported on first access so that importing this package
does not load python-docx.

Examples
--------
    >>> from mdprinters.printers import LatexPrinter, DocxPrinter
    >>> latex = LatexPrinter().render_to_string(tree)
    >>> diagnostics = DocxPrinter().render(tree, "output.docx")

"""

from typing import Any

from mdprinters.printers.base import BasePrinter, PrinterResult
from mdprinters.printers.latex import LatexPrinter, LatexVisitors, create_latex_printer

_lazy_docx = ("DocxPrinter", "DocxVisitors", "create_docx_printer")


def __getattr__(name: str) -> Any:
    """Load the DOCX printer on first access."""
    if name in _lazy_docx:
        import importlib

        module = importlib.import_module("mdprinters.printers.docx")
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "BasePrinter",
    "DocxPrinter",
    "DocxVisitors",
    "LatexPrinter",
    "LatexVisitors",
    "PrinterResult",
    "create_docx_printer",
    "create_latex_printer",
]
