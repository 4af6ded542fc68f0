"""mdprinters - print Markdown document trees to LaTeX and DOCX.

mdprinters takes the processed document tree of a Markdown documentation
toolchain (headings, lists, numbered tables, pictures, formulas, code
listings, cross references and appendices) and prints it to either LaTeX
source or a Word document. Printing is a table driven visitor: every node
type has a handler returning output fragments plus diagnostics, and an
optional executor prints top-level blocks concurrently while keeping
document order.

Examples
--------
    >>> from mdprinters import File, Heading, Paragraph, Text, LatexPrinter
    >>> tree = File(path="doc.md", children=[
    ...     Heading(depth=1, children=[Text(text="Title")]),
    ...     Paragraph(children=[Text(text="Hello")]),
    ... ])
    >>> latex = LatexPrinter().render_to_string(tree)

    >>> from mdprinters import DocxPrinter
    >>> diagnostics = DocxPrinter().render(tree, "doc.docx")

See Also
--------
mdprinters.ast : Node definitions and tree helpers
mdprinters.printers : Printer implementations

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdprinters requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from typing import Any  # noqa: E402

from mdprinters.ast import *  # noqa: E402,F401,F403
from mdprinters.ast import __all__ as _ast_all  # noqa: E402
from mdprinters.diagnostics import (  # noqa: E402
    DiagnoseErrorType,
    DiagnoseSeverity,
    Diagnostic,
    has_errors,
)
from mdprinters.exceptions import (  # noqa: E402
    DependencyError,
    FormulaRenderError,
    InvalidOptionsError,
    MdPrintersError,
    OutputWriteError,
    RenderingError,
    ValidationError,
    VisitorTableError,
)
from mdprinters.logging_utils import configure_logging  # noqa: E402
from mdprinters.options import (  # noqa: E402
    BasePrinterOptions,
    DocxPrinterOptions,
    LatexMarginOptions,
    LatexPrinterOptions,
)
from mdprinters.printers import (  # noqa: E402
    BasePrinter,
    LatexPrinter,
    PrinterResult,
    create_latex_printer,
)


def __getattr__(name: str) -> Any:
    """Load the DOCX printer lazily."""
    if name in ("DocxPrinter", "DocxVisitors", "create_docx_printer"):
        from mdprinters import printers

        value = getattr(printers, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    *_ast_all,
    "__version__",
    "BasePrinter",
    "BasePrinterOptions",
    "DependencyError",
    "DiagnoseErrorType",
    "DiagnoseSeverity",
    "Diagnostic",
    "DocxPrinter",
    "DocxPrinterOptions",
    "DocxVisitors",
    "FormulaRenderError",
    "InvalidOptionsError",
    "LatexMarginOptions",
    "LatexPrinter",
    "LatexPrinterOptions",
    "MdPrintersError",
    "OutputWriteError",
    "PrinterResult",
    "RenderingError",
    "ValidationError",
    "VisitorTableError",
    "configure_logging",
    "create_docx_printer",
    "create_latex_printer",
    "has_errors",
]
