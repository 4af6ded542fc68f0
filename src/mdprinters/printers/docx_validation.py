#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/docx_validation.py
"""Structural checks on the root fragments of a DOCX print.

Only paragraphs and tables may be attached to the document body, and a
paragraph may never be nested in another paragraph. Violations are
reported as diagnostics at the start of the document rather than raised, so
the rest of the output still gets written.

"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from mdprinters.diagnostics import DiagnoseErrorType, DiagnoseSeverity, Diagnostic
from mdprinters.printers.docx_elements import has_paragraph_ancestor, is_paragraph, is_table, iter_paragraphs

logger = logging.getLogger(__name__)

ROOT_NOT_PARAGRAPH_MESSAGE = "The docx root node is not a paragraph"
NESTED_PARAGRAPH_MESSAGE = "Docx Paragraph in paragraph detected"


def _document_diagnostic(message: str) -> Diagnostic:
    return Diagnostic(
        severity=DiagnoseSeverity.ERROR,
        error_type=DiagnoseErrorType.OTHER_ERROR,
        message=message,
        file_path=".",
    )


def validate_docx_root_node(element: Any) -> list[Diagnostic]:
    """Check one root fragment.

    Parameters
    ----------
    element : lxml element
        Fragment about to be attached to the document body

    Returns
    -------
    list of Diagnostic
        Empty when the fragment is a paragraph or table free of nested
        paragraphs

    """
    diagnostics = []
    if not (is_paragraph(element) or is_table(element)):
        logger.debug("Unexpected docx root element %s", element.tag)
        diagnostics.append(_document_diagnostic(ROOT_NOT_PARAGRAPH_MESSAGE))

    if any(has_paragraph_ancestor(p) for p in iter_paragraphs(element)):
        diagnostics.append(_document_diagnostic(NESTED_PARAGRAPH_MESSAGE))
    return diagnostics


def validate_docx_root_nodes(elements: Iterable[Any]) -> list[Diagnostic]:
    """Check every root fragment, in order."""
    return [diagnostic for element in elements for diagnostic in validate_docx_root_node(element)]
