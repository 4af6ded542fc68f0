#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_diagnostics.py
"""Unit tests for printer diagnostics."""

import logging

import pytest

from mdprinters.ast import File, Paragraph, PositionRange, Text, TextPosition, link_parents
from mdprinters.diagnostics import (
    DiagnoseErrorType,
    DiagnoseSeverity,
    Diagnostic,
    has_errors,
    log_diagnostics,
    node_to_diagnostic,
)


@pytest.mark.unit
class TestDiagnostic:
    """Tests for Diagnostic and its helpers."""

    def test_node_to_diagnostic_takes_position_and_path(self):
        """Test that node position and enclosing file path are used."""
        pos = PositionRange(start=TextPosition(line=2, column=4, absolute=30), end=TextPosition(line=2, column=9))
        text = Text(text="oops", pos=pos)
        root = link_parents(File(path="chapter.md", children=[Paragraph(children=[text])]))
        diagnostic = node_to_diagnostic(text, DiagnoseSeverity.WARNING, DiagnoseErrorType.PRINTER_ERROR, "bad")
        assert diagnostic.file_path == root.path
        assert diagnostic.pos is pos
        assert diagnostic.severity is DiagnoseSeverity.WARNING

    def test_str_is_one_based(self):
        """Test the human readable form."""
        diagnostic = Diagnostic(
            severity=DiagnoseSeverity.ERROR,
            error_type=DiagnoseErrorType.OTHER_ERROR,
            message="broken",
            file_path="a.md",
            pos=PositionRange(start=TextPosition(line=0, column=0)),
        )
        assert str(diagnostic) == "a.md:1:1: error: broken"

    def test_has_errors(self):
        """Test detection of Error severity."""
        warning = Diagnostic(DiagnoseSeverity.WARNING, DiagnoseErrorType.PRINTER_ERROR, "w")
        error = Diagnostic(DiagnoseSeverity.ERROR, DiagnoseErrorType.PRINTER_ERROR, "e")
        assert not has_errors([warning])
        assert has_errors([warning, error])
        assert not has_errors([])

    def test_log_diagnostics_levels(self, caplog):
        """Test that diagnostics are logged at the matching level."""
        logger = logging.getLogger("mdprinters.test")
        diagnostics = [
            Diagnostic(DiagnoseSeverity.INFO, DiagnoseErrorType.PRINTER_ERROR, "note"),
            Diagnostic(DiagnoseSeverity.ERROR, DiagnoseErrorType.PRINTER_ERROR, "failure"),
        ]
        with caplog.at_level(logging.INFO, logger="mdprinters.test"):
            log_diagnostics(diagnostics, logger)
        levels = [(record.levelno, record.getMessage()) for record in caplog.records]
        assert levels[0][0] == logging.INFO and "note" in levels[0][1]
        assert levels[1][0] == logging.ERROR and "failure" in levels[1][1]
