#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/diagnostics.py
"""Diagnostic records collected while printing.

Expected problems (unsupported nodes, malformed trees, missing images) do
not raise. Handlers create a :class:`Diagnostic` pointing at the offending
node and return it next to a placeholder; the lists bubble up to the caller
by plain concatenation.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from mdprinters.ast.nodes import Node, PositionRange
from mdprinters.ast.utils import find_file_path


class DiagnoseSeverity(str, Enum):
    """How serious a diagnostic is."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnoseErrorType(str, Enum):
    """Which stage produced a diagnostic."""

    PRINTER_ERROR = "printer_error"
    OTHER_ERROR = "other_error"


_LOG_LEVELS = {
    DiagnoseSeverity.INFO: logging.INFO,
    DiagnoseSeverity.WARNING: logging.WARNING,
    DiagnoseSeverity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    """One problem found while printing.

    Parameters
    ----------
    severity : DiagnoseSeverity
        Info, Warning or Error
    error_type : DiagnoseErrorType
        Kind of the problem
    message : str
        Human-readable description
    file_path : str
        Path of the source file, empty when unknown
    pos : PositionRange
        Source range of the offending node

    """

    severity: DiagnoseSeverity
    error_type: DiagnoseErrorType
    message: str
    file_path: str = ""
    pos: PositionRange = field(default_factory=PositionRange)

    def __str__(self) -> str:
        start = self.pos.start
        location = f"{self.file_path or '<unknown>'}:{start.line + 1}:{start.column + 1}"
        return f"{location}: {self.severity.value}: {self.message}"


def node_to_diagnostic(
    node: Node,
    severity: DiagnoseSeverity,
    error_type: DiagnoseErrorType,
    message: str,
) -> Diagnostic:
    """Create a diagnostic located at ``node``.

    The file path is taken from the enclosing File node, so the tree must
    have its parents linked for it to be filled in.
    """
    return Diagnostic(
        severity=severity,
        error_type=error_type,
        message=message,
        file_path=find_file_path(node),
        pos=node.pos,
    )


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    """Return True if any diagnostic has Error severity."""
    return any(d.severity is DiagnoseSeverity.ERROR for d in diagnostics)


def log_diagnostics(diagnostics: Iterable[Diagnostic], logger: logging.Logger) -> None:
    """Forward diagnostics to ``logger`` at the matching level."""
    for diagnostic in diagnostics:
        logger.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic)
