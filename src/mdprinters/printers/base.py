#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/base.py
"""Base classes for AST printers.

A printer is the per-run context of one conversion: it owns the options,
the dispatch table built from a stateless visitor, any side stores the
output format needs (such as list numbering references) and an optional
executor for fanning out sibling subtrees. Handlers receive the printer as
their first argument and recurse through :meth:`BasePrinter.process_node`
and :meth:`BasePrinter.process_node_list`.

"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Executor
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Generic, Iterable, Optional, Sequence, TypeVar, Union

from mdprinters.ast.nodes import Node
from mdprinters.ast.utils import link_parents
from mdprinters.ast.visitors import NodeVisitor, build_dispatch_table
from mdprinters.diagnostics import (
    DiagnoseErrorType,
    DiagnoseSeverity,
    Diagnostic,
    node_to_diagnostic,
)
from mdprinters.exceptions import InvalidOptionsError
from mdprinters.options.base import BasePrinterOptions

logger = logging.getLogger(__name__)

FragmentT = TypeVar("FragmentT")


@dataclass
class PrinterResult(Generic[FragmentT]):
    """Output of one handler: fragments plus the diagnostics raised producing them.

    Attributes
    ----------
    result : FragmentT
        A string for text printers, a list of document elements for
        structured printers
    diagnostics : list of Diagnostic
        Problems found, in document order

    """

    result: FragmentT
    diagnostics: list[Diagnostic] = field(default_factory=list)


class BasePrinter(ABC, Generic[FragmentT]):
    """Abstract base class for all printers.

    Parameters
    ----------
    visitors : NodeVisitor
        Handler table; must cover every node type
    options : BasePrinterOptions
        Format-specific options
    executor : concurrent.futures.Executor, optional
        When given, the children of the top-level node are dispatched
        concurrently. Results are always concatenated in document order.

    Raises
    ------
    VisitorTableError
        If ``visitors`` lacks a handler for some node type

    """

    #: Short name used in log messages and errors
    name: str = "base"

    def __init__(
        self,
        visitors: NodeVisitor,
        options: BasePrinterOptions,
        executor: Optional[Executor] = None,
    ):
        """Build the dispatch table and the run state."""
        self.visitors = visitors
        self.options = options
        self.dispatch_table = build_dispatch_table(visitors)
        self.executor = executor
        self.lock = threading.RLock()
        self._worker_state = threading.local()

    @staticmethod
    def _validate_options_type(options: BasePrinterOptions | None, expected_type: type, printer_name: str) -> None:
        """Validate that options are of the correct type for this printer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                printer_name=printer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def process_node(self, node: Node) -> PrinterResult[FragmentT]:
        """Dispatch ``node`` to its handler."""
        return self.dispatch_table[node.type](self, node)

    def process_node_list(self, nodes: Iterable[Node], separator: str = "") -> PrinterResult[FragmentT]:
        """Print nodes in order and concatenate their results.

        Parameters
        ----------
        nodes : iterable of Node
            Sibling nodes in document order
        separator : str, default ""
            Inserted between fragments by text printers

        Returns
        -------
        PrinterResult
            Concatenated fragments and diagnostics, both in input order

        """
        node_list = list(nodes)
        if self.executor is not None and len(node_list) > 1 and not self._in_worker:
            # Only the outermost call fans out; workers recurse sequentially
            results = list(self.executor.map(self._process_in_worker, node_list))
        else:
            results = [self.process_node(node) for node in node_list]

        diagnostics = [diagnostic for result in results for diagnostic in result.diagnostics]
        return PrinterResult(self.join_fragments([result.result for result in results], separator), diagnostics)

    @property
    def _in_worker(self) -> bool:
        return getattr(self._worker_state, "active", False)

    def _process_in_worker(self, node: Node) -> PrinterResult[FragmentT]:
        self._worker_state.active = True
        try:
            return self.process_node(node)
        finally:
            self._worker_state.active = False

    @abstractmethod
    def join_fragments(self, fragments: Sequence[FragmentT], separator: str) -> FragmentT:
        """Concatenate the fragments of sibling nodes."""

    # ------------------------------------------------------------------
    # Helpers for handlers
    # ------------------------------------------------------------------

    def diagnostic(
        self,
        node: Node,
        severity: DiagnoseSeverity,
        message: str,
        error_type: DiagnoseErrorType = DiagnoseErrorType.PRINTER_ERROR,
    ) -> Diagnostic:
        """Create a diagnostic located at ``node``."""
        return node_to_diagnostic(node, severity, error_type, message)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def print_tree(self, root: Node) -> PrinterResult[FragmentT]:
        """Link parent references below ``root`` and print it.

        Parameters
        ----------
        root : Node
            Usually a File node

        Returns
        -------
        PrinterResult
            Fragments and diagnostics of the whole tree

        """
        link_parents(root)
        logger.debug("Printing %s tree rooted at %s", self.name, root.type.value)
        return self.process_node(root)

    @abstractmethod
    def render(self, root: Node, output: Union[str, Path, IO[bytes], IO[str]]) -> list[Diagnostic]:
        """Print ``root`` and write the finished artifact to ``output``.

        Returns
        -------
        list of Diagnostic
            Diagnostics collected while printing and assembling

        Raises
        ------
        RenderingError
            If rendering fails hard
        OutputWriteError
            If output cannot be written

        """
