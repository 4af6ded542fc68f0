#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/ast/visitors.py
"""Visitor base class and dispatch table construction.

A printer is driven by a :class:`NodeVisitor` subclass that defines one
``visit_<type>`` handler per :class:`~mdprinters.ast.nodes.NodeType`. Every
handler receives the printer (the per-run state) and the node, and returns a
``PrinterResult``. Handlers for node types a printer cannot render still
exist and return a placeholder plus a diagnostic, so dispatch never falls
through.

Because each handler is an abstract method, a visitor that forgets a node
type cannot be instantiated. :func:`build_dispatch_table` checks the same
property for duck-typed visitors and freezes the tag to handler mapping.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, Mapping

from mdprinters.ast.nodes import (
    AllApplications,
    AllReferences,
    ApplicationKey,
    Blockquote,
    Br,
    Code,
    CodeApplication,
    CodeProcessed,
    CodeSpan,
    Comment,
    Def,
    Del,
    Em,
    Escape,
    File,
    Formula,
    FormulaKey,
    FormulaNoLabelProcessed,
    FormulaProcessed,
    FormulaSpan,
    Heading,
    Hr,
    Html,
    Image,
    Latex,
    LatexSpan,
    Link,
    List,
    ListItem,
    Node,
    NodeType,
    NonBreakingSpace,
    OpCode,
    Paragraph,
    ParagraphBreak,
    PictureAmount,
    PictureApplication,
    PictureKey,
    PictureProcessed,
    Raw,
    RawApplication,
    Reference,
    ReferenceKey,
    SoftBreak,
    Space,
    Strong,
    Table,
    TableAmount,
    TableCell,
    TableControlCell,
    TableControlRow,
    TableKey,
    TableProcessed,
    TableRow,
    Text,
    TextBreak,
    ThinNonBreakingSpace,
    Tokens,
    Underline,
)
from mdprinters.exceptions import VisitorTableError

Handler = Callable[[Any, Node], Any]


class NodeVisitor(ABC):
    """Abstract base class for printer visitors.

    Visitors hold no per-run state: everything that changes during a run
    lives on the printer passed as the first argument, so one visitor
    instance can serve many runs.

    Examples
    --------
    Aliasing several tags to one placeholder handler:

        >>> class MyVisitors(NodeVisitor):
        ...     def _unsupported(self, printer, node):
        ...         return printer.placeholder(node)
        ...     visit_raw = visit_tokens = _unsupported
        ...     # ... one definition per remaining node type

    """

    @abstractmethod
    def visit_raw(self, printer: Any, node: Raw) -> Any:
        """Print unconsumed parser output."""

    @abstractmethod
    def visit_tokens(self, printer: Any, node: Tokens) -> Any:
        """Print an unconsumed token stream."""

    @abstractmethod
    def visit_soft_break(self, printer: Any, node: SoftBreak) -> Any:
        """Print a soft line break token."""

    @abstractmethod
    def visit_paragraph_break(self, printer: Any, node: ParagraphBreak) -> Any:
        """Print a paragraph break token."""

    @abstractmethod
    def visit_text_break(self, printer: Any, node: TextBreak) -> Any:
        """Print a text break token."""

    @abstractmethod
    def visit_space(self, printer: Any, node: Space) -> Any:
        """Print blank lines between blocks."""

    @abstractmethod
    def visit_code(self, printer: Any, node: Code) -> Any:
        """Print an unnumbered code block."""

    @abstractmethod
    def visit_heading(self, printer: Any, node: Heading) -> Any:
        """Print a heading."""

    @abstractmethod
    def visit_table(self, printer: Any, node: Table) -> Any:
        """Print an unnumbered table."""

    @abstractmethod
    def visit_blockquote(self, printer: Any, node: Blockquote) -> Any:
        """Print a block quote."""

    @abstractmethod
    def visit_list(self, printer: Any, node: List) -> Any:
        """Print a list."""

    @abstractmethod
    def visit_list_item(self, printer: Any, node: ListItem) -> Any:
        """Print a list item with its marker or numbering."""

    @abstractmethod
    def visit_paragraph(self, printer: Any, node: Paragraph) -> Any:
        """Print a paragraph."""

    @abstractmethod
    def visit_def(self, printer: Any, node: Def) -> Any:
        """Print a link reference definition."""

    @abstractmethod
    def visit_escape(self, printer: Any, node: Escape) -> Any:
        """Print an escaped character."""

    @abstractmethod
    def visit_text(self, printer: Any, node: Text) -> Any:
        """Print plain text."""

    @abstractmethod
    def visit_html(self, printer: Any, node: Html) -> Any:
        """Print embedded HTML."""

    @abstractmethod
    def visit_link(self, printer: Any, node: Link) -> Any:
        """Print a hyperlink."""

    @abstractmethod
    def visit_image(self, printer: Any, node: Image) -> Any:
        """Print an unnumbered image."""

    @abstractmethod
    def visit_strong(self, printer: Any, node: Strong) -> Any:
        """Print bold content."""

    @abstractmethod
    def visit_underline(self, printer: Any, node: Underline) -> Any:
        """Print underlined content."""

    @abstractmethod
    def visit_em(self, printer: Any, node: Em) -> Any:
        """Print italic content."""

    @abstractmethod
    def visit_hr(self, printer: Any, node: Hr) -> Any:
        """Print a thematic break."""

    @abstractmethod
    def visit_code_span(self, printer: Any, node: CodeSpan) -> Any:
        """Print inline code."""

    @abstractmethod
    def visit_br(self, printer: Any, node: Br) -> Any:
        """Print a hard line break."""

    @abstractmethod
    def visit_del(self, printer: Any, node: Del) -> Any:
        """Print struck-through content."""

    @abstractmethod
    def visit_file(self, printer: Any, node: File) -> Any:
        """Print a whole source file."""

    @abstractmethod
    def visit_non_breaking_space(self, printer: Any, node: NonBreakingSpace) -> Any:
        """Print a non-breaking space."""

    @abstractmethod
    def visit_thin_non_breaking_space(self, printer: Any, node: ThinNonBreakingSpace) -> Any:
        """Print a thin non-breaking space."""

    @abstractmethod
    def visit_table_cell(self, printer: Any, node: TableCell) -> Any:
        """Print a table cell."""

    @abstractmethod
    def visit_table_row(self, printer: Any, node: TableRow) -> Any:
        """Print a table row."""

    @abstractmethod
    def visit_table_control_row(self, printer: Any, node: TableControlRow) -> Any:
        """Print a table layout directive row."""

    @abstractmethod
    def visit_table_control_cell(self, printer: Any, node: TableControlCell) -> Any:
        """Print a table layout directive cell."""

    @abstractmethod
    def visit_op_code(self, printer: Any, node: OpCode) -> Any:
        """Print a macro invocation left in the tree."""

    @abstractmethod
    def visit_latex(self, printer: Any, node: Latex) -> Any:
        """Print a raw LaTeX block."""

    @abstractmethod
    def visit_latex_span(self, printer: Any, node: LatexSpan) -> Any:
        """Print inline raw LaTeX."""

    @abstractmethod
    def visit_formula(self, printer: Any, node: Formula) -> Any:
        """Print an unnumbered display formula."""

    @abstractmethod
    def visit_formula_span(self, printer: Any, node: FormulaSpan) -> Any:
        """Print an inline formula."""

    @abstractmethod
    def visit_comment(self, printer: Any, node: Comment) -> Any:
        """Print a source comment."""

    @abstractmethod
    def visit_code_processed(self, printer: Any, node: CodeProcessed) -> Any:
        """Print a numbered code listing with caption."""

    @abstractmethod
    def visit_table_processed(self, printer: Any, node: TableProcessed) -> Any:
        """Print a numbered table with caption."""

    @abstractmethod
    def visit_picture_processed(self, printer: Any, node: PictureProcessed) -> Any:
        """Print a numbered picture with caption."""

    @abstractmethod
    def visit_picture_key(self, printer: Any, node: PictureKey) -> Any:
        """Print the number of a referenced picture."""

    @abstractmethod
    def visit_table_key(self, printer: Any, node: TableKey) -> Any:
        """Print the number of a referenced table."""

    @abstractmethod
    def visit_application_key(self, printer: Any, node: ApplicationKey) -> Any:
        """Print the letter of a referenced appendix."""

    @abstractmethod
    def visit_reference_key(self, printer: Any, node: ReferenceKey) -> Any:
        """Print the number of a referenced bibliography entry."""

    @abstractmethod
    def visit_formula_key(self, printer: Any, node: FormulaKey) -> Any:
        """Print the number of a referenced formula."""

    @abstractmethod
    def visit_all_applications(self, printer: Any, node: AllApplications) -> Any:
        """Print all appendices."""

    @abstractmethod
    def visit_all_references(self, printer: Any, node: AllReferences) -> Any:
        """Print the bibliography."""

    @abstractmethod
    def visit_raw_application(self, printer: Any, node: RawApplication) -> Any:
        """Print an appendix made of child blocks."""

    @abstractmethod
    def visit_picture_application(self, printer: Any, node: PictureApplication) -> Any:
        """Print a picture appendix."""

    @abstractmethod
    def visit_code_application(self, printer: Any, node: CodeApplication) -> Any:
        """Print a source file appendix."""

    @abstractmethod
    def visit_reference(self, printer: Any, node: Reference) -> Any:
        """Print one bibliography entry."""

    @abstractmethod
    def visit_formula_processed(self, printer: Any, node: FormulaProcessed) -> Any:
        """Print a numbered display formula."""

    @abstractmethod
    def visit_formula_no_label_processed(self, printer: Any, node: FormulaNoLabelProcessed) -> Any:
        """Print a display formula without a number."""

    @abstractmethod
    def visit_picture_amount(self, printer: Any, node: PictureAmount) -> Any:
        """Print the total number of pictures."""

    @abstractmethod
    def visit_table_amount(self, printer: Any, node: TableAmount) -> Any:
        """Print the total number of tables."""


def build_dispatch_table(visitor: Any) -> Mapping[NodeType, Handler]:
    """Map every node type to the visitor's bound handler.

    Parameters
    ----------
    visitor : Any
        Object exposing ``visit_<type>`` methods, normally a NodeVisitor

    Returns
    -------
    Mapping[NodeType, Callable]
        Read-only mapping covering every NodeType

    Raises
    ------
    VisitorTableError
        If any node type has no callable handler

    """
    table: dict[NodeType, Handler] = {}
    missing = []
    for node_type in NodeType:
        handler = getattr(visitor, f"visit_{node_type.value}", None)
        if not callable(handler):
            missing.append(node_type.value)
            continue
        table[node_type] = handler

    if missing:
        raise VisitorTableError(type(visitor).__name__, missing)
    return MappingProxyType(table)
