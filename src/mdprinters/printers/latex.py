#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/latex.py
r"""LaTeX printing from AST.

:class:`LatexVisitors` maps every node type to a handler returning a
``PrinterResult[str]``; :class:`LatexPrinter` carries the options of one run
and joins fragments with plain string concatenation.

Examples
--------
    >>> from mdprinters.ast import File, Heading, Paragraph, Text
    >>> printer = LatexPrinter()
    >>> result = printer.print_tree(File(path="a.md", children=[
    ...     Heading(depth=2, children=[Text(text="Title")]),
    ...     Paragraph(children=[Text(text="Hello")]),
    ... ]))
    >>> print(result.result)
    \subsection{Title}
    <BLANKLINE>
    Hello
    <BLANKLINE>

"""

from __future__ import annotations

import logging
import re
from concurrent.futures import Executor
from pathlib import Path, PurePosixPath
from typing import IO, Optional, Sequence, Union

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
    Latex,
    LatexSpan,
    Link,
    List,
    ListItem,
    Node,
    NodeType,
    NonBreakingSpace,
    Paragraph,
    PictureAmount,
    PictureApplication,
    PictureKey,
    PictureProcessed,
    RawApplication,
    Reference,
    ReferenceKey,
    Space,
    Strong,
    TableAmount,
    TableCell,
    TableControlCell,
    TableControlRow,
    TableKey,
    TableProcessed,
    TableRow,
    Text,
    ThinNonBreakingSpace,
    Underline,
)
from mdprinters.ast.utils import find_node_data, get_right_neighbour_leaf, resolve_list_context
from mdprinters.ast.visitors import NodeVisitor
from mdprinters.diagnostics import DiagnoseSeverity, Diagnostic, log_diagnostics
from mdprinters.options.latex import LatexPrinterOptions
from mdprinters.printers import latex_templates as templates
from mdprinters.printers.base import BasePrinter, PrinterResult
from mdprinters.printers.numbering import application_letter, format_list_marker
from mdprinters.utils.decorators import debug_timer
from mdprinters.utils.escape import escape_latex, escape_latex_url, prepare_latex_text, remove_unnecessary_line_breaks
from mdprinters.utils.io_utils import write_content

logger = logging.getLogger(__name__)

# Blocks rendered as boxes; a box directly followed by another box drops its bottom spacing
BOXED_NODE_TYPES = frozenset(
    {
        NodeType.CODE,
        NodeType.TABLE,
        NodeType.IMAGE,
        NodeType.CODE_PROCESSED,
        NodeType.TABLE_PROCESSED,
        NodeType.PICTURE_PROCESSED,
    }
)
_BOX_GAP_TYPES = (NodeType.SPACE, NodeType.OP_CODE)

_LENGTH_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*([a-zA-Z]+)\s*$")


def is_node_before_boxed(node: Node) -> bool:
    """Whether the next leaf after ``node``, ignoring spaces and op codes, is a boxed block."""
    leaf = get_right_neighbour_leaf(node, skip=_BOX_GAP_TYPES)
    return leaf is not None and leaf.type in BOXED_NODE_TYPES


def _scale_length(length: str, factor: int) -> Optional[str]:
    match = _LENGTH_RE.match(length)
    if not match or factor <= 0:
        return None
    return f"{float(match.group(1)) * factor:g}{match.group(2)}"


class LatexVisitors(NodeVisitor):
    """Handler table of the LaTeX printer."""

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------

    def _internal_unparsable(self, printer: LatexPrinter, node: Node) -> PrinterResult[str]:
        return PrinterResult(
            f"% InternalError: node '{node.type.value}'\n",
            [
                printer.diagnostic(
                    node,
                    DiagnoseSeverity.WARNING,
                    f"Unable to print node with type '{node.type.value}' (internal error)",
                )
            ],
        )

    def _unparsable(self, printer: LatexPrinter, node: Node) -> PrinterResult[str]:
        return PrinterResult(
            f"% Unparsable: node '{node.type.value}'\n",
            [printer.diagnostic(node, DiagnoseSeverity.WARNING, f"Unable to print node with type '{node.type.value}'")],
        )

    # Raw and unprocessed nodes should have been consumed by macro expansion
    visit_raw = _internal_unparsable
    visit_tokens = _internal_unparsable
    visit_soft_break = _internal_unparsable
    visit_paragraph_break = _internal_unparsable
    visit_text_break = _internal_unparsable
    visit_code = _internal_unparsable
    visit_table = _internal_unparsable
    visit_image = _internal_unparsable
    visit_op_code = _internal_unparsable
    visit_comment = _internal_unparsable

    visit_blockquote = _unparsable
    visit_def = _unparsable
    visit_html = _unparsable

    # ------------------------------------------------------------------
    # Text and inline formatting
    # ------------------------------------------------------------------

    def visit_space(self, printer: LatexPrinter, node: Space) -> PrinterResult[str]:
        return PrinterResult("\n")

    def visit_text(self, printer: LatexPrinter, node: Text) -> PrinterResult[str]:
        return PrinterResult(printer.prepare_text(node.text))

    def visit_escape(self, printer: LatexPrinter, node: Escape) -> PrinterResult[str]:
        return PrinterResult(printer.escape(node.text))

    def _wrap_children(self, printer: LatexPrinter, node: Node, command: str) -> PrinterResult[str]:
        children = printer.process_node_list(getattr(node, "children"))
        return PrinterResult(f"\\{command}{{{children.result}}}", children.diagnostics)

    def visit_strong(self, printer: LatexPrinter, node: Strong) -> PrinterResult[str]:
        return self._wrap_children(printer, node, "textbf")

    def visit_em(self, printer: LatexPrinter, node: Em) -> PrinterResult[str]:
        return self._wrap_children(printer, node, "textit")

    def visit_underline(self, printer: LatexPrinter, node: Underline) -> PrinterResult[str]:
        return self._wrap_children(printer, node, "underline")

    def visit_del(self, printer: LatexPrinter, node: Del) -> PrinterResult[str]:
        return self._wrap_children(printer, node, "sout")

    def visit_code_span(self, printer: LatexPrinter, node: CodeSpan) -> PrinterResult[str]:
        text = printer.prepare_text(node.text)
        return PrinterResult(templates.latex_code_span(text, printer.options.use_code_span_as))

    def visit_link(self, printer: LatexPrinter, node: Link) -> PrinterResult[str]:
        children = printer.process_node_list(node.children)
        text = templates.latex_link(
            children.result,
            escape_latex_url(node.href),
            escape_latex(node.href),
            printer.options.use_link_as,
        )
        return PrinterResult(text, children.diagnostics)

    def visit_br(self, printer: LatexPrinter, node: Br) -> PrinterResult[str]:
        return PrinterResult("\n\n")

    def visit_non_breaking_space(self, printer: LatexPrinter, node: NonBreakingSpace) -> PrinterResult[str]:
        return PrinterResult("~")

    def visit_thin_non_breaking_space(self, printer: LatexPrinter, node: ThinNonBreakingSpace) -> PrinterResult[str]:
        return PrinterResult("\\,")

    def visit_latex(self, printer: LatexPrinter, node: Latex) -> PrinterResult[str]:
        return PrinterResult(f"\n{node.text}\n")

    def visit_latex_span(self, printer: LatexPrinter, node: LatexSpan) -> PrinterResult[str]:
        return PrinterResult(node.text)

    def visit_formula_span(self, printer: LatexPrinter, node: FormulaSpan) -> PrinterResult[str]:
        return PrinterResult(templates.latex_inline_math(node.text))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_file(self, printer: LatexPrinter, node: File) -> PrinterResult[str]:
        children = printer.process_node_list(node.children)
        return PrinterResult(remove_unnecessary_line_breaks(children.result), children.diagnostics)

    def visit_paragraph(self, printer: LatexPrinter, node: Paragraph) -> PrinterResult[str]:
        children = printer.process_node_list(node.children)
        return PrinterResult(f"\n{children.result}\n", children.diagnostics)

    def visit_heading(self, printer: LatexPrinter, node: Heading) -> PrinterResult[str]:
        children = printer.process_node_list(node.children)
        text = templates.latex_heading(children.result, node.depth)
        if text is not None:
            return PrinterResult(text, children.diagnostics)
        return PrinterResult(
            templates.latex_fallback_heading(children.result),
            children.diagnostics
            + [printer.diagnostic(node, DiagnoseSeverity.ERROR, f"Unable to resolve heading level {node.depth}")],
        )

    def visit_hr(self, printer: LatexPrinter, node: Hr) -> PrinterResult[str]:
        return PrinterResult("\n\\pagebreak\n")

    def visit_list(self, printer: LatexPrinter, node: List) -> PrinterResult[str]:
        return printer.process_node_list(node.children)

    def visit_list_item(self, printer: LatexPrinter, node: ListItem) -> PrinterResult[str]:
        context = resolve_list_context(node)
        if context is None:
            return PrinterResult(
                "",
                [
                    printer.diagnostic(
                        node, DiagnoseSeverity.ERROR, "Cannot find List parent for ListItem (internal error)"
                    )
                ],
            )

        children = printer.process_node_list(node.children)
        data = find_node_data(node)
        index = data.index if data is not None else 0
        marker = format_list_marker(index, context.depth, context.parent_list.ordered)
        indent = _scale_length(printer.options.list_indent, context.depth - 1)
        return PrinterResult(
            templates.latex_list_item(children.result, marker, context.depth, indent),
            children.diagnostics,
        )

    def visit_formula(self, printer: LatexPrinter, node: Formula) -> PrinterResult[str]:
        return PrinterResult(templates.latex_math(node.text, printer.options.margin))

    def visit_formula_processed(self, printer: LatexPrinter, node: FormulaProcessed) -> PrinterResult[str]:
        return PrinterResult(templates.latex_math(node.text, printer.options.margin, tag=node.index + 1))

    def visit_formula_no_label_processed(
        self, printer: LatexPrinter, node: FormulaNoLabelProcessed
    ) -> PrinterResult[str]:
        return PrinterResult(templates.latex_math(node.text, printer.options.margin))

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def visit_table_cell(self, printer: LatexPrinter, node: TableCell) -> PrinterResult[str]:
        return printer.process_node_list(node.children)

    def visit_table_row(self, printer: LatexPrinter, node: TableRow) -> PrinterResult[str]:
        diagnostics: list[Diagnostic] = []
        cells = []
        for child in node.children:
            if not isinstance(child, TableCell):
                diagnostics.append(
                    printer.diagnostic(child, DiagnoseSeverity.ERROR, "Not cell in row (internal error)")
                )
                continue
            cells.append(child)
        row = printer.process_node_list(cells, separator=" & ")
        return PrinterResult(f"{row.result} \\\\ \\hline\n", diagnostics + row.diagnostics)

    def visit_table_control_row(self, printer: LatexPrinter, node: TableControlRow) -> PrinterResult[str]:
        return PrinterResult("")

    def visit_table_control_cell(self, printer: LatexPrinter, node: TableControlCell) -> PrinterResult[str]:
        return PrinterResult("")

    # ------------------------------------------------------------------
    # Numbered blocks
    # ------------------------------------------------------------------

    def visit_code_processed(self, printer: LatexPrinter, node: CodeProcessed) -> PrinterResult[str]:
        title = printer.process_node_list(node.name)
        text = templates.latex_code(
            number=node.index + 1,
            title=title.result,
            lang=node.lang or printer.options.default_code_language,
            code=node.code,
            remove_space=is_node_before_boxed(node),
            label=printer.options.code_label,
            separator=printer.options.caption_separator,
            margin=printer.options.margin,
        )
        return PrinterResult(text, title.diagnostics)

    def visit_table_processed(self, printer: LatexPrinter, node: TableProcessed) -> PrinterResult[str]:
        title = printer.process_node_list(node.name)
        header = printer.process_node_list(node.header)
        content = printer.process_node_list(node.rows)
        col_amount = max(
            (len(row.children) for row in [*node.header, *node.rows] if isinstance(row, TableRow)),
            default=1,
        )
        text = templates.latex_table(
            number=node.index + 1,
            title=title.result,
            header=header.result,
            content=content.result,
            col_amount=col_amount,
            remove_space=is_node_before_boxed(node),
            label=printer.options.table_label,
            separator=printer.options.caption_separator,
            margin=printer.options.margin,
        )
        return PrinterResult(text, title.diagnostics + header.diagnostics + content.diagnostics)

    def visit_picture_processed(self, printer: LatexPrinter, node: PictureProcessed) -> PrinterResult[str]:
        title = printer.process_node_list(node.name)
        text = templates.latex_image(
            number=node.index + 1,
            title=title.result,
            href=node.href,
            width=node.width,
            height=node.height,
            remove_space=is_node_before_boxed(node),
            label=printer.options.picture_label,
            separator=printer.options.caption_separator,
            margin=printer.options.margin,
        )
        return PrinterResult(text, title.diagnostics)

    # ------------------------------------------------------------------
    # Cross references
    # ------------------------------------------------------------------

    def _print_index(self, printer: LatexPrinter, node: Node) -> PrinterResult[str]:
        return PrinterResult(str(getattr(node, "index") + 1))

    visit_picture_key = _print_index
    visit_table_key = _print_index
    visit_reference_key = _print_index
    visit_formula_key = _print_index

    def visit_application_key(self, printer: LatexPrinter, node: ApplicationKey) -> PrinterResult[str]:
        return printer.application_letter(node)

    def visit_picture_amount(self, printer: LatexPrinter, node: PictureAmount) -> PrinterResult[str]:
        return PrinterResult(str(node.count()))

    def visit_table_amount(self, printer: LatexPrinter, node: TableAmount) -> PrinterResult[str]:
        return PrinterResult(str(node.count()))

    def visit_all_references(self, printer: LatexPrinter, node: AllReferences) -> PrinterResult[str]:
        return printer.process_node_list(node.children)

    def visit_reference(self, printer: LatexPrinter, node: Reference) -> PrinterResult[str]:
        children = printer.process_node_list(node.children)
        return PrinterResult(f"{node.index + 1}.\\,{children.result.strip()}\n\n", children.diagnostics)

    # ------------------------------------------------------------------
    # Appendices
    # ------------------------------------------------------------------

    def visit_all_applications(self, printer: LatexPrinter, node: AllApplications) -> PrinterResult[str]:
        return printer.process_node_list(node.children)

    def visit_raw_application(self, printer: LatexPrinter, node: RawApplication) -> PrinterResult[str]:
        letter = printer.application_letter(node)
        children = printer.process_node_list(node.children)
        text = templates.latex_raw_application(letter.result, children.result, printer.options.application_label)
        return PrinterResult(text, letter.diagnostics + children.diagnostics)

    def visit_picture_application(self, printer: LatexPrinter, node: PictureApplication) -> PrinterResult[str]:
        letter = printer.application_letter(node)
        title = printer.process_node_list(node.title)
        text = templates.latex_picture_application(
            letter.result, title.result, node.href, node.rotated, printer.options.application_label
        )
        return PrinterResult(text, letter.diagnostics + title.diagnostics)

    def visit_code_application(self, printer: LatexPrinter, node: CodeApplication) -> PrinterResult[str]:
        letter = printer.application_letter(node)
        path = str(PurePosixPath(node.directory or ".") / node.filename)
        text = templates.latex_code_application(
            letter.result,
            path,
            node.lang or printer.options.default_code_language,
            node.columns,
            printer.options.application_label,
        )
        return PrinterResult(text, letter.diagnostics)


class LatexPrinter(BasePrinter[str]):
    """Print an AST as LaTeX source.

    Parameters
    ----------
    options : LatexPrinterOptions or None, default = None
        LaTeX printing options
    visitors : NodeVisitor or None, default = None
        Handler table; :class:`LatexVisitors` when None
    executor : Executor or None, default = None
        Optional executor for concurrent dispatch of top-level blocks

    """

    name = "latex"

    def __init__(
        self,
        options: LatexPrinterOptions | None = None,
        visitors: NodeVisitor | None = None,
        executor: Optional[Executor] = None,
    ):
        BasePrinter._validate_options_type(options, LatexPrinterOptions, "latex")
        super().__init__(visitors or LatexVisitors(), options or LatexPrinterOptions(), executor)
        self.options: LatexPrinterOptions

    def join_fragments(self, fragments: Sequence[str], separator: str) -> str:
        return separator.join(fragments)

    def escape(self, text: str) -> str:
        """Escape text with the configured escape table."""
        return escape_latex(text, self.options.extend_auto_escapes, self.options.default_auto_escapes)

    def prepare_text(self, text: str) -> str:
        """Decode entities, normalize spacing and escape text."""
        return prepare_latex_text(text, self.options.extend_auto_escapes, self.options.default_auto_escapes)

    def application_letter(self, node: Node) -> PrinterResult[str]:
        """Appendix letter for the node's index, with an Error when out of range."""
        index = getattr(node, "index")
        letter = application_letter(index, self.options.application_letters)
        if letter is not None:
            return PrinterResult(letter)
        return PrinterResult(
            "?",
            [
                self.diagnostic(
                    node,
                    DiagnoseSeverity.ERROR,
                    f"Unable to get application letter for index {index}: only "
                    f"{len(self.options.application_letters)} letters are available",
                )
            ],
        )

    def render_to_string(self, root: Node) -> str:
        """Print ``root`` to LaTeX source, logging any diagnostics."""
        with debug_timer(logger, "Printing (latex)"):
            result = self.print_tree(root)
        log_diagnostics(result.diagnostics, logger)
        return result.result

    def render(self, root: Node, output: Union[str, Path, IO[bytes], IO[str]]) -> list[Diagnostic]:
        """Print ``root`` and write the LaTeX source to ``output``."""
        with debug_timer(logger, "Printing (latex)"):
            result = self.print_tree(root)
        log_diagnostics(result.diagnostics, logger)
        write_content(result.result, output)
        return result.diagnostics


def create_latex_printer(
    options: LatexPrinterOptions | None = None,
    executor: Optional[Executor] = None,
) -> LatexPrinter:
    """Create a LaTeX printer for one conversion run."""
    return LatexPrinter(options=options, executor=executor)
