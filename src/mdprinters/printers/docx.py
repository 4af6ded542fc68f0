#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/docx.py
"""DOCX printing from AST.

This module prints an AST into a Word document using python-docx. Handlers
return detached WordprocessingML elements (runs, paragraphs, tables, OMML
math); :meth:`DocxPrinter.assemble` wraps stray inline fragments into
paragraphs, validates the root fragments, attaches them to the document body
and writes styles, numbering definitions and page layout.

A printer instance holds one :class:`docx.document.Document` and is meant for
a single run: create a new printer per output file.

Examples
--------
    >>> from mdprinters.ast import File, Heading, Paragraph, Text
    >>> printer = DocxPrinter()
    >>> diagnostics = printer.render(File(path="a.md", children=[
    ...     Heading(depth=1, children=[Text(text="Title")]),
    ...     Paragraph(children=[Text(text="Hello")]),
    ... ]), "output.docx")

"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Optional, Sequence, Union

from docx import Document
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml.ns import qn

from mdprinters.ast.nodes import (
    AllApplications,
    AllReferences,
    ApplicationKey,
    Br,
    CodeProcessed,
    CodeSpan,
    Del,
    Em,
    Escape,
    File,
    Formula,
    FormulaNoLabelProcessed,
    FormulaProcessed,
    FormulaSpan,
    Heading,
    Hr,
    Link,
    List,
    ListItem,
    Node,
    NonBreakingSpace,
    Paragraph,
    PictureAmount,
    PictureProcessed,
    Reference,
    Space,
    Strong,
    TableAmount,
    TableCell,
    TableControlCell,
    TableControlRow,
    TableProcessed,
    TableRow,
    Text,
    ThinNonBreakingSpace,
    Underline,
)
from mdprinters.ast.utils import find_file_path, find_node_data, resolve_list_context
from mdprinters.ast.visitors import NodeVisitor
from mdprinters.constants import (
    DEPS_DOCX_RENDER,
    EMU_PER_PIXEL,
    FORMULA_NUMBER_CELL_WIDTH_DXA,
    INLINE_FORMULA_PICTURE_POSITION,
)
from mdprinters.diagnostics import DiagnoseErrorType, DiagnoseSeverity, Diagnostic, log_diagnostics
from mdprinters.exceptions import DependencyError, FormulaRenderError, OutputWriteError, RenderingError
from mdprinters.options.docx import DocxPrinterOptions
from mdprinters.printers import docx_elements as el
from mdprinters.printers import docx_styles as styles
from mdprinters.printers.base import BasePrinter, PrinterResult
from mdprinters.printers.docx_validation import validate_docx_root_nodes
from mdprinters.printers.lists import ListRef, ListRefRegistry
from mdprinters.printers.numbering import application_letter, format_list_marker
from mdprinters.utils.decorators import debug_timer, requires_dependencies
from mdprinters.utils.escape import prepare_raw_text
from mdprinters.utils.formula import FormulaRenderer, MathJaxFormulaRenderer, render_formula_picture
from mdprinters.utils.images import (
    PREFERRED_UNIT,
    Dimension,
    ImageLoader,
    PillowImageLoader,
    compute_picture_size,
    parse_dimension,
)

logger = logging.getLogger(__name__)

DocxFragments = list[Any]


class DocxVisitors(NodeVisitor):
    """Handler table of the DOCX printer."""

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------

    def _internal_unparsable(self, printer: DocxPrinter, node: Node) -> PrinterResult[DocxFragments]:
        return PrinterResult(
            [el.make_placeholder_run("InternalError", node.type.value)],
            [
                printer.diagnostic(
                    node,
                    DiagnoseSeverity.WARNING,
                    f"Unable to print node with type '{node.type.value}' (internal error)",
                )
            ],
        )

    def _unparsable(self, printer: DocxPrinter, node: Node) -> PrinterResult[DocxFragments]:
        return PrinterResult(
            [el.make_placeholder_run("Unparsable", node.type.value)],
            [printer.diagnostic(node, DiagnoseSeverity.WARNING, f"Unable to print node with type '{node.type.value}'")],
        )

    def _todo_inline(self, printer: DocxPrinter, node: Node) -> PrinterResult[DocxFragments]:
        return PrinterResult(
            [el.make_todo_run(node.type.value, inline=True)],
            [printer.diagnostic(node, DiagnoseSeverity.WARNING, f"Printing of '{node.type.value}' is not supported")],
        )

    def _todo_paragraph(self, printer: DocxPrinter, node: Node) -> PrinterResult[DocxFragments]:
        return PrinterResult(
            [el.make_paragraph([el.make_todo_run(node.type.value, inline=False)])],
            [printer.diagnostic(node, DiagnoseSeverity.WARNING, f"Printing of '{node.type.value}' is not supported")],
        )

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

    visit_latex = _todo_paragraph
    visit_latex_span = _todo_inline
    visit_raw_application = _todo_paragraph
    visit_picture_application = _todo_paragraph
    visit_code_application = _todo_paragraph

    # ------------------------------------------------------------------
    # Text and inline formatting
    # ------------------------------------------------------------------

    def visit_space(self, printer: DocxPrinter, node: Space) -> PrinterResult[DocxFragments]:
        return PrinterResult([])

    def visit_text(self, printer: DocxPrinter, node: Text) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_run(prepare_raw_text(node.text))])

    def visit_escape(self, printer: DocxPrinter, node: Escape) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_run(node.text)])

    def _format_children(self, printer: DocxPrinter, node: Node, **formatting: Any) -> PrinterResult[DocxFragments]:
        children = printer.process_node_list(getattr(node, "children"))
        el.apply_run_format(children.result, **formatting)
        return children

    def visit_strong(self, printer: DocxPrinter, node: Strong) -> PrinterResult[DocxFragments]:
        return self._format_children(printer, node, bold=True)

    def visit_em(self, printer: DocxPrinter, node: Em) -> PrinterResult[DocxFragments]:
        return self._format_children(printer, node, italic=True)

    def visit_underline(self, printer: DocxPrinter, node: Underline) -> PrinterResult[DocxFragments]:
        return self._format_children(printer, node, underline=True)

    def visit_del(self, printer: DocxPrinter, node: Del) -> PrinterResult[DocxFragments]:
        return self._format_children(printer, node, strike=True)

    def visit_code_span(self, printer: DocxPrinter, node: CodeSpan) -> PrinterResult[DocxFragments]:
        mode = printer.options.use_code_span_as
        return PrinterResult(
            el.make_interpreted_runs(
                node.text,
                "monospace" if mode == "default" else mode,
                code_font=printer.options.code_font,
                code_font_size=printer.options.code_font_size,
            )
        )

    def visit_link(self, printer: DocxPrinter, node: Link) -> PrinterResult[DocxFragments]:
        children = printer.process_node_list(node.children)
        mode = printer.options.use_link_as
        if mode == "default":
            with printer.lock:
                hyperlink = el.make_hyperlink(printer.document.part, node.href, children.result)
            return PrinterResult([hyperlink], children.diagnostics)
        if mode == "quotes":
            return PrinterResult([el.make_run("«"), *children.result, el.make_run("»")], children.diagnostics)
        if mode == "monospace":
            el.apply_run_format(children.result, name=printer.options.code_font)
        else:
            el.apply_run_format(children.result, **{mode: True})
        return children

    def visit_br(self, printer: DocxPrinter, node: Br) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_line_break_run()])

    def visit_non_breaking_space(self, printer: DocxPrinter, node: NonBreakingSpace) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_run("\xa0")])

    def visit_thin_non_breaking_space(
        self, printer: DocxPrinter, node: ThinNonBreakingSpace
    ) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_run("\u202f")])

    def visit_formula_span(self, printer: DocxPrinter, node: FormulaSpan) -> PrinterResult[DocxFragments]:
        if printer.options.render_math_as == "picture":
            return printer.formula_picture_run(node, node.text, position=INLINE_FORMULA_PICTURE_POSITION)
        return PrinterResult([el.make_math(node.text)])

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_file(self, printer: DocxPrinter, node: File) -> PrinterResult[DocxFragments]:
        return printer.process_node_list(node.children)

    def visit_paragraph(self, printer: DocxPrinter, node: Paragraph) -> PrinterResult[DocxFragments]:
        children = printer.process_node_list(node.children)
        return PrinterResult(el.wrap_inline(children.result) or [el.make_paragraph()], children.diagnostics)

    def visit_heading(self, printer: DocxPrinter, node: Heading) -> PrinterResult[DocxFragments]:
        children = printer.process_node_list(node.children)
        style = styles.HEADING_STYLE_IDS.get(node.depth)
        diagnostics = children.diagnostics
        if style is None:
            style = styles.FALLBACK_HEADING_STYLE_ID
            diagnostics = diagnostics + [
                printer.diagnostic(node, DiagnoseSeverity.ERROR, f"Unable to resolve heading level {node.depth}")
            ]
        return PrinterResult([el.make_paragraph(children.result, style=style)], diagnostics)

    def visit_hr(self, printer: DocxPrinter, node: Hr) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_page_break_paragraph()])

    def visit_list(self, printer: DocxPrinter, node: List) -> PrinterResult[DocxFragments]:
        return printer.process_node_list(node.children)

    def visit_list_item(self, printer: DocxPrinter, node: ListItem) -> PrinterResult[DocxFragments]:
        context = resolve_list_context(node)
        if context is None:
            return PrinterResult(
                [],
                [
                    printer.diagnostic(
                        node, DiagnoseSeverity.ERROR, "Cannot find List parent for ListItem (internal error)"
                    )
                ],
            )

        # Resolve the reference before the children so outer lists register first
        ref = printer.list_ref(context.parent_list)
        children = printer.process_node_list(node.children)

        blocks = el.wrap_inline(children.result)
        if not blocks or not el.is_paragraph(blocks[0]):
            blocks.insert(0, el.make_paragraph())

        level = context.depth - 1
        if printer.numbering_enabled:
            el.set_numbering(blocks[0], ref.num_id, level)
        else:
            data = find_node_data(node)
            marker = format_list_marker(data.index if data is not None else 0, context.depth, ref.is_ordered)
            properties = blocks[0].find(qn("w:pPr"))
            blocks[0].insert(0 if properties is None else 1, el.make_run(f"{marker}\xa0"))
        return PrinterResult(blocks, children.diagnostics)

    def visit_formula(self, printer: DocxPrinter, node: Formula) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_math_paragraph(node.text, style=styles.FORMULA_PICTURE_STYLE)])

    def visit_formula_no_label_processed(
        self, printer: DocxPrinter, node: FormulaNoLabelProcessed
    ) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_math_paragraph(node.text, style=styles.FORMULA_PICTURE_STYLE)])

    def visit_formula_processed(self, printer: DocxPrinter, node: FormulaProcessed) -> PrinterResult[DocxFragments]:
        picture = printer.formula_picture_run(node, node.text)
        formula_cell = el.make_cell([el.make_paragraph(picture.result, style=styles.FORMULA_TABLE_CELL_STYLE)])
        number_cell = el.make_cell(
            [el.make_paragraph([el.make_run(f"({node.index + 1})")], style=styles.FORMULA_TABLE_CELL_NUMBER_STYLE)],
            width_dxa=FORMULA_NUMBER_CELL_WIDTH_DXA,
        )
        table = el.make_table([el.make_row([formula_cell, number_cell])], column_count=2, borders=False)
        return PrinterResult([table], picture.diagnostics)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def visit_table_cell(self, printer: DocxPrinter, node: TableCell) -> PrinterResult[DocxFragments]:
        children = printer.process_node_list(node.children)
        if node.header:
            el.apply_run_format(children.result, bold=True)
        cell = el.make_cell(el.wrap_inline(children.result, style=styles.TABLE_CELL_STYLE))
        return PrinterResult([cell], children.diagnostics)

    def visit_table_row(self, printer: DocxPrinter, node: TableRow) -> PrinterResult[DocxFragments]:
        diagnostics: list[Diagnostic] = []
        cells = []
        for child in node.children:
            if not isinstance(child, TableCell):
                diagnostics.append(
                    printer.diagnostic(child, DiagnoseSeverity.ERROR, "Not cell in row (internal error)")
                )
                continue
            cells.append(child)
        row = printer.process_node_list(cells)
        return PrinterResult([el.make_row(row.result)], diagnostics + row.diagnostics)

    def visit_table_control_row(self, printer: DocxPrinter, node: TableControlRow) -> PrinterResult[DocxFragments]:
        return PrinterResult([])

    def visit_table_control_cell(self, printer: DocxPrinter, node: TableControlCell) -> PrinterResult[DocxFragments]:
        return PrinterResult([])

    def visit_table_processed(self, printer: DocxPrinter, node: TableProcessed) -> PrinterResult[DocxFragments]:
        title = printer.process_node_list(node.name)
        header = printer.process_node_list(node.header)
        content = printer.process_node_list(node.rows)
        message = "Not row in table (internal error)"
        header_rows, header_diagnostics = printer.keep_fragments(node, header, el.is_row, message)
        rows, row_diagnostics = printer.keep_fragments(node, content, el.is_row, message)
        for row in header_rows:
            el.mark_header_row(row)

        all_rows = [*header_rows, *rows]
        column_count = max((len(row.findall(qn("w:tc"))) for row in all_rows), default=1)
        caption = el.make_caption(
            printer.options.table_label,
            node.index + 1,
            printer.options.caption_separator,
            el.unwrap_paragraphs(title.result),
            styles.TABLE_CAPTION_STYLE,
        )
        el.set_keep_with_next(caption)
        table = el.make_table(all_rows, column_count)
        return PrinterResult([caption, table], title.diagnostics + header_diagnostics + row_diagnostics)

    # ------------------------------------------------------------------
    # Numbered blocks
    # ------------------------------------------------------------------

    def visit_code_processed(self, printer: DocxPrinter, node: CodeProcessed) -> PrinterResult[DocxFragments]:
        title = printer.process_node_list(node.name)
        code = el.make_paragraph([el.make_run(node.code.rstrip("\n"))], style=styles.CODE_STYLE)
        el.set_keep_with_next(code)
        el.add_box_border(code)
        # Listings are captioned below, like figures
        caption = el.make_caption(
            printer.options.code_label,
            node.index + 1,
            printer.options.caption_separator,
            el.unwrap_paragraphs(title.result),
            styles.PICTURE_CAPTION_STYLE,
        )
        return PrinterResult([code, caption], title.diagnostics)

    def visit_picture_processed(self, printer: DocxPrinter, node: PictureProcessed) -> PrinterResult[DocxFragments]:
        title = printer.process_node_list(node.name)
        picture = printer.picture_run(node, node.href, node.width, node.height)
        paragraph = el.make_paragraph(picture.result, style=styles.PICTURE_STYLE)
        caption = el.make_caption(
            printer.options.picture_label,
            node.index + 1,
            printer.options.caption_separator,
            el.unwrap_paragraphs(title.result),
            styles.PICTURE_CAPTION_STYLE,
        )
        return PrinterResult([paragraph, caption], picture.diagnostics + title.diagnostics)

    # ------------------------------------------------------------------
    # Cross references
    # ------------------------------------------------------------------

    def _print_index(self, printer: DocxPrinter, node: Node) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_run(str(getattr(node, "index") + 1))])

    visit_picture_key = _print_index
    visit_table_key = _print_index
    visit_reference_key = _print_index
    visit_formula_key = _print_index

    def visit_application_key(self, printer: DocxPrinter, node: ApplicationKey) -> PrinterResult[DocxFragments]:
        letter = application_letter(node.index, printer.options.application_letters)
        if letter is not None:
            return PrinterResult([el.make_run(letter)])
        return PrinterResult(
            [el.make_run("?")],
            [
                printer.diagnostic(
                    node,
                    DiagnoseSeverity.ERROR,
                    f"Unable to get application letter for index {node.index}: only "
                    f"{len(printer.options.application_letters)} letters are available",
                )
            ],
        )

    def visit_picture_amount(self, printer: DocxPrinter, node: PictureAmount) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_run(str(node.count()))])

    def visit_table_amount(self, printer: DocxPrinter, node: TableAmount) -> PrinterResult[DocxFragments]:
        return PrinterResult([el.make_run(str(node.count()))])

    def visit_all_references(self, printer: DocxPrinter, node: AllReferences) -> PrinterResult[DocxFragments]:
        children = printer.process_node_list(node.children)
        paragraphs, diagnostics = printer.keep_fragments(
            node, children, el.is_paragraph, "Not paragraph in references (internal error)"
        )
        return PrinterResult(paragraphs, diagnostics)

    def visit_reference(self, printer: DocxPrinter, node: Reference) -> PrinterResult[DocxFragments]:
        children = printer.process_node_list(node.children)
        paragraph = el.make_paragraph([el.make_run(f"{node.index + 1}.\xa0"), *el.unwrap_paragraphs(children.result)])
        return PrinterResult([paragraph], children.diagnostics)

    def visit_all_applications(self, printer: DocxPrinter, node: AllApplications) -> PrinterResult[DocxFragments]:
        return printer.process_node_list(node.children)


class DocxPrinter(BasePrinter[DocxFragments]):
    """Print an AST into a Word document.

    Parameters
    ----------
    options : DocxPrinterOptions or None, default = None
        DOCX printing options
    visitors : NodeVisitor or None, default = None
        Handler table; :class:`DocxVisitors` when None
    executor : Executor or None, default = None
        Optional executor for concurrent dispatch of top-level blocks
    image_loader : ImageLoader or None, default = None
        Reads pictures; a :class:`PillowImageLoader` when None
    formula_renderer : FormulaRenderer or None, default = None
        Turns TeX into pictures; a :class:`MathJaxFormulaRenderer` when None

    """

    name = "docx"

    def __init__(
        self,
        options: DocxPrinterOptions | None = None,
        visitors: NodeVisitor | None = None,
        executor: Optional[Executor] = None,
        image_loader: Optional[ImageLoader] = None,
        formula_renderer: Optional[FormulaRenderer] = None,
    ):
        BasePrinter._validate_options_type(options, DocxPrinterOptions, "docx")
        options = options or DocxPrinterOptions()
        super().__init__(visitors or DocxVisitors(), options, executor)
        self.options: DocxPrinterOptions = options

        self.document = Document(options.template_path) if options.template_path else Document()
        self.image_loader: ImageLoader = image_loader or PillowImageLoader(options.max_asset_size_bytes)
        self.formula_renderer: FormulaRenderer = formula_renderer or MathJaxFormulaRenderer()

        self._numbering = self._load_numbering()
        first_num_id = styles.first_free_num_id(self._numbering) if self._numbering is not None else 1
        self.registry = ListRefRegistry(first_num_id, lock=self.lock)

    def _load_numbering(self) -> Any:
        try:
            return self.document.part.numbering_part.element
        except NotImplementedError:
            logger.warning("Document template has no numbering part; list and heading numbering are disabled")
            return None

    @property
    def numbering_enabled(self) -> bool:
        return self._numbering is not None

    # ------------------------------------------------------------------
    # Fragment helpers
    # ------------------------------------------------------------------

    def join_fragments(self, fragments: Sequence[DocxFragments], separator: str) -> DocxFragments:
        joined: DocxFragments = []
        for i, fragment in enumerate(fragments):
            if separator and i:
                joined.append(el.make_run(separator))
            joined.extend(fragment)
        return joined

    def list_ref(self, list_node: List) -> ListRef:
        """Numbering reference of ``list_node``, created on first use."""
        return self.registry.get_or_create(list_node)

    def keep_fragments(
        self,
        node: Node,
        result: PrinterResult[DocxFragments],
        predicate: Any,
        message: str,
    ) -> tuple[DocxFragments, list[Diagnostic]]:
        """Split off fragments failing ``predicate``, reporting one Error per dropped fragment."""
        kept = [fragment for fragment in result.result if predicate(fragment)]
        dropped = len(result.result) - len(kept)
        diagnostics = list(result.diagnostics)
        diagnostics.extend(self.diagnostic(node, DiagnoseSeverity.ERROR, message) for _ in range(dropped))
        return kept, diagnostics

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def resolve_asset_path(self, node: Node, href: str) -> Path:
        """Resolve ``href`` against the enclosing file's directory under ``root_dir``."""
        path = Path(href)
        if path.is_absolute():
            return path
        return Path(self.options.root_dir) / Path(find_file_path(node)).parent / path

    def _resource_failure(
        self,
        node: Node,
        message: str,
        error: Exception,
        stage: str,
        placeholder: str,
    ) -> PrinterResult[DocxFragments]:
        logger.warning(message)
        if self.options.fail_on_resource_errors:
            if isinstance(error, RenderingError):
                raise error
            raise RenderingError(message, rendering_stage=stage, original_error=error) from error
        return PrinterResult(
            [el.make_placeholder_run(placeholder, node.type.value)],
            [self.diagnostic(node, DiagnoseSeverity.ERROR, message)],
        )

    def _parse_picture_dimension(
        self, node: Node, name: str, value: Optional[str], diagnostics: list[Diagnostic]
    ) -> Optional[Dimension]:
        if not value:
            return None
        try:
            dimension = parse_dimension(value)
        except ValueError:
            diagnostics.append(
                self.diagnostic(node, DiagnoseSeverity.WARNING, f"Unable to parse picture {name} '{value}'")
            )
            return None
        if dimension.unit != PREFERRED_UNIT:
            diagnostics.append(
                self.diagnostic(
                    node,
                    DiagnoseSeverity.WARNING,
                    f"Picture {name} '{value}' is not in '{PREFERRED_UNIT}'; other units are approximate",
                )
            )
        return dimension

    def picture_run(
        self, node: Node, href: str, width: Optional[str], height: Optional[str]
    ) -> PrinterResult[DocxFragments]:
        """Load a picture and return a run displaying it at its computed size.

        Raises
        ------
        RenderingError
            If the picture cannot be loaded and ``fail_on_resource_errors`` is set

        """
        diagnostics: list[Diagnostic] = []
        explicit_width = self._parse_picture_dimension(node, "width", width, diagnostics)
        explicit_height = self._parse_picture_dimension(node, "height", height, diagnostics)
        path = self.resolve_asset_path(node, href)
        try:
            asset = self.image_loader.load(path)
            size = compute_picture_size((asset.width_px, asset.height_px), explicit_width, explicit_height)
            with self.lock:
                run = el.make_picture_run(self.document.part, asset.data, size.width, size.height)
        except (OSError, ValueError, UnrecognizedImageError, DependencyError) as e:
            failure = self._resource_failure(
                node, f"Unable to load picture '{href}': {e}", e, "image_processing", "Missing picture"
            )
            return PrinterResult(failure.result, diagnostics + failure.diagnostics)
        return PrinterResult([run], diagnostics)

    def formula_picture_run(
        self, node: Node, tex: str, position: Optional[int] = None
    ) -> PrinterResult[DocxFragments]:
        """Typeset a formula to a picture run.

        Raises
        ------
        FormulaRenderError
            If typesetting fails and ``fail_on_resource_errors`` is set
        RenderingError
            If the formula services are unavailable and ``fail_on_resource_errors``
            is set

        """
        try:
            picture = render_formula_picture(self.formula_renderer, tex, self.options.formula_px_per_ex)
            with self.lock:
                run = el.make_picture_run(
                    self.document.part,
                    picture.png,
                    picture.width_px * EMU_PER_PIXEL,
                    picture.height_px * EMU_PER_PIXEL,
                    position=position,
                )
        except (FormulaRenderError, UnrecognizedImageError, DependencyError) as e:
            return self._resource_failure(node, f"Unable to render formula: {e}", e, "formula", "Formula")
        return PrinterResult([run])

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def assemble(self, fragments: DocxFragments) -> list[Diagnostic]:
        """Attach root fragments to the document and write document level parts.

        Returns
        -------
        list of Diagnostic
            Problems with the root fragments or the document template

        """
        blocks = el.wrap_inline(fragments)
        diagnostics = validate_docx_root_nodes(blocks)

        styles.setup_styles(self.document, self.options)
        if self._numbering is not None:
            styles.add_numbering_definitions(
                self._numbering, self.registry.heading_num_id, self.registry.refs(), self.options
            )
            styles.link_heading_numbering(self.document, self.registry.heading_num_id)
        else:
            diagnostics.append(
                Diagnostic(
                    severity=DiagnoseSeverity.WARNING,
                    error_type=DiagnoseErrorType.OTHER_ERROR,
                    message="Document template has no numbering part; numbering was skipped",
                    file_path=".",
                )
            )
        styles.setup_page(self.document, self.options)
        styles.enable_update_fields(self.document)

        body = self.document.element.body
        section_properties = body.find(qn("w:sectPr"))
        for block in blocks:
            if section_properties is not None:
                section_properties.addprevious(block)
            else:
                body.append(block)
        logger.debug("Assembled %d root blocks", len(blocks))
        return diagnostics

    def print_document(self, root: Node) -> list[Diagnostic]:
        """Print ``root`` into :attr:`document` without saving it."""
        with debug_timer(logger, "Printing (docx)"):
            result = self.print_tree(root)
            diagnostics = result.diagnostics + self.assemble(result.result)
        log_diagnostics(diagnostics, logger)
        return diagnostics

    @requires_dependencies("docx", DEPS_DOCX_RENDER)
    def render(self, root: Node, output: Union[str, Path, IO[bytes]]) -> list[Diagnostic]:
        """Print ``root`` and save the document to ``output``.

        Parameters
        ----------
        root : Node
            Usually a File node
        output : str, Path, or IO[bytes]
            Output destination (file path or binary file-like object)

        Returns
        -------
        list of Diagnostic
            Diagnostics of printing and assembly

        Raises
        ------
        RenderingError
            If an asset fails and ``fail_on_resource_errors`` is set
        OutputWriteError
            If the document cannot be written

        """
        diagnostics = self.print_document(root)
        try:
            if isinstance(output, (str, Path)):
                self.document.save(str(output))
            else:
                self.document.save(output)
        except OSError as e:
            raise OutputWriteError(str(output), original_error=e) from e
        return diagnostics

    @requires_dependencies("docx", DEPS_DOCX_RENDER)
    def render_to_bytes(self, root: Node) -> bytes:
        """Print ``root`` and return the document as bytes."""
        buffer = BytesIO()
        self.render(root, buffer)
        return buffer.getvalue()


def create_docx_printer(
    options: DocxPrinterOptions | None = None,
    executor: Optional[Executor] = None,
    image_loader: Optional[ImageLoader] = None,
    formula_renderer: Optional[FormulaRenderer] = None,
) -> DocxPrinter:
    """Create a DOCX printer for one conversion run."""
    return DocxPrinter(
        options=options,
        executor=executor,
        image_loader=image_loader,
        formula_renderer=formula_renderer,
    )
