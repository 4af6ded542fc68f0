#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/printers/test_docx_printer.py
"""Unit tests for the DOCX printer."""

from concurrent.futures import ThreadPoolExecutor
from io import BytesIO
from pathlib import Path

import pytest

try:
    from docx import Document
    from docx.enum.text import WD_COLOR_INDEX
    from docx.oxml.ns import qn

    HAS_DOCX = True
except ImportError:
    HAS_DOCX = False

from mdprinters.ast import (
    AllReferences,
    ApplicationKey,
    CodeProcessed,
    CodeSpan,
    Em,
    File,
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
    Paragraph,
    PictureProcessed,
    Reference,
    Strong,
    TableCell,
    TableControlCell,
    TableProcessed,
    TableRow,
    Text,
)
from mdprinters.diagnostics import DiagnoseSeverity
from mdprinters.exceptions import DependencyError, FormulaRenderError, InvalidOptionsError, RenderingError
from mdprinters.options import DocxPrinterOptions, LatexPrinterOptions
from mdprinters.utils.decorators import requires_dependencies
from mdprinters.utils.images import PillowImageLoader

pytestmark = [pytest.mark.docx, pytest.mark.skipif(not HAS_DOCX, reason="python-docx not installed")]

MATH_NS = "http://schemas.openxmlformats.org/officeDocument/2006/math"


@pytest.fixture
def make_printer(image_loader, formula_renderer):
    """Factory for printers wired to the fake asset services."""
    from mdprinters.printers.docx import DocxPrinter

    def factory(**option_values):
        options = DocxPrinterOptions(**option_values) if option_values else None
        return DocxPrinter(options=options, image_loader=image_loader, formula_renderer=formula_renderer)

    return factory


def print_file(printer, *children):
    """Print a File holding ``children`` into the printer's document."""
    root = File(path="doc.md", children=list(children))
    diagnostics = printer.print_document(root)
    return printer.document, diagnostics


def messages(diagnostics):
    return [diagnostic.message for diagnostic in diagnostics]


def num_pr(paragraph):
    ppr = paragraph._p.pPr
    return None if ppr is None else ppr.numPr


@pytest.mark.unit
class TestDocxBlocks:
    """Tests for block level output."""

    def test_heading_and_paragraph(self, make_printer):
        """Test heading styles and body paragraphs."""
        document, diagnostics = print_file(
            make_printer(),
            Heading(depth=1, children=[Text(text="Title")]),
            Paragraph(children=[Text(text="Hello  world")]),
        )
        assert [p.text for p in document.paragraphs] == ["Title", "Hello world"]
        assert document.paragraphs[0].style.name == "Heading 1"
        assert diagnostics == []

    def test_unknown_heading_level(self, make_printer):
        """Test that deep headings fall back to a low level style."""
        document, diagnostics = print_file(make_printer(), Heading(depth=6, children=[Text(text="Deep")]))
        assert document.paragraphs[0]._p.style == "Heading6"
        assert messages(diagnostics) == ["Unable to resolve heading level 6"]
        assert diagnostics[0].severity is DiagnoseSeverity.ERROR

    def test_inline_formatting(self, make_printer):
        """Test direct run formatting and the default code span mode."""
        document, _ = print_file(
            make_printer(),
            Paragraph(
                children=[
                    Strong(children=[Text(text="bold")]),
                    Em(children=[Text(text="italic")]),
                    CodeSpan(text="x"),
                ]
            ),
        )
        runs = document.paragraphs[0].runs
        assert runs[0].bold is True
        assert runs[1].italic is True
        assert runs[2].text == "«x»"

    def test_hyperlink(self, make_printer):
        """Test that default links become external hyperlinks."""
        printer = make_printer()
        print_file(printer, Paragraph(children=[Link(href="https://x.org", children=[Text(text="site")])]))
        hyperlinks = list(printer.document.element.body.iter(qn("w:hyperlink")))
        assert len(hyperlinks) == 1
        rel = printer.document.part.rels[hyperlinks[0].get(qn("r:id"))]
        assert rel.target_ref == "https://x.org"
        assert rel.is_external

    def test_link_as_bold(self, make_printer):
        """Test link interpretation without a hyperlink."""
        document, _ = print_file(
            make_printer(use_link_as="bold"),
            Paragraph(children=[Link(href="https://x.org", children=[Text(text="site")])]),
        )
        assert document.paragraphs[0].runs[0].bold is True
        assert not list(document.element.body.iter(qn("w:hyperlink")))

    def test_page_break(self, make_printer):
        """Test that thematic breaks become page breaks."""
        document, _ = print_file(make_printer(), Hr())
        breaks = list(document.paragraphs[0]._p.iter(qn("w:br")))
        assert breaks[0].get(qn("w:type")) == "page"

    def test_code_listing(self, make_printer):
        """Test that the bordered code paragraph is kept with the caption below it."""
        document, _ = print_file(make_printer(), CodeProcessed(index=0, name=[Text(text="Main")], code="x = 1\n"))
        code, caption = document.paragraphs
        assert code.text == "x = 1"
        assert code._p.style == "code"
        assert code.paragraph_format.keep_with_next is True
        assert code._p.pPr.find(qn("w:pBdr")) is not None
        assert caption.text == "Listing 1 – Main"
        assert caption._p.style == "picture-caption"

    def test_table(self, make_printer):
        """Test caption, header row and cell content."""
        table = TableProcessed(
            index=0,
            name=[Text(text="Data")],
            header=[
                TableRow(
                    children=[
                        TableCell(header=True, children=[Text(text="a")]),
                        TableCell(header=True, children=[Text(text="b")]),
                    ]
                )
            ],
            rows=[TableRow(children=[TableCell(children=[Text(text="1")]), TableCell(children=[Text(text="2")])])],
        )
        document, diagnostics = print_file(make_printer(), table)
        assert document.paragraphs[0].text == "Table 1 – Data"
        docx_table = document.tables[0]
        assert [[cell.text for cell in row.cells] for row in docx_table.rows] == [["a", "b"], ["1", "2"]]
        assert docx_table.rows[0]._tr.find(qn("w:trPr")).find(qn("w:tblHeader")) is not None
        assert docx_table.rows[0].cells[0].paragraphs[0].runs[0].bold is True
        assert diagnostics == []

    def test_non_cell_in_row(self, make_printer):
        """Test that stray row content is dropped with an error."""
        row = TableRow(children=[TableCell(children=[Text(text="x")]), Text(text="stray")])
        document, diagnostics = print_file(make_printer(), TableProcessed(index=0, rows=[row]))
        assert [cell.text for cell in document.tables[0].rows[0].cells] == ["x"]
        assert messages(diagnostics) == ["Not cell in row (internal error)"]

    def test_control_cell_in_row(self, make_printer):
        """Test that a control cell inside a row is reported, not silently dropped."""
        row = TableRow(children=[TableControlCell(text=":---"), TableCell(children=[Text(text="x")])])
        document, diagnostics = print_file(make_printer(), TableProcessed(index=0, rows=[row]))
        assert [cell.text for cell in document.tables[0].rows[0].cells] == ["x"]
        assert messages(diagnostics) == ["Not cell in row (internal error)"]
        assert diagnostics[0].severity == DiagnoseSeverity.ERROR


@pytest.mark.unit
class TestDocxLists:
    """Tests for list numbering."""

    def test_nested_lists_get_own_numbering(self, make_printer):
        """Test that each list gets its own numbering instance and ordered flag."""
        inner = List(ordered=True, children=[ListItem(children=[Text(text="nested")])])
        outer = List(
            ordered=False,
            children=[
                ListItem(children=[Text(text="first")]),
                ListItem(children=[Text(text="second"), inner]),
            ],
        )
        printer = make_printer()
        document, diagnostics = print_file(printer, outer)

        assert [p.text for p in document.paragraphs] == ["first", "second", "nested"]
        outer_ref, inner_ref = printer.registry.refs()
        assert (outer_ref.reference, outer_ref.is_ordered) == ("list-1", False)
        assert (inner_ref.reference, inner_ref.is_ordered) == ("list-2", True)
        assert printer.registry.heading_num_id < outer_ref.num_id < inner_ref.num_id

        levels = [(num_pr(p).numId.val, num_pr(p).ilvl.val) for p in document.paragraphs]
        assert levels == [(outer_ref.num_id, 0), (outer_ref.num_id, 0), (inner_ref.num_id, 1)]
        assert diagnostics == []

    def test_numbering_definitions(self, make_printer):
        """Test that definitions are written in schema order with the right formats."""
        printer = make_printer()
        print_file(printer, List(ordered=True, children=[ListItem(children=[Text(text="one")])]))
        (ref,) = printer.registry.refs()
        numbering = printer.document.part.numbering_part.element

        num_ids = numbering.xpath("./w:num/@w:numId")
        assert str(ref.num_id) in num_ids
        assert str(printer.registry.heading_num_id) in num_ids

        tags = [child.tag for child in numbering]
        last_abstract = max(i for i, tag in enumerate(tags) if tag == qn("w:abstractNum"))
        first_num = tags.index(qn("w:num"))
        assert last_abstract < first_num

        abstract_id = numbering.xpath(f'./w:num[@w:numId="{ref.num_id}"]/w:abstractNumId/@w:val')[0]
        levels = numbering.xpath(f'./w:abstractNum[@w:abstractNumId="{abstract_id}"]/w:lvl')
        assert len(levels) == 9
        assert levels[0].find(qn("w:numFmt")).get(qn("w:val")) == "lowerLetter"
        assert levels[0].find(qn("w:lvlText")).get(qn("w:val")) == "%1)"

    def test_headings_linked_to_numbering(self, make_printer):
        """Test that heading styles use the reserved numbering id."""
        printer = make_printer()
        document, _ = print_file(printer, Heading(depth=2, children=[Text(text="Part")]))
        style = document.styles["Heading 2"]
        assert style.element.pPr.numPr.numId.val == printer.registry.heading_num_id
        assert style.element.pPr.numPr.ilvl.val == 1

    def test_numbering_disabled(self, make_printer, monkeypatch):
        """Test the text marker fallback for templates without a numbering part."""
        from mdprinters.printers.docx import DocxPrinter

        monkeypatch.setattr(DocxPrinter, "_load_numbering", lambda self: None)
        printer = make_printer()
        document, diagnostics = print_file(
            printer,
            List(
                ordered=True,
                children=[ListItem(children=[Text(text="one")]), ListItem(children=[Text(text="two")])],
            ),
        )
        assert [p.text for p in document.paragraphs] == ["a)\xa0one", "b)\xa0two"]
        assert all(num_pr(p) is None for p in document.paragraphs)
        assert messages(diagnostics) == ["Document template has no numbering part; numbering was skipped"]
        assert diagnostics[0].severity is DiagnoseSeverity.WARNING

    def test_orphan_list_item(self, make_printer):
        """Test that a ListItem without a List ancestor is reported and skipped."""
        document, diagnostics = print_file(make_printer(), ListItem(children=[Text(text="lost")]))
        assert document.paragraphs == []
        assert messages(diagnostics) == ["Cannot find List parent for ListItem (internal error)"]


@pytest.mark.unit
class TestDocxPictures:
    """Tests for pictures loaded through the image loader."""

    def test_picture_size_and_caption(self, make_printer, image_loader):
        """Test that an explicit width keeps the intrinsic aspect ratio."""
        picture = PictureProcessed(index=0, name=[Text(text="Plot")], href="plot.png", width="10cm")
        document, diagnostics = print_file(make_printer(), picture)

        figure, caption = document.paragraphs
        extent = next(figure._p.iter(qn("wp:extent")))
        assert (int(extent.get("cx")), int(extent.get("cy"))) == (3600000, 2700000)
        assert figure._p.style == "picture"
        assert caption.text == "Figure 1 – Plot"
        assert image_loader.loaded == [Path("plot.png")]
        assert diagnostics == []

    def test_picture_relative_to_root_dir(self, make_printer, image_loader):
        """Test resolution against root_dir and the enclosing file directory."""
        printer = make_printer(root_dir="/data")
        root = File(path="chapters/one.md", children=[PictureProcessed(index=0, href="img/a.png")])
        printer.print_document(root)
        assert image_loader.loaded == [Path("/data/chapters/img/a.png")]

    def test_missing_picture(self, make_printer):
        """Test the placeholder and error for unreadable pictures."""
        picture = PictureProcessed(index=0, name=[Text(text="Gone")], href="missing.png")
        document, diagnostics = print_file(make_printer(), picture)
        assert document.paragraphs[0].text == "[Missing picture: 'picture_processed']"
        assert document.paragraphs[1].text == "Figure 1 – Gone"
        assert len(diagnostics) == 1
        assert diagnostics[0].severity is DiagnoseSeverity.ERROR
        assert diagnostics[0].message.startswith("Unable to load picture 'missing.png'")

    def test_missing_picture_raises_when_strict(self, make_printer):
        """Test that strict mode raises instead of emitting a placeholder."""
        printer = make_printer(fail_on_resource_errors=True)
        with pytest.raises(RenderingError) as exc_info:
            print_file(printer, PictureProcessed(index=0, href="missing.png"))
        assert exc_info.value.rendering_stage == "image_processing"
        assert isinstance(exc_info.value.original_error, FileNotFoundError)

    @pytest.mark.parametrize(
        "width,expected",
        [
            ("4in", "Picture width '4in' is not in 'cm'; other units are approximate"),
            ("wide", "Unable to parse picture width 'wide'"),
        ],
    )
    def test_dimension_warnings(self, make_printer, width, expected):
        """Test warnings for unexpected units and unparsable values."""
        _, diagnostics = print_file(make_printer(), PictureProcessed(index=0, href="plot.png", width=width))
        assert messages(diagnostics) == [expected]
        assert diagnostics[0].severity is DiagnoseSeverity.WARNING


@pytest.mark.unit
class TestDocxFormulas:
    """Tests for display and inline formulas."""

    def test_numbered_formula(self, make_printer, formula_renderer):
        """Test the two cell layout of numbered formulas."""
        document, diagnostics = print_file(make_printer(), FormulaProcessed(index=0, text="x^2"))
        cells = document.tables[0].rows[0].cells
        assert cells[1].text == "(1)"
        assert list(cells[0]._tc.iter(qn("w:drawing")))
        assert formula_renderer.rendered == ["x^2"]
        assert diagnostics == []

    def test_formula_failure(self, make_printer):
        """Test the placeholder for formulas that cannot be typeset."""
        document, diagnostics = print_file(make_printer(), FormulaProcessed(index=0, text="\\fail"))
        assert document.tables[0].rows[0].cells[0].text == "[Formula: 'formula_processed']"
        assert messages(diagnostics) == [
            "Unable to render formula: Unable to convert tex to svg: Undefined control sequence \\fail"
        ]

    def test_formula_failure_raises_when_strict(self, make_printer):
        """Test that strict mode re-raises formula errors."""
        with pytest.raises(FormulaRenderError):
            print_file(make_printer(fail_on_resource_errors=True), FormulaProcessed(index=0, text="\\fail"))

    def test_inline_math(self, make_printer):
        """Test that inline formulas become OMML by default."""
        document, _ = print_file(make_printer(), Paragraph(children=[FormulaSpan(text="a+b")]))
        texts = [t.text for t in document.paragraphs[0]._p.iter(f"{{{MATH_NS}}}t")]
        assert texts == ["a+b"]

    def test_inline_formula_picture(self, make_printer):
        """Test that inline formula pictures are lowered to the text baseline."""
        document, _ = print_file(
            make_printer(render_math_as="picture"), Paragraph(children=[FormulaSpan(text="a+b")])
        )
        positions = list(document.paragraphs[0]._p.iter(qn("w:position")))
        assert positions[0].get(qn("w:val")) == "-6"


class CairoMissingRenderer:
    """Formula renderer that typesets fine but has no rasterizer installed."""

    def __init__(self, typesetter):
        self.typesetter = typesetter

    def tex_to_svg(self, tex):
        return self.typesetter.tex_to_svg(tex)

    def svg_to_png(self, svg):
        raise DependencyError("formula", [("cairosvg", ">=2.7.0")])


def native_library_renderer(typesetter, module_name):
    """Formula renderer whose rasterizer depends on a module that fails to load."""

    class NativeLibraryRenderer(CairoMissingRenderer):
        @requires_dependencies("formula", [("broken-native-ext", module_name, "")])
        def svg_to_png(self, svg):
            return b""

    return NativeLibraryRenderer(typesetter)


class PillowMissingLoader:
    """Image loader reporting that Pillow is not installed."""

    def load(self, path):
        raise DependencyError("image", [("Pillow", ">=9.0.0")])


@pytest.mark.unit
class TestDocxAssetFailures:
    """Tests that asset failures degrade to placeholders instead of stopping the document."""

    def test_decompression_bomb_picture(self, formula_renderer, oversized_png_file):
        """Test that a picture over Pillow's pixel limit becomes a placeholder between intact paragraphs."""
        from mdprinters.printers.docx import DocxPrinter

        printer = DocxPrinter(
            options=DocxPrinterOptions(root_dir=str(oversized_png_file.parent)),
            image_loader=PillowImageLoader(),
            formula_renderer=formula_renderer,
        )
        document, diagnostics = print_file(
            printer,
            Paragraph(children=[Text(text="before")]),
            PictureProcessed(index=0, href="scan.png"),
            Paragraph(children=[Text(text="after")]),
        )
        texts = [p.text for p in document.paragraphs]
        assert texts[0] == "before"
        assert "[Missing picture: 'picture_processed']" in texts
        assert texts[-1] == "after"
        assert len(diagnostics) == 1
        assert diagnostics[0].severity is DiagnoseSeverity.ERROR
        assert diagnostics[0].message.startswith("Unable to load picture 'scan.png'")

    def test_picture_loader_dependency_missing(self, formula_renderer):
        """Test that a loader without its imaging package yields a placeholder and an error."""
        from mdprinters.printers.docx import DocxPrinter

        printer = DocxPrinter(image_loader=PillowMissingLoader(), formula_renderer=formula_renderer)
        document, diagnostics = print_file(printer, PictureProcessed(index=0, href="plot.png"))
        assert document.paragraphs[0].text == "[Missing picture: 'picture_processed']"
        assert "Pillow>=9.0.0" in diagnostics[0].message
        assert diagnostics[0].severity is DiagnoseSeverity.ERROR

    def test_picture_loader_dependency_missing_when_strict(self, formula_renderer):
        """Test that strict mode wraps the dependency failure in a RenderingError."""
        from mdprinters.printers.docx import DocxPrinter

        printer = DocxPrinter(
            options=DocxPrinterOptions(fail_on_resource_errors=True),
            image_loader=PillowMissingLoader(),
            formula_renderer=formula_renderer,
        )
        with pytest.raises(RenderingError) as exc_info:
            print_file(printer, PictureProcessed(index=0, href="plot.png"))
        assert exc_info.value.rendering_stage == "image_processing"
        assert isinstance(exc_info.value.original_error, DependencyError)

    def test_formula_rasterizer_not_installed(self, image_loader, formula_renderer):
        """Test that a missing rasterizer package becomes a formula placeholder."""
        from mdprinters.printers.docx import DocxPrinter

        printer = DocxPrinter(image_loader=image_loader, formula_renderer=CairoMissingRenderer(formula_renderer))
        document, diagnostics = print_file(
            printer, FormulaProcessed(index=0, text="x^2"), Paragraph(children=[Text(text="after")])
        )
        assert document.tables[0].rows[0].cells[0].text == "[Formula: 'formula_processed']"
        assert document.paragraphs[-1].text == "after"
        assert len(diagnostics) == 1
        assert diagnostics[0].message.startswith("Unable to render formula: formula requires")
        assert "cairosvg>=2.7.0" in diagnostics[0].message

    def test_formula_rasterizer_native_library_missing(self, image_loader, formula_renderer, broken_native_module):
        """Test that a rasterizer whose native library fails to load becomes a formula placeholder."""
        from mdprinters.printers.docx import DocxPrinter

        renderer = native_library_renderer(formula_renderer, broken_native_module)
        printer = DocxPrinter(image_loader=image_loader, formula_renderer=renderer)
        document, diagnostics = print_file(printer, FormulaProcessed(index=0, text="x^2"))
        assert document.tables[0].rows[0].cells[0].text == "[Formula: 'formula_processed']"
        assert diagnostics[0].severity is DiagnoseSeverity.ERROR
        assert "broken-native-ext" in diagnostics[0].message


@pytest.mark.unit
class TestDocxPlaceholders:
    """Tests for unsupported nodes."""

    def test_unparsable(self, make_printer):
        """Test that unsupported blocks get a bold marker."""
        document, diagnostics = print_file(make_printer(), Html(text="<b>x</b>"))
        assert document.paragraphs[0].text == "[Unparsable: 'html']"
        assert document.paragraphs[0].runs[0].bold is True
        assert messages(diagnostics) == ["Unable to print node with type 'html'"]

    def test_todo_paragraph_and_inline(self, make_printer):
        """Test red markers for LaTeX only content."""
        document, diagnostics = print_file(
            make_printer(),
            Latex(text="\\newpage"),
            Paragraph(children=[Text(text="see "), LatexSpan(text="\\LaTeX")]),
        )
        assert document.paragraphs[0].text == "[TODO (paragraph) 'latex']"
        assert document.paragraphs[0].runs[0].font.highlight_color == WD_COLOR_INDEX.RED
        assert document.paragraphs[1].text == "see [TODO (inline) 'latex_span']"
        assert messages(diagnostics) == [
            "Printing of 'latex' is not supported",
            "Printing of 'latex_span' is not supported",
        ]


@pytest.mark.unit
class TestDocxReferences:
    """Tests for keys and bibliography."""

    def test_application_keys(self, make_printer):
        """Test appendix letters and the out of range marker."""
        document, diagnostics = print_file(
            make_printer(),
            Paragraph(children=[ApplicationKey(index=0), Text(text=" "), ApplicationKey(index=99)]),
        )
        assert document.paragraphs[0].text == "A ?"
        assert len(diagnostics) == 1
        assert "index 99" in diagnostics[0].message

    def test_references(self, make_printer):
        """Test numbered bibliography paragraphs."""
        document, diagnostics = print_file(
            make_printer(),
            AllReferences(
                children=[
                    Reference(index=0, children=[Paragraph(children=[Text(text="Knuth")])]),
                    Text(text="stray"),
                ]
            ),
        )
        assert [p.text for p in document.paragraphs] == ["1.\xa0Knuth"]
        assert messages(diagnostics) == ["Not paragraph in references (internal error)"]


@pytest.mark.unit
class TestDocxPrinter:
    """Tests for printer construction and output."""

    def test_rejects_wrong_options(self):
        """Test options type validation."""
        from mdprinters.printers.docx import DocxPrinter

        with pytest.raises(InvalidOptionsError):
            DocxPrinter(options=LatexPrinterOptions())

    def test_render_to_bytes_round_trips(self, make_printer):
        """Test that the saved package opens with python-docx."""
        root = File(
            path="doc.md",
            children=[
                Heading(depth=1, children=[Text(text="Title")]),
                List(ordered=False, children=[ListItem(children=[Text(text="item")])]),
                FormulaProcessed(index=0, text="x"),
            ],
        )
        data = make_printer().render_to_bytes(root)
        assert data.startswith(b"PK")
        reopened = Document(BytesIO(data))
        assert [p.text for p in reopened.paragraphs] == ["Title", "item"]
        assert len(reopened.tables) == 1
        assert reopened.settings.element.find(qn("w:updateFields")) is not None

    def test_render_to_path(self, make_printer, tmp_path):
        """Test saving to a file path."""
        path = tmp_path / "out.docx"
        diagnostics = make_printer().render(File(children=[Paragraph(children=[Text(text="Hi")])]), path)
        assert diagnostics == []
        assert Document(str(path)).paragraphs[0].text == "Hi"

    def test_lazy_package_exports(self):
        """Test that DOCX names are importable from the package root."""
        import mdprinters
        from mdprinters.printers.docx import DocxPrinter

        assert mdprinters.DocxPrinter is DocxPrinter
        assert callable(mdprinters.create_docx_printer)

    def test_executor_keeps_document_order(self, image_loader, formula_renderer):
        """Test that concurrent dispatch yields the sequential paragraphs."""
        from mdprinters.printers.docx import create_docx_printer

        def build():
            children = []
            for i in range(10):
                children.append(Paragraph(children=[Text(text=f"p{i}")]))
                children.append(List(ordered=bool(i % 2), children=[ListItem(children=[Text(text=f"item{i}")])]))
            children.append(PictureProcessed(index=0, name=[Text(text="Plot")], href="plot.png"))
            return File(path="doc.md", children=children)

        sequential = create_docx_printer(image_loader=image_loader, formula_renderer=formula_renderer)
        sequential.print_document(build())
        with ThreadPoolExecutor(max_workers=4) as executor:
            concurrent = create_docx_printer(
                executor=executor, image_loader=image_loader, formula_renderer=formula_renderer
            )
            concurrent.print_document(build())

        assert [p.text for p in concurrent.document.paragraphs] == [p.text for p in sequential.document.paragraphs]
        assert len(concurrent.registry) == len(sequential.registry) == 10
        assert len({ref.num_id for ref in concurrent.registry.refs()}) == 10
