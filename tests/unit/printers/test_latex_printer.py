#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/printers/test_latex_printer.py
"""Unit tests for the LaTeX printer."""

from concurrent.futures import ThreadPoolExecutor
from io import StringIO

import pytest

from mdprinters.ast import (
    AllReferences,
    ApplicationKey,
    Blockquote,
    Code,
    CodeApplication,
    CodeProcessed,
    CodeSpan,
    Escape,
    File,
    FormulaProcessed,
    FormulaSpan,
    Heading,
    Hr,
    Link,
    List,
    ListItem,
    Paragraph,
    PictureAmount,
    PictureApplication,
    PictureKey,
    PictureProcessed,
    Reference,
    Space,
    Strong,
    TableCell,
    TableControlCell,
    TableProcessed,
    TableRow,
    Text,
)
from mdprinters.diagnostics import DiagnoseSeverity
from mdprinters.exceptions import InvalidOptionsError
from mdprinters.options import DocxPrinterOptions, LatexPrinterOptions
from mdprinters.printers.latex import LatexPrinter, create_latex_printer, is_node_before_boxed


def print_file(*children, options=None):
    """Print a File holding ``children`` and return the result."""
    printer = LatexPrinter(options=options)
    root = File(path="doc.md", children=list(children))
    return printer.print_tree(root)


def messages(result):
    return [diagnostic.message for diagnostic in result.diagnostics]


@pytest.mark.unit
class TestLatexBlocks:
    """Tests for block level output."""

    def test_heading_and_paragraph(self):
        """Test the basic document layout."""
        result = print_file(
            Heading(depth=2, children=[Text(text="Title")]),
            Paragraph(children=[Text(text="Hello")]),
        )
        assert result.result == "\\subsection{Title}\n\nHello\n"
        assert result.diagnostics == []

    def test_chapter_heading_is_uppercased(self):
        """Test level 1 headings."""
        result = print_file(Heading(depth=1, children=[Text(text="Intro")]))
        assert result.result == "\\section{\\uppercase{Intro}}\n"

    def test_unknown_heading_level(self):
        """Test that deep headings fall back and report an error."""
        result = print_file(Heading(depth=5, children=[Text(text="Deep")]))
        assert "\\subparagraph{Deep}" in result.result
        assert messages(result) == ["Unable to resolve heading level 5"]
        assert result.diagnostics[0].severity is DiagnoseSeverity.ERROR
        assert result.diagnostics[0].file_path == "doc.md"

    def test_hr_is_page_break(self):
        """Test thematic breaks."""
        assert print_file(Hr()).result == "\\pagebreak\n"

    def test_inline_formatting(self):
        """Test escaping and inline decorations in one paragraph."""
        result = print_file(
            Paragraph(
                children=[
                    Text(text="50% "),
                    Strong(children=[Text(text="bold")]),
                    Text(text=" "),
                    CodeSpan(text="a_b"),
                    Text(text=" "),
                    Link(href="http://x.org/#a", children=[Text(text="site")]),
                    Escape(text="#"),
                ]
            )
        )
        assert result.result == "50\\% \\textbf{bold} <<a\\_b>> \\href{http://x.org/\\#a}{site}\\#\n"

    def test_link_as_monospace(self):
        """Test link interpretation modes."""
        options = LatexPrinterOptions(use_link_as="monospace")
        result = print_file(
            Paragraph(
                children=[
                    Link(href="http://x.org", children=[Text(text="site")]),
                    Text(text=" "),
                    Link(href="http://x.org", children=[Text(text="http://x.org")]),
                ]
            ),
            options=options,
        )
        assert result.result == "site (\\texttt{http://x.org}) \\texttt{http://x.org}\n"

    def test_extra_escapes(self):
        """Test that configured replacements apply to text."""
        options = LatexPrinterOptions(extend_auto_escapes={'"': "''"})
        result = print_file(Paragraph(children=[Text(text='say "hi"')]), options=options)
        assert result.result == "say ''hi''\n"

    def test_formulas(self):
        """Test display and inline math."""
        result = print_file(
            FormulaProcessed(index=2, text=" E=mc^2 "),
            Paragraph(children=[FormulaSpan(text="x")]),
        )
        assert "\\begin{align*}\nE=mc^2 \\tag{3}\n\\end{align*}" in result.result
        assert "\\setlength{\\abovedisplayskip}{-0.9em}" in result.result
        assert "$\\displaystyle x$" in result.result


@pytest.mark.unit
class TestLatexLists:
    """Tests for list items."""

    def test_ordered_list(self):
        """Test markers of a flat ordered list."""
        result = print_file(
            List(
                ordered=True,
                children=[ListItem(children=[Text(text="one")]), ListItem(children=[Text(text="two")])],
            )
        )
        assert result.result == "a)~one\n\nb)~two\n"

    def test_nested_list_uses_own_ordering(self):
        """Test that a nested list is numbered by its own ordered flag and indented."""
        inner = List(ordered=True, children=[ListItem(children=[Text(text="inner")])])
        outer = List(ordered=False, children=[ListItem(children=[Text(text="outer"), inner])])
        result = print_file(outer)
        assert result.result == "–~outer\n\n\\hspace*{1.25cm}1)~inner\n"

    def test_orphan_list_item(self):
        """Test that a ListItem without a List ancestor is reported."""
        result = print_file(ListItem(children=[Text(text="lost")]))
        assert result.result == ""
        assert messages(result) == ["Cannot find List parent for ListItem (internal error)"]


@pytest.mark.unit
class TestLatexNumberedBlocks:
    """Tests for listings, tables and pictures."""

    def test_boxed_neighbour_removes_space(self):
        """Test that a listing followed by a picture drops its bottom spacing."""
        code = CodeProcessed(index=0, name=[Text(text="Main")], code="print(1)\n", lang="python")
        picture = PictureProcessed(index=0, name=[Text(text="Plot")], href="plot.png", width="10cm")
        root = File(children=[code, Space(), picture])
        result = LatexPrinter().print_tree(root)

        assert is_node_before_boxed(code)
        assert not is_node_before_boxed(picture)
        code_part, picture_part = result.result.split("\\end{figure}\n", 1)
        assert "\\addtolength{\\belowcaptionskip}{-1.6em}" in code_part
        assert "\\begin{minted}[breaklines]{python}\nprint(1)\n\\end{minted}" in code_part
        assert "\\caption*{Listing 1 -- Main}" in code_part
        assert "\\addtolength" not in picture_part
        assert "\\includegraphics[width=10cm]{plot.png}" in picture_part
        assert "\\caption*{Figure 1 -- Plot}" in picture_part

    def test_listing_default_language(self):
        """Test that listings without a language use the default lexer."""
        result = print_file(CodeProcessed(index=0, code="x"))
        assert "\\begin{minted}[breaklines]{text}" in result.result

    def test_table(self):
        """Test longtable output."""
        table = TableProcessed(
            index=1,
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
        result = print_file(table)
        assert "\\begin{longtable}{|c|c|}" in result.result
        assert "\\caption*{Table 2 -- Data} \\\\" in result.result
        assert "a & b \\\\ \\hline\n\\endfirsthead" in result.result
        assert "1 & 2 \\\\ \\hline\n\\end{longtable}" in result.result

    def test_non_cell_in_row(self):
        """Test that non-cell children of a row are dropped with an error."""
        row = TableRow(children=[TableCell(children=[Text(text="x")]), Text(text="stray")])
        result = print_file(TableProcessed(index=0, rows=[row]))
        assert "x \\\\ \\hline" in result.result
        assert "stray" not in result.result
        assert messages(result) == ["Not cell in row (internal error)"]

    def test_control_cell_in_row(self):
        """Test that a control cell inside a row is reported like any other non-cell."""
        row = TableRow(children=[TableControlCell(text=":---"), TableCell(children=[Text(text="x")])])
        result = print_file(TableProcessed(index=0, rows=[row]))
        assert "x \\\\ \\hline" in result.result
        assert messages(result) == ["Not cell in row (internal error)"]
        assert result.diagnostics[0].severity == DiagnoseSeverity.ERROR


@pytest.mark.unit
class TestLatexPlaceholders:
    """Tests for unsupported nodes."""

    def test_unparsable(self):
        """Test nodes that cannot be printed."""
        result = print_file(Blockquote(children=[Paragraph(children=[Text(text="q")])]))
        assert result.result == "% Unparsable: node 'blockquote'\n"
        assert messages(result) == ["Unable to print node with type 'blockquote'"]
        assert result.diagnostics[0].severity is DiagnoseSeverity.WARNING

    def test_internal_error(self):
        """Test raw nodes that should have been processed upstream."""
        result = print_file(Code(code="x = 1"))
        assert result.result == "% InternalError: node 'code'\n"
        assert messages(result) == ["Unable to print node with type 'code' (internal error)"]


@pytest.mark.unit
class TestLatexReferences:
    """Tests for keys, amounts, references and appendices."""

    def test_keys_and_amounts(self):
        """Test that keys render one based numbers and amounts their count."""
        result = print_file(
            Paragraph(
                children=[
                    PictureKey(key="fig", index=0),
                    Text(text="/"),
                    PictureAmount(count=lambda: 4),
                    Text(text="/"),
                    ApplicationKey(key="app", index=1),
                ]
            )
        )
        assert result.result == "1/4/B\n"

    def test_application_letter_out_of_range(self):
        """Test that an index past the alphabet yields a marker and an error."""
        result = print_file(Paragraph(children=[ApplicationKey(key="far", index=30)]))
        assert result.result == "?\n"
        assert messages(result) == ["Unable to get application letter for index 30: only 24 letters are available"]

    def test_references(self):
        """Test bibliography entries."""
        result = print_file(AllReferences(children=[Reference(index=0, children=[Text(text=" Knuth ")])]))
        assert result.result == "1.\\,Knuth\n"

    def test_code_application(self):
        """Test appendix listings in columns."""
        result = print_file(
            CodeApplication(index=0, directory="src", filename="main.py", lang="python", columns=2)
        )
        assert "\\section*{\\centering\\uppercase{Appendix A}}" in result.result
        assert "\\begin{multicols}{2}\n\\inputminted[breaklines,fontsize=\\small]{python}{src/main.py}" in result.result

    def test_rotated_picture_application(self):
        """Test landscape appendix pictures."""
        result = print_file(PictureApplication(index=1, title=[Text(text="Scheme")], href="s.png", rotated=True))
        assert "Appendix B" in result.result
        assert "\\begin{landscape}" in result.result
        assert "\\caption*{Scheme}" in result.result


@pytest.mark.unit
class TestLatexPrinter:
    """Tests for printer construction and output."""

    def test_rejects_wrong_options(self):
        """Test options type validation."""
        with pytest.raises(InvalidOptionsError):
            LatexPrinter(options=DocxPrinterOptions())

    def test_render_to_stream(self):
        """Test writing to a text stream."""
        root = File(children=[Paragraph(children=[Text(text="Hello")])])
        output = StringIO()
        diagnostics = create_latex_printer().render(root, output)
        assert output.getvalue() == "Hello\n"
        assert diagnostics == []

    def test_render_to_path(self, tmp_path):
        """Test writing to a file."""
        root = File(children=[Heading(depth=3, children=[Text(text="Part")])])
        path = tmp_path / "out.tex"
        LatexPrinter().render(root, path)
        assert path.read_text(encoding="utf-8") == "\\subsubsection{Part}\n"

    def test_executor_keeps_document_order(self):
        """Test that concurrent dispatch produces the sequential output."""
        children = [Paragraph(children=[Text(text=f"p{i}")]) for i in range(40)]
        children.append(ListItem(children=[Text(text="orphan")]))
        root = File(children=children)
        sequential = LatexPrinter().print_tree(root)
        with ThreadPoolExecutor(max_workers=4) as executor:
            concurrent = LatexPrinter(executor=executor).print_tree(root)
        assert concurrent.result == sequential.result
        assert concurrent.diagnostics == sequential.diagnostics
