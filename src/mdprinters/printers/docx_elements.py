#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/docx_elements.py
"""WordprocessingML element builders for the DOCX printer.

The DOCX printer works with detached ``python-docx`` oxml elements instead of
appending to a document as it goes: each handler returns a list of ``w:p``,
``w:r``, ``w:hyperlink``, ``w:tbl`` (and friends) or ``m:oMath`` elements and
the assembler attaches the root fragments to the document body at the end.
python-docx proxies (``Run``, ``Paragraph``) are used on the detached elements
for formatting, which only touches the element itself.

Functions that need the document package (pictures, hyperlinks) take the
document part explicitly and must be called under the printer lock.

"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Iterable, Optional, Sequence

from docx.enum.text import WD_BREAK, WD_COLOR_INDEX
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.shared import Pt, RGBColor
from docx.text.paragraph import Paragraph
from docx.text.run import Run
from lxml import etree

from mdprinters.constants import TextInterpretation

logger = logging.getLogger(__name__)

MATH_NS = "http://schemas.openxmlformats.org/officeDocument/2006/math"

W_P = qn("w:p")
W_R = qn("w:r")
W_HYPERLINK = qn("w:hyperlink")
W_TBL = qn("w:tbl")
W_TR = qn("w:tr")
M_OMATH = f"{{{MATH_NS}}}oMath"
M_OMATH_PARA = f"{{{MATH_NS}}}oMathPara"

INLINE_TAGS = frozenset({W_R, W_HYPERLINK, M_OMATH})
BLOCK_TAGS = frozenset({W_P, W_TBL})


# ============================================================================
# Classification
# ============================================================================


def is_inline(element: Any) -> bool:
    """Whether ``element`` must live inside a paragraph."""
    return element.tag in INLINE_TAGS


def is_paragraph(element: Any) -> bool:
    return element.tag == W_P


def is_table(element: Any) -> bool:
    return element.tag == W_TBL


def is_row(element: Any) -> bool:
    return element.tag == W_TR


def iter_runs(elements: Iterable[Any]) -> Iterable[Any]:
    """Yield every ``w:r`` contained in ``elements``, including the elements themselves."""
    for element in elements:
        yield from element.iter(W_R)


# ============================================================================
# Runs
# ============================================================================


def make_run(
    text: str = "",
    *,
    bold: Optional[bool] = None,
    italic: Optional[bool] = None,
    underline: Optional[bool] = None,
    strike: Optional[bool] = None,
    font_name: Optional[str] = None,
    font_size: Optional[int] = None,
) -> Any:
    """Create a detached ``w:r`` with text and direct formatting.

    Tabs and newlines in ``text`` become ``w:tab`` and ``w:br`` elements.
    """
    run = Run(OxmlElement("w:r"), None)
    if text:
        run.text = text
    if bold is not None:
        run.bold = bold
    if italic is not None:
        run.italic = italic
    if underline is not None:
        run.underline = underline
    if strike is not None:
        run.font.strike = strike
    if font_name is not None:
        run.font.name = font_name
    if font_size is not None:
        run.font.size = Pt(font_size)
    return run._r


def apply_run_format(elements: Iterable[Any], **formatting: Any) -> None:
    """Set font attributes (``bold``, ``italic``, ``underline``, ``strike``) on every run."""
    for r in iter_runs(elements):
        font = Run(r, None).font
        for name, value in formatting.items():
            setattr(font, name, value)


def make_interpreted_runs(
    text: str,
    mode: TextInterpretation,
    *,
    code_font: str,
    code_font_size: int,
) -> list[Any]:
    """Runs for text shown according to an interpretation mode."""
    if mode == "monospace":
        return [make_run(text, font_name=code_font, font_size=code_font_size)]
    if mode == "bold":
        return [make_run(text, bold=True)]
    if mode == "italic":
        return [make_run(text, italic=True)]
    if mode == "underline":
        return [make_run(text, underline=True)]
    if mode == "quotes":
        return [make_run(f"«{text}»")]
    return [make_run(text)]


def make_line_break_run() -> Any:
    run = Run(OxmlElement("w:r"), None)
    run.add_break(WD_BREAK.LINE)
    return run._r


def make_picture_run(part: Any, data: bytes, width: int, height: int, position: Optional[int] = None) -> Any:
    """Create a run holding an inline picture.

    Parameters
    ----------
    part : docx.parts.document.DocumentPart
        Part the image is related to; mutated, so hold the printer lock
    data : bytes
        Raster image data
    width, height : int
        Display size in EMU
    position : int, optional
        Vertical offset in half-points, negative values lower the picture

    """
    inline = part.new_pic_inline(BytesIO(data), width, height)
    r = OxmlElement("w:r")
    if position is not None:
        rpr = r.get_or_add_rPr()
        position_el = OxmlElement("w:position")
        position_el.set(qn("w:val"), str(position))
        rpr.append(position_el)
    r.add_drawing(inline)
    return r


def make_hyperlink(part: Any, url: str, runs: Sequence[Any]) -> Any:
    """Wrap runs into an external ``w:hyperlink``; relates ``url`` to ``part``."""
    r_id = part.relate_to(url, RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)
    for r in runs:
        if r.tag == W_R:
            r.get_or_add_rPr().style = "Hyperlink"
        hyperlink.append(r)
    return hyperlink


def make_placeholder_run(kind: str, node_type: str) -> Any:
    """Run marking a node the printer cannot print, e.g. ``[Unparsable: 'html']``."""
    return make_run(f"[{kind}: '{node_type}']", bold=True)


def make_todo_run(node_type: str, inline: bool) -> Any:
    """Red highlighted placeholder for node types without DOCX support yet."""
    where = "inline" if inline else "paragraph"
    run = Run(OxmlElement("w:r"), None)
    run.text = f"[TODO ({where}) '{node_type}']"
    run.bold = True
    run.font.color.rgb = RGBColor(0xFF, 0xFF, 0xFF)
    run.font.highlight_color = WD_COLOR_INDEX.RED
    return run._r


# ============================================================================
# Paragraphs
# ============================================================================


def make_paragraph(children: Iterable[Any] = (), style: Optional[str] = None) -> Any:
    """Create a ``w:p`` with an optional style id and inline children."""
    p = OxmlElement("w:p")
    if style is not None:
        p.style = style
    for child in children:
        p.append(child)
    return p


def paragraph_proxy(p: Any) -> Paragraph:
    """python-docx proxy for direct paragraph formatting of a detached ``w:p``."""
    return Paragraph(p, None)


def make_page_break_paragraph() -> Any:
    run = Run(OxmlElement("w:r"), None)
    run.add_break(WD_BREAK.PAGE)
    return make_paragraph([run._r])


def make_caption(label: str, number: int, separator: str, title: Sequence[Any], style: str) -> Any:
    """Caption paragraph ``<label> <number><separator><title>``."""
    return make_paragraph([make_run(f"{label} {number}{separator}"), *title], style=style)


def set_numbering(p: Any, num_id: int, level: int) -> None:
    """Attach list numbering ``num_id`` at ``level`` (0 based) to a paragraph."""
    num_pr = p.get_or_add_pPr().get_or_add_numPr()
    num_pr.get_or_add_ilvl().val = level
    num_pr.get_or_add_numId().val = num_id


def add_box_border(p: Any) -> None:
    """Draw a single line border around a paragraph."""
    borders = parse_xml(
        f"<w:pBdr {nsdecls('w')}>"
        + "".join(
            f'<w:{side} w:val="single" w:sz="4" w:space="4" w:color="auto"/>'
            for side in ("top", "left", "bottom", "right")
        )
        + "</w:pBdr>"
    )
    ppr = p.get_or_add_pPr()
    # pBdr goes before shading, tabs and the rest of the paragraph properties
    ppr.insert_element_before(
        borders,
        "w:shd", "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap", "w:overflowPunct",
        "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN", "w:bidi", "w:adjustRightInd", "w:snapToGrid",
        "w:spacing", "w:ind", "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
        "w:textDirection", "w:textAlignment", "w:textboxTightWrap", "w:outlineLvl", "w:divId", "w:cnfStyle",
        "w:rPr", "w:sectPr", "w:pPrChange",
    )  # fmt: skip


def set_keep_with_next(p: Any) -> None:
    paragraph_proxy(p).paragraph_format.keep_with_next = True


# ============================================================================
# Tables
# ============================================================================


def make_table(rows: Sequence[Any], column_count: int, borders: bool = True) -> Any:
    """Create a full width ``w:tbl`` from ``w:tr`` elements."""
    border_xml = ""
    if borders:
        border_xml = (
            "<w:tblBorders>"
            + "".join(
                f'<w:{side} w:val="single" w:sz="4" w:space="0" w:color="auto"/>'
                for side in ("top", "left", "bottom", "right", "insideH", "insideV")
            )
            + "</w:tblBorders>"
        )
    grid = "".join("<w:gridCol/>" for _ in range(max(column_count, 1)))
    tbl = parse_xml(
        f"<w:tbl {nsdecls('w')}>"
        f'<w:tblPr><w:tblW w:w="5000" w:type="pct"/>{border_xml}</w:tblPr>'
        f"<w:tblGrid>{grid}</w:tblGrid>"
        "</w:tbl>"
    )
    for row in rows:
        tbl.append(row)
    return tbl


def make_row(cells: Sequence[Any], header: bool = False) -> Any:
    """Create a ``w:tr``; header rows repeat on every page."""
    tr = parse_xml(f"<w:tr {nsdecls('w')}/>")
    for cell in cells:
        tr.append(cell)
    if header:
        mark_header_row(tr)
    return tr


def mark_header_row(tr: Any) -> None:
    """Repeat a row at the top of every page the table spans."""
    if tr.find(qn("w:trPr")) is None:
        tr.insert(0, parse_xml(f"<w:trPr {nsdecls('w')}><w:tblHeader/></w:trPr>"))


def make_cell(blocks: Sequence[Any], width_dxa: Optional[int] = None) -> Any:
    """Create a vertically centered ``w:tc`` from block elements.

    A cell must end with a paragraph, so an empty one is appended when
    needed.
    """
    width_xml = f'<w:tcW w:w="{width_dxa}" w:type="dxa"/>' if width_dxa is not None else ""
    tc = parse_xml(f'<w:tc {nsdecls("w")}><w:tcPr>{width_xml}<w:vAlign w:val="center"/></w:tcPr></w:tc>')
    for block in blocks:
        tc.append(block)
    if not blocks or not is_paragraph(blocks[-1]):
        tc.append(make_paragraph())
    return tc


# ============================================================================
# Math
# ============================================================================


def make_math(text: str) -> Any:
    """Create an ``m:oMath`` holding the formula source as a linear math run."""
    omath = etree.Element(M_OMATH, nsmap={"m": MATH_NS})
    run = etree.SubElement(omath, f"{{{MATH_NS}}}r")
    t = etree.SubElement(run, f"{{{MATH_NS}}}t")
    t.text = text
    return omath


def make_math_paragraph(text: str, style: Optional[str] = None) -> Any:
    """Display math: a paragraph holding an ``m:oMathPara``."""
    para = etree.Element(M_OMATH_PARA, nsmap={"m": MATH_NS})
    para.append(make_math(text))
    return make_paragraph([para], style=style)


# ============================================================================
# Validation helpers
# ============================================================================


def has_paragraph_ancestor(element: Any) -> bool:
    """Whether a ``w:p`` element sits somewhere inside another ``w:p``."""
    ancestor = element.getparent()
    while ancestor is not None:
        if ancestor.tag == W_P:
            return True
        ancestor = ancestor.getparent()
    return False


def iter_paragraphs(element: Any) -> Iterable[Any]:
    """Yield ``element`` and every nested ``w:p``."""
    return element.iter(W_P)


# ============================================================================
# Grouping
# ============================================================================


def wrap_inline(fragments: Iterable[Any], style: Optional[str] = None) -> list[Any]:
    """Group consecutive inline fragments into paragraphs, keep blocks as they are."""
    blocks: list[Any] = []
    pending: list[Any] = []
    for fragment in fragments:
        if is_inline(fragment):
            pending.append(fragment)
            continue
        if pending:
            blocks.append(make_paragraph(pending, style=style))
            pending = []
        blocks.append(fragment)
    if pending:
        blocks.append(make_paragraph(pending, style=style))
    return blocks


def unwrap_paragraphs(fragments: Iterable[Any]) -> list[Any]:
    """Replace paragraphs by their inline content, dropping paragraph properties."""
    inline: list[Any] = []
    for fragment in fragments:
        if is_paragraph(fragment):
            inline.extend(child for child in fragment if child.tag != qn("w:pPr"))
        else:
            inline.append(fragment)
    return inline
