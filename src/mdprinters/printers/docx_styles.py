#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/printers/docx_styles.py
"""Document level setup for the DOCX printer.

Styles, numbering definitions and page layout are written once per run by
the assembler, after all fragments have been printed. The paragraph styles
referenced by the printer are identified by these style ids:

- ``code`` - bordered code listings
- ``table-caption``, ``table``, ``table-cell`` - table captions and content
- ``picture``, ``picture-caption`` - figures and their captions
- ``formula-picture``, ``formula-table-cell``, ``formula-table-cell-number``
  - numbered formulas laid out in a borderless two cell table

"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from docx.enum.style import WD_STYLE_TYPE
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.shared import Cm, Mm, Pt

from mdprinters.options.docx import DocxPrinterOptions
from mdprinters.printers.lists import ListRef
from mdprinters.printers.numbering import HEADING_LEVELS, LevelFormat, level_format

logger = logging.getLogger(__name__)

#: Word supports nine list levels
LIST_LEVEL_COUNT = 9

HEADING_STYLE_IDS = {1: "Heading1", 2: "Heading2", 3: "Heading3", 4: "Heading4"}
FALLBACK_HEADING_STYLE_ID = "Heading6"
_HEADING_STYLE_NAMES = ("Heading 1", "Heading 2", "Heading 3", "Heading 4", "Heading 6")

CODE_STYLE = "code"
TABLE_CAPTION_STYLE = "table-caption"
TABLE_STYLE = "table"
TABLE_CELL_STYLE = "table-cell"
PICTURE_STYLE = "picture"
PICTURE_CAPTION_STYLE = "picture-caption"
FORMULA_PICTURE_STYLE = "formula-picture"
FORMULA_TABLE_CELL_STYLE = "formula-table-cell"
FORMULA_TABLE_CELL_NUMBER_STYLE = "formula-table-cell-number"

_SETTINGS_AFTER_UPDATE_FIELDS = (
    "w:hdrShapeDefaults", "w:footnotePr", "w:endnotePr", "w:compat", "w:docVars", "w:rsids",
    "w:attachedSchema", "w:themeFontLang", "w:clrSchemeMapping", "w:doNotIncludeSubdocsInStats",
    "w:doNotAutoCompressPictures", "w:forceUpgrade", "w:captions", "w:readModeInkLockDown",
    "w:smartTagType", "w:shapeDefaults", "w:doNotEmbedSmartTags", "w:decimalSymbol", "w:listSeparator",
)  # fmt: skip


def mm_to_twips(mm: float) -> int:
    return round(mm * 1440 / 25.4)


# ============================================================================
# Styles
# ============================================================================


def _get_or_add_paragraph_style(document: Any, name: str) -> Any:
    styles = document.styles
    if name in styles:
        return styles[name]
    style = styles.add_style(name, WD_STYLE_TYPE.PARAGRAPH)
    style.base_style = styles["Normal"]
    return style


def _plain_block(style: Any, alignment: Any = None, keep_with_next: bool = False) -> None:
    fmt = style.paragraph_format
    fmt.first_line_indent = Cm(0)
    if alignment is not None:
        fmt.alignment = alignment
    if keep_with_next:
        fmt.keep_with_next = True


def setup_styles(document: Any, options: DocxPrinterOptions) -> None:
    """Configure the body style and create every custom paragraph style."""
    normal = document.styles["Normal"]
    normal.font.name = options.default_font
    normal.font.size = Pt(options.default_font_size)
    normal_fmt = normal.paragraph_format
    normal_fmt.first_line_indent = Cm(options.first_line_indent_cm)
    normal_fmt.line_spacing = options.line_spacing
    normal_fmt.space_after = Mm(options.block_spacing_mm)
    normal_fmt.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY

    for name in _HEADING_STYLE_NAMES:
        if name in document.styles:
            heading = document.styles[name]
            heading.font.name = options.default_font
            _plain_block(heading, keep_with_next=True)

    code = _get_or_add_paragraph_style(document, CODE_STYLE)
    code.font.name = options.code_font
    code.font.size = Pt(options.code_font_size)
    _plain_block(code, WD_ALIGN_PARAGRAPH.LEFT)
    code.paragraph_format.line_spacing = 1.0

    _plain_block(_get_or_add_paragraph_style(document, TABLE_CAPTION_STYLE), WD_ALIGN_PARAGRAPH.LEFT, True)
    _plain_block(_get_or_add_paragraph_style(document, TABLE_STYLE), WD_ALIGN_PARAGRAPH.LEFT)
    table_cell = _get_or_add_paragraph_style(document, TABLE_CELL_STYLE)
    _plain_block(table_cell, WD_ALIGN_PARAGRAPH.LEFT)
    table_cell.paragraph_format.space_after = Pt(0)
    table_cell.paragraph_format.line_spacing = 1.0

    _plain_block(_get_or_add_paragraph_style(document, PICTURE_STYLE), WD_ALIGN_PARAGRAPH.CENTER, True)
    _plain_block(_get_or_add_paragraph_style(document, PICTURE_CAPTION_STYLE), WD_ALIGN_PARAGRAPH.CENTER)
    _plain_block(_get_or_add_paragraph_style(document, FORMULA_PICTURE_STYLE), WD_ALIGN_PARAGRAPH.CENTER)
    _plain_block(_get_or_add_paragraph_style(document, FORMULA_TABLE_CELL_STYLE), WD_ALIGN_PARAGRAPH.CENTER)
    _plain_block(
        _get_or_add_paragraph_style(document, FORMULA_TABLE_CELL_NUMBER_STYLE), WD_ALIGN_PARAGRAPH.RIGHT
    )
    logger.debug("Configured document styles")


# ============================================================================
# Numbering
# ============================================================================


def first_free_num_id(numbering: Any) -> int:
    """Smallest numbering id above every id already defined in ``numbering``."""
    ids = [int(num.get(qn("w:numId"))) for num in numbering.findall(qn("w:num"))]
    return max(ids, default=0) + 1


def _first_free_abstract_num_id(numbering: Any) -> int:
    ids = [int(abstract.get(qn("w:abstractNumId"))) for abstract in numbering.findall(qn("w:abstractNum"))]
    return max(ids, default=-1) + 1


def _level_text(fmt: LevelFormat, level: int) -> str:
    return fmt.template.replace("{n}", f"%{level + 1}")


def _level_xml(level: int, fmt: LevelFormat, left_twips: int, hanging_twips: int, text: str) -> str:
    return (
        f'<w:lvl w:ilvl="{level}">'
        '<w:start w:val="1"/>'
        f'<w:numFmt w:val="{fmt.num_fmt}"/>'
        f'<w:lvlText w:val="{text}"/>'
        '<w:lvlJc w:val="left"/>'
        f'<w:pPr><w:tabs><w:tab w:val="num" w:pos="{left_twips}"/></w:tabs>'
        f'<w:ind w:left="{left_twips}" w:hanging="{hanging_twips}"/></w:pPr>'
        "</w:lvl>"
    )


def build_list_abstract_num(abstract_num_id: int, is_ordered: bool, options: DocxPrinterOptions) -> Any:
    """Numbering definition of one list, nine levels deep."""
    hanging = mm_to_twips(options.list_tab_offset_mm)
    levels = []
    for level in range(LIST_LEVEL_COUNT):
        fmt = level_format(level + 1, is_ordered)
        left = mm_to_twips(options.list_level_step_mm * level) + hanging
        levels.append(_level_xml(level, fmt, left, hanging, _level_text(fmt, level)))
    return parse_xml(
        f'<w:abstractNum {nsdecls("w")} w:abstractNumId="{abstract_num_id}">'
        '<w:multiLevelType w:val="hybridMultilevel"/>'
        f'{"".join(levels)}'
        "</w:abstractNum>"
    )


def build_heading_abstract_num(abstract_num_id: int) -> Any:
    """Heading numbering: chapters unnumbered, then ``1``, then ``1.1``."""
    levels = []
    for level in range(LIST_LEVEL_COUNT):
        fmt = HEADING_LEVELS[min(level, len(HEADING_LEVELS) - 1)]
        levels.append(_level_xml(level, fmt, 0, 0, fmt.template))
    return parse_xml(
        f'<w:abstractNum {nsdecls("w")} w:abstractNumId="{abstract_num_id}">'
        '<w:multiLevelType w:val="multilevel"/>'
        f'{"".join(levels)}'
        "</w:abstractNum>"
    )


def build_num(num_id: int, abstract_num_id: int) -> Any:
    return parse_xml(
        f'<w:num {nsdecls("w")} w:numId="{num_id}"><w:abstractNumId w:val="{abstract_num_id}"/></w:num>'
    )


def _add_definition(numbering: Any, abstract_num: Any, num: Any) -> None:
    # Every w:abstractNum must precede the first w:num
    first_num = numbering.find(qn("w:num"))
    if first_num is not None:
        first_num.addprevious(abstract_num)
    else:
        numbering.append(abstract_num)
    numbering.append(num)


def add_numbering_definitions(
    numbering: Any,
    heading_num_id: int,
    refs: Sequence[ListRef],
    options: DocxPrinterOptions,
) -> None:
    """Write heading and list numbering definitions into the numbering part.

    Parameters
    ----------
    numbering : CT_Numbering
        Root element of the document's numbering part
    heading_num_id : int
        Id reserved for heading numbering
    refs : sequence of ListRef
        Registered lists, each getting its own definition

    """
    abstract_num_id = _first_free_abstract_num_id(numbering)
    _add_definition(numbering, build_heading_abstract_num(abstract_num_id), build_num(heading_num_id, abstract_num_id))
    for ref in refs:
        abstract_num_id += 1
        _add_definition(
            numbering,
            build_list_abstract_num(abstract_num_id, ref.is_ordered, options),
            build_num(ref.num_id, abstract_num_id),
        )
    logger.debug("Added numbering definitions for headings and %d lists", len(refs))


def link_heading_numbering(document: Any, heading_num_id: int) -> None:
    """Number the Heading 1-3 styles through the heading definition."""
    for level, name in enumerate(_HEADING_STYLE_NAMES[:3]):
        if name not in document.styles:
            continue
        num_pr = document.styles[name].element.get_or_add_pPr().get_or_add_numPr()
        num_pr.get_or_add_ilvl().val = level
        num_pr.get_or_add_numId().val = heading_num_id


# ============================================================================
# Page layout
# ============================================================================


def setup_page(document: Any, options: DocxPrinterOptions) -> None:
    """Apply page margins and a centred page number footer to every section."""
    for section in document.sections:
        section.top_margin = Mm(options.margin_top_mm)
        section.bottom_margin = Mm(options.margin_bottom_mm)
        section.left_margin = Mm(options.margin_left_mm)
        section.right_margin = Mm(options.margin_right_mm)

        footer = section.footer
        footer.is_linked_to_previous = False
        paragraph = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        paragraph.paragraph_format.first_line_indent = Cm(0)
        paragraph._p.append(
            parse_xml(f'<w:fldSimple {nsdecls("w")} w:instr="PAGE"><w:r><w:t>1</w:t></w:r></w:fldSimple>')
        )


def enable_update_fields(document: Any) -> None:
    """Ask Word to refresh fields (page numbers) when the file is opened."""
    settings = document.settings.element
    if settings.find(qn("w:updateFields")) is not None:
        return
    update = parse_xml(f'<w:updateFields {nsdecls("w")} w:val="true"/>')
    settings.insert_element_before(update, *_SETTINGS_AFTER_UPDATE_FIELDS)
