#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/ast/nodes.py
"""AST node classes consumed by the printers.

The tree is produced upstream by a Markdown parser followed by a macro
expansion pass. Every node class carries a ``type`` tag from
:class:`NodeType`, a source position and a non-owning ``parent`` reference
used for ancestor lookups. Parents own their children through list fields.

Node Kinds
----------
Raw nodes should never reach a printer; they exist only when the parser
emitted something the macro pass did not consume:
    - Raw, Tokens, SoftBreak, ParagraphBreak, TextBreak

Regular nodes mirror Markdown constructs plus a few extensions:
    - File, Heading, Paragraph, Blockquote, List, ListItem, Code, Table
    - Text, Space, Escape, Strong, Em, Underline, Del, CodeSpan, Link
    - Formula, FormulaSpan, Latex, LatexSpan, OpCode, Comment, ...

Processed nodes are produced by macro expansion and carry resolved data
such as caption indices:
    - CodeProcessed, TableProcessed, PictureProcessed, FormulaProcessed
    - PictureKey, TableKey, FormulaKey, ReferenceKey, ApplicationKey
    - AllReferences, Reference, AllApplications, RawApplication, ...

"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Iterator, Optional


class NodeType(str, Enum):
    """Discriminant tag of every node variant."""

    # Raw
    RAW = "raw"
    TOKENS = "tokens"
    SOFT_BREAK = "soft_break"
    PARAGRAPH_BREAK = "paragraph_break"
    TEXT_BREAK = "text_break"

    # Regular
    SPACE = "space"
    CODE = "code"
    HEADING = "heading"
    TABLE = "table"
    BLOCKQUOTE = "blockquote"
    LIST = "list"
    LIST_ITEM = "list_item"
    PARAGRAPH = "paragraph"
    DEF = "def"
    ESCAPE = "escape"
    TEXT = "text"
    HTML = "html"
    LINK = "link"
    IMAGE = "image"
    STRONG = "strong"
    UNDERLINE = "underline"
    EM = "em"
    HR = "hr"
    CODE_SPAN = "code_span"
    BR = "br"
    DEL = "del"
    FILE = "file"
    NON_BREAKING_SPACE = "non_breaking_space"
    THIN_NON_BREAKING_SPACE = "thin_non_breaking_space"
    TABLE_CELL = "table_cell"
    TABLE_ROW = "table_row"
    TABLE_CONTROL_ROW = "table_control_row"
    TABLE_CONTROL_CELL = "table_control_cell"
    OP_CODE = "op_code"
    LATEX = "latex"
    LATEX_SPAN = "latex_span"
    FORMULA = "formula"
    FORMULA_SPAN = "formula_span"
    COMMENT = "comment"

    # Processed
    CODE_PROCESSED = "code_processed"
    TABLE_PROCESSED = "table_processed"
    PICTURE_PROCESSED = "picture_processed"
    PICTURE_KEY = "picture_key"
    TABLE_KEY = "table_key"
    APPLICATION_KEY = "application_key"
    REFERENCE_KEY = "reference_key"
    FORMULA_KEY = "formula_key"
    ALL_APPLICATIONS = "all_applications"
    ALL_REFERENCES = "all_references"
    RAW_APPLICATION = "raw_application"
    PICTURE_APPLICATION = "picture_application"
    CODE_APPLICATION = "code_application"
    REFERENCE = "reference"
    FORMULA_PROCESSED = "formula_processed"
    FORMULA_NO_LABEL_PROCESSED = "formula_no_label_processed"
    PICTURE_AMOUNT = "picture_amount"
    TABLE_AMOUNT = "table_amount"


RAW_NODE_TYPES = frozenset(
    {NodeType.RAW, NodeType.TOKENS, NodeType.SOFT_BREAK, NodeType.PARAGRAPH_BREAK, NodeType.TEXT_BREAK}
)


@dataclass(frozen=True)
class TextPosition:
    """A point in the source text (zero based)."""

    line: int = 0
    column: int = 0
    absolute: int = 0


@dataclass(frozen=True)
class PositionRange:
    """Start and end of the source text a node was parsed from."""

    start: TextPosition = field(default_factory=TextPosition)
    end: TextPosition = field(default_factory=TextPosition)


class Node:
    """Base class for all AST nodes.

    Subclasses are dataclasses. ``CHILD_FIELDS`` names the attributes that hold
    child nodes (lists or single nodes); only ``children`` is treated as the
    inline/block content when looking for neighbouring leaves.

    """

    type: ClassVar[NodeType]
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ()

    _parent_ref: Optional[weakref.ReferenceType[Node]] = None

    @property
    def parent(self) -> Optional[Node]:
        """Parent node, or None for a root or a detached node."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, value: Optional[Node]) -> None:
        self._parent_ref = None if value is None else weakref.ref(value)

    def iter_children(self) -> Iterator[Node]:
        """Yield child nodes from every child-bearing field in order."""
        for name in self.CHILD_FIELDS:
            value = getattr(self, name)
            if isinstance(value, Node):
                yield value
            elif value:
                yield from value

    def accept(self, visitor: Any, printer: Any) -> Any:
        """Dispatch to ``visitor.visit_<type>(printer, self)``."""
        return getattr(visitor, f"visit_{self.type.value}")(printer, self)


# ============================================================================
# Raw nodes
# ============================================================================


@dataclass
class Raw(Node):
    """Unconsumed parser output."""

    type: ClassVar[NodeType] = NodeType.RAW

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Tokens(Node):
    """Unconsumed parser token stream."""

    type: ClassVar[NodeType] = NodeType.TOKENS

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class SoftBreak(Node):
    type: ClassVar[NodeType] = NodeType.SOFT_BREAK

    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class ParagraphBreak(Node):
    type: ClassVar[NodeType] = NodeType.PARAGRAPH_BREAK

    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TextBreak(Node):
    type: ClassVar[NodeType] = NodeType.TEXT_BREAK

    pos: PositionRange = field(default_factory=PositionRange)


# ============================================================================
# Block-level nodes
# ============================================================================


@dataclass
class File(Node):
    """Root of one source file.

    Parameters
    ----------
    path : str
        Path of the source file, used in diagnostics
    children : list of Node
        Top level blocks

    """

    type: ClassVar[NodeType] = NodeType.FILE
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    path: str = ""
    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Heading(Node):
    """Heading with a ``depth`` of 1 or more."""

    type: ClassVar[NodeType] = NodeType.HEADING
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    depth: int = 1
    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Paragraph(Node):
    type: ClassVar[NodeType] = NodeType.PARAGRAPH
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Space(Node):
    """Blank line(s) between blocks."""

    type: ClassVar[NodeType] = NodeType.SPACE

    text: str = "\n"
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Code(Node):
    """Fenced code block not yet turned into a numbered listing."""

    type: ClassVar[NodeType] = NodeType.CODE

    code: str = ""
    lang: Optional[str] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Blockquote(Node):
    type: ClassVar[NodeType] = NodeType.BLOCKQUOTE
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool
        True for numbered lists
    children : list of ListItem
        List items
    start : int, default 1
        Starting number as written in the source
    loose : bool, default False
        Whether items are separated by blank lines

    """

    type: ClassVar[NodeType] = NodeType.LIST
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    ordered: bool = False
    children: list[Node] = field(default_factory=list)
    start: int = 1
    loose: bool = False
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class ListItem(Node):
    type: ClassVar[NodeType] = NodeType.LIST_ITEM
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    checked: Optional[bool] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Table(Node):
    """Markdown table not yet turned into a numbered table."""

    type: ClassVar[NodeType] = NodeType.TABLE
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("header", "rows")

    header: list[Node] = field(default_factory=list)
    rows: list[Node] = field(default_factory=list)
    align: list[Optional[str]] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TableRow(Node):
    type: ClassVar[NodeType] = NodeType.TABLE_ROW
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TableCell(Node):
    type: ClassVar[NodeType] = NodeType.TABLE_CELL
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    header: bool = False
    align: Optional[str] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TableControlRow(Node):
    """Row carrying table layout directives rather than content."""

    type: ClassVar[NodeType] = NodeType.TABLE_CONTROL_ROW
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TableControlCell(Node):
    type: ClassVar[NodeType] = NodeType.TABLE_CONTROL_CELL

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Def(Node):
    """Link reference definition."""

    type: ClassVar[NodeType] = NodeType.DEF

    label: str = ""
    href: str = ""
    title: Optional[str] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Html(Node):
    type: ClassVar[NodeType] = NodeType.HTML

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Hr(Node):
    type: ClassVar[NodeType] = NodeType.HR

    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class OpCode(Node):
    """Macro invocation left in the tree, e.g. ``!PICTURE(...)``."""

    type: ClassVar[NodeType] = NodeType.OP_CODE

    opcode: str = ""
    arguments: list[str] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Latex(Node):
    """Raw LaTeX block copied verbatim into LaTeX output."""

    type: ClassVar[NodeType] = NodeType.LATEX

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Formula(Node):
    """Display formula written in TeX."""

    type: ClassVar[NodeType] = NodeType.FORMULA

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Comment(Node):
    type: ClassVar[NodeType] = NodeType.COMMENT

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


# ============================================================================
# Inline nodes
# ============================================================================


@dataclass
class Text(Node):
    type: ClassVar[NodeType] = NodeType.TEXT

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Escape(Node):
    """Backslash-escaped character; ``text`` holds the character itself."""

    type: ClassVar[NodeType] = NodeType.ESCAPE

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Link(Node):
    type: ClassVar[NodeType] = NodeType.LINK
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    href: str = ""
    children: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Image(Node):
    """Markdown image not yet turned into a numbered picture."""

    type: ClassVar[NodeType] = NodeType.IMAGE

    href: str = ""
    alt: str = ""
    title: Optional[str] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Strong(Node):
    type: ClassVar[NodeType] = NodeType.STRONG
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Em(Node):
    type: ClassVar[NodeType] = NodeType.EM
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Underline(Node):
    type: ClassVar[NodeType] = NodeType.UNDERLINE
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Del(Node):
    type: ClassVar[NodeType] = NodeType.DEL
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class CodeSpan(Node):
    type: ClassVar[NodeType] = NodeType.CODE_SPAN

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Br(Node):
    type: ClassVar[NodeType] = NodeType.BR

    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class NonBreakingSpace(Node):
    type: ClassVar[NodeType] = NodeType.NON_BREAKING_SPACE

    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class ThinNonBreakingSpace(Node):
    type: ClassVar[NodeType] = NodeType.THIN_NON_BREAKING_SPACE

    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class LatexSpan(Node):
    type: ClassVar[NodeType] = NodeType.LATEX_SPAN

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class FormulaSpan(Node):
    """Inline formula written in TeX."""

    type: ClassVar[NodeType] = NodeType.FORMULA_SPAN

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


# ============================================================================
# Processed nodes
# ============================================================================


@dataclass
class CodeProcessed(Node):
    """Numbered code listing.

    Parameters
    ----------
    index : int
        Zero based listing number resolved upstream
    name : list of Node
        Caption content
    code : str
        Source code
    lang : str or None
        Language used for highlighting

    """

    type: ClassVar[NodeType] = NodeType.CODE_PROCESSED
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("name",)

    index: int = 0
    name: list[Node] = field(default_factory=list)
    code: str = ""
    lang: Optional[str] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TableProcessed(Node):
    """Numbered table with caption, header rows and body rows."""

    type: ClassVar[NodeType] = NodeType.TABLE_PROCESSED
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("name", "header", "rows")

    index: int = 0
    name: list[Node] = field(default_factory=list)
    header: list[Node] = field(default_factory=list)
    rows: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class PictureProcessed(Node):
    """Numbered picture.

    Parameters
    ----------
    index : int
        Zero based picture number resolved upstream
    name : list of Node
        Caption content
    href : str
        Image path, relative to the printer ``root_dir``
    width, height : str or None
        Explicit dimensions with unit, e.g. ``"10cm"``

    """

    type: ClassVar[NodeType] = NodeType.PICTURE_PROCESSED
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("name",)

    index: int = 0
    name: list[Node] = field(default_factory=list)
    href: str = ""
    width: Optional[str] = None
    height: Optional[str] = None
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class PictureKey(Node):
    """Reference to a picture by key; renders its number."""

    type: ClassVar[NodeType] = NodeType.PICTURE_KEY

    key: str = ""
    index: int = 0
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TableKey(Node):
    type: ClassVar[NodeType] = NodeType.TABLE_KEY

    key: str = ""
    index: int = 0
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class ApplicationKey(Node):
    """Reference to an appendix; renders its letter."""

    type: ClassVar[NodeType] = NodeType.APPLICATION_KEY

    key: str = ""
    index: int = 0
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class ReferenceKey(Node):
    type: ClassVar[NodeType] = NodeType.REFERENCE_KEY

    key: str = ""
    index: int = 0
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class FormulaKey(Node):
    type: ClassVar[NodeType] = NodeType.FORMULA_KEY

    key: str = ""
    index: int = 0
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class AllApplications(Node):
    type: ClassVar[NodeType] = NodeType.ALL_APPLICATIONS
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class AllReferences(Node):
    """Bibliography; children are Reference nodes."""

    type: ClassVar[NodeType] = NodeType.ALL_REFERENCES
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class RawApplication(Node):
    """Appendix whose content is the child blocks."""

    type: ClassVar[NodeType] = NodeType.RAW_APPLICATION
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    index: int = 0
    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class PictureApplication(Node):
    """Appendix consisting of a single full-page picture."""

    type: ClassVar[NodeType] = NodeType.PICTURE_APPLICATION
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("title",)

    index: int = 0
    title: list[Node] = field(default_factory=list)
    href: str = ""
    rotated: bool = False
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class CodeApplication(Node):
    """Appendix listing a source file from disk."""

    type: ClassVar[NodeType] = NodeType.CODE_APPLICATION

    index: int = 0
    directory: str = ""
    filename: str = ""
    lang: Optional[str] = None
    columns: int = 1
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class Reference(Node):
    """One bibliography entry."""

    type: ClassVar[NodeType] = NodeType.REFERENCE
    CHILD_FIELDS: ClassVar[tuple[str, ...]] = ("children",)

    index: int = 0
    children: list[Node] = field(default_factory=list)
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class FormulaProcessed(Node):
    """Numbered display formula."""

    type: ClassVar[NodeType] = NodeType.FORMULA_PROCESSED

    index: int = 0
    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class FormulaNoLabelProcessed(Node):
    type: ClassVar[NodeType] = NodeType.FORMULA_NO_LABEL_PROCESSED

    text: str = ""
    pos: PositionRange = field(default_factory=PositionRange)


def _zero() -> int:
    return 0


@dataclass
class PictureAmount(Node):
    """Total number of pictures, known only after the whole run is expanded."""

    type: ClassVar[NodeType] = NodeType.PICTURE_AMOUNT

    count: Callable[[], int] = _zero
    pos: PositionRange = field(default_factory=PositionRange)


@dataclass
class TableAmount(Node):
    type: ClassVar[NodeType] = NodeType.TABLE_AMOUNT

    count: Callable[[], int] = _zero
    pos: PositionRange = field(default_factory=PositionRange)


NODE_CLASSES: dict[NodeType, type[Node]] = {
    cls.type: cls
    for cls in (
        Raw, Tokens, SoftBreak, ParagraphBreak, TextBreak,
        Space, Code, Heading, Table, Blockquote, List, ListItem, Paragraph, Def, Escape, Text, Html, Link,
        Image, Strong, Underline, Em, Hr, CodeSpan, Br, Del, File, NonBreakingSpace, ThinNonBreakingSpace,
        TableCell, TableRow, TableControlRow, TableControlCell, OpCode, Latex, LatexSpan, Formula,
        FormulaSpan, Comment,
        CodeProcessed, TableProcessed, PictureProcessed, PictureKey, TableKey, ApplicationKey, ReferenceKey,
        FormulaKey, AllApplications, AllReferences, RawApplication, PictureApplication, CodeApplication,
        Reference, FormulaProcessed, FormulaNoLabelProcessed, PictureAmount, TableAmount,
    )
}  # fmt: skip
