#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/ast/__init__.py
"""Document tree consumed by the printers."""

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
    NODE_CLASSES,
    NonBreakingSpace,
    OpCode,
    Paragraph,
    ParagraphBreak,
    PictureAmount,
    PictureApplication,
    PictureKey,
    PictureProcessed,
    PositionRange,
    Raw,
    RawApplication,
    RAW_NODE_TYPES,
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
    TextPosition,
    ThinNonBreakingSpace,
    Tokens,
    Underline,
)
from mdprinters.ast.utils import (
    ListContext,
    NodeData,
    find_file_path,
    find_node_data,
    iter_child_nodes,
    get_right_neighbour_leaf,
    link_parents,
    resolve_list_context,
    walk,
)
from mdprinters.ast.visitors import NodeVisitor, build_dispatch_table

__all__ = [
    "NODE_CLASSES",
    "Node",
    "NodeType",
    "PositionRange",
    "RAW_NODE_TYPES",
    "TextPosition",
    "Raw",
    "Tokens",
    "SoftBreak",
    "ParagraphBreak",
    "TextBreak",
    "File",
    "Heading",
    "Paragraph",
    "Space",
    "Code",
    "Blockquote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "TableControlRow",
    "TableControlCell",
    "Def",
    "Html",
    "Hr",
    "OpCode",
    "Latex",
    "Formula",
    "Comment",
    "Text",
    "Escape",
    "Link",
    "Image",
    "Strong",
    "Em",
    "Underline",
    "Del",
    "CodeSpan",
    "Br",
    "NonBreakingSpace",
    "ThinNonBreakingSpace",
    "LatexSpan",
    "FormulaSpan",
    "CodeProcessed",
    "TableProcessed",
    "PictureProcessed",
    "PictureKey",
    "TableKey",
    "ApplicationKey",
    "ReferenceKey",
    "FormulaKey",
    "AllApplications",
    "AllReferences",
    "RawApplication",
    "PictureApplication",
    "CodeApplication",
    "Reference",
    "FormulaProcessed",
    "FormulaNoLabelProcessed",
    "PictureAmount",
    "TableAmount",
    "ListContext",
    "NodeData",
    "find_file_path",
    "find_node_data",
    "iter_child_nodes",
    "get_right_neighbour_leaf",
    "link_parents",
    "resolve_list_context",
    "walk",
    "NodeVisitor",
    "build_dispatch_table",
]
