#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/ast/utils.py
"""Tree navigation helpers for AST nodes.

Parents are tracked with weak references, so ancestor lookups only work on
trees that went through :func:`link_parents`. The helpers here never modify
the tree apart from setting those references.

Functions
---------
link_parents : Set the parent reference of every node below a root
iter_child_nodes : Direct children from every child-bearing field
walk : Depth-first pre-order iteration
find_node_data : Container list and index of a node inside its parent
get_right_neighbour_leaf : Next leaf to the right in document order
resolve_list_context : Governing List ancestors and depth of a ListItem
find_file_path : Path of the enclosing File node

Examples
--------
    >>> from mdprinters.ast import File, List, ListItem, Text
    >>> item = ListItem(children=[Text(text="one")])
    >>> root = link_parents(File(path="a.md", children=[List(ordered=True, children=[item])]))
    >>> resolve_list_context(item).depth
    1

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, TypeVar

from mdprinters.ast.nodes import File, List, Node, NodeType

NodeT = TypeVar("NodeT", bound=Node)


def link_parents(root: NodeT) -> NodeT:
    """Set the parent reference of every descendant of ``root``.

    Parameters
    ----------
    root : Node
        Tree root. Its own parent is left untouched.

    Returns
    -------
    Node
        The same root, for chaining.

    """
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        for child in node.iter_children():
            child.parent = node
            stack.append(child)
    return root


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` from all child-bearing fields."""
    return node.iter_children()


def walk(root: Node) -> Iterator[Node]:
    """Yield ``root`` and all its descendants in document order."""
    yield root
    for child in iter_child_nodes(root):
        yield from walk(child)


@dataclass(frozen=True)
class NodeData:
    """Location of a node inside its parent."""

    container: list[Node]
    index: int


def find_node_data(node: Node) -> Optional[NodeData]:
    """Find the child list holding ``node`` and its position there.

    Identity, not equality, is used to locate the node, so two equal
    siblings still get distinct indices.

    Returns
    -------
    NodeData or None
        None for a root node or a node missing from its parent's fields.

    """
    parent = node.parent
    if parent is None:
        return None
    for name in parent.CHILD_FIELDS:
        value = getattr(parent, name)
        if isinstance(value, list):
            for index, sibling in enumerate(value):
                if sibling is node:
                    return NodeData(container=value, index=index)
    return None


def _leftmost_leaf(node: Node) -> Node:
    while True:
        children = getattr(node, "children", None)
        if not children:
            return node
        node = children[0]


def get_right_neighbour_leaf(node: Node, skip: Iterable[NodeType] = ()) -> Optional[Node]:
    """Return the first leaf after ``node`` in document order.

    Descent only follows ``children`` fields, so processed blocks such as
    TableProcessed count as leaves.

    Parameters
    ----------
    node : Node
        Starting node
    skip : iterable of NodeType
        Leaf types to step over, e.g. spaces between blocks

    Returns
    -------
    Node or None
        None when nothing follows ``node``.

    """
    skipped = frozenset(skip)
    current = node
    while True:
        data = find_node_data(current)
        if data is None:
            return None
        if data.index + 1 < len(data.container):
            leaf = _leftmost_leaf(data.container[data.index + 1])
            if leaf.type in skipped:
                current = leaf
                continue
            return leaf
        parent = current.parent
        if parent is None:
            return None
        current = parent


@dataclass(frozen=True)
class ListContext:
    """Lists governing a ListItem.

    Attributes
    ----------
    parent_list : List
        Nearest List ancestor; decides ordered-ness and owns the numbering
    root_list : List
        Outermost List ancestor
    depth : int
        Number of List ancestors, 1 for a top-level item

    """

    parent_list: List
    root_list: List
    depth: int


def resolve_list_context(item: Node) -> Optional[ListContext]:
    """Walk up from a ListItem counting List ancestors.

    Returns
    -------
    ListContext or None
        None when the item has no List ancestor (malformed tree).

    """
    nearest: Optional[List] = None
    outermost: Optional[List] = None
    depth = 0
    ancestor = item.parent
    while ancestor is not None:
        if isinstance(ancestor, List):
            depth += 1
            if nearest is None:
                nearest = ancestor
            outermost = ancestor
        ancestor = ancestor.parent

    if nearest is None or outermost is None:
        return None
    return ListContext(parent_list=nearest, root_list=outermost, depth=depth)


def find_file_path(node: Node) -> str:
    """Path of the File node enclosing ``node``, or an empty string."""
    current: Optional[Node] = node
    while current is not None:
        if isinstance(current, File):
            return current.path
        current = current.parent
    return ""
