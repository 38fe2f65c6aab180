"""Generic depth-first traversal driven by a visitor table.

A visitor maps a node kind to a NodeVisitor holding optional enter and exit
callbacks. traverse() calls enter before a node's children are visited and
exit after all of them, passing (node, parent) each time; parent is None
for the root. Children are found through CHILD_SLOTS, which covers both the
source and the target AST. Nothing here knows about any particular visitor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional

from lisp2c.ast_nodes import NodeKind
from lisp2c.c_ast import CNodeKind
from lisp2c.errors import CompileError, unknown_node_kind

Callback = Callable[[Any, Optional[Any]], None]


@dataclass(frozen=True)
class NodeVisitor:
    """Enter/exit pair for one node kind. Either may be omitted."""
    enter: Optional[Callback] = None
    exit: Optional[Callback] = None


Visitor = Mapping[Enum, NodeVisitor]


def make_visitor(table: Mapping[Enum, NodeVisitor]) -> Visitor:
    """Freeze a visitor table so callbacks cannot be swapped mid-traversal."""
    return MappingProxyType(dict(table))


# Attribute names holding children, in visiting order. A slot may hold a
# single node or a list of nodes.
CHILD_SLOTS: Mapping[Enum, tuple[str, ...]] = MappingProxyType({
    NodeKind.PROGRAM: ("body",),
    NodeKind.CALL_EXPRESSION: ("params",),
    NodeKind.NUMBER_LITERAL: (),
    NodeKind.STRING_LITERAL: (),
    CNodeKind.PROGRAM: ("body",),
    CNodeKind.EXPRESSION_STATEMENT: ("expression",),
    CNodeKind.CALL_EXPRESSION: ("callee", "arguments"),
    CNodeKind.IDENTIFIER: (),
    CNodeKind.NUMBER_LITERAL: (),
    CNodeKind.STRING_LITERAL: (),
})


def _kind_of(node: Any) -> Enum:
    kind = getattr(node, "kind", None)
    if not isinstance(kind, Enum) or kind not in CHILD_SLOTS:
        raise CompileError(unknown_node_kind(_kind_name(node, kind)))
    return kind


def _kind_name(node: Any, kind: Any) -> str:
    if isinstance(kind, Enum):
        return str(kind.value)
    if kind is not None:
        return str(kind)
    return type(node).__name__


def children(node: Any) -> Iterator[Any]:
    """Yield the direct children of a node in visiting order."""
    for slot in CHILD_SLOTS[_kind_of(node)]:
        value = getattr(node, slot)
        if isinstance(value, list):
            yield from value
        else:
            yield value


def traverse(root: Any, visitor: Visitor) -> None:
    """Walk the tree rooted at root, firing the visitor's callbacks.

    The walk keeps its own stack of (node, parent, leaving) entries instead
    of recursing, so deeply nested trees are fine.
    """
    stack: list[tuple[Any, Optional[Any], bool]] = [(root, None, False)]
    while stack:
        node, parent, leaving = stack.pop()
        methods = visitor.get(_kind_of(node))

        if leaving:
            if methods and methods.exit:
                methods.exit(node, parent)
            continue

        if methods and methods.enter:
            methods.enter(node, parent)

        stack.append((node, parent, True))
        for child in reversed(list(children(node))):
            stack.append((child, node, False))
