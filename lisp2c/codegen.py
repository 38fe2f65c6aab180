"""lisp2c Emit — target AST to C-like infix text.

Structural over the target node kinds; the set is small and fixed, so no
visitor is involved. Each kind is laid out as its children plus a function
joining their generated text. The walk keeps its own stack rather than
recursing, so nesting depth is not bounded by the recursion limit. String
values are emitted between double quotes exactly as they were read, with no
escaping.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, NamedTuple

from lisp2c.c_ast import (
    CProgram, ExpressionStatement, CCallExpression, Identifier,
    CNumberLiteral, CStringLiteral,
)
from lisp2c.errors import CompileError, unknown_node_kind

logger = logging.getLogger(__name__)

Combine = Callable[[list[str]], str]


class _Pending(NamedTuple):
    count: int
    combine: Combine


def _layout(node: Any) -> tuple[list[Any], Combine]:
    if isinstance(node, CProgram):
        return list(node.body), "\n".join

    if isinstance(node, ExpressionStatement):
        return [node.expression], lambda parts: f"{parts[0]};"

    if isinstance(node, CCallExpression):
        return [node.callee, *node.arguments], \
            lambda parts: f"{parts[0]}({','.join(parts[1:])})"

    if isinstance(node, Identifier):
        return [], lambda parts: node.name

    if isinstance(node, CNumberLiteral):
        return [], lambda parts: node.value

    if isinstance(node, CStringLiteral):
        return [], lambda parts: f'"{node.value}"'

    raise CompileError(unknown_node_kind(type(node).__name__))


def generate(node: Any) -> str:
    """Generate output text for a target AST node."""
    stack: list[Any] = [node]
    results: list[str] = []

    while stack:
        item = stack.pop()
        if isinstance(item, _Pending):
            parts = results[len(results) - item.count:]
            del results[len(results) - item.count:]
            results.append(item.combine(parts))
            continue

        kids, combine = _layout(item)
        stack.append(_Pending(len(kids), combine))
        stack.extend(reversed(kids))

    output = results[0]
    if isinstance(node, CProgram):
        logger.debug("generated %d statements, %d chars", len(node.body), len(output))
    return output
