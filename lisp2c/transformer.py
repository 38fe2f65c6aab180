"""lisp2c Transform — source AST to target AST.

Implemented as a single visitor plugged into the traversal engine; there is
no recursion here. Each source node that has children is given a destination
accumulator: the list in the new tree where its transformed children land.
The association is kept in a side map keyed by source-node identity, so the
source tree is never touched, and it is dropped when transform() returns.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from lisp2c.ast_nodes import (
    Program, NodeKind, CallExpression, NumberLiteral, StringLiteral,
)
from lisp2c.c_ast import (
    CProgram, Expression, ExpressionStatement, CCallExpression, Identifier,
    CNumberLiteral, CStringLiteral,
)
from lisp2c.traverser import NodeVisitor, Visitor, make_visitor, traverse

logger = logging.getLogger(__name__)


class Transformer:
    """Builds a CProgram from a Program during one traversal."""

    def __init__(self):
        self._accumulators: dict[int, list[Any]] = {}

    def _destination(self, parent: Optional[Any]) -> list[Any]:
        # The parent's enter callback always runs first and registers it.
        return self._accumulators[id(parent)]

    def _enter_number(self, node: NumberLiteral, parent: Optional[Any]) -> None:
        self._destination(parent).append(CNumberLiteral(value=node.value))

    def _enter_string(self, node: StringLiteral, parent: Optional[Any]) -> None:
        self._destination(parent).append(CStringLiteral(value=node.value))

    def _enter_call(self, node: CallExpression, parent: Optional[Any]) -> None:
        call = CCallExpression(callee=Identifier(name=node.name), arguments=[])
        self._accumulators[id(node)] = call.arguments

        expression: Expression | ExpressionStatement = call
        if parent is None or parent.kind is not NodeKind.CALL_EXPRESSION:
            # statement position: direct child of Program
            expression = ExpressionStatement(expression=call)
        self._destination(parent).append(expression)

    def visitor(self) -> Visitor:
        return make_visitor({
            NodeKind.NUMBER_LITERAL: NodeVisitor(enter=self._enter_number),
            NodeKind.STRING_LITERAL: NodeVisitor(enter=self._enter_string),
            NodeKind.CALL_EXPRESSION: NodeVisitor(enter=self._enter_call),
        })

    def transform_program(self, program: Program) -> CProgram:
        target = CProgram(body=[])
        self._accumulators = {id(program): target.body}
        try:
            traverse(program, self.visitor())
        finally:
            self._accumulators = {}
        logger.debug("%s: transformed %d statements", program.filename, len(target.body))
        return target


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def transform(program: Program) -> CProgram:
    """Transform a source Program into its C-like target tree."""
    return Transformer().transform_program(program)
