"""lisp2c target AST — the C-like infix call tree.

Produced only by the transformer and consumed only by the code generator.
Kinds are disjoint from the source AST even where the names coincide.
JSON-serializable for the CLI's ast command.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


class CNodeKind(Enum):
    PROGRAM = "Program"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    CALL_EXPRESSION = "CallExpression"
    IDENTIFIER = "Identifier"
    NUMBER_LITERAL = "NumberLiteral"
    STRING_LITERAL = "StringLiteral"


@dataclass
class Identifier:
    kind: ClassVar[CNodeKind] = CNodeKind.IDENTIFIER
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "name": self.name}


@dataclass
class CNumberLiteral:
    kind: ClassVar[CNodeKind] = CNodeKind.NUMBER_LITERAL
    value: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "value": self.value}


@dataclass
class CStringLiteral:
    kind: ClassVar[CNodeKind] = CNodeKind.STRING_LITERAL
    value: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "value": self.value}


@dataclass
class CCallExpression:
    kind: ClassVar[CNodeKind] = CNodeKind.CALL_EXPRESSION
    callee: Identifier = field(default_factory=Identifier)
    arguments: list[Expression] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "callee": self.callee.to_dict(),
            "arguments": [a.to_dict() for a in self.arguments],
        }


Expression = Union[CCallExpression, Identifier, CNumberLiteral, CStringLiteral]


@dataclass
class ExpressionStatement:
    kind: ClassVar[CNodeKind] = CNodeKind.EXPRESSION_STATEMENT
    expression: Expression = field(default_factory=CCallExpression)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "expression": self.expression.to_dict(),
        }


Statement = ExpressionStatement


@dataclass
class CProgram:
    kind: ClassVar[CNodeKind] = CNodeKind.PROGRAM
    body: list[Statement] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "body": [s.to_dict() for s in self.body],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
