"""lisp2c source AST.

Four node kinds: Program (root), CallExpression (interior) and the two
literal leaves. Locations are kept for diagnostics but ignored by equality.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from lisp2c.errors import SourceLocation


class NodeKind(Enum):
    PROGRAM = "Program"
    NUMBER_LITERAL = "NumberLiteral"
    STRING_LITERAL = "StringLiteral"
    CALL_EXPRESSION = "CallExpression"


@dataclass
class NumberLiteral:
    kind: ClassVar[NodeKind] = NodeKind.NUMBER_LITERAL
    value: str = ""
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "value": self.value}


@dataclass
class StringLiteral:
    kind: ClassVar[NodeKind] = NodeKind.STRING_LITERAL
    value: str = ""
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "value": self.value}


@dataclass
class CallExpression:
    kind: ClassVar[NodeKind] = NodeKind.CALL_EXPRESSION
    name: str = ""
    params: list[Node] = field(default_factory=list)
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "name": self.name,
            "params": [p.to_dict() for p in self.params],
        }


# Anything that may appear in Program.body or CallExpression.params
Node = Union[NumberLiteral, StringLiteral, CallExpression]


@dataclass
class Program:
    kind: ClassVar[NodeKind] = NodeKind.PROGRAM
    body: list[Node] = field(default_factory=list)
    filename: str = "<stdin>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "body": [n.to_dict() for n in self.body],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
