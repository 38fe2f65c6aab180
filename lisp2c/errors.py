"""Structured error objects for the lisp2c compiler.

Every error is machine-readable: a kind, a message, an optional source
location and a details dict. Stages raise them wrapped in CompileError at
the point of detection; nothing is recovered.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    UNRECOGNIZED_CHARACTER = "unrecognized_character"
    UNTERMINATED_STRING = "unterminated_string"
    UNEXPECTED_TOKEN = "unexpected_token"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    UNKNOWN_NODE_KIND = "unknown_node_kind"
    UNREADABLE_SOURCE = "unreadable_source"


@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: int
    offset: int = 0
    file: str = "<stdin>"

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass
class Lisp2cError:
    kind: ErrorKind
    message: str
    location: Optional[SourceLocation] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.location:
            d["location"] = {
                "file": self.location.file,
                "line": self.location.line,
                "column": self.location.column,
                "offset": self.location.offset,
            }
        if self.details:
            d["details"] = self.details
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        return f"[{self.kind.value}]{loc}: {self.message}"


def unrecognized_character(
    char: str,
    location: Optional[SourceLocation] = None,
) -> Lisp2cError:
    return Lisp2cError(
        kind=ErrorKind.UNRECOGNIZED_CHARACTER,
        message=f"Unrecognized character {char!r}",
        location=location,
        details={"char": char},
    )


def unterminated_string(location: Optional[SourceLocation] = None) -> Lisp2cError:
    return Lisp2cError(
        kind=ErrorKind.UNTERMINATED_STRING,
        message="Unterminated string literal",
        location=location,
    )


def unexpected_token(
    token_type: str,
    location: Optional[SourceLocation] = None,
    expected: Optional[str] = None,
) -> Lisp2cError:
    details: dict[str, Any] = {"token_type": token_type}
    message = f"Unexpected token {token_type}"
    if expected:
        details["expected"] = expected
        message += f", expected {expected}"
    return Lisp2cError(
        kind=ErrorKind.UNEXPECTED_TOKEN,
        message=message,
        location=location,
        details=details,
    )


def unexpected_end_of_input(expected: Optional[str] = None) -> Lisp2cError:
    message = "Unexpected end of input"
    details: dict[str, Any] = {}
    if expected:
        details["expected"] = expected
        message += f", expected {expected}"
    return Lisp2cError(
        kind=ErrorKind.UNEXPECTED_END_OF_INPUT,
        message=message,
        details=details,
    )


def unknown_node_kind(node_kind: str) -> Lisp2cError:
    return Lisp2cError(
        kind=ErrorKind.UNKNOWN_NODE_KIND,
        message=f"Unknown node kind '{node_kind}'",
        details={"node_kind": node_kind},
    )


def unreadable_source(path: str, reason: str) -> Lisp2cError:
    return Lisp2cError(
        kind=ErrorKind.UNREADABLE_SOURCE,
        message=f"Cannot read {path}: {reason}",
        details={"path": path, "reason": reason},
    )


class CompileError(Exception):
    """Exception wrapping one or more Lisp2cErrors."""

    def __init__(self, errors: list[Lisp2cError] | Lisp2cError):
        if isinstance(errors, Lisp2cError):
            errors = [errors]
        self.errors = errors
        super().__init__(self._format())

    @property
    def kind(self) -> ErrorKind:
        return self.errors[0].kind

    def _format(self) -> str:
        return "\n".join(str(e) for e in self.errors)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps([e.to_dict() for e in self.errors], indent=indent)
