"""lisp2c Lexer — Tokenizer with line/column tracking.

Turns prefix call source into a flat list of tokens in one left-to-right
pass. Whitespace is skipped and never produces a token.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from lisp2c.errors import (
    SourceLocation, CompileError, unrecognized_character, unterminated_string,
)

logger = logging.getLogger(__name__)


class TokenType(Enum):
    LPAREN = "lparen"
    RPAREN = "rparen"
    NUMBER = "number"
    STRING = "string"
    NAME = "name"


WHITESPACE = frozenset(" \t\n\r\f\v")
DIGITS = frozenset("0123456789")
LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    location: SourceLocation

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "value": self.value,
            "line": self.location.line,
            "column": self.location.column,
        }

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.location})"


class Lexer:
    """Tokenizer for prefix call source."""

    def __init__(self, source: str, filename: str = "<stdin>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def _loc(self) -> SourceLocation:
        return SourceLocation(self.line, self.column, self.pos, self.filename)

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _read_run(self, allowed: frozenset[str]) -> str:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in allowed:
            self._advance()
        return self.source[start:self.pos]

    def _read_string(self) -> Token:
        loc = self._loc()
        self._advance()  # opening quote
        start = self.pos
        while self.pos < len(self.source):
            if self.source[self.pos] == '"':
                value = self.source[start:self.pos]
                self._advance()  # closing quote
                return Token(TokenType.STRING, value, loc)
            self._advance()
        raise CompileError(unterminated_string(loc))

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while self.pos < len(self.source):
            ch = self._peek()
            loc = self._loc()

            if ch == "(":
                self._advance()
                tokens.append(Token(TokenType.LPAREN, "(", loc))
            elif ch == ")":
                self._advance()
                tokens.append(Token(TokenType.RPAREN, ")", loc))
            elif ch in WHITESPACE:
                self._advance()
            elif ch in DIGITS:
                tokens.append(Token(TokenType.NUMBER, self._read_run(DIGITS), loc))
            elif ch == '"':
                tokens.append(self._read_string())
            elif ch in LETTERS:
                tokens.append(Token(TokenType.NAME, self._read_run(LETTERS), loc))
            else:
                raise CompileError(unrecognized_character(ch, loc))

        logger.debug("%s: %d tokens", self.filename, len(tokens))
        return tokens


def tokenize(source: str, filename: str = "<stdin>") -> list[Token]:
    """Convenience function to tokenize prefix call source."""
    return Lexer(source, filename).tokenize()


def tokens_to_json(tokens: list[Token], indent: int = 2) -> str:
    return json.dumps([t.to_dict() for t in tokens], indent=indent)
