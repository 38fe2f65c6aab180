"""lisp2c Parser — descent parser over the token list.

Parses the token list into a source AST. One token of lookahead through a
single cursor (self.pos). Nested calls are kept on an explicit stack of open
CallExpressions, so nesting depth is not bounded by the interpreter's
recursion limit. Running out of tokens inside a call is detected explicitly
and reported, never read past.
"""

from __future__ import annotations

import logging
from typing import Optional

from lisp2c.lexer import Token, TokenType
from lisp2c.ast_nodes import (
    Program, Node, NumberLiteral, StringLiteral, CallExpression,
)
from lisp2c.errors import CompileError, unexpected_token, unexpected_end_of_input

logger = logging.getLogger(__name__)


class Parser:
    """Descent parser for prefix call syntax."""

    def __init__(self, tokens: list[Token], filename: str = "<stdin>"):
        self.tokens = tokens
        self.pos = 0
        self.filename = filename

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _current(self, expected: Optional[str] = None) -> Token:
        if self._at_end():
            raise CompileError(unexpected_end_of_input(expected))
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        tok = self._current()
        self.pos += 1
        return tok

    def _expect(self, tt: TokenType) -> Token:
        tok = self._current(expected=tt.value)
        if tok.type != tt:
            raise CompileError(unexpected_token(tok.type.value, tok.location, expected=tt.value))
        return self._advance()

    # -------------------------------------------------------------------
    # Top-level
    # -------------------------------------------------------------------

    def parse(self) -> Program:
        body: list[Node] = []
        while not self._at_end():
            body.append(self._walk())
        logger.debug("%s: parsed %d top-level expressions", self.filename, len(body))
        return Program(body=body, filename=self.filename)

    def _walk(self) -> Node:
        tok = self._current()

        if tok.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteral(value=tok.value, location=tok.location)

        if tok.type == TokenType.STRING:
            self._advance()
            return StringLiteral(value=tok.value, location=tok.location)

        if tok.type == TokenType.LPAREN:
            return self._parse_call()

        raise CompileError(unexpected_token(tok.type.value, tok.location))

    def _open_call(self) -> CallExpression:
        loc = self._expect(TokenType.LPAREN).location
        name = self._expect(TokenType.NAME).value
        return CallExpression(name=name, params=[], location=loc)

    def _parse_call(self) -> CallExpression:
        stack = [self._open_call()]
        while True:
            tok = self._current(expected=TokenType.RPAREN.value)
            if tok.type == TokenType.RPAREN:
                self._advance()
                done = stack.pop()
                if not stack:
                    return done
                stack[-1].params.append(done)
            elif tok.type == TokenType.LPAREN:
                stack.append(self._open_call())
            else:
                stack[-1].params.append(self._walk())


def parse(tokens: list[Token], filename: str = "<stdin>") -> Program:
    """Parse a token list into a Program."""
    return Parser(tokens, filename).parse()
