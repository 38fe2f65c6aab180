"""Property-Based Tests for the lisp2c pipeline.

Laws checked over generated programs:

  1. Round trip: reading the infix output back with a small infix grammar
     recovers the source call structure (names, argument order, literal
     values verbatim).
  2. Whitespace insensitivity: any amount and kind of separating whitespace
     yields the same tokens and the same output.
  3. Determinism: compiling the same source twice is byte-identical.
"""

from __future__ import annotations

import re

from hypothesis import given, settings
from hypothesis import strategies as st

from lisp2c.compiler import compile
from lisp2c.lexer import tokenize
from lisp2c.parser import parse
from lisp2c.ast_nodes import CallExpression, NumberLiteral, StringLiteral


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

names = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1, max_size=8)
numbers = st.text(alphabet="0123456789", min_size=1, max_size=6)
# no quotes inside strings; everything else printable is allowed
string_bodies = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126, exclude_characters='"'), max_size=10)

literals = st.one_of(
    numbers.map(lambda v: NumberLiteral(value=v)),
    string_bodies.map(lambda v: StringLiteral(value=v)),
)


def calls(children):
    return st.builds(
        lambda name, params: CallExpression(name=name, params=params),
        names, st.lists(children, max_size=4),
    )


expressions = st.recursive(literals, calls, max_leaves=12)
call_programs = st.lists(calls(expressions), min_size=1, max_size=4)
separators = st.text(alphabet=" \t\n\r", min_size=1, max_size=3)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def render(node, sep=" "):
    """Write a source node back out as prefix text."""
    if isinstance(node, NumberLiteral):
        return node.value
    if isinstance(node, StringLiteral):
        return f'"{node.value}"'
    parts = [node.name] + [render(p, sep) for p in node.params]
    return "(" + sep.join(parts) + ")"


_INFIX_TOKEN = re.compile(r'\s*(?:(?P<num>[0-9]+)|"(?P<str>[^"]*)"|(?P<name>[A-Za-z]+)|(?P<punct>[(),;]))')


class InfixReader:
    """Reads `name(arg,arg);` lines back into source AST nodes."""

    def __init__(self, text: str):
        self.tokens = []
        pos = 0
        while pos < len(text):
            m = _INFIX_TOKEN.match(text, pos)
            assert m, f"unreadable output at {pos}: {text[pos:]!r}"
            self.tokens.append((m.lastgroup, m.group(m.lastgroup)))
            pos = m.end()
        self.pos = 0

    def _next(self):
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _expect(self, value):
        kind, got = self._next()
        assert (kind, got) == ("punct", value), f"expected {value!r}, got {got!r}"

    def statements(self):
        out = []
        while self.pos < len(self.tokens):
            out.append(self._expr())
            self._expect(";")
        return out

    def _expr(self):
        kind, value = self._next()
        if kind == "num":
            return NumberLiteral(value=value)
        if kind == "str":
            return StringLiteral(value=value)
        assert kind == "name", f"unexpected {value!r}"
        self._expect("(")
        params = []
        if self.tokens[self.pos] != ("punct", ")"):
            params.append(self._expr())
            while self.tokens[self.pos] == ("punct", ","):
                self.pos += 1
                params.append(self._expr())
        self._expect(")")
        return CallExpression(name=value, params=params)


# ===========================================================================
# Laws
# ===========================================================================

class TestPipelineLaws:

    @given(call_programs)
    @settings(max_examples=200)
    def test_round_trip_recovers_call_structure(self, body):
        """read_infix(compile(render(p))) = p"""
        source = " ".join(render(n) for n in body)
        output = compile(source)
        assert InfixReader(output).statements() == body
        assert output.count("\n") == len(body) - 1

    @given(call_programs, separators)
    @settings(max_examples=200)
    def test_whitespace_insensitive(self, body, sep):
        """Separator choice changes neither tokens nor output."""
        plain = " ".join(render(n) for n in body)
        spaced = sep.join(render(n, sep) for n in body)
        assert [(t.type, t.value) for t in tokenize(plain)] == \
            [(t.type, t.value) for t in tokenize(spaced)]
        assert compile(plain) == compile(spaced)

    @given(call_programs)
    @settings(max_examples=100)
    def test_compile_is_deterministic(self, body):
        """compile(s) == compile(s)"""
        source = " ".join(render(n) for n in body)
        assert compile(source) == compile(source)

    @given(call_programs)
    @settings(max_examples=100)
    def test_parse_inverts_render(self, body):
        """parse(tokenize(render(p))) = p"""
        source = " ".join(render(n) for n in body)
        assert parse(tokenize(source)).body == body
