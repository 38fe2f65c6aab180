"""lisp2c — prefix call expressions to C-like infix calls."""

__version__ = "0.1.0"

from lisp2c.errors import CompileError, ErrorKind, Lisp2cError, SourceLocation
from lisp2c.lexer import Token, TokenType, tokenize
from lisp2c.parser import parse
from lisp2c.traverser import NodeVisitor, make_visitor, traverse
from lisp2c.transformer import transform
from lisp2c.codegen import generate
from lisp2c.compiler import CompileResult, compile, try_compile
