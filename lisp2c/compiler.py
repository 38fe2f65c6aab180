"""lisp2c compiler pipeline.

  source -> tokenize -> parse -> transform -> generate -> output

compile() raises the first CompileError unchanged. try_compile() runs the
same stages but hands the outcome back as a CompileResult value, stopping
at the first stage that fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from lisp2c.codegen import generate
from lisp2c.errors import CompileError, Lisp2cError
from lisp2c.lexer import tokenize
from lisp2c.parser import parse
from lisp2c.transformer import transform

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Outcome of one compilation: either output or the errors that stopped it."""
    output: Optional[str] = None
    errors: list[Lisp2cError] = field(default_factory=list)
    filename: str = "<stdin>"

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"file": self.filename, "ok": self.ok}
        if self.ok:
            d["output"] = self.output
        else:
            d["errors"] = [e.to_dict() for e in self.errors]
        return d


def compile(source: str, filename: str = "<stdin>") -> str:
    """Compile prefix call source to C-like infix text."""
    tokens = tokenize(source, filename)
    program = parse(tokens, filename)
    target = transform(program)
    return generate(target)


def try_compile(source: str, filename: str = "<stdin>") -> CompileResult:
    """Compile without raising; failures come back in CompileResult.errors."""
    try:
        output = compile(source, filename)
    except CompileError as e:
        logger.debug("%s: compilation failed: %s", filename, e)
        return CompileResult(errors=list(e.errors), filename=filename)
    return CompileResult(output=output, filename=filename)
