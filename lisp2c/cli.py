"""lisp2c CLI — Command-line interface for the lisp2c compiler.

Commands:
  lisp2c compile <file|->              — Compile prefix calls to C-like infix calls
  lisp2c tokens <file|->               — Emit the token list (JSON)
  lisp2c ast <file|-> [--target]       — Emit the source or target AST (JSON)
  lisp2c scan <dir>                    — Compile every source file under a directory
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional

from lisp2c import __version__
from lisp2c.compiler import CompileResult, compile, try_compile
from lisp2c.config import Lisp2cConfig, load_config
from lisp2c.errors import CompileError, unreadable_source
from lisp2c.lexer import tokenize, tokens_to_json
from lisp2c.parser import parse
from lisp2c.transformer import transform

logger = logging.getLogger(__name__)


def _read_source(path: str) -> Optional[str]:
    if path == "-":
        return sys.stdin.read()
    if not os.path.exists(path):
        print(json.dumps({"error": f"File not found: {path}"}))
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (UnicodeDecodeError, OSError) as e:
        print(json.dumps({"error": f"Cannot read {path}: {e}"}))
        return None


def _display_name(path: str) -> str:
    return "<stdin>" if path == "-" else path


def _report(error: CompileError, config: Lisp2cConfig) -> int:
    if config.format == "json":
        print(error.to_json())
    else:
        print(str(error), file=sys.stderr)
    return 1


def cmd_compile(args: argparse.Namespace) -> int:
    """Compile a single source file."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        output = compile(source, filename=_display_name(args.file))
    except CompileError as e:
        return _report(e, args.config)

    if args.output:
        with open(args.output, "w") as f:
            f.write(output + "\n")
        print(json.dumps({"status": "compiled", "path": args.output}))
    else:
        print(output)
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Emit the token list as JSON."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        tokens = tokenize(source, filename=_display_name(args.file))
    except CompileError as e:
        return _report(e, args.config)

    print(tokens_to_json(tokens))
    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Emit the source AST, or the transformed target AST, as JSON."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        filename = _display_name(args.file)
        program = parse(tokenize(source, filename=filename), filename=filename)
        tree = transform(program) if args.target else program
    except CompileError as e:
        return _report(e, args.config)

    print(tree.to_json())
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    """Compile every source file under a directory, writing outputs beside them."""
    target = args.directory
    if not os.path.isdir(target):
        print(json.dumps({"error": f"Not a directory: {target}"}))
        return 1

    config: Lisp2cConfig = args.config
    results = []
    for root, dirs, files in os.walk(target):
        dirs.sort()
        for name in sorted(files):
            if not name.endswith(config.source_extension):
                continue
            path = os.path.join(root, name)
            rel = os.path.relpath(path, target)
            if not config.should_include(rel) or config.should_exclude(rel):
                logger.debug("skipping %s", rel)
                continue

            try:
                with open(path, "r", encoding="utf-8") as f:
                    source = f.read()
            except (UnicodeDecodeError, OSError) as e:
                logger.debug("cannot read %s: %s", path, e)
                results.append(CompileResult(errors=[unreadable_source(path, str(e))], filename=path))
                continue

            result = try_compile(source, filename=path)
            if result.ok:
                out_path = os.path.splitext(path)[0] + config.output_extension
                with open(out_path, "w") as f:
                    f.write(result.output + "\n")
            results.append(result)

    failed = [r for r in results if not r.ok]
    if config.format == "json":
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        for r in results:
            status = "ok" if r.ok else "FAILED"
            print(f"{status:6s} {r.filename}")
            for e in r.errors:
                print(f"       {e}")
        print(f"{len(results) - len(failed)}/{len(results)} files compiled")

    return 1 if failed else 0


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="lisp2c",
        description="lisp2c — compile prefix call expressions to C-like infix calls",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", dest="config_path", help="Path to a .lisp2crc.yml / .json file")
    parser.add_argument("--format", choices=["text", "json"], help="Error output format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # compile
    p_compile = subparsers.add_parser("compile", help="Compile a source file ('-' for stdin)")
    p_compile.add_argument("file", help="Source file, or '-' to read stdin")
    p_compile.add_argument("-o", "--output", help="Write output to this path")
    p_compile.set_defaults(func=cmd_compile)

    # tokens
    p_tokens = subparsers.add_parser("tokens", help="Emit the token list (JSON)")
    p_tokens.add_argument("file", help="Source file, or '-' to read stdin")
    p_tokens.set_defaults(func=cmd_tokens)

    # ast
    p_ast = subparsers.add_parser("ast", help="Emit the AST (JSON)")
    p_ast.add_argument("file", help="Source file, or '-' to read stdin")
    p_ast.add_argument("--target", action="store_true", help="Emit the transformed target AST")
    p_ast.set_defaults(func=cmd_ast)

    # scan
    p_scan = subparsers.add_parser("scan", help="Compile every source file under a directory")
    p_scan.add_argument("directory", help="Directory to scan recursively")
    p_scan.set_defaults(func=cmd_scan)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    start_dir = args.directory if args.command == "scan" else "."
    config = load_config(args.config_path, start_dir=start_dir)
    if args.format:
        config.format = args.format
    args.config = config

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
