"""CLI: python -m gong [--tokens] [--strict] [--max-depth N] [FILE]

Reads FILE, or piped stdin, or starts a prompt when stdin is a terminal.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .errors import GongError, ParseError
from .parser import parse
from .printer import format_program, format_token
from .scanner import scan
from .types import ReaderConfig

logger = logging.getLogger("gong")

PROMPT = "> "
EXIT_WORDS = ("quit", "exit")


def show(text: str, config: ReaderConfig, tokens_only: bool = False) -> str:
    """Scan (and unless tokens_only, parse) text and return what to print."""
    tokens = scan(text.strip())
    if tokens_only:
        return "\n".join(f"  - {tok}" for tok in tokens)
    return format_program(parse(tokens, config))


def repl(config: ReaderConfig, tokens_only: bool, stdin: TextIO, stdout: TextIO) -> int:
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return 0
        text = line.strip()
        if text in EXIT_WORDS:
            return 0
        if not text:
            continue
        try:
            out = show(text, config, tokens_only)
        except ParseError as e:
            logger.debug("syntax error in %r: %s", text, e)
            stdout.write(f"error: {e}\n")
            continue
        if out:
            stdout.write(out + "\n")


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="gong", description="Read gong source and print its syntax tree.")
    ap.add_argument("file", nargs="?", help="source file (default: stdin or interactive prompt)")
    ap.add_argument("--tokens", action="store_true", help="print scanner tokens instead of expressions")
    ap.add_argument("--strict", action="store_true", help="reject atoms with lexical errors")
    ap.add_argument("--max-depth", type=int, default=None,
                    help="reject input nested deeper than N (default: no limit)")
    ap.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return ap


def main(argv: Optional[list[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ReaderConfig(max_depth=args.max_depth, strict=args.strict)
    except GongError as e:
        print(f"gong: {e}", file=sys.stderr)
        return 2

    if args.file:
        path = Path(args.file)
        try:
            text = path.read_text()
        except OSError as e:
            logger.debug("read of %s failed", path, exc_info=True)
            print(f"gong: cannot read {path}: {e}", file=sys.stderr)
            return 2
    elif stdin.isatty():
        return repl(config, args.tokens, stdin, stdout)
    else:
        text = stdin.read()

    try:
        out = show(text, config, args.tokens)
    except ParseError as e:
        logger.debug("syntax error at offset %s", e.offset)
        print(f"gong: {e}", file=sys.stderr)
        return 1
    if out:
        stdout.write(out + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
