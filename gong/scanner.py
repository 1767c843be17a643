"""Scanner: turns source text into a flat list of tokens.

Scanning never fails. Malformed input comes back as ``Invalid`` tokens or as
``String``/``Number`` tokens with ``error`` set, so the parser (or whoever reads
the tokens) decides what is fatal.
"""

import logging
import string

from .types import Token, TokenKind

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n\r")
DIGITS = frozenset(string.digits)
HEX_DIGITS = frozenset(string.hexdigits)
BINARY_DIGITS = frozenset("01")
# Characters that may start or continue an identifier alongside letters.
OPERATOR_CHARS = frozenset("+-*/<>=!?_%&:.")
BOOLEANS = ("true", "false")

_PREFIXES = {"x": ("hex", HEX_DIGITS), "b": ("binary", BINARY_DIGITS)}


def _is_identifier_start(ch: str) -> bool:
    return ch.isalpha() or ch in OPERATOR_CHARS


def _is_identifier_char(ch: str) -> bool:
    return _is_identifier_start(ch) or ch in DIGITS


def _scan_number(src: str, start: int) -> tuple[Token, int]:
    """Scan a numeric literal starting at a digit. Returns (token, end)."""
    n = len(src)
    pos = start
    error = None

    if src[pos] == "0" and pos + 1 < n and src[pos + 1].lower() in _PREFIXES:
        name, allowed = _PREFIXES[src[pos + 1].lower()]
        pos += 2
        digits_start = pos
        # Keep going over anything that still looks numeric so a bad digit
        # ends up inside this token instead of starting a new one.
        while pos < n and (src[pos] in allowed or src[pos] in DIGITS or src[pos] == "."):
            if src[pos] not in allowed and error is None:
                error = f"invalid digit {src[pos]!r} in {name} literal"
            pos += 1
        if pos == digits_start:
            error = f"missing digits after {src[start:start + 2]}"
        return Token(TokenKind.NUMBER, src[start:pos], start, error), pos

    dots = 0
    while pos < n and (src[pos] in DIGITS or src[pos] == "."):
        if src[pos] == ".":
            dots += 1
        pos += 1
    if dots > 1:
        error = "too many decimal points"
    return Token(TokenKind.NUMBER, src[start:pos], start, error), pos


def _scan_string(src: str, start: int) -> tuple[Token, int]:
    """Scan a double-quoted string. The lexeme is the unescaped content."""
    n = len(src)
    pos = start + 1
    buf: list[str] = []
    while pos < n:
        ch = src[pos]
        if ch == "\\":
            pos += 1
            if pos < n:
                buf.append(src[pos])
                pos += 1
            continue
        if ch == '"':
            return Token(TokenKind.STRING, "".join(buf), start), pos + 1
        buf.append(ch)
        pos += 1
    return Token(TokenKind.STRING, "".join(buf), start, "unterminated string"), pos


def _scan_identifier(src: str, start: int) -> tuple[Token, int]:
    n = len(src)
    pos = start
    while pos < n and _is_identifier_char(src[pos]):
        pos += 1
    word = src[start:pos]
    kind = TokenKind.BOOLEAN if word in BOOLEANS else TokenKind.IDENTIFIER
    return Token(kind, word, start), pos


def scan(source: str) -> list[Token]:
    """Scan source text into tokens, always ending with a single Eof token."""
    tokens: list[Token] = []
    n = len(source)
    pos = 0
    while pos < n:
        ch = source[pos]
        if ch in WHITESPACE:
            pos += 1
            continue
        if ch == "'":
            tokens.append(Token(TokenKind.QUOTE, ch, pos))
            pos += 1
        elif ch == "(":
            tokens.append(Token(TokenKind.OPEN_PAREN, ch, pos))
            pos += 1
        elif ch == ")":
            tokens.append(Token(TokenKind.CLOSE_PAREN, ch, pos))
            pos += 1
        elif ch in DIGITS:
            tok, pos = _scan_number(source, pos)
            tokens.append(tok)
        elif ch == '"':
            tok, pos = _scan_string(source, pos)
            tokens.append(tok)
        elif _is_identifier_start(ch):
            tok, pos = _scan_identifier(source, pos)
            tokens.append(tok)
        else:
            tokens.append(Token(TokenKind.INVALID, ch, pos, "unexpected character"))
            pos += 1
    tokens.append(Token(TokenKind.EOF, "", n))

    if logger.isEnabledFor(logging.DEBUG):
        bad = sum(1 for t in tokens if not t.ok)
        logger.debug("scanned %d chars into %d tokens (%d malformed)", n, len(tokens), bad)
    return tokens
