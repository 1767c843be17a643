"""Recursive-descent parser over scanner tokens.

Nested lists are tracked on an explicit stack rather than the Python call
stack, so deep input is limited only by ReaderConfig.max_depth.

Grammar::

    program    = form* EOF
    form       = QUOTE primary | list
    list       = "(" element* ")"
    element    = QUOTE primary | primary
    primary    = NUMBER | STRING | BOOLEAN | IDENTIFIER | list
"""

import logging
from enum import Enum
from typing import Optional, Sequence

from .errors import DepthExceeded, ParseError
from .scanner import scan
from .types import ATOM_KINDS, Atom, Expression, List, Quote, ReaderConfig, Token, TokenKind

logger = logging.getLogger(__name__)

_EOF = Token(TokenKind.EOF, "", 0)


class ParserState(Enum):
    AWAITING_FORM = "AwaitingForm"
    AWAITING_LIST_ELEMENT_OR_CLOSE = "AwaitingListElementOrClose"
    DONE = "Done"


class _OpenList:
    __slots__ = ("opener", "items", "quoted", "depth")

    def __init__(self, opener: Token, quoted: bool, depth: int):
        self.opener = opener
        self.items: list[Expression] = []
        self.quoted = quoted
        self.depth = depth


class Parser:
    """Holds the token tuple and the one cursor that walks it forward."""

    def __init__(self, tokens: Sequence[Token], config: Optional[ReaderConfig] = None):
        self.tokens = tuple(tokens)
        self.config = config or ReaderConfig()
        self.pos = 0
        self.depth = 0
        self.open_lists: list[_OpenList] = []
        self.state = ParserState.AWAITING_FORM

    def peek(self) -> Token:
        if self.pos >= len(self.tokens):
            # Token lists that were not produced by scan() may lack an Eof.
            if self.tokens:
                last = self.tokens[-1]
                return Token(TokenKind.EOF, "", last.offset + len(last.lexeme))
            return _EOF
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind is not TokenKind.EOF:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.peek()
        if tok.kind is not kind:
            raise ParseError(str(kind), tok)
        return self.advance()

    def parse_program(self) -> list[Expression]:
        forms: list[Expression] = []
        while self.state is not ParserState.DONE:
            if self.peek().kind is TokenKind.EOF:
                self.state = ParserState.DONE
                break
            forms.append(self.parse_form())
        return forms

    def parse_form(self) -> Expression:
        if self.peek().kind is TokenKind.QUOTE:
            return self._parse_quote()
        return self.parse_list()

    def parse_list(self) -> List:
        """Parse one list, nested lists included, without recursing per level."""
        opener = self.expect(TokenKind.OPEN_PAREN)
        base = len(self.open_lists)
        self._push(opener, quoted=False)
        while True:
            frame = self.open_lists[-1]
            tok = self.peek()
            if tok.kind is TokenKind.CLOSE_PAREN:
                self.advance()
                self.open_lists.pop()
                node: Expression = List(tuple(frame.items))
                if frame.quoted:
                    node = Quote(node)
                if len(self.open_lists) == base:
                    if not self.open_lists:
                        self.state = ParserState.AWAITING_FORM
                    return node
                self.open_lists[-1].items.append(node)
            elif tok.kind is TokenKind.EOF:
                raise ParseError(
                    str(TokenKind.CLOSE_PAREN), tok,
                    f"unterminated list opened at offset {frame.opener.offset}",
                )
            elif tok.kind is TokenKind.OPEN_PAREN:
                self.advance()
                self._push(tok, quoted=False)
            elif tok.kind is TokenKind.QUOTE:
                self.advance()
                target = self.peek()
                if target.kind is TokenKind.OPEN_PAREN:
                    self.advance()
                    self._push(target, quoted=True)
                else:
                    self._check_depth(frame.depth + 1, tok)
                    frame.items.append(Quote(self._parse_atom()))
            else:
                frame.items.append(self._parse_atom())

    def parse_primary(self) -> Expression:
        if self.peek().kind is TokenKind.OPEN_PAREN:
            return self.parse_list()
        return self._parse_atom()

    def _parse_atom(self) -> Atom:
        tok = self.peek()
        if tok.kind in ATOM_KINDS:
            if self.config.strict and not tok.ok:
                raise ParseError("a well-formed atom", tok, tok.error)
            return Atom(self.advance())
        detail = tok.error if tok.kind is TokenKind.INVALID else None
        raise ParseError("an atom or open paren", tok, detail)

    def _parse_quote(self) -> Quote:
        mark = self.expect(TokenKind.QUOTE)
        self._check_depth(self.depth + 1, mark)
        self.depth += 1
        try:
            return Quote(self.parse_primary())
        finally:
            self.depth -= 1

    def _push(self, opener: Token, quoted: bool) -> None:
        parent = self.open_lists[-1].depth if self.open_lists else self.depth
        depth = parent + 1 + int(quoted)
        self._check_depth(depth, opener)
        self.open_lists.append(_OpenList(opener, quoted, depth))
        self.state = ParserState.AWAITING_LIST_ELEMENT_OR_CLOSE

    def _check_depth(self, depth: int, tok: Token) -> None:
        limit = self.config.max_depth
        if limit is not None and depth > limit:
            raise DepthExceeded(
                f"nesting of at most {limit}", tok,
                "max nesting depth exceeded",
            )


def parse(tokens: Sequence[Token], config: Optional[ReaderConfig] = None) -> list[Expression]:
    """Parse a token sequence into its top-level expressions.

    Raises ParseError on the first syntax error; nothing is returned for the
    forms that parsed before it.
    """
    parser = Parser(tokens, config)
    forms = parser.parse_program()
    logger.debug("parsed %d top-level forms from %d tokens", len(forms), len(parser.tokens))
    return forms


def read(source: str, config: Optional[ReaderConfig] = None) -> list[Expression]:
    """Scan and parse source text in one call."""
    return parse(scan(source), config)
