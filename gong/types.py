from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .errors import GongError


class TokenKind(Enum):
    NUMBER = "Number"
    STRING = "String"
    BOOLEAN = "Boolean"
    IDENTIFIER = "Identifier"
    QUOTE = "Quote"
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"
    EOF = "Eof"
    INVALID = "Invalid"

    def __str__(self) -> str:
        return self.value


ATOM_KINDS = frozenset({
    TokenKind.NUMBER,
    TokenKind.STRING,
    TokenKind.BOOLEAN,
    TokenKind.IDENTIFIER,
})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    # Tokens read at different places compare equal.
    offset: int = field(compare=False)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def radix(self) -> Optional[int]:
        """Base of a Number token, taken from its prefix. None for other kinds."""
        if self.kind is not TokenKind.NUMBER:
            return None
        prefix = self.lexeme[:2].lower()
        if prefix == "0x":
            return 16
        if prefix == "0b":
            return 2
        return 10

    @property
    def is_decimal(self) -> bool:
        return self.radix == 10 and "." in self.lexeme


# Expression nodes. Trees are immutable values; no node is shared or
# mutated after the parser builds it.

@dataclass(frozen=True)
class Atom:
    token: Token

    def __post_init__(self):
        if self.token.kind not in ATOM_KINDS:
            raise ValueError(f"{self.token.kind} token cannot be an atom")


@dataclass(frozen=True)
class Quote:
    expr: "Expression"


@dataclass(frozen=True)
class List:
    items: tuple["Expression", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


Expression = Union[Atom, Quote, List]


@dataclass(frozen=True)
class ReaderConfig:
    # None means no limit on nesting.
    max_depth: Optional[int] = None
    strict: bool = False

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise GongError(f"max_depth must be at least 1, got {self.max_depth}")
