from .types import Token, TokenKind, Atom, Quote, List, Expression, ReaderConfig
from .errors import GongError, ParseError, DepthExceeded
from .scanner import scan
from .parser import Parser, ParserState, parse, read
from .printer import format_token, format_expression, format_program

__all__ = [
    "Token", "TokenKind", "Atom", "Quote", "List", "Expression", "ReaderConfig",
    "GongError", "ParseError", "DepthExceeded",
    "scan", "Parser", "ParserState", "parse", "read",
    "format_token", "format_expression", "format_program",
]

__version__ = "0.1.0"
