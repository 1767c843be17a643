"""Render tokens and expressions back to text."""

from typing import Iterable

from .types import Atom, Expression, List, Quote, Token, TokenKind


def _quote_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_token(tok: Token) -> str:
    if tok.kind is TokenKind.EOF:
        text = f"({tok.kind}:{tok.offset})"
    else:
        text = f'({tok.kind}:{tok.offset}:{len(tok.lexeme)} "{tok.lexeme}")'
    if tok.error:
        text += f" !{tok.error}"
    return text


def format_expression(expr: Expression) -> str:
    """Print an expression so that reading the text gives the same tree back.

    Walks the tree with an explicit stack, so nesting depth is not bounded by
    the interpreter's recursion limit.
    """
    out: list[str] = []
    # Entries are (is_text, value): literal text or a node still to print.
    stack: list[tuple[bool, object]] = [(False, expr)]
    while stack:
        is_text, item = stack.pop()
        if is_text:
            out.append(item)
        elif isinstance(item, Atom):
            if item.token.kind is TokenKind.STRING:
                out.append(_quote_string(item.token.lexeme))
            else:
                out.append(item.token.lexeme)
        elif isinstance(item, Quote):
            out.append("'")
            stack.append((False, item.expr))
        elif isinstance(item, List):
            out.append("(")
            stack.append((True, ")"))
            for i in range(len(item.items) - 1, -1, -1):
                stack.append((False, item.items[i]))
                if i:
                    stack.append((True, " "))
        else:
            raise TypeError(f"not an expression: {item!r}")
    return "".join(out)


def format_program(exprs: Iterable[Expression]) -> str:
    return "\n".join(format_expression(e) for e in exprs)


Token.__str__ = format_token
for _node in (Atom, Quote, List):
    _node.__str__ = format_expression
