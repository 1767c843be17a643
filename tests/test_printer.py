import pytest

from gong.parser import read
from gong.printer import format_expression, format_program, format_token
from gong.scanner import scan
from gong.types import Atom, List, Quote, Token, TokenKind


def test_format_atoms():
    assert format_expression(Atom(Token(TokenKind.NUMBER, "0x1F", 0))) == "0x1F"
    assert format_expression(Atom(Token(TokenKind.BOOLEAN, "true", 0))) == "true"
    assert format_expression(Atom(Token(TokenKind.STRING, "hi", 0))) == '"hi"'


def test_format_string_escapes():
    atom = Atom(Token(TokenKind.STRING, 'a"b\\c', 0))
    assert format_expression(atom) == '"a\\"b\\\\c"'


def test_format_list_and_quote():
    (expr,) = read("(a  b\n (c) 'd ())")
    assert format_expression(expr) == "(a b (c) 'd ())"
    assert str(expr) == "(a b (c) 'd ())"


def test_format_program():
    assert format_program(read("(a) 'b")) == "(a)\n'b"


@pytest.mark.parametrize("src", [
    "()",
    "(define (square x) (* x x))",
    "'(1 2.5 0xFF 0b10)",
    '(print "say \\"hi\\"" "back\\\\slash")',
    "(if true '(yes) (no false))",
    "(list->vector '(a b) (c/d -e))",
])
def test_print_then_read_gives_same_tree(src):
    exprs = read(src)
    assert read(format_program(exprs)) == exprs


def test_format_token():
    tokens = scan("(foo")
    assert format_token(tokens[1]) == '(Identifier:1:3 "foo")'
    assert format_token(tokens[-1]) == "(Eof:4)"
    assert str(tokens[0]) == '(OpenParen:0:1 "(")'


def test_format_token_with_error():
    tok = scan('"abc')[0]
    assert format_token(tok) == '(String:0:3 "abc") !unterminated string'


def test_format_rejects_non_expression():
    with pytest.raises(TypeError):
        format_expression("x")


def test_atom_rejects_paren_token():
    with pytest.raises(ValueError):
        Atom(Token(TokenKind.OPEN_PAREN, "(", 0))


def test_str_of_deep_tree():
    depth = 3000
    src = "'" + "(" * depth + ")" * depth
    (expr,) = read(src)
    assert str(expr) == src
    assert format_expression(expr) == src


def test_str_is_bound_for_every_node():
    tok = Token(TokenKind.IDENTIFIER, "a", 0)
    assert str(tok) == '(Identifier:0:1 "a")'
    assert str(Atom(tok)) == "a"
    assert str(Quote(Atom(tok))) == "'a"
    assert str(List((Atom(tok), List()))) == "(a ())"
