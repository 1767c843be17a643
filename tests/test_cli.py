import io
from pathlib import Path

import pytest

from gong.__main__ import main, repl, show
from gong.types import ReaderConfig

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples" / "programs"


class FakeTerminal(io.StringIO):
    def isatty(self):
        return True


def run(argv, stdin_text=""):
    out = io.StringIO()
    code = main(argv, stdin=io.StringIO(stdin_text), stdout=out)
    return code, out.getvalue()


def test_show_expressions():
    assert show("  (a   'b)\n", ReaderConfig()) == "(a 'b)"


def test_show_tokens():
    out = show("(a)", ReaderConfig(), tokens_only=True)
    assert out.splitlines() == [
        '  - (OpenParen:0:1 "(")',
        '  - (Identifier:1:1 "a")',
        '  - (CloseParen:2:1 ")")',
        "  - (Eof:3)",
    ]


def test_main_reads_file():
    code, out = run([str(EXAMPLES_DIR / "factorial.gong")])
    assert code == 0
    assert out.splitlines()[1] == '(print "factorial of 10 is" (factorial 10))'


def test_main_reads_piped_stdin():
    code, out = run([], "(x 1)\n'y\n")
    assert code == 0
    assert out == "(x 1)\n'y\n"


def test_main_syntax_error(capsys):
    code, out = run([str(EXAMPLES_DIR / "broken.gong")])
    assert code == 1
    assert out == ""
    assert "unterminated list" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    code, _ = run([str(tmp_path / "nope.gong")])
    assert code == 2
    assert "cannot read" in capsys.readouterr().err


def test_main_bad_max_depth(capsys):
    code, _ = run(["--max-depth", "0"], "(a)")
    assert code == 2
    assert "max_depth" in capsys.readouterr().err


def test_main_strict(capsys):
    code, _ = run(["--strict"], "(x 1.2.3)")
    assert code == 1
    assert "too many decimal points" in capsys.readouterr().err


def test_main_starts_repl_on_terminal():
    out = io.StringIO()
    code = main([], stdin=FakeTerminal("(a)\nexit\n"), stdout=out)
    assert code == 0
    assert "(a)" in out.getvalue()


def test_repl_reports_errors_and_continues():
    out = io.StringIO()
    code = repl(ReaderConfig(), False, io.StringIO("(a\n\n(b c)\nquit\n(never)\n"), out)
    assert code == 0
    text = out.getvalue()
    assert "error: expected CloseParen" in text
    assert "(b c)" in text
    assert "never" not in text


def test_repl_stops_at_eof():
    out = io.StringIO()
    assert repl(ReaderConfig(), True, io.StringIO("'x\n"), out) == 0
    assert '(Quote:0:1 "\'")' in out.getvalue()


def test_main_large_max_depth():
    src = "(" * 2000 + ")" * 2000
    code, out = run(["--max-depth", "5000"], src)
    assert code == 0
    assert out == src + "\n"


def test_main_max_depth_exceeded(capsys):
    code, _ = run(["--max-depth", "2"], "(((a)))")
    assert code == 1
    assert "max nesting depth" in capsys.readouterr().err
