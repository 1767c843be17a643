from typing import Any, Optional


class GongError(RuntimeError):
    pass


class ParseError(SyntaxError):
    """A token of the wrong kind where the grammar required something else.

    ``expected`` describes what the parser wanted, ``found`` is the kind of the
    token it got and ``offset`` is where that token starts in the source.
    """

    def __init__(self, expected: str, token: Any, detail: Optional[str] = None):
        self.expected = expected
        self.token = token
        self.found = token.kind
        message = f"expected {expected}, found {token.kind} at offset {token.offset}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        # SyntaxError.__init__ resets offset, so set it afterwards.
        self.offset = token.offset


class DepthExceeded(ParseError):
    pass
