"""
Error types raised by the arith parsers.

ParseError:
    The single user-facing error. Raised on the first malformed construct;
    parsing never recovers or collects multiple errors. Carries the offending
    token, its kind/value, its `(line, col)` when the token is positioned,
    and the set of constructs that would have been valid at that point.

InternalParserError:
    Signals that a parser's own bookkeeping went wrong (for example the
    shunting-yard output stack holding fewer operands than a reduction
    needs). Never expected from any input; seeing one is a bug.
"""

from collections.abc import Iterable

from arith.arith_lexer import Token


def expectation(expected: Iterable[str]) -> str:
    """Joins expectation descriptions: `a`, `a or b`, `a, b or c`."""
    items = list(expected)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} or {items[-1]}"


class ParseError(SyntaxError):
    """Raised when a token stream does not match the grammar.

    Attributes:
        message (str): The error message without location.
        token (Token | None): The offending token.
        kind (str | None): The offending token's kind.
        value (object): The offending token's value.
        location (tuple[int, int] | None): `(line, col)` of the offending token, when known.
        expected (tuple[str, ...]): Descriptions of what was valid instead.
    """

    def __init__(
        self,
        message: str,
        token: Token | None = None,
        expected: Iterable[str] = (),
    ) -> None:
        self.message = message
        self.token = token
        self.kind = token.kind if token is not None else None
        self.value = token.value if token is not None else None
        self.location = token.location if token is not None else None
        self.expected = tuple(expected)
        super().__init__(self._format())
        if self.location is not None:
            self.lineno, self.offset = self.location

    @classmethod
    def unexpected(cls, token: Token, *expected: str) -> "ParseError":
        """Builds the standard `Unexpected <token> token; expected ...` error."""
        message = f"Unexpected {token.describe()} token"
        if expected:
            message += f"; expected {expectation(expected)}"
        return cls(message, token, expected)

    @classmethod
    def too_deep(cls, token: Token, limit: int) -> "ParseError":
        """Builds the error for a `(` that opens one group more than `limit`."""
        return cls(f"Expression nested too deeply (limit {limit})", token)

    def _format(self) -> str:
        if self.location is None:
            return self.message
        line, col = self.location
        return f"{self.message} at line {line}, col {col}"

    def __str__(self) -> str:
        return self._format()


class InternalParserError(AssertionError):
    """Raised when a parser invariant is violated; indicates a bug, not bad input."""


__all__ = ["InternalParserError", "ParseError", "expectation"]
