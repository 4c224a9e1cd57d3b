"""
Lexical analyzer for the arith expression language.

This module converts raw source text into an ordered, positioned token stream:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Immutable token with kind, value, raw lexeme, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace (never tokenized)
    - Recognizes:
        * Identifiers (`[A-Za-z_][A-Za-z0-9_]*`) and the keywords `var` / `def`
        * Numbers (a run of digits and dots)
        * Any other character as a single-character operator token
    - Terminates every stream with exactly one `EOF` token

Tokenizing never fails. Characters that are not part of the grammar come out
as operator tokens and are rejected later by the parser as unexpected tokens.

Example:
    >>> [tok.kind for tok in tokenize("f(x) ^ 2")]
    ['identifier', '(', 'identifier', ')', '^', 'number', 'EOF']

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import string
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from arith.arith_constants import EOF, IDENT, NUMBER, keywords

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)
NUMBER_CHARS = frozenset(string.digits + ".")


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        kind (str): `number`, `identifier`, `var`, `def`, `EOF`, or the operator character itself.
        value (Any): The parsed value: a float for numbers, the name for identifiers,
            the character for operators, and "" for `EOF`.
        text (str): The raw lexeme exactly as it appeared in the source.
        line (int): 1-based line of the first character; 0 when the token carries no position.
        col (int): 1-based column of the first character; 0 when the token carries no position.
    """

    kind: str
    value: Any
    text: str = ""
    line: int = 0
    col: int = 0

    @property
    def location(self) -> tuple[int, int] | None:
        """`(line, col)` of the token, or None for tokens built without a position."""
        if self.line <= 0:
            return None
        return (self.line, self.col)

    def describe(self) -> str:
        """Human-readable name used in error messages."""
        if self.kind == NUMBER:
            return f"number {self.text or self.value}"
        if self.kind == IDENT:
            return f"identifier {self.value!r}"
        if self.kind == EOF:
            return "EOF"
        return repr(self.kind)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "value": self.value,
            "text": self.text,
            "line": self.line,
            "col": self.col,
        }

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r})"


def number_value(lexeme: str) -> float:
    """Parses a digits-and-dots lexeme, keeping only the longest valid decimal prefix.

    `"12"` -> 12.0, `"1."` -> 1.0, `"1.2.3"` -> 1.2.
    """
    whole, dot, rest = lexeme.partition(".")
    if not dot:
        return float(whole)
    fraction = rest.split(".", 1)[0]
    return float(f"{whole}.{fraction}")


class Lexer:
    """Lexical analyzer for the arith language.

    The Lexer takes a CharacterStream and converts it into a stream of Token objects.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips spaces, tabs and newlines; the stream tracks line and column."""
        while not self.stream.end_of_file() and self.peek().isspace():
            self.advance()

    def read_while(self, allowed: frozenset[str]) -> str:
        """Consumes a maximal run of characters drawn from `allowed`."""
        lexeme = ""
        while not self.stream.end_of_file() and self.peek() in allowed:
            lexeme += self.advance()
        return lexeme

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Once the source is exhausted every call returns an `EOF` token positioned
        immediately after the last character.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "", "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch in IDENT_START:
            ident = self.read_while(IDENT_CHARS)
            if ident in keywords:
                return Token(ident, ident, ident, line, col)
            return Token(IDENT, ident, ident, line, col)

        # 2. Number
        if ch in DIGITS:
            num = self.read_while(NUMBER_CHARS)
            return Token(NUMBER, number_value(num), num, line, col)

        # 3. Anything else is a single-character operator
        op = self.advance()
        return Token(op, op, op, line, col)

    def tokens(self) -> Iterator[Token]:
        """Yields every token up to and including the terminating `EOF`."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Tokenizes `source` into a list that always ends with exactly one `EOF` token."""
    return list(Lexer(CharacterStream(source)).tokens())


__all__ = ["CharacterStream", "Lexer", "Token", "number_value", "tokenize"]
