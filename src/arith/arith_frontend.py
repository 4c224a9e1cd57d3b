"""
Provides the `ExpressionParser` interface and the two interchangeable parsing strategies.

Classes and Features:
    - ExpressionParser (Protocol): anything that turns a token stream into an expression AST.
    - RecursiveDescent: strategy backed by `arith_parser.RecursiveDescentParser`.
    - ShuntingYard: strategy backed by `arith_shunting.shunting_yard`.
    - get_expression_parser(): selects a strategy by name.
    - parse_source(): tokenize and parse a source string in one step.

Both strategies accept the identical token format produced by
`arith_lexer.tokenize` and build structurally identical trees, so either can be
swapped in wherever an expression parser is needed (including the program parser).

Example:
    >>> parser = get_expression_parser("shunting-yard")
    >>> parser.parse(tokenize("3 + 4 * 2"))
    BinaryOp(operator='+', lhs=NumberLiteral(value=3.0), rhs=BinaryOp(...))

Raises:
    ValueError: If a strategy name is not recognized.
    ParseError: If the token stream is malformed.
"""

from collections.abc import Sequence
from typing import Protocol

from arith import arith_parser, arith_shunting
from arith.arith_ast import Expr
from arith.arith_lexer import Token, tokenize

DEFAULT_STRATEGY = "recursive-descent"


class ExpressionParser(Protocol):  # pragma: no cover
    """Protocol for expression parsing strategies.

    Methods:
        parse(tokens): Parse a whole stream; the expression must be followed by `EOF`.
        parse_at(tokens, position): Parse the longest expression starting at `position`
            and return it with the index of the first token after it.
    """

    name: str

    def parse(self, tokens: Sequence[Token]) -> Expr: ...  # pragma: no cover

    def parse_at(self, tokens: Sequence[Token], position: int) -> tuple[Expr, int]: ...  # pragma: no cover


class RecursiveDescent:
    """Precedence-layered hand-written parser."""

    name = "recursive-descent"

    def parse(self, tokens: Sequence[Token]) -> Expr:
        """Parses a whole stream; trailing tokens before `EOF` are an error."""
        return arith_parser.parse_expression(tokens)

    def parse_at(self, tokens: Sequence[Token], position: int) -> tuple[Expr, int]:
        """Parses the longest expression at `position`; returns it and the stop index."""
        parser = arith_parser.RecursiveDescentParser(tokens, position)
        expression = parser.parse_expression()
        return expression, parser.position

    def __repr__(self) -> str:
        return "RecursiveDescent()"


class ShuntingYard:
    """Operator-precedence parser over explicit operator/output/arity stacks."""

    name = "shunting-yard"

    def parse(self, tokens: Sequence[Token]) -> Expr:
        """Parses a whole stream; trailing tokens before `EOF` are an error."""
        return arith_shunting.parse_expression(tokens)

    def parse_at(self, tokens: Sequence[Token], position: int) -> tuple[Expr, int]:
        return arith_shunting.shunting_yard(tokens, position)

    def __repr__(self) -> str:
        return "ShuntingYard()"


ParserType = type[ExpressionParser]
"""Alias for a concrete ExpressionParser class."""

strategies: dict[str, ParserType] = {
    "recursive-descent": RecursiveDescent,
    "rd": RecursiveDescent,
    "shunting-yard": ShuntingYard,
    "sy": ShuntingYard,
}


def get_expression_parser(strategy: str = DEFAULT_STRATEGY) -> ExpressionParser:
    """Returns a parser for the named strategy.

    Args:
        strategy: "recursive-descent" / "rd" or "shunting-yard" / "sy" (case-insensitive;
            underscores are accepted in place of hyphens).

    Raises:
        ValueError: If the strategy is not supported.
    """
    key = strategy.lower().replace("_", "-")
    if key not in strategies:
        raise ValueError(f"Unknown parsing strategy: {strategy!r}")
    return strategies[key]()


def parse_source(source: str, strategy: str = DEFAULT_STRATEGY) -> Expr:
    """Tokenizes and parses a single expression."""
    return get_expression_parser(strategy).parse(tokenize(source))


__all__ = [
    "DEFAULT_STRATEGY",
    "ExpressionParser",
    "RecursiveDescent",
    "ShuntingYard",
    "get_expression_parser",
    "parse_source",
    "strategies",
]
