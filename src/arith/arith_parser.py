"""
arith Recursive-Descent Parser

Parses a token stream into an expression AST with one method per precedence
level. Each level first calls the next tighter-binding level, so precedence
falls out of the call structure.

Grammar
-------
    Expression          -> AdditiveExpr
    AdditiveExpr        -> MultiplicativeExpr (('+' | '-') MultiplicativeExpr)*
    MultiplicativeExpr  -> ExponentialExpr (('*' | '/' | '%') ExponentialExpr)*
    ExponentialExpr     -> PrefixExpr ('^' ExponentialExpr)?
    PrefixExpr          -> ('+' | '-')* PrimaryExpr
    PrimaryExpr         -> number
                         | identifier ('(' (Expression (',' Expression)*)? ')')?
                         | '(' Expression ')'

Parser Behavior
---------------
- `+` and `-` chains and `* / %` chains are left-associative; `^` chains are
  collected left to right and folded from the right.
- Unary `+` is a no-op. A run of unary `-` negates only when its length is
  odd; the negation is `BinaryOp("-", 0, expr)`.
- The cursor only moves forward on explicit consumption. Reads past the end
  of the stream see a synthetic `EOF`.
- At most `MAX_NESTING_DEPTH` parenthesized groups and argument lists may be
  open at once; the `(` that would exceed it is rejected.

Entry Points
------------
- `parse_expression()`: parse one expression, stopping at the first token that
  cannot continue it.
- `parse_expression_eof()`: parse one expression that must span the whole
  stream up to `EOF`.

Raises
------
ParseError
    On the first unexpected token, missing `,` / `)` in an argument list,
    an unclosed `(`, nesting past `MAX_NESTING_DEPTH`, or trailing tokens
    after a complete expression.
"""

from __future__ import annotations

from collections.abc import Sequence

from arith.arith_ast import BinaryOp, Expr, FunctionCall, NumberLiteral, Variable, negate
from arith.arith_constants import (
    COMMA,
    EOF,
    IDENT,
    LPAREN,
    MAX_NESTING_DEPTH,
    NUMBER,
    RPAREN,
    additive_operators,
    exponential_operator,
    multiplicative_operators,
    prefix_operators,
)
from arith.arith_errors import ParseError
from arith.arith_lexer import Token

EXPECT_EXPRESSION = "expression"
EXPECT_INFIX = "infix operator"


class RecursiveDescentParser:
    """
    Precedence-layered expression parser.

    Attributes
    ----------
    tokens : Sequence[Token]
        The input token stream; never mutated.
    position : int
        Index of the next unconsumed token.
    depth : int
        Number of `(` groups and argument lists currently open.
    """

    def __init__(self, tokens: Sequence[Token], position: int = 0) -> None:
        self.tokens: Sequence[Token] = tokens
        self.position: int = position
        self.depth: int = 0

    def current(self) -> Token:
        """Returns the token under the cursor, or a synthetic `EOF` past the end."""
        return (
            self.tokens[self.position]
            if self.position < len(self.tokens)
            else Token(EOF, "")
        )

    def advance(self) -> Token:
        """Consumes the current token and returns it."""
        tok = self.current()
        self.position += 1
        return tok

    def match(self, kind: str, *expected: str) -> Token:
        """Consumes a token of `kind` or raises a ParseError listing `expected`."""
        tok = self.current()
        if tok.kind != kind:
            raise ParseError.unexpected(tok, *(expected or (repr(kind),)))
        return self.advance()

    def open_group(self) -> Token:
        """Consumes a `(`, refusing to nest deeper than MAX_NESTING_DEPTH."""
        tok = self.current()
        if self.depth >= MAX_NESTING_DEPTH:
            raise ParseError.too_deep(tok, MAX_NESTING_DEPTH)
        self.depth += 1
        return self.match(LPAREN)

    def close_group(self, *expected: str) -> Token:
        """Consumes the `)` of the innermost open group."""
        tok = self.match(RPAREN, *expected)
        self.depth -= 1
        return tok

    def parse_expression_eof(self) -> Expr:
        """Parse one expression that must be followed directly by `EOF`."""
        expression = self.parse_expression()
        if self.current().kind != EOF:
            raise ParseError.unexpected(self.current(), EXPECT_INFIX, "end of input")
        return expression

    def parse_expression(self) -> Expr:
        """Parse one expression, leaving the cursor on the first token after it."""
        return self.parse_additive_expression()

    def parse_additive_expression(self) -> Expr:
        """`+` and `-`, left-associative."""
        expression = self.parse_multiplicative_expression()
        while self.current().kind in additive_operators:
            op_tok = self.advance()
            rhs = self.parse_multiplicative_expression()
            expression = BinaryOp(op_tok.kind, expression, rhs, op_tok.location)
        return expression

    def parse_multiplicative_expression(self) -> Expr:
        """`*`, `/` and `%`, left-associative."""
        expression = self.parse_exponential_expression()
        while self.current().kind in multiplicative_operators:
            op_tok = self.advance()
            rhs = self.parse_exponential_expression()
            expression = BinaryOp(op_tok.kind, expression, rhs, op_tok.location)
        return expression

    def parse_exponential_expression(self) -> Expr:
        """`^`, right-associative: `a ^ b ^ c` is `a ^ (b ^ c)`."""
        operands = [self.parse_prefix_expression()]
        op_toks: list[Token] = []
        while self.current().kind == exponential_operator:
            op_toks.append(self.advance())
            operands.append(self.parse_prefix_expression())

        expression = operands.pop()
        while op_toks:
            op_tok = op_toks.pop()
            expression = BinaryOp(op_tok.kind, operands.pop(), expression, op_tok.location)
        return expression

    def parse_prefix_expression(self) -> Expr:
        """Any run of unary `+` / `-` followed by a primary expression."""
        negate_tok: Token | None = None
        while self.current().kind in prefix_operators:
            tok = self.advance()
            if tok.kind == "-":
                # Two minuses cancel; remember the one that left it negated.
                negate_tok = tok if negate_tok is None else None
        expression = self.parse_primary_expression()
        if negate_tok is None:
            return expression
        return negate(expression, negate_tok.location)

    def parse_primary_expression(self) -> Expr:
        """A number, a variable, a call or a parenthesized expression."""
        tok = self.current()

        if tok.kind == NUMBER:
            self.advance()
            return NumberLiteral(tok.value, tok.location)

        if tok.kind == IDENT:
            self.advance()
            if self.current().kind == LPAREN:
                return self.parse_call(tok)
            return Variable(tok.value, tok.location)

        if tok.kind == LPAREN:
            self.open_group()
            expression = self.parse_expression()
            self.close_group("')'", EXPECT_INFIX)
            return expression

        raise ParseError.unexpected(tok, EXPECT_EXPRESSION)

    def parse_call(self, name_tok: Token) -> FunctionCall:
        """Parse the argument list of a call whose name has been consumed."""
        self.open_group()
        if self.current().kind == RPAREN:
            self.close_group()
            return FunctionCall(name_tok.value, (), name_tok.location)

        args: list[Expr] = [self.parse_expression()]
        while self.current().kind != RPAREN:
            if self.current().kind != COMMA:
                raise ParseError.unexpected(self.current(), "','", "')'", EXPECT_INFIX)
            self.advance()
            args.append(self.parse_expression())
        self.close_group()
        return FunctionCall(name_tok.value, tuple(args), name_tok.location)


def parse_expression(tokens: Sequence[Token]) -> Expr:
    """Parse a complete token stream (ending in `EOF`) into an expression AST."""
    return RecursiveDescentParser(tokens).parse_expression_eof()


__all__ = ["RecursiveDescentParser", "parse_expression"]
