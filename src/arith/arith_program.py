"""
arith Program Parser

Parses a sequence of top-level definitions, delegating every definition body
to an expression parser strategy.

Supported Constructs
--------------------
- Variable definitions:  `var <identifier> = <expr> ;`
- Function definitions:  `def <identifier> ( <param>, ... ) = <expr> ;`

Parameter lists hold zero or more comma-separated identifiers with no
trailing comma. Parameter names are not checked for uniqueness here.

Entry Points
------------
- `ProgramParser.parse_program()`: parse definitions until `EOF`.
- `parse_program(tokens, expression_parser)`: functional wrapper.
- `parse_program_source(source, strategy)`: tokenize and parse in one step.

Raises
------
ParseError
    On an unrecognized leading keyword, a missing `=` or `;`, or a malformed
    parameter list. The error names the offending token and what was expected.
"""

from __future__ import annotations

from collections.abc import Sequence

from arith.arith_ast import Definition, Expr, FunctionDefinition, Program, VariableDefinition
from arith.arith_constants import ASSIGN, COMMA, DEF, EOF, IDENT, LPAREN, RPAREN, SEMI, VAR
from arith.arith_errors import ParseError
from arith.arith_frontend import (
    DEFAULT_STRATEGY,
    ExpressionParser,
    RecursiveDescent,
    get_expression_parser,
)
from arith.arith_lexer import Token, tokenize


class ProgramParser:
    """
    Parses `var` / `def` definitions.

    Attributes
    ----------
    tokens : Sequence[Token]
        The input token stream.
    position : int
        Index of the next unconsumed token.
    expression_parser : ExpressionParser
        Strategy used for definition bodies.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        expression_parser: ExpressionParser | None = None,
    ) -> None:
        self.tokens: Sequence[Token] = tokens
        self.position: int = 0
        self.expression_parser: ExpressionParser = expression_parser or RecursiveDescent()

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

    def parse_program(self) -> Program:
        """Parse definitions until `EOF`; fail fast on the first malformed one."""
        program: Program = []
        while self.current().kind != EOF:
            program.append(self.parse_definition())
        return program

    def parse_definition(self) -> Definition:
        """Dispatches on the leading `var` / `def` keyword."""
        tok = self.current()
        if tok.kind == VAR:
            return self.parse_variable_definition()
        if tok.kind == DEF:
            return self.parse_function_definition()
        raise ParseError.unexpected(tok, "'var'", "'def'")

    def parse_variable_definition(self) -> VariableDefinition:
        """`var <identifier> = <expr> ;`"""
        var_tok = self.match(VAR)
        name_tok = self.match(IDENT, "variable name")
        self.match(ASSIGN, "'='")
        body = self.parse_body()
        return VariableDefinition(name_tok.value, body, var_tok.location)

    def parse_function_definition(self) -> FunctionDefinition:
        """`def <identifier> ( <params> ) = <expr> ;`"""
        def_tok = self.match(DEF)
        name_tok = self.match(IDENT, "function name")
        parameters = self.parse_parameters()
        self.match(ASSIGN, "'='")
        body = self.parse_body()
        return FunctionDefinition(name_tok.value, parameters, body, def_tok.location)

    def parse_parameters(self) -> tuple[str, ...]:
        """`( <identifier>, ... )`, possibly empty, no trailing comma."""
        self.match(LPAREN, "'('")
        params: list[str] = []
        if self.current().kind == RPAREN:
            self.advance()
            return ()

        params.append(self.match(IDENT, "parameter name", "')'").value)
        while self.current().kind != RPAREN:
            if self.current().kind != COMMA:
                raise ParseError.unexpected(self.current(), "','", "')'")
            self.advance()
            params.append(self.match(IDENT, "parameter name").value)
        self.advance()
        return tuple(params)

    def parse_body(self) -> Expr:
        """Parse a definition body and its terminating `;`."""
        body, self.position = self.expression_parser.parse_at(self.tokens, self.position)
        self.match(SEMI, "';'", "infix operator")
        return body


def parse_program(
    tokens: Sequence[Token], expression_parser: ExpressionParser | None = None
) -> Program:
    """Parses a whole token stream into its list of definitions."""
    return ProgramParser(tokens, expression_parser).parse_program()


def parse_program_source(source: str, strategy: str = DEFAULT_STRATEGY) -> Program:
    """Tokenizes and parses a whole program."""
    return parse_program(tokenize(source), get_expression_parser(strategy))


__all__ = ["ProgramParser", "parse_program", "parse_program_source"]
