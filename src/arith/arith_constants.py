"""
Shared token and operator tables for the arith front end.

Every table the lexer and both expression parsers consult lives here so the
two parsing strategies cannot drift apart on what an operator means.

Exports:
    - NUMBER, IDENT, VAR, DEF, EOF: non-operator token kinds
    - keywords: lexemes lexed as keyword tokens instead of identifiers
    - infix_operators: precedence/associativity table for binary operators
    - UNARY_MINUS, UNARY_PRECEDENCE, GROUP_PRECEDENCE: shunting-yard markers
    - MAX_NESTING_DEPTH: bracket nesting limit shared by both parsers
"""

import math
from typing import Literal, NamedTuple

NUMBER = "number"
IDENT = "identifier"
VAR = "var"
DEF = "def"
EOF = "EOF"

LPAREN = "("
RPAREN = ")"
COMMA = ","
SEMI = ";"
ASSIGN = "="

keywords: frozenset[str] = frozenset({VAR, DEF})

Associativity = Literal["left", "right"]


class OperatorInfo(NamedTuple):
    kind: str
    precedence: float
    associativity: Associativity


infix_operators: dict[str, OperatorInfo] = {
    "+": OperatorInfo("+", 1, "left"),
    "-": OperatorInfo("-", 1, "left"),
    "*": OperatorInfo("*", 2, "left"),
    "/": OperatorInfo("/", 2, "left"),
    "%": OperatorInfo("%", 2, "left"),
    "^": OperatorInfo("^", 3, "right"),
}

additive_operators = ("+", "-")
multiplicative_operators = ("*", "/", "%")
exponential_operator = "^"
prefix_operators = ("+", "-")

# Synthetic operator-stack entries used by the shunting-yard parser.
UNARY_MINUS = "unary -"
FUNCTION_CALL = "function call"
UNARY_PRECEDENCE = math.inf
GROUP_PRECEDENCE = -math.inf

# Deepest allowed nesting of `(` groups and call argument lists.
MAX_NESTING_DEPTH = 100

__all__ = [
    "ASSIGN",
    "COMMA",
    "DEF",
    "EOF",
    "FUNCTION_CALL",
    "GROUP_PRECEDENCE",
    "IDENT",
    "LPAREN",
    "MAX_NESTING_DEPTH",
    "NUMBER",
    "OperatorInfo",
    "RPAREN",
    "SEMI",
    "UNARY_MINUS",
    "UNARY_PRECEDENCE",
    "VAR",
    "additive_operators",
    "exponential_operator",
    "infix_operators",
    "keywords",
    "multiplicative_operators",
    "prefix_operators",
]
