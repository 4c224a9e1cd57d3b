"""AST builders and Hypothesis strategies shared by the test modules."""

from typing import Any

from hypothesis import strategies as st

from arith.arith_ast import BinaryOp, Expr, FunctionCall, NumberLiteral, Variable
from arith.arith_constants import infix_operators, keywords
from arith.arith_lexer import Token


def make_tokens(*kinds_vals: tuple[str, Any]) -> list[Token]:
    """Builds an unpositioned token stream terminated by EOF."""
    return [Token(k, v, str(v)) for k, v in kinds_vals] + [Token("EOF", "")]


def num(value: float) -> NumberLiteral:
    return NumberLiteral(float(value))


def var(name: str) -> Variable:
    return Variable(name)


def call(name: str, *args: Expr) -> FunctionCall:
    return FunctionCall(name, args)


def binop(op: str, lhs: Expr, rhs: Expr) -> BinaryOp:
    return BinaryOp(op, lhs, rhs)


def neg(operand: Expr) -> BinaryOp:
    return BinaryOp("-", num(0), operand)


identifiers = st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,6}", fullmatch=True).filter(
    lambda name: name not in keywords
)

literals = st.one_of(
    st.integers(min_value=0, max_value=10**9).map(float),
    st.decimals(
        min_value=0, max_value=10**6, places=3, allow_nan=False, allow_infinity=False
    ).map(float),
)


def _extend(children: st.SearchStrategy[Expr]) -> st.SearchStrategy[Expr]:
    return st.one_of(
        st.builds(
            BinaryOp, st.sampled_from(sorted(infix_operators)), children, children
        ),
        st.builds(
            FunctionCall, identifiers, st.lists(children, max_size=3).map(tuple)
        ),
    )


expressions: st.SearchStrategy[Expr] = st.recursive(
    st.one_of(st.builds(NumberLiteral, literals), st.builds(Variable, identifiers)),
    _extend,
    max_leaves=12,
)

source_fragments = st.text(alphabet="0123456789.+-*/%^(),;= \nabfxy", max_size=24)
