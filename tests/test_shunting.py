import pytest

from arith.arith_ast import BinaryOp, Expr
from arith.arith_constants import MAX_NESTING_DEPTH
from arith.arith_errors import ParseError
from arith.arith_lexer import tokenize
from arith.arith_shunting import parse_expression, shunting_yard
from helpers import binop, call, make_tokens, neg, num, var


def parse(source: str) -> Expr:
    return parse_expression(tokenize(source))


def test_precedence() -> None:
    assert parse("3 + 4 * 2") == binop("+", num(3), binop("*", num(4), num(2)))


def test_right_associative_exponent() -> None:
    assert parse("2 ^ 3 ^ 2") == binop("^", num(2), binop("^", num(3), num(2)))


def test_mixed_precedence_chain() -> None:
    assert parse("1 - 2 * 3 ^ 2 / 4 + 5") == binop(
        "+",
        binop("-", num(1), binop("/", binop("*", num(2), binop("^", num(3), num(2))), num(4))),
        num(5),
    )


def test_unary_minus_markers_cancel() -> None:
    assert parse("- - 5") == num(5)
    assert parse("-5") == neg(num(5))
    assert parse("- + - - 5") == neg(num(5))
    assert parse("3 - - 5") == binop("-", num(3), neg(num(5)))


def test_unary_minus_reduces_before_infix_operator() -> None:
    assert parse("-x ^ 2") == binop("^", neg(var("x")), num(2))
    assert parse("2 ^ -3 ^ 2") == binop("^", num(2), binop("^", neg(num(3)), num(2)))


def test_unary_minus_before_group_is_not_cancelled_by_inner_minus() -> None:
    assert parse("-(-x)") == neg(neg(var("x")))


def test_zero_argument_call() -> None:
    assert parse("f()") == call("f")
    assert parse("f() + g()") == binop("+", call("f"), call("g"))


def test_nested_call_arities_are_independent() -> None:
    assert parse("g(f(1), 2)") == call("g", call("f", num(1)), num(2))
    assert parse("h(a, f(), g(1, 2, 3))") == call(
        "h", var("a"), call("f"), call("g", num(1), num(2), num(3))
    )


def test_call_arguments_keep_source_order() -> None:
    assert parse("f(1, 2+3)") == call("f", num(1), binop("+", num(2), num(3)))


def test_shunting_yard_reports_stop_index() -> None:
    tokens = tokenize("var x = (1 + 2) * y; var z = 1;")
    expr, stop = shunting_yard(tokens, 3)
    assert expr == binop("*", binop("+", num(1), num(2)), var("y"))
    assert tokens[stop].kind == ";"
    assert stop == 10


def test_token_count_form_without_eof() -> None:
    tokens = make_tokens(("number", 1.0), ("+", "+"), ("number", 2.0))[:-1]
    assert parse_expression(tokens) == binop("+", num(1), num(2))


@pytest.mark.parametrize(
    "source,message",
    [
        ("", "Empty expression"),
        ("+", "Empty expression"),
        ("1 +", "Operator at end of input"),
        ("-", "Operator at end of input"),
        ("(1 +", "Unclosed opening parenthesis"),
        ("(1", "Unclosed opening parenthesis"),
        ("f(1, 2", "Unclosed opening parenthesis"),
        ("1 )", "Unmatched closing parenthesis"),
        ("1, 2", "',' outside of a function call"),
        ("(1, 2)", "',' outside of a function call"),
        ("1 2", "Unexpected number 2 token; expected ',', ')' or infix operator"),
        ("f(1,)", "Unexpected ')' token; expected expression"),
        ("f(+)", "Unexpected ')' token; expected expression"),
        ("()", "Unexpected ')' token; expected expression"),
        ("* 2", "Unexpected '*' token; expected expression"),
        ("def", "Unexpected 'def' token; expected expression"),
    ],
)  # type: ignore[misc]
def test_errors(source: str, message: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse(source)
    assert excinfo.value.message == message


def test_unclosed_parenthesis_points_at_innermost_open() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse("(1 + f(2")
    assert excinfo.value.kind == "identifier"
    assert excinfo.value.location == (1, 6)


def test_dangling_unary_minus_points_at_its_token() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse("1 + -")
    assert excinfo.value.message == "Operator at end of input"
    assert excinfo.value.location == (1, 5)


def test_closed_groups_do_not_count_toward_nesting() -> None:
    count = MAX_NESTING_DEPTH + 50
    tree = parse(" + ".join(["f()", "(x)", "g(1, (2))"] * count))
    assert isinstance(tree, BinaryOp)
    assert tree.rhs == call("g", num(1), num(2))


def test_nesting_past_limit_points_at_call_paren() -> None:
    depth = MAX_NESTING_DEPTH + 1
    with pytest.raises(ParseError, match="nested too deeply") as excinfo:
        parse("h(" * depth + ")" * depth)
    assert excinfo.value.kind == "("
    assert excinfo.value.location == (1, 2 * depth)
