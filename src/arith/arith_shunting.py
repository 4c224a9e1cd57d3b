"""
arith Shunting-Yard Parser

Builds the same expression AST as the recursive-descent parser, but with an
explicit operator-precedence algorithm driven by the operator table in
`arith_constants` instead of one function per precedence level.

State is three stacks owned by a single call:

- operator stack: pending infix operators, unary minus markers, `(` markers
  and function-call markers;
- output stack: completed subtrees;
- arity stack: one argument counter per open function-call argument list,
  innermost on top;

plus a flag telling whether the next token must start an operand (prefix
position) or continue one (infix position).

Unary minus gets infinite precedence so it always reduces before any infix
operator waiting beneath it. `(` and call markers get negative infinite
precedence and are only ever removed by the matching `)`. A unary minus
pushed directly onto another one from the same prefix run cancels it, which
makes an even run of `-` a no-op exactly as in the recursive-descent parser.

Open `(` groups and call markers are counted; the `(` that would open more
than `MAX_NESTING_DEPTH` of them is rejected with the same error the
recursive-descent parser raises for it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from arith.arith_ast import BinaryOp, Expr, FunctionCall, NumberLiteral, Variable, negate
from arith.arith_constants import (
    COMMA,
    EOF,
    FUNCTION_CALL,
    GROUP_PRECEDENCE,
    IDENT,
    LPAREN,
    MAX_NESTING_DEPTH,
    NUMBER,
    RPAREN,
    UNARY_MINUS,
    UNARY_PRECEDENCE,
    infix_operators,
)
from arith.arith_errors import InternalParserError, ParseError
from arith.arith_lexer import Token

GROUP_KINDS = (LPAREN, FUNCTION_CALL)


class PendingOperator(NamedTuple):
    """An operator-stack entry.

    `open_index` is the index of the `(` token for call markers and -1 otherwise.
    """

    kind: str
    precedence: float
    associativity: str
    token: Token
    open_index: int = -1


def shunting_yard(tokens: Sequence[Token], start: int = 0) -> tuple[Expr, int]:
    """Parse the longest expression beginning at `tokens[start]`.

    Returns:
        The expression and the index of the first token that is not part of it
        (the `EOF` token for a stream holding a single expression).

    Raises:
        ParseError: On malformed input.
        InternalParserError: If the stacks end up in a shape the algorithm cannot produce.
    """
    operator_stack: list[PendingOperator] = []
    output_stack: list[Expr] = []
    arity_stack: list[int] = []
    depth = 0

    def token_at(index: int) -> Token:
        """Token at `index`, or a synthetic `EOF` past the end."""
        return tokens[index] if index < len(tokens) else Token(EOF, "")

    def top() -> PendingOperator | None:
        """Operator-stack top, or None when empty."""
        return operator_stack[-1] if operator_stack else None

    def pop_operator() -> None:
        """Reduces the top operator into a subtree on the output stack."""
        op = operator_stack.pop()
        location = op.token.location

        if op.kind in infix_operators:
            if len(output_stack) < 2:
                raise ParseError("Operator at end of input", op.token, ("operand",))
            rhs = output_stack.pop()
            lhs = output_stack.pop()
            output_stack.append(BinaryOp(op.kind, lhs, rhs, location))
        elif op.kind == UNARY_MINUS:
            if not output_stack:
                raise ParseError("Operator at end of input", op.token, ("operand",))
            output_stack.append(negate(output_stack.pop(), location))
        elif op.kind in GROUP_KINDS:
            raise ParseError("Unclosed opening parenthesis", op.token, ("')'",))
        else:
            raise InternalParserError(f"Unknown operator on stack: {op.kind!r}")  # pragma: no cover

    def pop_until_group() -> None:
        """Reduces operators down to the innermost `(` or call marker."""
        while operator_stack and operator_stack[-1].kind not in GROUP_KINDS:
            pop_operator()

    def close_call(op: PendingOperator) -> None:
        """Replaces the call's arguments on the output stack with the call node."""
        arity = arity_stack.pop()
        if len(output_stack) < arity:
            raise InternalParserError(
                f"Call to {op.token.value!r} expects {arity} operands, output stack holds {len(output_stack)}"
            )
        args = output_stack[len(output_stack) - arity :]
        del output_stack[len(output_stack) - arity :]
        output_stack.append(FunctionCall(op.token.value, tuple(args), op.token.location))

    def push_group(entry: PendingOperator, paren: Token) -> None:
        """Pushes a `(` or call marker, refusing to nest deeper than MAX_NESTING_DEPTH."""
        nonlocal depth
        if depth >= MAX_NESTING_DEPTH:
            raise ParseError.too_deep(paren, MAX_NESTING_DEPTH)
        depth += 1
        operator_stack.append(entry)

    expecting_prefix = True
    i = start
    while True:
        tok = token_at(i)

        if expecting_prefix:
            if tok.kind == NUMBER:
                output_stack.append(NumberLiteral(tok.value, tok.location))
                expecting_prefix = False
            elif tok.kind == "+":
                pass
            elif tok.kind == "-":
                current = top()
                if current is not None and current.kind == UNARY_MINUS:
                    operator_stack.pop()
                else:
                    operator_stack.append(
                        PendingOperator(UNARY_MINUS, UNARY_PRECEDENCE, "right", tok)
                    )
            elif tok.kind == LPAREN:
                push_group(PendingOperator(LPAREN, GROUP_PRECEDENCE, "n/a", tok), tok)
            elif tok.kind == IDENT:
                if token_at(i + 1).kind == LPAREN:
                    push_group(
                        PendingOperator(FUNCTION_CALL, GROUP_PRECEDENCE, "n/a", tok, i + 1),
                        token_at(i + 1),
                    )
                    arity_stack.append(1)
                    # The `(` belongs to the call marker.
                    i += 1
                else:
                    output_stack.append(Variable(tok.value, tok.location))
                    expecting_prefix = False
            elif tok.kind == RPAREN:
                current = top()
                if current is None or current.kind != FUNCTION_CALL or i != current.open_index + 1:
                    raise ParseError.unexpected(tok, "expression")
                operator_stack.pop()
                arity_stack.pop()
                depth -= 1
                output_stack.append(FunctionCall(current.token.value, (), current.token.location))
                expecting_prefix = False
            elif tok.kind == EOF:
                break
            else:
                raise ParseError.unexpected(tok, "expression")
        else:
            if tok.kind in infix_operators:
                op = infix_operators[tok.kind]
                while operator_stack and (
                    operator_stack[-1].precedence > op.precedence
                    or (
                        operator_stack[-1].precedence == op.precedence
                        and op.associativity == "left"
                    )
                ):
                    pop_operator()
                operator_stack.append(
                    PendingOperator(op.kind, op.precedence, op.associativity, tok)
                )
                expecting_prefix = True
            elif tok.kind == COMMA:
                pop_until_group()
                current = top()
                if current is None or current.kind != FUNCTION_CALL:
                    raise ParseError("',' outside of a function call", tok, ("')'", "infix operator"))
                arity_stack[-1] += 1
                expecting_prefix = True
            elif tok.kind == RPAREN:
                pop_until_group()
                if not operator_stack:
                    raise ParseError("Unmatched closing parenthesis", tok, ("infix operator",))
                op = operator_stack.pop()
                depth -= 1
                if op.kind == FUNCTION_CALL:
                    close_call(op)
            else:
                break
        i += 1

    for pending in reversed(operator_stack):
        if pending.kind in GROUP_KINDS:
            raise ParseError("Unclosed opening parenthesis", pending.token, ("')'",))
    if expecting_prefix and operator_stack:
        raise ParseError("Operator at end of input", operator_stack[-1].token, ("operand",))
    while operator_stack:
        pop_operator()

    if not output_stack:
        raise ParseError("Empty expression", tok, ("expression",))
    if len(output_stack) > 1:
        raise ParseError(
            "Multiple consecutive expressions without infix operator in between", tok
        )
    return output_stack[0], i


def parse_expression(tokens: Sequence[Token]) -> Expr:
    """Parse a complete token stream (ending in `EOF`) into an expression AST."""
    expression, stop = shunting_yard(tokens)
    tok = tokens[stop] if stop < len(tokens) else Token(EOF, "")
    if tok.kind != EOF:
        raise ParseError.unexpected(tok, "','", "')'", "infix operator")
    return expression


__all__ = ["PendingOperator", "parse_expression", "shunting_yard"]
