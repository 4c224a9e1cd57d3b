"""
Translates arith AST nodes back into arith source text.

This module defines the `SourceEmitter` class, which prints expressions and
definitions as source that tokenizes and parses back into an equal tree.

Behavior:
    - Inserts only the parentheses needed to preserve precedence and associativity.
    - Prints unary minus in its tree form, `0 - x`.
    - Prints integral literals without a fractional part and never uses exponent notation.
    - Maintains a line buffer for definitions, retrieved with `get_output()`.

Raises:
    - `ValueError`: For literals that have no source spelling (negative, infinite, NaN).
    - `NotImplementedError`: If a node kind has no emitter.
"""

import math
from decimal import Decimal

from arith.arith_ast import (
    BinaryOp,
    Definition,
    Expr,
    FunctionCall,
    FunctionDefinition,
    NumberLiteral,
    Variable,
    VariableDefinition,
)
from arith.arith_constants import infix_operators

ATOM_PRECEDENCE = math.inf


class SourceEmitter:
    """Emits arith source from AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted definitions.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_number(self, node: NumberLiteral) -> str:
        """Positional decimal spelling; integral values drop the fraction."""
        value = float(node.value)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Number literal has no source form: {node.value!r}")
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")

    def emit_variable(self, node: Variable) -> str:
        return node.name

    def emit_call(self, node: FunctionCall) -> str:
        args = ", ".join(self.emit_expr(arg) for arg in node.arguments)
        return f"{node.name}({args})"

    def emit_binary(self, node: BinaryOp) -> str:
        """Emits `lhs op rhs`, parenthesizing an operand only when needed."""
        op = infix_operators[node.operator]
        left = self.emit_expr(node.lhs)
        right = self.emit_expr(node.rhs)

        lhs_prec = self.precedence(node.lhs)
        if lhs_prec < op.precedence or (
            lhs_prec == op.precedence and op.associativity == "right"
        ):
            left = f"({left})"

        rhs_prec = self.precedence(node.rhs)
        if rhs_prec < op.precedence or (
            rhs_prec == op.precedence and op.associativity == "left"
        ):
            right = f"({right})"

        return f"{left} {node.operator} {right}"

    @staticmethod
    def precedence(node: Expr) -> float:
        """Binding strength of a node; leaves and calls bind tightest."""
        if isinstance(node, BinaryOp):
            return infix_operators[node.operator].precedence
        return ATOM_PRECEDENCE

    def emit_expr(self, node: Expr) -> str:
        """Emits one expression, dispatching on its variant."""
        emitters = {
            NumberLiteral.kind: self.emit_number,
            Variable.kind: self.emit_variable,
            FunctionCall.kind: self.emit_call,
            BinaryOp.kind: self.emit_binary,
        }
        emitter = emitters.get(getattr(node, "kind", None))
        if emitter is None:
            raise NotImplementedError(f"No emitter for node: {node!r}")
        return emitter(node)  # type: ignore[operator]

    def emit_definition(self, node: Definition) -> None:
        """Appends one `var` or `def` line to the output buffer."""
        if isinstance(node, VariableDefinition):
            self.lines.append(f"var {node.name} = {self.emit_expr(node.body)};")
        elif isinstance(node, FunctionDefinition):
            params = ", ".join(node.parameters)
            self.lines.append(f"def {node.name}({params}) = {self.emit_expr(node.body)};")
        else:
            raise NotImplementedError(f"No emitter for definition: {node!r}")

    def emit_program(self, program: list[Definition]) -> str:
        """Emits every definition, one per line."""
        for definition in program:
            self.emit_definition(definition)
        return self.get_output()


def to_source(node: Expr) -> str:
    """Shorthand for emitting a single expression."""
    return SourceEmitter().emit_expr(node)


__all__ = ["SourceEmitter", "to_source"]
