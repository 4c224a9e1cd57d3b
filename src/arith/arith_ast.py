"""
Defines the abstract syntax tree (AST) produced by every arith parser.

Expression variants (closed set, see `Expr`):
    NumberLiteral:  a numeric literal (`value: float`)
    Variable:       a bare identifier reference
    FunctionCall:   `name(arg, ...)` with zero or more arguments
    BinaryOp:       `lhs <op> rhs` for one of `+ - * / % ^`

Program-level variants (closed set, see `Definition`):
    VariableDefinition:  `var name = body;`
    FunctionDefinition:  `def name(p, ...) = body;`

Unary minus has no node of its own; it is represented as `BinaryOp("-", 0, x)`.

Nodes are frozen dataclasses and own their children exclusively. Each node may
carry the `(line, col)` of the token it was built from. The location is
informational only: it is left out of equality so two trees compare equal
when their shape and payloads match, wherever their source text came from.

Serialization:
    `node.to_dict()` returns an `ASTDict` suitable for JSON output;
    `ast_from_dict()` rebuilds the node.
"""

from dataclasses import dataclass, field
from typing import ClassVar, TypedDict, Union

Location = tuple[int, int]


class ASTDict(TypedDict, total=False):
    """
    Serialized form of an AST node.

    Fields:
        kind (str): The variant tag (e.g. "binaryOp", "functionCall").
        value (float): Literal value of a numberLiteral.
        name (str): Variable, function, or definition name.
        operator (str): Operator character of a binaryOp.
        lhs (ASTDict): Left operand of a binaryOp.
        rhs (ASTDict): Right operand of a binaryOp.
        arguments (list[ASTDict]): Call arguments in source order.
        parameters (list[str]): Parameter names of a functionDefinition.
        body (ASTDict): Body expression of a definition.
        line (int | None): Source line of the originating token.
        col (int | None): Source column of the originating token.
    """

    kind: str
    value: float
    name: str
    operator: str
    lhs: "ASTDict"
    rhs: "ASTDict"
    arguments: list["ASTDict"]
    parameters: list[str]
    body: "ASTDict"
    line: int | None
    col: int | None


def _with_location(data: ASTDict, location: Location | None) -> ASTDict:
    data["line"], data["col"] = location if location is not None else (None, None)
    return data


@dataclass(frozen=True)
class NumberLiteral:
    kind: ClassVar[str] = "numberLiteral"

    value: float
    location: Location | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> ASTDict:
        return _with_location({"kind": self.kind, "value": self.value}, self.location)


@dataclass(frozen=True)
class Variable:
    kind: ClassVar[str] = "variable"

    name: str
    location: Location | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> ASTDict:
        return _with_location({"kind": self.kind, "name": self.name}, self.location)


@dataclass(frozen=True)
class FunctionCall:
    kind: ClassVar[str] = "functionCall"

    name: str
    arguments: tuple["Expr", ...] = ()
    location: Location | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the tree stays immutable.
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def to_dict(self) -> ASTDict:
        return _with_location(
            {
                "kind": self.kind,
                "name": self.name,
                "arguments": [arg.to_dict() for arg in self.arguments],
            },
            self.location,
        )


@dataclass(frozen=True)
class BinaryOp:
    kind: ClassVar[str] = "binaryOp"

    operator: str
    lhs: "Expr"
    rhs: "Expr"
    location: Location | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> ASTDict:
        return _with_location(
            {
                "kind": self.kind,
                "operator": self.operator,
                "lhs": self.lhs.to_dict(),
                "rhs": self.rhs.to_dict(),
            },
            self.location,
        )


Expr = Union[NumberLiteral, Variable, FunctionCall, BinaryOp]


def negate(operand: Expr, location: Location | None = None) -> BinaryOp:
    """Builds the tree for unary minus: `0 - operand`."""
    return BinaryOp("-", NumberLiteral(0.0, location), operand, location)


@dataclass(frozen=True)
class VariableDefinition:
    kind: ClassVar[str] = "variableDefinition"

    name: str
    body: Expr
    location: Location | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> ASTDict:
        return _with_location(
            {
                "kind": self.kind,
                "name": self.name,
                "body": self.body.to_dict(),
            },
            self.location,
        )


@dataclass(frozen=True)
class FunctionDefinition:
    kind: ClassVar[str] = "functionDefinition"

    name: str
    parameters: tuple[str, ...]
    body: Expr
    location: Location | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def to_dict(self) -> ASTDict:
        return _with_location(
            {
                "kind": self.kind,
                "name": self.name,
                "parameters": list(self.parameters),
                "body": self.body.to_dict(),
            },
            self.location,
        )


Definition = Union[VariableDefinition, FunctionDefinition]
Program = list[Definition]


def ast_from_dict(data: ASTDict) -> Expr | Definition:
    """Rebuilds a node from its `to_dict()` form.

    Raises:
        ValueError: If `kind` is not one of the known variants.
    """
    line, col = data.get("line"), data.get("col")
    location = (line, col) if line is not None and col is not None else None
    kind = data.get("kind")

    if kind == NumberLiteral.kind:
        return NumberLiteral(float(data["value"]), location)
    if kind == Variable.kind:
        return Variable(data["name"], location)
    if kind == FunctionCall.kind:
        args = [_expr_from_dict(arg) for arg in data.get("arguments", [])]
        return FunctionCall(data["name"], tuple(args), location)
    if kind == BinaryOp.kind:
        return BinaryOp(
            data["operator"],
            _expr_from_dict(data["lhs"]),
            _expr_from_dict(data["rhs"]),
            location,
        )
    if kind == VariableDefinition.kind:
        return VariableDefinition(data["name"], _expr_from_dict(data["body"]), location)
    if kind == FunctionDefinition.kind:
        return FunctionDefinition(
            data["name"],
            tuple(data.get("parameters", [])),
            _expr_from_dict(data["body"]),
            location,
        )
    raise ValueError(f"Unknown AST node kind: {kind!r}")


def _expr_from_dict(data: ASTDict) -> Expr:
    """Like `ast_from_dict`, but rejects definitions where an expression belongs."""
    node = ast_from_dict(data)
    if isinstance(node, (VariableDefinition, FunctionDefinition)):
        raise ValueError(f"Expected an expression node, got {node.kind!r}")
    return node


__all__ = [
    "ASTDict",
    "BinaryOp",
    "Definition",
    "Expr",
    "FunctionCall",
    "FunctionDefinition",
    "Location",
    "NumberLiteral",
    "Program",
    "Variable",
    "VariableDefinition",
    "ast_from_dict",
    "negate",
]
