"""
Expression tree node definitions.

The evaluator computes values inline during the descent and never builds a
tree. These nodes back the tree-building Parser, for callers that want to
evaluate one expression many times with different bindings or render it back
to text. Nodes follow the Visitor pattern.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol


class ASTVisitor(Protocol):
    """
    Visitor protocol for traversing expression trees.

    Implementations provide evaluation, string rendering, etc.
    """

    def visit_number(self, node: "Number") -> Any:
        ...

    def visit_constant(self, node: "Constant") -> Any:
        ...

    def visit_unary_op(self, node: "UnaryOp") -> Any:
        ...

    def visit_binary_op(self, node: "BinaryOp") -> Any:
        ...

    def visit_function_call(self, node: "FunctionCall") -> Any:
        ...


class ASTNode(ABC):
    """Base class for all expression tree nodes."""

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor for traversal."""
        pass

    @abstractmethod
    def __repr__(self) -> str:
        pass


# Leaf Nodes


class Number(ASTNode):
    """
    Numeric literal.

    Examples: 42, 3.14, 1e-10
    """

    def __init__(self, value: float | int):
        self.value = float(value)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_number(self)

    def __repr__(self) -> str:
        return f"Number({self.value})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value


class Constant(ASTNode):
    """
    Reference to a named constant, resolved when the tree is evaluated.

    Examples: pi, e, phi
    """

    def __init__(self, name: str):
        self.name = name

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_constant(self)

    def __repr__(self) -> str:
        return f"Constant('{self.name}')"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Constant) and self.name == other.name


# Composite Nodes


class UnaryOp(ASTNode):
    """
    Unary sign.

    Operators: -, +
    """

    def __init__(self, op: str, operand: ASTNode):
        self.op = op
        self.operand = operand

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary_op(self)

    def __repr__(self) -> str:
        return f"UnaryOp('{self.op}', {self.operand!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, UnaryOp)
            and self.op == other.op
            and self.operand == other.operand
        )


class BinaryOp(ASTNode):
    """
    Binary operation.

    Operators: +, -, *, /, %, ^
    """

    def __init__(self, left: ASTNode, op: str, right: ASTNode):
        self.left = left
        self.op = op
        self.right = right

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)

    def __repr__(self) -> str:
        return f"BinaryOp({self.left!r}, '{self.op}', {self.right!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BinaryOp)
            and self.left == other.left
            and self.op == other.op
            and self.right == other.right
        )


class FunctionCall(ASTNode):
    """
    Call of a registered unary function.

    Examples: sin(x), sqrt(2)
    """

    def __init__(self, name: str, arg: ASTNode):
        self.name = name
        self.arg = arg

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_call(self)

    def __repr__(self) -> str:
        return f"FunctionCall('{self.name}', {self.arg!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FunctionCall)
            and self.name == other.name
            and self.arg == other.arg
        )
