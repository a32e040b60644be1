"""
Visitor implementations for expression trees.

- EvalVisitor: Evaluate a tree to a float against a context
- StringVisitor: Render a tree back to infix text with minimal parentheses
"""

import math
from typing import Any, Mapping

from ..core.errors import UnknownFunctionError, UnknownIdentifierError
from ..math.standard import BINARY_OPERATORS, UNARY_OPERATORS
from .ast import ASTNode, BinaryOp, Constant, FunctionCall, Number, UnaryOp
from .context import Context

# Binding strength used when rendering; '^' binds tighter than a unary sign
PRECEDENCE = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "%": 2,
    "unary": 3,
    "^": 4,
}
ATOM = 5


class EvalVisitor:
    """
    Evaluate an expression tree.

    Bindings shadow the context's constants, so one parsed tree can be
    evaluated repeatedly with different values:

        tree = Parser().parse("x^2 + 1")
        EvalVisitor(context, {"x": 3.0}).evaluate(tree)  # 10.0
    """

    def __init__(
        self,
        context: Context | None = None,
        bindings: Mapping[str, float] | None = None,
    ):
        self.context = context if context is not None else Context.standard()
        self.bindings = dict(bindings or {})

    def evaluate(self, node: ASTNode) -> float:
        return float(node.accept(self))

    def visit_number(self, node: Number) -> float:
        return node.value

    def visit_constant(self, node: Constant) -> float:
        if node.name in self.bindings:
            return float(self.bindings[node.name])
        value = self.context.get_constant_value(node.name)
        if value is None:
            raise UnknownIdentifierError(node.name)
        return value

    def visit_unary_op(self, node: UnaryOp) -> float:
        return UNARY_OPERATORS[node.op](node.operand.accept(self))

    def visit_binary_op(self, node: BinaryOp) -> float:
        left = node.left.accept(self)
        right = node.right.accept(self)
        return BINARY_OPERATORS[node.op](left, right)

    def visit_function_call(self, node: FunctionCall) -> float:
        arg = node.arg.accept(self)
        func = self.context.get_function(node.name)
        if func is None:
            raise UnknownFunctionError(node.name)
        return float(func(arg))


class StringVisitor:
    """
    Convert a tree to infix text that parses back to the same tree.

    Examples:
    - BinaryOp(Number(2), '+', Number(3)) → "2 + 3"
    - UnaryOp('-', BinaryOp(Number(2), '^', Number(2))) → "-2^2"
    """

    def render(self, node: ASTNode) -> str:
        return node.accept(self)

    def visit_number(self, node: Number) -> str:
        if math.isinf(node.value):
            # Overflows back to the same infinity when parsed
            return "-1e999" if node.value < 0 else "1e999"
        # Format number nicely (remove .0 for integers)
        if node.value.is_integer() and abs(node.value) < 1e16:
            return str(int(node.value))
        return repr(node.value)

    def visit_constant(self, node: Constant) -> str:
        return node.name

    def visit_unary_op(self, node: UnaryOp) -> str:
        operand_str = node.operand.accept(self)
        if self._precedence(node.operand) < PRECEDENCE["unary"]:
            operand_str = f"({operand_str})"
        return f"{node.op}{operand_str}"

    def visit_binary_op(self, node: BinaryOp) -> str:
        left_str = node.left.accept(self)
        right_str = node.right.accept(self)
        op_prec = PRECEDENCE[node.op]
        left_prec = self._precedence(node.left)
        right_prec = self._precedence(node.right)

        if node.op == "^":
            # Base must be a primary; exponent may be any factor
            if left_prec <= op_prec:
                left_str = f"({left_str})"
            if right_prec < PRECEDENCE["unary"]:
                right_str = f"({right_str})"
            return f"{left_str}^{right_str}"

        if left_prec < op_prec:
            left_str = f"({left_str})"
        if right_prec <= op_prec:
            right_str = f"({right_str})"
        return f"{left_str} {node.op} {right_str}"

    def visit_function_call(self, node: FunctionCall) -> str:
        return f"{node.name}({node.arg.accept(self)})"

    def _precedence(self, node: Any) -> int:
        """Get precedence of a node for parenthesization."""
        if isinstance(node, BinaryOp):
            return PRECEDENCE[node.op]
        if isinstance(node, UnaryOp):
            return PRECEDENCE["unary"]
        if isinstance(node, Number) and node.value < 0:
            return PRECEDENCE["unary"]
        return ATOM


def to_string(node: ASTNode) -> str:
    return StringVisitor().render(node)
