"""
Recursive descent evaluator for infix arithmetic expressions.

Precedence is encoded in the call hierarchy, lowest to highest:

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/' | '%') factor)*
    factor     := ('-' | '+') factor
                | primary ('^' factor)?
    primary    := '(' expression ')'
                | identifier '(' expression ')'
                | identifier
                | number

The power operand recurses into factor, which makes '^' right-associative
(2^3^2 == 2^(3^2)) and lets a unary sign apply to a whole power
(-2^2 == -(2^2)).

The grammar is written once in DescentParser. Evaluator computes values
inline as it descends; Parser builds an expression tree instead.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..core.config import get_settings
from ..core.errors import (
    CalculatorError,
    MismatchedParenthesesError,
    NestingTooDeepError,
    TrailingInputError,
    UnexpectedEndError,
    UnknownFunctionError,
    UnknownIdentifierError,
    describe_error,
)
from ..core.logging import get_context_logger
from ..math.standard import BINARY_OPERATORS, UNARY_OPERATORS
from ..models import EvaluationResult
from .ast import ASTNode, BinaryOp, Constant, FunctionCall, Number, UnaryOp
from .context import Context, UnaryFunction
from .cursor import Cursor

logger = get_context_logger(__name__, component="parser")

T = TypeVar("T")

SUM_OPERATORS = ("+", "-")
PRODUCT_OPERATORS = ("*", "/", "%")
SIGN_OPERATORS = ("+", "-")
POWER_OPERATOR = "^"


class DescentParser(ABC, Generic[T]):
    """
    Grammar shared by the inline evaluator and the tree builder.

    Subclasses decide what each production yields by implementing the
    number/constant/call/unary/binary hooks.
    """

    def __init__(
        self,
        context: Context | None = None,
        *,
        require_full_input: bool | None = None,
        max_depth: int | None = None,
    ):
        """
        Initialize with optional context.

        Args:
            context: Function and constant tables (defaults to a fresh
                standard context owned by this instance)
            require_full_input: Reject text left over after a complete
                expression (defaults to settings)
            max_depth: Maximum factor nesting; 0 disables the limit
                (defaults to settings)
        """
        settings = get_settings()
        self.context = context if context is not None else Context.standard()
        self.require_full_input = (
            settings.REQUIRE_FULL_INPUT if require_full_input is None else require_full_input
        )
        self.max_depth = settings.MAX_DEPTH if max_depth is None else max_depth

    def register_function(self, name: str, func: UnaryFunction) -> None:
        """Insert or replace a function binding; the last registration wins."""
        self.context.register_function(name, func)

    def register_constant(self, name: str, value: float) -> None:
        """Insert or replace a constant binding; the last registration wins."""
        self.context.register_constant(name, value)

    def _run(self, expression: str) -> T:
        """Run the full grammar over one expression with a fresh cursor."""
        cursor = Cursor(expression)
        try:
            result = self.parse_expression(cursor)
        except RecursionError:
            # Guard disabled or set above what the interpreter stack holds
            raise NestingTooDeepError(cursor.pos, self.max_depth) from None

        if self.require_full_input:
            cursor.skip_whitespace()
            if not cursor.at_end():
                if cursor.peek() == ")":
                    raise MismatchedParenthesesError(cursor.pos)
                raise TrailingInputError(cursor.peek(), cursor.pos)

        return result

    # Grammar

    def parse_expression(self, cursor: Cursor) -> T:
        """Sum level: terms joined by + and -, left-associative."""
        result = self.parse_term(cursor)

        while True:
            cursor.skip_whitespace()
            op = cursor.peek()
            if op not in SUM_OPERATORS:
                break
            cursor.advance()
            right = self.parse_term(cursor)
            result = self.binary(op, result, right)

        return result

    def parse_term(self, cursor: Cursor) -> T:
        """Product level: factors joined by *, / and %, left-associative."""
        result = self.parse_factor(cursor)

        while True:
            cursor.skip_whitespace()
            op = cursor.peek()
            if op not in PRODUCT_OPERATORS:
                break
            cursor.advance()
            right = self.parse_factor(cursor)
            result = self.binary(op, result, right)

        return result

    def parse_factor(self, cursor: Cursor) -> T:
        """Unary sign, or a primary with an optional power suffix."""
        cursor.skip_whitespace()

        if cursor.at_end():
            raise UnexpectedEndError(cursor.pos)

        cursor.depth += 1
        try:
            if self.max_depth and cursor.depth > self.max_depth:
                raise NestingTooDeepError(cursor.pos, self.max_depth)

            char = cursor.peek()
            if char in SIGN_OPERATORS:
                cursor.advance()
                return self.unary(char, self.parse_factor(cursor))

            base = self.parse_primary(cursor)

            if cursor.accept(POWER_OPERATOR):
                exponent = self.parse_factor(cursor)
                return self.binary(POWER_OPERATOR, base, exponent)

            return base
        finally:
            cursor.depth -= 1

    def parse_primary(self, cursor: Cursor) -> T:
        char = cursor.peek()

        if char == "(":
            return self.parse_group(cursor)

        if char.isascii() and char.isalpha():
            return self.parse_identifier(cursor)

        return self.number(cursor.scan_number())

    def parse_group(self, cursor: Cursor) -> T:
        cursor.advance()  # Consume (
        result = self.parse_expression(cursor)
        if not cursor.accept(")"):
            raise MismatchedParenthesesError(cursor.pos)
        return result

    def parse_identifier(self, cursor: Cursor) -> T:
        """
        Function call if the name is followed by '(', else a constant.

        The argument is parsed before the function table is consulted.
        """
        start = cursor.pos
        name = cursor.scan_identifier()

        if cursor.accept("("):
            arg = self.parse_expression(cursor)
            if not cursor.accept(")"):
                raise MismatchedParenthesesError(cursor.pos, in_call=True)
            return self.call(name, arg, start)

        return self.constant(name, start)

    # Hooks

    @abstractmethod
    def number(self, value: float) -> T:
        pass

    @abstractmethod
    def constant(self, name: str, position: int) -> T:
        pass

    @abstractmethod
    def call(self, name: str, arg: T, position: int) -> T:
        pass

    @abstractmethod
    def unary(self, op: str, operand: T) -> T:
        pass

    @abstractmethod
    def binary(self, op: str, left: T, right: T) -> T:
        pass


class Evaluator(DescentParser[float]):
    """
    Evaluate expressions in a single pass, without building a tree.

    Each call to evaluate() is independent: the cursor lives only for that
    call, and the context tables are only read while evaluating.

    Example:
        >>> Evaluator().evaluate("2 + 3 * 4")
        14.0
    """

    def evaluate(self, expression: str) -> float:
        """
        Parse and compute the value of a complete expression.

        Args:
            expression: Single-line infix expression

        Returns:
            The value as a float

        Raises:
            ParseError: For malformed input or unknown names
            MathDomainError: When a function or operator rejects its argument
        """
        try:
            value = float(self._run(expression))
        except CalculatorError as exc:
            logger.debug(
                "Evaluation failed",
                extra_data={"expression": expression, "error": describe_error(exc)},
            )
            raise

        logger.debug(
            "Evaluated expression",
            extra_data={"expression": expression, "result": value},
        )
        return value

    def try_evaluate(self, expression: str) -> EvaluationResult:
        """
        Evaluate, capturing any failure in the result instead of raising.

        Errors raised by user-registered functions (ValueError,
        ArithmeticError) are captured too.
        """
        try:
            value = self.evaluate(expression)
        except (CalculatorError, ArithmeticError, ValueError) as exc:
            return EvaluationResult.failure(expression, exc)
        return EvaluationResult(expression=expression, value=value)

    def number(self, value: float) -> float:
        return value

    def constant(self, name: str, position: int) -> float:
        value = self.context.get_constant_value(name)
        if value is None:
            raise UnknownIdentifierError(name, position)
        return value

    def call(self, name: str, arg: float, position: int) -> float:
        func = self.context.get_function(name)
        if func is None:
            raise UnknownFunctionError(name, position)
        return float(func(arg))

    def unary(self, op: str, operand: float) -> float:
        return UNARY_OPERATORS[op](operand)

    def binary(self, op: str, left: float, right: float) -> float:
        return BINARY_OPERATORS[op](left, right)


class Parser(DescentParser[ASTNode]):
    """
    Build an expression tree with the evaluator's grammar.

    Names are not resolved while parsing; unknown functions and identifiers
    are reported when the tree is evaluated with EvalVisitor.
    """

    def parse(self, expression: str) -> ASTNode:
        """
        Parse an expression string to a tree.

        Raises:
            ParseError: If expression is malformed
        """
        node = self._run(expression)
        logger.debug(
            "Parsed expression", extra_data={"expression": expression, "tree": repr(node)}
        )
        return node

    def number(self, value: float) -> ASTNode:
        return Number(value)

    def constant(self, name: str, position: int) -> ASTNode:
        return Constant(name)

    def call(self, name: str, arg: ASTNode, position: int) -> ASTNode:
        return FunctionCall(name, arg)

    def unary(self, op: str, operand: ASTNode) -> ASTNode:
        return UnaryOp(op, operand)

    def binary(self, op: str, left: ASTNode, right: ASTNode) -> ASTNode:
        return BinaryOp(left, op, right)


def evaluate(expression: str, context: Context | None = None) -> float:
    """Evaluate one expression against a context (standard by default)."""
    return Evaluator(context).evaluate(expression)


def parse(expression: str) -> ASTNode:
    """Parse one expression to a tree."""
    return Parser().parse(expression)
