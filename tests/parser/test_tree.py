"""Tests for the tree-building Parser and its visitors."""

import math
import pytest

from advcalc.core.errors import (
    MismatchedParenthesesError,
    NestingTooDeepError,
    UnknownFunctionError,
    UnknownIdentifierError,
)
from advcalc.parser import (
    BinaryOp,
    Constant,
    Context,
    EvalVisitor,
    Evaluator,
    FunctionCall,
    Number,
    StringVisitor,
    UnaryOp,
    parse,
    to_string,
)


class TestTreeShape:
    def test_number(self, parser):
        assert parser.parse("3.5") == Number(3.5)

    def test_left_associative_sum(self, parser):
        assert parser.parse("10-2-3") == BinaryOp(
            BinaryOp(Number(10), "-", Number(2)), "-", Number(3)
        )

    def test_right_associative_power(self, parser):
        assert parser.parse("2^3^2") == BinaryOp(
            Number(2), "^", BinaryOp(Number(3), "^", Number(2))
        )

    def test_unary_wraps_power(self, parser):
        assert parser.parse("-2^2") == UnaryOp("-", BinaryOp(Number(2), "^", Number(2)))

    def test_call_and_constant(self, parser):
        assert parser.parse("sin(pi)") == FunctionCall("sin", Constant("pi"))

    def test_unknown_names_parse(self, parser):
        """Test that names are resolved only when the tree is evaluated."""
        assert parser.parse("foo(x)") == FunctionCall("foo", Constant("x"))

    def test_parse_errors_match_evaluator(self, parser):
        with pytest.raises(MismatchedParenthesesError):
            parser.parse("(1+2")

    def test_depth_limit_applies(self, parser):
        with pytest.raises(NestingTooDeepError):
            parser.parse("(" * 150 + "1" + ")" * 150)

    def test_repr(self):
        node = BinaryOp(Number(1), "+", FunctionCall("f", UnaryOp("-", Constant("x"))))
        assert repr(node) == (
            "BinaryOp(Number(1.0), '+', FunctionCall('f', UnaryOp('-', Constant('x'))))"
        )


class TestEvalVisitor:
    @pytest.mark.parametrize(
        "expression",
        ["2+3*4", "(2+3)*4", "2^3^2", "-2^2", "10-2-3", "sqrt(144)", "e^2", "7 % 3 * 2"],
    )
    def test_matches_inline_evaluation(self, parser, expression):
        tree = parser.parse(expression)
        assert EvalVisitor().evaluate(tree) == Evaluator().evaluate(expression)

    def test_bindings_vary_per_evaluation(self, parser):
        tree = parser.parse("x^2 + 1")
        context = Context.standard()
        assert EvalVisitor(context, {"x": 3.0}).evaluate(tree) == 10.0
        assert EvalVisitor(context, {"x": -1.0}).evaluate(tree) == 2.0

    def test_bindings_shadow_constants(self, parser):
        tree = parser.parse("pi")
        assert EvalVisitor(bindings={"pi": 3.0}).evaluate(tree) == 3.0

    def test_unknown_identifier(self, parser):
        with pytest.raises(UnknownIdentifierError) as exc_info:
            EvalVisitor().evaluate(parser.parse("y + 1"))
        assert exc_info.value.position is None
        assert str(exc_info.value) == "Unknown identifier: y"

    def test_unknown_function(self, parser):
        with pytest.raises(UnknownFunctionError):
            EvalVisitor().evaluate(parser.parse("foo(1)"))

    def test_late_registration(self, parser):
        tree = parser.parse("half(k)")
        context = Context.standard()
        context.register_function("half", lambda v: v / 2)
        context.register_constant("k", 9.0)
        assert EvalVisitor(context).evaluate(tree) == 4.5


class TestStringVisitor:
    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("1+2*3", "1 + 2 * 3"),
            ("(1+2)*3", "(1 + 2) * 3"),
            ("10-(2-3)", "10 - (2 - 3)"),
            ("10-2-3", "10 - 2 - 3"),
            ("2^3^2", "2^3^2"),
            ("(2^3)^2", "(2^3)^2"),
            ("(-2)^2", "(-2)^2"),
            ("-2^2", "-2^2"),
            ("2^-1", "2^-1"),
            ("2^(1+1)", "2^(1 + 1)"),
            ("-(1+2)", "-(1 + 2)"),
            ("sin(pi/2)", "sin(pi / 2)"),
            ("0.5", "0.5"),
            ("1e999 * 2", "1e999 * 2"),
        ],
    )
    def test_render(self, parser, expression, expected):
        assert to_string(parser.parse(expression)) == expected

    @pytest.mark.parametrize(
        "expression",
        [
            "1-(2-3)-4",
            "2^-(1+1)",
            "-(2*3)^2",
            "ln(e^2)/log(100) % 3",
            "--1 - -2",
            "1e999 + 1",
            "2^-1e999",
        ],
    )
    def test_rendered_text_reparses_to_same_tree(self, parser, expression):
        tree = parser.parse(expression)
        assert parser.parse(StringVisitor().render(tree)) == tree

    def test_module_level_parse(self):
        assert to_string(parse("1 +2")) == "1 + 2"

    def test_negative_number_node(self):
        node = BinaryOp(Number(-2), "^", Number(2))
        assert to_string(node) == "(-2)^2"
        assert EvalVisitor().evaluate(node) == 4.0
        assert math.isclose(Evaluator().evaluate(to_string(node)), 4.0)
