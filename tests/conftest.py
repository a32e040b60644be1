"""
Shared pytest fixtures for the calculator tests.

This module provides:
- Evaluator and context fixtures with fresh, independent tables
- A settings fixture that clears the cached settings around each use
- Helpers for asserting parse failures
"""

import logging

import pytest
from typing import Type

from advcalc.core.config import get_settings
from advcalc.core.errors import CalculatorError
from advcalc.parser import Context, Evaluator, Parser


@pytest.fixture
def context() -> Context:
    """A fresh standard context."""
    return Context.standard()


@pytest.fixture
def evaluator(context) -> Evaluator:
    """Evaluator over the fresh standard context, strict about trailing input."""
    return Evaluator(context, require_full_input=True, max_depth=100)


@pytest.fixture
def parser() -> Parser:
    """Tree-building parser."""
    return Parser(require_full_input=True, max_depth=100)


@pytest.fixture
def clean_settings(monkeypatch):
    """Clear cached settings before and after the test so env changes apply."""
    for name in ("ADVCALC_MAX_DEPTH", "ADVCALC_REQUIRE_FULL_INPUT", "ADVCALC_CONTEXT_FILE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after setup_logging() runs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def assert_fails(evaluator):
    """Helper to assert that evaluating an expression raises a given error."""
    def _assert_fails(
        expression: str,
        error_class: Type[CalculatorError],
        message: str | None = None,
    ) -> CalculatorError:
        """
        Assert that evaluation raises error_class.

        Args:
            expression: The expression to evaluate
            error_class: Expected exception class
            message: Substring expected in the error message (optional)

        Returns:
            The raised exception
        """
        with pytest.raises(error_class) as exc_info:
            evaluator.evaluate(expression)

        if message:
            assert message in str(exc_info.value), (
                f"Expected '{message}' in '{exc_info.value}'"
            )

        return exc_info.value

    return _assert_fails


pytestmark = [
    pytest.mark.filterwarnings("ignore::DeprecationWarning"),
]
