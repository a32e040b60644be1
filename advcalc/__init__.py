"""Advanced Calculator - infix expression evaluation.

Main package containing all submodules:
- advcalc.parser: Recursive descent evaluator, contexts and expression trees
- advcalc.math: Double-precision function library with domain checks
- advcalc.core: Configuration, logging and exceptions
- advcalc.cli: Interactive REPL and one-shot command line
"""

__version__ = "0.1.0"

from .core.errors import CalculatorError, MathDomainError, ParseError
from .models import EvaluationResult
from .parser import Context, Evaluator, Parser, evaluate

__all__ = [
    "CalculatorError",
    "MathDomainError",
    "ParseError",
    "EvaluationResult",
    "Context",
    "Evaluator",
    "Parser",
    "evaluate",
]
