"""
Numeric function library.

Double-precision arithmetic, roots, logarithms, trigonometric and hyperbolic
functions with domain validation. The evaluator dispatches operators and
named functions here.
"""

from . import standard
from .standard import BINARY_OPERATORS, CONSTANTS, FUNCTIONS, UNARY_OPERATORS

__all__ = [
    "standard",
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "FUNCTIONS",
    "CONSTANTS",
]
