"""
Standard double-precision function library.

Every function takes and returns floats. Functions with a restricted domain
raise MathDomainError; everything else follows IEEE semantics, so overflow
becomes an infinity and undefined results become NaN rather than exceptions.
"""

import math
from typing import Callable

from ..core.errors import MathDomainError

PI = 3.14159265358979323846
E = 2.71828182845904523536
GOLDEN_RATIO = 1.61803398874989484820


# Basic arithmetic


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> float:
    if b == 0.0:
        raise MathDomainError("Division by zero", "divide")
    return a / b


def modulo(a: float, b: float) -> float:
    """Remainder with the sign of the dividend, like C fmod."""
    if b == 0.0:
        raise MathDomainError("Modulo by zero", "modulo")
    if math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    return math.fmod(a, b)


def negate(x: float) -> float:
    return -x


# Power and roots


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and math.fmod(x, 2.0) != 0.0


def power(base: float, exponent: float) -> float:
    """
    IEEE pow.

    A negative base with a fractional exponent gives NaN, zero raised to a
    negative power gives infinity, and overflow gives a signed infinity.
    """
    base = float(base)
    exponent = float(exponent)
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0.0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


def sqrt(x: float) -> float:
    if x < 0.0:
        raise MathDomainError("Square root of negative number", "sqrt")
    return math.sqrt(x)


def cbrt(x: float) -> float:
    return math.cbrt(x)


# Exponential and logarithmic


def exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def exp2(x: float) -> float:
    try:
        return math.exp2(x)
    except OverflowError:
        return math.inf


def log(x: float) -> float:
    """Natural logarithm."""
    if x <= 0.0:
        raise MathDomainError("Logarithm of non-positive number", "log")
    return math.log(x)


def log10(x: float) -> float:
    if x <= 0.0:
        raise MathDomainError("Logarithm of non-positive number", "log10")
    return math.log10(x)


def log2(x: float) -> float:
    if x <= 0.0:
        raise MathDomainError("Logarithm of non-positive number", "log2")
    return math.log2(x)


# Trigonometric (radians)


def sin(x: float) -> float:
    if math.isinf(x):
        return math.nan
    return math.sin(x)


def cos(x: float) -> float:
    if math.isinf(x):
        return math.nan
    return math.cos(x)


def tan(x: float) -> float:
    if math.isinf(x):
        return math.nan
    return math.tan(x)


def asin(x: float) -> float:
    if x < -1.0 or x > 1.0:
        raise MathDomainError("asin domain error: x must be in [-1, 1]", "asin")
    return math.asin(x)


def acos(x: float) -> float:
    if x < -1.0 or x > 1.0:
        raise MathDomainError("acos domain error: x must be in [-1, 1]", "acos")
    return math.acos(x)


def atan(x: float) -> float:
    return math.atan(x)


def atan2(y: float, x: float) -> float:
    return math.atan2(y, x)


# Hyperbolic


def sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


def tanh(x: float) -> float:
    return math.tanh(x)


def asinh(x: float) -> float:
    return math.asinh(x)


def acosh(x: float) -> float:
    if x < 1.0:
        raise MathDomainError("acosh domain error: x must be >= 1", "acosh")
    return math.acosh(x)


def atanh(x: float) -> float:
    if x <= -1.0 or x >= 1.0:
        raise MathDomainError("atanh domain error: x must be in (-1, 1)", "atanh")
    return math.atanh(x)


# Special functions and rounding


def factorial(n: int) -> float:
    if n < 0:
        raise MathDomainError("Factorial of negative number", "factorial")
    if n > 170:
        raise OverflowError("Factorial overflow (use arbitrary precision)")
    return math.gamma(n + 1.0)


def fabs(x: float) -> float:
    return math.fabs(x)


def floor(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.floor(x))


def ceil(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.ceil(x))


def round_half_away(x: float) -> float:
    """Round to the nearest integer, halves away from zero (C round)."""
    if not math.isfinite(x):
        return x
    magnitude = math.floor(abs(x))
    if abs(x) - magnitude >= 0.5:
        magnitude += 1
    return math.copysign(float(magnitude), x)


BINARY_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": divide,
    "%": modulo,
    "^": power,
}

UNARY_OPERATORS: dict[str, Callable[[float], float]] = {
    "-": negate,
    "+": float,
}

# Default function table, keyed by the name used in expressions
FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": sin,
    "cos": cos,
    "tan": tan,
    "asin": asin,
    "acos": acos,
    "atan": atan,
    "sinh": sinh,
    "cosh": cosh,
    "tanh": tanh,
    "asinh": asinh,
    "acosh": acosh,
    "atanh": atanh,
    "sqrt": sqrt,
    "cbrt": cbrt,
    "abs": fabs,
    "exp": exp,
    "exp2": exp2,
    "ln": log,
    "log": log10,
    "log2": log2,
    "floor": floor,
    "ceil": ceil,
    "round": round_half_away,
}

CONSTANTS: dict[str, float] = {
    "pi": PI,
    "e": E,
    "phi": GOLDEN_RATIO,
}
