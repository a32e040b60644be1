"""Core utilities package"""

from .config import Settings, get_settings
from .logging import setup_logging, get_logger, get_context_logger
from .errors import (
    CalculatorError,
    ParseError,
    UnexpectedEndError,
    MismatchedParenthesesError,
    InvalidNumberFormatError,
    ExpectedNumberError,
    UnknownFunctionError,
    UnknownIdentifierError,
    TrailingInputError,
    NestingTooDeepError,
    MathDomainError,
    InvalidNameError,
    ContextError,
    describe_error,
)

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "CalculatorError",
    "ParseError",
    "UnexpectedEndError",
    "MismatchedParenthesesError",
    "InvalidNumberFormatError",
    "ExpectedNumberError",
    "UnknownFunctionError",
    "UnknownIdentifierError",
    "TrailingInputError",
    "NestingTooDeepError",
    "MathDomainError",
    "InvalidNameError",
    "ContextError",
    "describe_error",
]
