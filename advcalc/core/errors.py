"""
Calculator exceptions.

Defines the exception hierarchy surfaced by the evaluator, the numeric
function library and the context loader.
"""

from typing import Any, Dict, Optional


class CalculatorError(Exception):
    """Base exception for calculator errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Parse errors


class ParseError(CalculatorError):
    """Raised when an expression cannot be parsed"""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.position = position
        details = dict(details or {})
        if position is not None:
            details["position"] = position
        super().__init__(message, details)

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} at position {self.position}"


class UnexpectedEndError(ParseError):
    """Raised when a factor is expected but the input is exhausted"""

    def __init__(self, position: int):
        super().__init__("Unexpected end of expression", position)


class MismatchedParenthesesError(ParseError):
    """Raised when an opening parenthesis has no matching closing one"""

    def __init__(self, position: int, in_call: bool = False):
        message = "Mismatched parentheses"
        if in_call:
            message += " in function call"
        super().__init__(message, position)


class InvalidNumberFormatError(ParseError):
    """Raised for malformed numeric literals such as 1..2"""

    def __init__(self, text: str, position: int):
        super().__init__(
            "Invalid number format", position, details={"literal": text}
        )


class ExpectedNumberError(ParseError):
    """Raised when a number was required but nothing numeric was found"""

    def __init__(self, position: int):
        super().__init__("Expected number", position)


class UnknownFunctionError(ParseError):
    """Raised when a called name is not in the function table"""

    def __init__(self, name: str, position: Optional[int] = None):
        self.name = name
        super().__init__(
            f"Unknown function: {name}", position, details={"name": name}
        )


class UnknownIdentifierError(ParseError):
    """Raised when a bare name is not in the constant table"""

    def __init__(self, name: str, position: Optional[int] = None):
        self.name = name
        super().__init__(
            f"Unknown identifier: {name}", position, details={"name": name}
        )


class TrailingInputError(ParseError):
    """Raised when characters remain after a complete expression"""

    def __init__(self, char: str, position: int):
        super().__init__(f"Unexpected character '{char}'", position)


class NestingTooDeepError(ParseError):
    """Raised when nesting exceeds the configured depth limit"""

    def __init__(self, position: int, limit: int):
        super().__init__(
            "Expression too deeply nested", position, details={"limit": limit}
        )


# Evaluation errors


class MathDomainError(CalculatorError, ValueError):
    """Raised by numeric functions for arguments outside their domain"""

    def __init__(self, message: str, function: Optional[str] = None):
        details = {"function": function} if function else {}
        super().__init__(message, details)


# Table errors


class InvalidNameError(CalculatorError, ValueError):
    """Raised when registering a name the scanner can never produce"""

    def __init__(self, name: str):
        super().__init__(
            f"Invalid name '{name}': must start with a letter and contain "
            "only letters, digits and underscores",
            details={"name": name},
        )


class ContextError(CalculatorError):
    """Raised when a context file cannot be loaded"""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path else {}
        super().__init__(message, details)


def describe_error(error: Exception) -> Dict[str, Any]:
    """Describe an error as a plain dictionary for hosts and logs"""
    description: Dict[str, Any] = {
        "type": error.__class__.__name__,
        "message": str(error),
    }
    if isinstance(error, CalculatorError) and error.details:
        description["details"] = error.details
    return description
