"""
Result models shared by the evaluator and its hosts.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core.errors import describe_error


class EvaluationResult(BaseModel):
    """Outcome of evaluating one expression: a value or a described failure"""

    model_config = ConfigDict(frozen=True)

    expression: str
    value: Optional[float] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def failure(cls, expression: str, error: Exception) -> "EvaluationResult":
        description = describe_error(error)
        return cls(
            expression=expression,
            error=description["message"],
            error_type=description["type"],
            details=description.get("details", {}),
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    def format(self, precision: int = 12) -> str:
        """Render for display: the value in %g style, or the error message."""
        if not self.ok:
            return f"Error: {self.error}"
        return f"Result: {format_number(self.value, precision)}"


def format_number(value: float, precision: int = 12) -> str:
    """Format a float with the given significant digits, dropping noise."""
    text = f"{value:.{precision}g}"
    if text == "-0":
        return "0"
    return text
