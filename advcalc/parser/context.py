"""
Context system for expression evaluation.

A context owns the two lookup tables the evaluator resolves identifiers
against:
- Functions: name -> unary numeric function
- Constants: name -> fixed numeric value

Each context owns independent tables; there is no global registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml

from ..core.errors import ContextError, InvalidNameError
from ..core.logging import get_logger
from ..math import standard
from .cursor import is_identifier

logger = get_logger(__name__)

UnaryFunction = Callable[[float], float]


@dataclass
class Context:
    """
    Mathematical context defining the evaluation environment.

    Attributes:
        name: Context name (e.g., "Standard")
        functions: Registered unary functions
        constants: Registered constant values
    """

    name: str
    functions: dict[str, UnaryFunction] = field(default_factory=dict)
    constants: dict[str, float] = field(default_factory=dict)

    @classmethod
    def standard(cls) -> "Context":
        """
        Create the standard context.

        Registers the trigonometric, hyperbolic, root, exponential, logarithmic
        and rounding functions plus the constants pi, e and phi.
        """
        context = cls(name="Standard")
        for name, func in standard.FUNCTIONS.items():
            context.register_function(name, func)
        for name, value in standard.CONSTANTS.items():
            context.register_constant(name, value)
        return context

    @classmethod
    def empty(cls, name: str = "Empty") -> "Context":
        """Create a context with no functions or constants."""
        return cls(name=name)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Context":
        """
        Load context from YAML file.

        The file may name the context, add constants, and alias functions from
        the standard library under new names:

            name: Engineering
            include_defaults: true
            constants:
              g: 9.80665
            functions:
              arcsin: asin

        Args:
            path: Path to YAML configuration file

        Returns:
            Context instance

        Raises:
            ContextError: If the file is unreadable or malformed
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ContextError(f"Cannot read context file: {exc}", str(path)) from exc
        except yaml.YAMLError as exc:
            raise ContextError(f"Invalid YAML in context file: {exc}", str(path)) from exc

        if not isinstance(data, dict):
            raise ContextError("Context file must contain a mapping", str(path))

        if data.get("include_defaults", True):
            context = cls.standard()
        else:
            context = cls.empty()
        context.name = str(data.get("name", Path(path).stem))

        # Parse constants
        constants = data.get("constants") or {}
        if not isinstance(constants, dict):
            raise ContextError("'constants' must be a mapping", str(path))
        for const_name, value in constants.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ContextError(
                    f"Constant '{const_name}' must be numeric, got {value!r}", str(path)
                )
            context._register_from_file(path, const_name, float(value), constant=True)

        # Parse function aliases
        functions = data.get("functions") or {}
        if not isinstance(functions, dict):
            raise ContextError("'functions' must be a mapping", str(path))
        for alias, target in functions.items():
            if target not in standard.FUNCTIONS:
                raise ContextError(
                    f"Function '{alias}' refers to unknown library function {target!r}",
                    str(path),
                )
            context._register_from_file(path, alias, standard.FUNCTIONS[target])

        logger.info(
            "Loaded context %s from %s (%d functions, %d constants)",
            context.name,
            path,
            len(context.functions),
            len(context.constants),
        )
        return context

    def _register_from_file(
        self, path: str | Path, name: Any, value: Any, constant: bool = False
    ) -> None:
        try:
            if constant:
                self.register_constant(name, value)
            else:
                self.register_function(name, value)
        except InvalidNameError as exc:
            raise ContextError(exc.message, str(path)) from exc

    def register_function(self, name: str, func: UnaryFunction) -> None:
        """
        Insert or replace a function binding.

        The function is not checked against any domain; it is expected to
        raise MathDomainError itself for arguments it cannot handle.

        Args:
            name: Identifier used in call syntax, e.g. "sin"
            func: Callable taking one float and returning one float

        Raises:
            InvalidNameError: If name is not a valid identifier
            TypeError: If func is not callable
        """
        if not is_identifier(name):
            raise InvalidNameError(name)
        if not callable(func):
            raise TypeError(f"Function '{name}' must be callable, got {type(func).__name__}")
        self.functions[name] = func
        logger.debug("Registered function %s in context %s", name, self.name)

    def register_constant(self, name: str, value: float) -> None:
        """
        Insert or replace a constant binding.

        Raises:
            InvalidNameError: If name is not a valid identifier
        """
        if not is_identifier(name):
            raise InvalidNameError(name)
        self.constants[name] = float(value)
        logger.debug("Registered constant %s = %r in context %s", name, value, self.name)

    def get_function(self, name: str) -> UnaryFunction | None:
        return self.functions.get(name)

    def get_constant_value(self, name: str) -> float | None:
        """Get the value of a constant, or None if it is not registered."""
        return self.constants.get(name)

    def describe(self) -> dict[str, Any]:
        """Summarize the tables, sorted by name."""
        return {
            "name": self.name,
            "functions": sorted(self.functions),
            "constants": {
                name: self.constants[name] for name in sorted(self.constants)
            },
        }
