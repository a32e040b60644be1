"""
Expression parser package.

Provides the single-pass recursive descent evaluator, the function/constant
context it resolves names against, and an optional tree-building parser with
visitors for repeated evaluation and rendering.
"""

from .ast import ASTNode, Number, Constant, UnaryOp, BinaryOp, FunctionCall
from .cursor import Cursor
from .context import Context
from .parser import DescentParser, Evaluator, Parser, evaluate, parse
from .visitors import EvalVisitor, StringVisitor, to_string

__all__ = [
    "ASTNode",
    "Number",
    "Constant",
    "UnaryOp",
    "BinaryOp",
    "FunctionCall",
    "Cursor",
    "Context",
    "DescentParser",
    "Evaluator",
    "Parser",
    "evaluate",
    "parse",
    "EvalVisitor",
    "StringVisitor",
    "to_string",
]
