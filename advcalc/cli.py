"""Command line interface and REPL for the calculator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from .core.config import get_settings
from .core.errors import ContextError
from .core.logging import get_logger, setup_logging
from .models import EvaluationResult
from .parser import Context, Evaluator

logger = get_logger(__name__)

BANNER = """\
========================================
  Advanced Calculator
========================================
"""

HELP_TEXT = """\
Available Commands:
  help       - Show this help message
  exit/quit  - Exit the calculator
  clear      - Clear the screen
  functions  - List registered functions
  constants  - List registered constants

Examples:
  2 + 2 * 3
  sin(pi/2)
  sqrt(144)
  ln(e^2)
"""

CLEAR_SCREEN = "\033[2J\033[H"


class Repl:
    """
    Read-evaluate-print loop over text streams.

    Commands are filtered here; everything else is handed to the evaluator.
    A failed expression is reported and the loop continues.
    """

    def __init__(
        self,
        evaluator: Evaluator,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        prompt: str = "> ",
        precision: int = 12,
    ):
        self.evaluator = evaluator
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.prompt = prompt
        self.precision = precision

    def run(self) -> int:
        self.stdout.write(BANNER + "\n")
        self.stdout.write(HELP_TEXT + "\n")

        while True:
            self.stdout.write(self.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                break  # EOF
            if not self.handle_line(line):
                break

        return 0

    def handle_line(self, line: str) -> bool:
        """
        Process one input line.

        Returns:
            False when the loop should stop
        """
        command = line.strip(" \t\r\n")
        if not command:
            return True

        if command in ("exit", "quit"):
            self.stdout.write("Goodbye!\n")
            return False
        if command == "help":
            self.stdout.write(HELP_TEXT + "\n")
            return True
        if command == "clear":
            self.stdout.write(CLEAR_SCREEN + BANNER + "\n")
            return True
        if command == "functions":
            names = self.evaluator.context.describe()["functions"]
            self.stdout.write(", ".join(names) + "\n")
            return True
        if command == "constants":
            for name, value in self.evaluator.context.describe()["constants"].items():
                self.stdout.write(f"  {name} = {value!r}\n")
            return True

        self.report(self.evaluator.try_evaluate(command))
        return True

    def report(self, result: EvaluationResult) -> None:
        if result.ok:
            self.stdout.write(result.format(self.precision) + "\n")
        else:
            logger.info("Expression failed: %s (%s)", result.expression, result.error_type)
            self.stderr.write(result.format(self.precision) + "\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="advcalc",
        description="Evaluate infix arithmetic expressions.",
    )
    parser.add_argument(
        "-e",
        "--expression",
        help="Evaluate a single expression and exit.",
    )
    parser.add_argument(
        "--context",
        type=Path,
        help="YAML file with extra constants and function aliases.",
    )
    parser.add_argument(
        "--precision",
        type=int,
        help="Significant digits to print (default from settings).",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level, e.g. DEBUG or INFO (default from settings).",
    )
    parser.add_argument(
        "--allow-trailing",
        action="store_true",
        help="Ignore text left over after a complete expression.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    setup_logging(settings, level=args.log_level)

    context_path = args.context or settings.CONTEXT_FILE
    try:
        context = Context.from_yaml(context_path) if context_path else Context.standard()
    except ContextError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    evaluator = Evaluator(
        context,
        require_full_input=False if args.allow_trailing else None,
    )
    precision = args.precision if args.precision is not None else settings.PRECISION

    if args.expression is not None:
        result = evaluator.try_evaluate(args.expression.strip(" \t"))
        if not result.ok:
            print(result.format(precision), file=sys.stderr)
            return 1
        print(result.format(precision))
        return 0

    repl = Repl(evaluator, prompt=settings.PROMPT, precision=precision)
    try:
        return repl.run()
    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
