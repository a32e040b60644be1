"""
Cursor over expression text.

The cursor is the only lexical machinery in the evaluator: the grammar reads
characters, identifiers and numbers directly from the input at the current
offset instead of materializing a token list first.
"""

import re
from dataclasses import dataclass

from ..core.errors import ExpectedNumberError, InvalidNumberFormatError

# Space and tab only; newlines are not skippable
WHITESPACE = " \t"

# Regex patterns for scanning at the cursor
PATTERNS = {
    # Identifiers: ASCII letter followed by letters/digits/underscores
    "IDENTIFIER": r"[A-Za-z][A-Za-z0-9_]*",
    # Mantissa: run of digits and dots, validated after the match
    "MANTISSA": r"[0-9.]+",
    # Exponent suffix, only when complete
    "EXPONENT": r"[eE][+-]?[0-9]+",
}

IDENTIFIER_RE = re.compile(PATTERNS["IDENTIFIER"])
MANTISSA_RE = re.compile(PATTERNS["MANTISSA"])
EXPONENT_RE = re.compile(PATTERNS["EXPONENT"])


def is_identifier(name: str) -> bool:
    """Check whether name is something the cursor can scan as an identifier."""
    return isinstance(name, str) and IDENTIFIER_RE.fullmatch(name) is not None


@dataclass
class Cursor:
    """
    Position tracker into a single expression.

    Attributes:
        text: The expression being read (never modified)
        pos: Offset of the next unread character
        depth: Current factor nesting depth
    """

    text: str
    pos: int = 0
    depth: int = 0

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, rest='{self.text[self.pos:]}')"

    def at_end(self) -> bool:
        """True once every character has been consumed."""
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Current character, or '' at end of input."""
        if self.at_end():
            return ""
        return self.text[self.pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        char = self.peek()
        if char:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def accept(self, char: str) -> bool:
        """
        Skip whitespace and consume char if it is next.

        Args:
            char: Single character to look for

        Returns:
            True if the character was consumed
        """
        self.skip_whitespace()
        if self.peek() == char:
            self.pos += 1
            return True
        return False

    def scan_identifier(self) -> str | None:
        """Consume a maximal identifier at the cursor, if one starts here."""
        match = IDENTIFIER_RE.match(self.text, self.pos)
        if not match:
            return None
        self.pos = match.end()
        return match.group()

    def scan_number(self) -> float:
        """
        Consume a numeric literal and convert it.

        Accepts a run of digits with at most one decimal point, followed by an
        optional exponent (e/E, optional sign, at least one digit).

        Returns:
            The literal's value

        Raises:
            InvalidNumberFormatError: If the literal has a second decimal point
                or is not a number at all (e.g. a lone '.')
            ExpectedNumberError: If no numeric characters are present
        """
        self.skip_whitespace()
        start = self.pos

        match = MANTISSA_RE.match(self.text, self.pos)
        if not match:
            raise ExpectedNumberError(start)

        mantissa = match.group()
        if mantissa.count(".") > 1:
            second_dot = mantissa.index(".", mantissa.index(".") + 1)
            raise InvalidNumberFormatError(mantissa, start + second_dot)
        self.pos = match.end()

        exponent = EXPONENT_RE.match(self.text, self.pos)
        if exponent:
            self.pos = exponent.end()

        literal = self.text[start:self.pos]
        try:
            return float(literal)
        except ValueError:
            raise InvalidNumberFormatError(literal, start) from None
