"""Tests for the Cursor scanning primitives."""

import pytest

from advcalc.core.errors import ExpectedNumberError, InvalidNumberFormatError
from advcalc.parser.cursor import Cursor, is_identifier


class TestCursorMovement:
    def test_starts_at_zero(self):
        cursor = Cursor("1+2")
        assert cursor.pos == 0
        assert cursor.depth == 0
        assert cursor.peek() == "1"

    def test_advance(self):
        cursor = Cursor("ab")
        assert cursor.advance() == "a"
        assert cursor.advance() == "b"
        assert cursor.at_end()

    def test_advance_at_end_does_not_move(self):
        cursor = Cursor("")
        assert cursor.advance() == ""
        assert cursor.pos == 0

    def test_peek_at_end(self):
        assert Cursor("x", pos=1).peek() == ""

    def test_skip_whitespace_spaces_and_tabs(self):
        cursor = Cursor(" \t 5")
        cursor.skip_whitespace()
        assert cursor.pos == 3

    def test_skip_whitespace_stops_at_newline(self):
        cursor = Cursor(" \n5")
        cursor.skip_whitespace()
        assert cursor.pos == 1

    def test_accept_skips_whitespace(self):
        cursor = Cursor("  (")
        assert cursor.accept("(")
        assert cursor.at_end()

    def test_accept_miss_leaves_character(self):
        cursor = Cursor(" )")
        assert not cursor.accept("(")
        assert cursor.peek() == ")"


class TestIdentifiers:
    def test_scan_maximal_run(self):
        cursor = Cursor("log2_x(3)")
        assert cursor.scan_identifier() == "log2_x"
        assert cursor.peek() == "("

    def test_scan_requires_leading_letter(self):
        cursor = Cursor("_x")
        assert cursor.scan_identifier() is None
        assert cursor.pos == 0

    @pytest.mark.parametrize("name", ["x", "pi", "log2", "my_const", "X1_"])
    def test_valid_identifiers(self, name):
        assert is_identifier(name)

    @pytest.mark.parametrize("name", ["", "2x", "_x", "a-b", "a b", "π", None])
    def test_invalid_identifiers(self, name):
        assert not is_identifier(name)


class TestNumbers:
    @pytest.mark.parametrize(
        "text, value, end",
        [
            ("42", 42.0, 2),
            ("3.25+1", 3.25, 4),
            ("1e3*2", 1000.0, 3),
            ("1E-2", 0.01, 4),
            ("7e", 7.0, 1),
            ("7e+", 7.0, 1),
            ("  8", 8.0, 3),
        ],
    )
    def test_scan_number(self, text, value, end):
        cursor = Cursor(text)
        assert cursor.scan_number() == value
        assert cursor.pos == end

    def test_second_dot_reports_its_position(self):
        with pytest.raises(InvalidNumberFormatError) as exc_info:
            Cursor("12.5.3").scan_number()
        assert exc_info.value.position == 4
        assert exc_info.value.details["literal"] == "12.5.3"

    def test_nothing_numeric(self):
        with pytest.raises(ExpectedNumberError) as exc_info:
            Cursor("x").scan_number()
        assert exc_info.value.position == 0
