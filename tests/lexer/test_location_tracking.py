"""Tests for accurate source location tracking in the lexer.

Token locations drive editor integration and error messages. These
tests verify that line numbers, column offsets, and absolute offsets
are correctly tracked.
"""

from clex.lexer import Lexer
from clex.location import LineIndex, SourceLocation
from clex.tokens import Category


class TestSingleLineLocations:
    """Test location tracking for single-line tokens."""

    def test_first_token(self) -> None:
        """First token starts at line 1, column 1."""
        tokens = list(Lexer("int x;").tokenize())

        assert tokens[0].location.lineno == 1
        assert tokens[0].location.col_offset == 1
        assert tokens[0].location.offset == 0

    def test_columns_advance(self) -> None:
        tokens = list(Lexer("int x;").tokenize())

        assert [t.col for t in tokens] == [1, 5, 6]

    def test_end_coordinates(self) -> None:
        token = next(Lexer("  return").tokenize())

        assert token.location.end_lineno == 1
        assert token.location.end_col_offset == 9
        assert token.location.end_offset == 8


class TestMultilineLocations:
    """Test location tracking for tokens across multiple lines."""

    def test_line_numbers(self) -> None:
        source = "int a;\n  return 0;"
        tokens = list(Lexer(source).tokenize())

        ret = next(t for t in tokens if t.value == "return")
        zero = next(t for t in tokens if t.category is Category.INTEGER_CONSTANT)
        assert (ret.lineno, ret.col) == (2, 3)
        assert (zero.lineno, zero.col) == (2, 10)

    def test_blank_lines_counted(self) -> None:
        tokens = list(Lexer("a\n\n\nb").tokenize())

        assert tokens[-1].lineno == 4

    def test_crlf_columns(self) -> None:
        """A carriage return is an ordinary column before the newline."""
        tokens = list(Lexer("a\r\nb").tokenize())

        assert (tokens[1].lineno, tokens[1].col) == (2, 1)


class TestLineIndex:
    """Offset to (line, column) lookup."""

    def test_positions(self) -> None:
        index = LineIndex("ab\ncd\n")

        assert index.position(0) == (1, 1)
        assert index.position(2) == (1, 3)
        assert index.position(3) == (2, 1)
        assert index.position(6) == (3, 1)
        assert index.line_count == 3

    def test_out_of_range_offsets_clamp(self) -> None:
        index = LineIndex("ab")

        assert index.position(-5) == (1, 1)
        assert index.position(99) == (1, 3)

    def test_location(self) -> None:
        loc = LineIndex("x\nyy").location(2, 4, "a.c")

        assert loc == SourceLocation(
            lineno=2,
            col_offset=1,
            offset=2,
            end_offset=4,
            end_lineno=2,
            end_col_offset=3,
            source_file="a.c",
        )


class TestSourceLocation:
    """SourceLocation formatting and helpers."""

    def test_str_without_file(self) -> None:
        assert str(SourceLocation(3, 7)) == "3:7"

    def test_str_with_file(self) -> None:
        assert str(SourceLocation(3, 7, source_file="m.c")) == "m.c:3:7"

    def test_span_to(self) -> None:
        start = SourceLocation(1, 1, 0, 3)
        end = SourceLocation(2, 4, 10, 12, end_lineno=2, end_col_offset=6)

        merged = start.span_to(end)
        assert (merged.lineno, merged.col_offset) == (1, 1)
        assert (merged.end_lineno, merged.end_col_offset) == (2, 6)
        assert merged.end_offset == 12

    def test_unknown(self) -> None:
        assert SourceLocation.unknown().lineno == 0

    def test_token_location_cached(self) -> None:
        token = next(Lexer("x").tokenize())

        assert token.location is token.location
