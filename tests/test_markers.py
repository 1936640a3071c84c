"""Tests for marker encoding, stripping and decoding."""

import pytest

from clex.errors import ClexError, MarkerError
from clex.markers import (
    MARKER_CHARS,
    AnnotationBuilder,
    annotate,
    decode_spans,
    is_marker,
    iter_markers,
    marker_stream,
    strip_markers,
)
from clex.rules import rule
from clex.tokens import Category, Marker, Role, Span

K = Category.KEYWORD
ID = Category.IDENTIFIER
STR = Category.STRING_LITERAL
P = Category.PUNCTUATOR


class TestMarkerCodePoints:
    """Every category owns one BEGIN and one END code point."""

    def test_sixteen_distinct_markers(self) -> None:
        assert len(MARKER_CHARS) == 16

    def test_index_mapping(self) -> None:
        assert K.begin_char == "\x00"
        assert K.end_char == "\x80"
        assert P.begin_char == "\x07"
        assert P.end_char == "\x87"

    def test_from_marker(self) -> None:
        assert Category.from_marker("\x06") == (STR, Role.BEGIN)
        assert Category.from_marker("\x86") == (STR, Role.END)
        assert Category.from_marker("a") is None

    def test_is_marker(self) -> None:
        assert is_marker("\x01")
        assert not is_marker("\x08")
        assert not is_marker("\x88")


class TestAnnotate:
    """Inserting markers around spans."""

    def test_no_spans(self) -> None:
        assert annotate("int x;", []) == "int x;"

    def test_nested_spans(self) -> None:
        spans = [Span(ID, 0, 1), Span(STR, 0, 2)]
        assert annotate("xy", spans) == "\x06\x01x\x81y\x86"

    def test_adjacent_spans_close_before_open(self) -> None:
        spans = [Span(P, 1, 2), Span(ID, 0, 1)]
        assert annotate("a;", spans) == "\x01a\x81\x07;\x87"

    def test_strip_restores_source(self) -> None:
        source = "int x;"
        spans = [Span(K, 0, 3), Span(ID, 4, 5), Span(P, 5, 6)]
        assert strip_markers(annotate(source, spans)) == source


class TestMarkerStream:
    """Ordering of BEGIN/END markers."""

    def test_equal_extent_rule_outer_wraps(self) -> None:
        spans = [Span(ID, 0, 3), Span(K, 0, 3)]
        stream = marker_stream(spans, rule(ID, K))
        assert [(m.category, m.role) for m in stream] == [
            (ID, Role.BEGIN),
            (K, Role.BEGIN),
            (K, Role.END),
            (ID, Role.END),
        ]

    def test_equal_extent_precedence_without_rule(self) -> None:
        stream = marker_stream([Span(ID, 0, 3), Span(K, 0, 3)])
        assert stream[0] == Marker(Span(K, 0, 3), Role.BEGIN)
        assert stream[-1] == Marker(Span(K, 0, 3), Role.END)


class TestDecode:
    """Reading markers back out of annotated text."""

    def test_iter_markers_offsets(self) -> None:
        markers = list(iter_markers("\x01a\x81"))
        assert markers == [(ID, Role.BEGIN, 0), (ID, Role.END, 1)]

    def test_decode_round_trip(self) -> None:
        spans = (Span(STR, 0, 5), Span(ID, 1, 4), Span(P, 5, 6))
        assert decode_spans(annotate('"abc";', spans)) == spans

    def test_decode_plain_text(self) -> None:
        assert decode_spans("no markers") == ()

    def test_end_without_begin(self) -> None:
        with pytest.raises(MarkerError, match="closed without being opened") as exc:
            decode_spans("\x81a")
        assert (exc.value.lineno, exc.value.col_offset) == (1, 1)

    def test_begin_never_closed(self) -> None:
        with pytest.raises(MarkerError, match="never closed") as exc:
            decode_spans("a\nb\x01c")
        assert exc.value.offset == 3
        assert (exc.value.lineno, exc.value.col_offset) == (2, 2)

    def test_opened_twice(self) -> None:
        with pytest.raises(MarkerError, match="opened twice"):
            decode_spans("\x01\x01a\x81\x81")

    def test_marker_error_is_clex_error(self) -> None:
        with pytest.raises(ClexError):
            decode_spans("\x80")


class TestAnnotationBuilder:
    def test_build(self) -> None:
        builder = AnnotationBuilder()
        assert not builder
        builder.append("int").append("").append(" x")
        builder.append_marker(Marker(Span(K, 0, 3), Role.BEGIN))
        assert builder.build() == "int x\x00"
        assert len(builder) == 3
        assert builder.marker_count == 1
