"""Marker encoding for annotated source text.

Annotated text is the original source with zero-width category markers
inserted around every token: U+0000..U+0007 open a span and
U+0080..U+0087 close it, indexed by Category. Removing the sixteen
marker code points gives back the source unchanged.

Example:
    >>> from clex.tokens import Category, Span
    >>> annotated = annotate("x;", [Span(Category.IDENTIFIER, 0, 1)])
    >>> annotated == "\\x01x\\x81;"
    True
    >>> strip_markers(annotated)
    'x;'

Thread Safety:
All functions are pure; AnnotationBuilder instances are local to one call.

"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from clex.errors import MarkerError
from clex.location import LineIndex
from clex.rules import ResolutionRule
from clex.tokens import Category, Marker, Role, Span

MARKER_CHARS: frozenset[str] = frozenset(
    c.begin_char for c in Category
) | frozenset(c.end_char for c in Category)

MARKER_PATTERN = re.compile(r"[\x00-\x07\x80-\x87]")
_STRIP_TABLE = {ord(c): None for c in MARKER_CHARS}


def is_marker(char: str) -> bool:
    """True if char is one of the sixteen marker code points."""
    return char in MARKER_CHARS


def marker_stream(
    spans: Iterable[Span], rule: ResolutionRule | None = None
) -> list[Marker]:
    """Order the BEGIN/END markers of spans as they appear in annotated text.

    At one offset, END markers come before BEGIN markers. BEGIN markers open
    outermost first and END markers close innermost first. For spans with
    identical extents the rule's outer category opens first and closes last;
    without a rule, category precedence decides.

    Args:
        spans: Spans to expand into markers
        rule: Rule whose outer categories win extent ties

    Returns:
        Markers in stream order
    """
    outer = rule.outer if rule is not None else frozenset()

    def key(marker: Marker) -> tuple[int, int, int, int, int]:
        span = marker.span
        rank = span.category.precedence
        if marker.role is Role.BEGIN:
            tie = 0 if span.category in outer else 1
            return (span.start, 1, -span.end, tie, rank)
        tie = 1 if span.category in outer else 0
        return (span.end, 0, -span.start, tie, -rank)

    markers = [Marker(span, role) for span in spans for role in (Role.BEGIN, Role.END)]
    markers.sort(key=key)
    return markers


class AnnotationBuilder:
    """Accumulates source fragments and marker characters.

    Appends to a list, joins once at the end.

    Usage:
        >>> builder = AnnotationBuilder()
        >>> builder.append("int").build()
        'int'

    """

    __slots__ = ("_parts", "_markers")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._markers = 0

    def append(self, text: str) -> AnnotationBuilder:
        """Append plain source text (empty strings are skipped)."""
        if text:
            self._parts.append(text)
        return self

    def append_marker(self, marker: Marker) -> AnnotationBuilder:
        self._parts.append(marker.char)
        self._markers += 1
        return self

    @property
    def marker_count(self) -> int:
        return self._markers

    def build(self) -> str:
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)


def annotate(source: str, spans: Iterable[Span]) -> str:
    """Insert BEGIN/END markers for spans into source.

    Spans are expected to nest or be disjoint; crossing spans still produce
    output, but its markers will not nest.

    Args:
        source: Original source text
        spans: Spans over source

    Returns:
        Annotated text
    """
    builder = AnnotationBuilder()
    pos = 0
    for marker in marker_stream(spans):
        offset = marker.offset
        if offset > pos:
            builder.append(source[pos:offset])
            pos = offset
        builder.append_marker(marker)
    builder.append(source[pos:])
    return builder.build()


def strip_markers(text: str) -> str:
    """Remove every marker code point from text."""
    return text.translate(_STRIP_TABLE)


def iter_markers(text: str) -> Iterator[tuple[Category, Role, int]]:
    """Yield (category, role, offset) for each marker in annotated text.

    Offsets are positions in the stripped text, so they line up with the
    original source.
    """
    seen = 0
    for match in MARKER_PATTERN.finditer(text):
        decoded = Category.from_marker(match.group())
        if decoded is None:  # pragma: no cover
            continue
        category, role = decoded
        yield category, role, match.start() - seen
        seen += 1


def decode_spans(text: str) -> tuple[Span, ...]:
    """Rebuild spans from annotated text.

    Args:
        text: Annotated text as produced by :func:`annotate`

    Returns:
        Spans in document order

    Raises:
        MarkerError: On an END marker with no open BEGIN of its category,
            a BEGIN for a category that is already open, or a BEGIN that
            is never closed.
    """
    index: LineIndex | None = None

    def error(message: str, offset: int) -> MarkerError:
        nonlocal index
        if index is None:
            index = LineIndex(strip_markers(text))
        lineno, col = index.position(offset)
        return MarkerError(message, offset=offset, lineno=lineno, col_offset=col)

    open_spans: dict[Category, int] = {}
    spans: list[Span] = []

    for category, role, offset in iter_markers(text):
        if role is Role.BEGIN:
            if category in open_spans:
                raise error(f"{category.name} opened twice", offset)
            open_spans[category] = offset
            continue
        start = open_spans.pop(category, None)
        if start is None:
            raise error(f"{category.name} closed without being opened", offset)
        if offset > start:
            spans.append(Span(category, start, offset))

    if open_spans:
        category, start = min(open_spans.items(), key=lambda item: item[1])
        raise error(f"{category.name} never closed", start)

    spans.sort(key=Span.sort_key)
    return tuple(spans)


__all__ = [
    "MARKER_CHARS",
    "MARKER_PATTERN",
    "AnnotationBuilder",
    "annotate",
    "decode_spans",
    "is_marker",
    "iter_markers",
    "marker_stream",
    "strip_markers",
]
