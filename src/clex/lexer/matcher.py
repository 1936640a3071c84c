"""Matcher pass: independent, global scans per category.

Each category's compiled grammar is run over the original text with
``finditer``, giving that category's non-overlapping matches left to
right. Categories are never matched against each other's output, so
their matches can overlap; the disambiguator sorts that out.

A category with no match is not an error, and malformed input (an
unterminated string, a bad escape) simply produces no match.

"""

from __future__ import annotations

from collections.abc import Iterable

from clex.grammar import compiled
from clex.tokens import ALL_CATEGORIES, Category, Span


def match_category(source: str, category: Category) -> tuple[Span, ...]:
    """Return every non-empty match of one category, left to right.

    Args:
        source: Original source text
        category: Category whose grammar to run

    Returns:
        Spans of that category; never overlapping each other
    """
    return tuple(
        Span(category, m.start(), m.end())
        for m in compiled(category).finditer(source)
        if m.end() > m.start()
    )


def match_all(
    source: str, categories: Iterable[Category] = ALL_CATEGORIES
) -> tuple[Span, ...]:
    """Match every enabled category against the original text.

    Returns:
        All spans in document order (start, longest first, precedence)
    """
    spans: list[Span] = []
    for category in sorted(set(categories), key=lambda c: c.index):
        spans.extend(match_category(source, category))
    spans.sort(key=Span.sort_key)
    return tuple(spans)


def count_by_category(spans: Iterable[Span]) -> dict[Category, int]:
    """Tally spans per category (used for debug logging)."""
    counts: dict[Category, int] = {}
    for span in spans:
        counts[span.category] = counts.get(span.category, 0) + 1
    return counts


__all__ = ["count_by_category", "match_all", "match_category"]
