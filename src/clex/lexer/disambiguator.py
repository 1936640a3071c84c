"""Disambiguation passes over matched spans.

Every category is matched independently against the original text, so a
keyword is also an identifier, a float's digits are also integers and a
string's commas are also punctuators. This module removes those nested
matches with one reusable primitive, :func:`suppress`, applied once per
ResolutionRule in table order, then guarantees that no two surviving
spans cross with :func:`repair_overlaps`.

All functions are pure: they take a sequence of spans and return a new
tuple, leaving their input untouched.

Thread Safety:
No module state besides the logger; safe to call from any thread.

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from clex.markers import marker_stream
from clex.rules import DEFAULT_RULES, ResolutionRule
from clex.tokens import Category, Role, Span
from clex.utils.logger import get_logger

logger = get_logger(__name__)


def suppress(spans: Sequence[Span], rule: ResolutionRule) -> tuple[Span, ...]:
    """Remove inner spans nested inside an outer span of rule.

    Scans the marker stream left to right with the open outer markers
    keyed by category. An inner BEGIN seen while an outer span is open
    becomes pending; its END removes the pair if the enclosing outer span
    is still open. An outer END arriving first resets the pending inner
    state and the inner span survives.

    Non-exhaustive rules track a single pending inner span at a time;
    exhaustive rules track every inner span inside the outer span.

    Args:
        spans: Current spans (any categories)
        rule: Resolution rule to apply

    Returns:
        Spans with the nested inner spans removed, in input order
    """
    relevant = [span for span in spans if span.category in rule.categories]
    if not relevant:
        return tuple(spans)

    open_outer: dict[Category, int] = {}  # category -> stream index of BEGIN
    pending: dict[Span, int] = {}  # inner span -> stream index of BEGIN
    removed: set[Span] = set()

    for index, marker in enumerate(marker_stream(relevant, rule)):
        span = marker.span

        if span.category in rule.outer:
            if marker.role is Role.BEGIN:
                open_outer[span.category] = index
                continue
            opened = open_outer.pop(span.category, None)
            if opened is not None and pending:
                # Inner spans begun inside this outer span cross its END
                pending = {s: i for s, i in pending.items() if i < opened}
            continue

        if marker.role is Role.BEGIN:
            if open_outer:
                if not rule.exhaustive:
                    pending.clear()
                pending[span] = index
            continue

        begun = pending.pop(span, None)
        if begun is not None and any(i < begun for i in open_outer.values()):
            removed.add(span)

    if not removed:
        return tuple(spans)
    return tuple(span for span in spans if span not in removed)


def repair_overlaps(spans: Iterable[Span]) -> tuple[Span, ...]:
    """Drop spans that cross an earlier kept span.

    Spans are visited in document order (start, longest first, precedence).
    A span is kept when it nests inside, or is disjoint from, every span
    kept so far; a span with the same extent as a kept one is dropped.

    Returns:
        Laminar spans in document order
    """
    kept: list[Span] = []
    stack: list[Span] = []

    for span in sorted(spans, key=Span.sort_key):
        while stack and stack[-1].end <= span.start:
            stack.pop()
        if stack:
            top = stack[-1]
            if span.end > top.end or (span.start, span.end) == (top.start, top.end):
                logger.debug(
                    "dropping %s %d:%d crossing %s %d:%d",
                    span.category.name,
                    span.start,
                    span.end,
                    top.category.name,
                    top.start,
                    top.end,
                )
                continue
        stack.append(span)
        kept.append(span)

    return tuple(kept)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of running the rule table over matched spans.

    Attributes:
        spans: Surviving spans
        removed_by_rule: Number of spans each rule removed, keyed by rule name
        repaired: Number of crossing spans dropped by the final repair pass

    """

    spans: tuple[Span, ...]
    removed_by_rule: dict[str, int] = field(default_factory=dict)
    repaired: int = 0

    @property
    def suppressed(self) -> int:
        return sum(self.removed_by_rule.values()) + self.repaired


def resolve(
    spans: Sequence[Span],
    rules: Sequence[ResolutionRule] = DEFAULT_RULES,
    *,
    repair: bool = True,
) -> Resolution:
    """Apply rules in order, then (optionally) the overlap repair pass.

    Never raises: spans the rules cannot resolve are passed through.

    Args:
        spans: Matched spans
        rules: Ordered resolution rules
        repair: Run :func:`repair_overlaps` after the rules

    Returns:
        Resolution with surviving spans and per-rule statistics
    """
    current = tuple(spans)
    removed_by_rule: dict[str, int] = {}

    for rule in rules:
        resolved = suppress(current, rule)
        removed = len(current) - len(resolved)
        removed_by_rule[rule.name] = removed_by_rule.get(rule.name, 0) + removed
        if removed:
            logger.debug("rule %s removed %d spans", rule.name, removed)
        current = resolved

    repaired = 0
    if repair:
        laminar = repair_overlaps(current)
        repaired = len(current) - len(laminar)
        current = laminar

    return Resolution(spans=current, removed_by_rule=removed_by_rule, repaired=repaired)


def disambiguate(
    spans: Sequence[Span],
    rules: Sequence[ResolutionRule] = DEFAULT_RULES,
) -> tuple[Span, ...]:
    """Resolve overlapping matches and return the surviving spans."""
    return resolve(spans, rules).spans


__all__ = [
    "Resolution",
    "disambiguate",
    "repair_overlaps",
    "resolve",
    "suppress",
]
