"""LexAccumulator: opt-in profiling for lexing.

This module provides accumulated metrics during lexing:
- Total time spent inside the profiled block
- Source length
- Spans matched, suppressed by the rules and emitted
- Per-rule removal counts

Zero overhead when disabled (get_lex_accumulator() returns None).

Example:
    from clex import lex
    from clex.profiling import profiled_lex

    with profiled_lex() as metrics:
        lex("int main(void) { return 0; }")

    print(metrics.summary())
    # {"total_ms": 0.4, "lex_calls": 1, "source_length": 28, ...}

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class LexAccumulator:
    """Accumulated metrics during lexing.

    Attributes:
        start_time: Profiling start timestamp.
        lex_calls: Number of lex runs recorded.
        source_length: Total length of sources lexed.
        matched: Spans produced by the matcher.
        suppressed: Spans removed by the rules and the repair pass.
        emitted: Spans that survived.
        rule_hits: Spans removed per rule name.

    """

    start_time: float = field(default_factory=perf_counter)
    lex_calls: int = 0
    source_length: int = 0
    matched: int = 0
    suppressed: int = 0
    emitted: int = 0
    rule_hits: dict[str, int] = field(default_factory=dict)

    def record_lex(
        self,
        source_length: int,
        matched: int,
        emitted: int,
        rule_hits: Mapping[str, int] | None = None,
    ) -> None:
        """Record one lex run.

        Args:
            source_length: Length of the source string lexed.
            matched: Number of spans the matcher produced.
            emitted: Number of spans that survived disambiguation.
            rule_hits: Spans removed per rule name.

        """
        self.lex_calls += 1
        self.source_length += source_length
        self.matched += matched
        self.emitted += emitted
        self.suppressed += matched - emitted
        for name, count in (rule_hits or {}).items():
            self.rule_hits[name] = self.rule_hits.get(name, 0) + count

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of lex metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "lex_calls": self.lex_calls,
            "source_length": self.source_length,
            "matched": self.matched,
            "suppressed": self.suppressed,
            "emitted": self.emitted,
            "rule_hits": {k: v for k, v in self.rule_hits.items() if v},
        }


_accumulator: ContextVar[LexAccumulator | None] = ContextVar(
    "lex_accumulator",
    default=None,
)


def get_lex_accumulator() -> LexAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_lex() -> Iterator[LexAccumulator]:
    """Context manager for profiled lexing.

    Creates a LexAccumulator and makes it available via
    get_lex_accumulator() for the duration of the with block.

    Yields:
        LexAccumulator populated by every lex run inside the block.

    """
    acc = LexAccumulator()
    token: Token[LexAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = ["LexAccumulator", "get_lex_accumulator", "profiled_lex"]
