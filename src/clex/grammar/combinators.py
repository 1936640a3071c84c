"""Pattern combinators for building category grammars.

Grammars are written as values (sequence, alternation, repetition,
optional) and compiled to a single regular expression once, at import
time. Each Pattern remembers whether its source is atomic so grouping
parentheses are only added where precedence requires them.

Example:
    >>> digit = charset("0-9")
    >>> number = one_or_more(digit) + optional(literal(".") + one_or_more(digit))
    >>> compile_pattern(number).fullmatch("3.14") is not None
    True

Thread Safety:
Patterns are frozen; compiled regexes are immutable and shareable.

"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto


class Kind(Enum):
    """Precedence class of a pattern's regex source."""

    ATOM = auto()  # single char, class, or group: safe to quantify
    SEQUENCE = auto()  # concatenation: needs a group before quantifying
    ALTERNATION = auto()  # top-level "|": needs a group inside a sequence


@dataclass(frozen=True, slots=True)
class Pattern:
    """An immutable regular-expression fragment.

    Attributes:
        source: Regex source text
        kind: Precedence class of source

    """

    source: str
    kind: Kind = Kind.SEQUENCE

    def __add__(self, other: Pattern) -> Pattern:
        return seq(self, other)

    def __or__(self, other: Pattern) -> Pattern:
        return alt(self, other)

    def atom(self) -> str:
        """Source wrapped so a quantifier applies to the whole pattern."""
        if self.kind is Kind.ATOM:
            return self.source
        return f"(?:{self.source})"

    def operand(self) -> str:
        """Source wrapped so it can be concatenated safely."""
        if self.kind is Kind.ALTERNATION:
            return f"(?:{self.source})"
        return self.source


def literal(text: str) -> Pattern:
    """Match text exactly."""
    if not text:
        raise ValueError("literal() needs a non-empty string")
    return Pattern(re.escape(text), Kind.ATOM if len(text) == 1 else Kind.SEQUENCE)


def charset(chars: str) -> Pattern:
    """Match one character of a regex character class, e.g. ``"0-9a-f"``."""
    return Pattern(f"[{chars}]", Kind.ATOM)


def raw(source: str, kind: Kind = Kind.SEQUENCE) -> Pattern:
    """Wrap hand-written regex source."""
    return Pattern(source, kind)


def seq(*parts: Pattern) -> Pattern:
    """Match every part, one after another."""
    if not parts:
        raise ValueError("seq() needs at least one part")
    if len(parts) == 1:
        return parts[0]
    return Pattern("".join(p.operand() for p in parts), Kind.SEQUENCE)


def alt(*parts: Pattern) -> Pattern:
    """Match the first part that succeeds, tried left to right."""
    if not parts:
        raise ValueError("alt() needs at least one part")
    if len(parts) == 1:
        return parts[0]
    return Pattern("|".join(p.source for p in parts), Kind.ALTERNATION)


def optional(part: Pattern) -> Pattern:
    return Pattern(part.atom() + "?", Kind.SEQUENCE)


def zero_or_more(part: Pattern) -> Pattern:
    return Pattern(part.atom() + "*", Kind.SEQUENCE)


def one_or_more(part: Pattern) -> Pattern:
    return Pattern(part.atom() + "+", Kind.SEQUENCE)


def repeat(part: Pattern, low: int, high: int | None = None) -> Pattern:
    """Match part between low and high times (exactly low if high is None)."""
    if low < 0 or (high is not None and high < low):
        raise ValueError(f"invalid repetition bounds {low}..{high}")
    bounds = f"{{{low}}}" if high is None else f"{{{low},{high}}}"
    return Pattern(part.atom() + bounds, Kind.SEQUENCE)


def word(part: Pattern, continuation: Pattern | None = None) -> Pattern:
    """Match part only between word boundaries.

    ``\\b`` only knows regex word characters. Pass ``continuation`` for
    anything else that extends a word (a ``\\u00e9`` universal character
    name continues a C identifier) and the match is rejected when it
    follows.
    """
    tail = r"\b" if continuation is None else rf"\b(?!{continuation.source})"
    return Pattern(rf"\b{part.atom()}{tail}", Kind.SEQUENCE)


def choice_of(words: Iterable[str]) -> Pattern:
    """Alternation of literal strings, longest first.

    Longest-first ordering makes the regex take ``<<=`` rather than
    stopping at ``<<`` or ``<``.
    """
    ordered = sorted(set(words), key=lambda w: (-len(w), w))
    if not ordered:
        raise ValueError("choice_of() needs at least one word")
    return alt(*(literal(w) for w in ordered))


def compile_pattern(pattern: Pattern, flags: int = 0) -> re.Pattern[str]:
    """Compile a pattern to a regex object."""
    return re.compile(pattern.source, flags)


__all__ = [
    "Kind",
    "Pattern",
    "alt",
    "charset",
    "choice_of",
    "compile_pattern",
    "literal",
    "one_or_more",
    "optional",
    "raw",
    "repeat",
    "seq",
    "word",
    "zero_or_more",
]
