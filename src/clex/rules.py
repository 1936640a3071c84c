"""Precedence rules for resolving overlapping category matches.

A ResolutionRule names a set of outer categories and a set of inner
categories: any inner span found inside an outer span is not a token in
its own right and is dropped, its text becoming plain content of the
outer token.

The default table is ordered; earlier rules change what later rules see.

Thread Safety:
Rules and rule tables are frozen and shared by every lex() call.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from clex.errors import ConfigError
from clex.tokens import Category

K = Category.KEYWORD
ID = Category.IDENTIFIER
INT = Category.INTEGER_CONSTANT
FLT = Category.FLOAT_CONSTANT
ENUM = Category.ENUM_CONSTANT
CHR = Category.CHARACTER_CONSTANT
STR = Category.STRING_LITERAL
PUNCT = Category.PUNCTUATOR


@dataclass(frozen=True, slots=True)
class ResolutionRule:
    """Remove inner-category spans nested inside outer-category spans.

    Attributes:
        outer: Categories whose spans absorb nested matches
        inner: Categories removed when nested inside an outer span
        exhaustive: Resolve every inner span inside one outer span, not just
            the first pending one (enum declarations absorb everything)
        name: Short label used in logs and profiling

    """

    outer: frozenset[Category]
    inner: frozenset[Category]
    exhaustive: bool = False
    name: str = ""

    def __post_init__(self) -> None:
        if not self.outer or not self.inner:
            raise ConfigError("rules", "a rule needs outer and inner categories")
        shared = self.outer & self.inner
        if shared:
            names = ", ".join(sorted(c.name for c in shared))
            raise ConfigError("rules", f"{names} cannot be both outer and inner")
        if not self.name:
            object.__setattr__(self, "name", _default_name(self.outer, self.inner))

    @property
    def categories(self) -> frozenset[Category]:
        return self.outer | self.inner

    def __str__(self) -> str:
        return self.name


def _default_name(outer: frozenset[Category], inner: frozenset[Category]) -> str:
    def part(cats: frozenset[Category]) -> str:
        names = sorted(c.name for c in cats)
        return names[0] if len(names) == 1 else "{" + ",".join(names) + "}"

    return f"{part(outer)}>{part(inner)}"


def rule(
    outer: Category | Iterable[Category],
    inner: Category | Iterable[Category],
    *,
    exhaustive: bool = False,
    name: str = "",
) -> ResolutionRule:
    """Build a ResolutionRule from single categories or iterables of them."""
    return ResolutionRule(
        outer=_as_set(outer),
        inner=_as_set(inner),
        exhaustive=exhaustive,
        name=name,
    )


def _as_set(value: Category | Iterable[Category]) -> frozenset[Category]:
    if isinstance(value, Category):
        return frozenset((value,))
    return frozenset(value)


# The C11 highlighter's precedence table, in application order
C11_RULES: tuple[ResolutionRule, ...] = (
    rule(K, ID),
    rule(STR, ID),
    rule(ID, INT),
    rule(FLT, INT),
    rule(STR, K),
    rule(STR, PUNCT),
    rule({CHR, FLT}, PUNCT),
    rule({STR, CHR}, INT),
    rule(STR, FLT),
    rule(CHR, ID),
    # Enum declarations are one opaque token
    rule(ENUM, {K, ID, INT, PUNCT}, exhaustive=True),
)

# Nested matches the C11 table leaves behind because every category is
# matched against the original text (a suffix like the "f" of 3.14f is
# also an identifier).
SUPPLEMENTARY_RULES: tuple[ResolutionRule, ...] = (
    rule(ID, FLT),
    rule(FLT, ID),
    rule(INT, ID),
    rule(STR, {CHR, ENUM}, exhaustive=True),
    rule(CHR, {K, FLT, ENUM}, exhaustive=True),
    rule(ENUM, FLT),
)

DEFAULT_RULES: tuple[ResolutionRule, ...] = C11_RULES + SUPPLEMENTARY_RULES


__all__ = [
    "C11_RULES",
    "DEFAULT_RULES",
    "SUPPLEMENTARY_RULES",
    "ResolutionRule",
    "rule",
]
