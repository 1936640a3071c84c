"""Category, Span, Marker and Token definitions for the clex lexer.

The matcher produces Spans, the disambiguator scans them as a stream of
Markers, and the public API hands out Token objects.

Thread Safety:
Span, Marker and Token are frozen (immutable) and safe to share across threads.
Category and Role are enums (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand,
the same way the lexer avoids allocating locations nobody reads.

"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clex.location import SourceLocation

# Marker code points: BEGIN markers are U+0000..U+0007 and END markers are
# U+0080..U+0087, indexed by Category.index.
BEGIN_BASE = 0x00
END_BASE = 0x80


class Category(Enum):
    """Token categories recognised by the lexer.

    Member order fixes the marker index (KEYWORD is 0, PUNCTUATOR is 7).
    Precedence is a separate total order, used only for conflict resolution.

    """

    KEYWORD = auto()
    IDENTIFIER = auto()
    INTEGER_CONSTANT = auto()
    FLOAT_CONSTANT = auto()
    ENUM_CONSTANT = auto()
    CHARACTER_CONSTANT = auto()
    STRING_LITERAL = auto()
    PUNCTUATOR = auto()

    @property
    def index(self) -> int:
        """Zero-based marker index."""
        return self.value - 1

    @property
    def begin_char(self) -> str:
        return chr(BEGIN_BASE + self.index)

    @property
    def end_char(self) -> str:
        return chr(END_BASE + self.index)

    @property
    def precedence(self) -> int:
        """Conflict-resolution rank; lower wins."""
        return _PRECEDENCE[self]

    @property
    def css_class(self) -> str:
        return _CSS_CLASSES[self]

    @classmethod
    def from_marker(cls, char: str) -> tuple["Category", "Role"] | None:
        """Return (category, role) for a marker character, else None."""
        return _MARKER_LOOKUP.get(char)


class Role(Enum):
    """Marker role: opening or closing a span."""

    BEGIN = auto()
    END = auto()


_PRECEDENCE: dict[Category, int] = {
    category: rank
    for rank, category in enumerate(
        (
            Category.ENUM_CONSTANT,
            Category.STRING_LITERAL,
            Category.CHARACTER_CONSTANT,
            Category.FLOAT_CONSTANT,
            Category.KEYWORD,
            Category.IDENTIFIER,
            Category.INTEGER_CONSTANT,
            Category.PUNCTUATOR,
        )
    )
}

# Class names understood by the highlighting stylesheet
_CSS_CLASSES: dict[Category, str] = {
    Category.KEYWORD: "KEYWORDS",
    Category.IDENTIFIER: "IDENTIFIERS",
    Category.INTEGER_CONSTANT: "CONSTANTS_INTEGER",
    Category.FLOAT_CONSTANT: "CONSTANTS_FLOAT",
    Category.ENUM_CONSTANT: "CONSTANTS_ENUM",
    Category.CHARACTER_CONSTANT: "CONSTANTS_CHARACTER",
    Category.STRING_LITERAL: "STRING_LITERALS",
    Category.PUNCTUATOR: "PUNCTUATORS",
}

_MARKER_LOOKUP: dict[str, tuple[Category, Role]] = {}
for _category in Category:
    _MARKER_LOOKUP[_category.begin_char] = (_category, Role.BEGIN)
    _MARKER_LOOKUP[_category.end_char] = (_category, Role.END)
del _category

ALL_CATEGORIES: frozenset[Category] = frozenset(Category)


@dataclass(frozen=True, slots=True)
class Span:
    """A matched region of source text tagged with a category.

    Attributes:
        category: Token category of the match
        start: Absolute start offset (inclusive)
        end: Absolute end offset (exclusive)

    """

    category: Category
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        """Return the matched substring of source."""
        return source[self.start : self.end]

    def contains(self, other: "Span") -> bool:
        """True if other lies within this span (equal extents included)."""
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: "Span") -> bool:
        """True if the spans share at least one character."""
        return self.start < other.end and other.start < self.end

    def crosses(self, other: "Span") -> bool:
        """True if the spans overlap without either containing the other."""
        return (
            self.overlaps(other)
            and not self.contains(other)
            and not other.contains(self)
        )

    def sort_key(self) -> tuple[int, int, int]:
        """Document order: by start, longest first, then precedence."""
        return (self.start, -self.end, self.category.precedence)


@dataclass(frozen=True, slots=True)
class Marker:
    """A zero-width BEGIN or END annotation belonging to a span."""

    span: Span
    role: Role

    @property
    def category(self) -> Category:
        return self.span.category

    @property
    def offset(self) -> int:
        return self.span.start if self.role is Role.BEGIN else self.span.end

    @property
    def char(self) -> str:
        if self.role is Role.BEGIN:
            return self.span.category.begin_char
        return self.span.category.end_char


@dataclass(frozen=True, slots=True)
class Token:
    """A classified lexeme handed out by :func:`clex.tokenize`.

    Attributes:
        category: Token category
        value: Exact source substring
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source
        _lineno: Start line number (1-indexed)
        _col: Start column (1-indexed)
        _end_lineno: End line number
        _end_col: End column
        _source_file: Optional source file path

    Thread Safety:
        Frozen dataclass; the lazy location cache is an idempotent write.

    """

    category: Category
    value: str
    _start_offset: int
    _end_offset: int
    _lineno: int
    _col: int
    _end_lineno: int | None = None
    _end_col: int | None = None
    _source_file: str | None = None
    _location_cache: "SourceLocation | None" = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> "SourceLocation":
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from clex.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._end_lineno,
            end_col_offset=self._end_col,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def span(self) -> Span:
        return Span(self.category, self._start_offset, self._end_offset)

    @property
    def start(self) -> int:
        return self._start_offset

    @property
    def end(self) -> int:
        return self._end_offset

    @property
    def lineno(self) -> int:
        return self._lineno

    @property
    def col(self) -> int:
        return self._col

    def __repr__(self) -> str:
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.category.name}, {val!r}, {self._lineno}:{self._col})"
