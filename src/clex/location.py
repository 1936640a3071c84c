"""Source location tracking for tokens and error messages.

Provides SourceLocation for reporting positions and LineIndex for turning
absolute offsets into 1-indexed line/column pairs.

Thread Safety:
SourceLocation is frozen (immutable). A LineIndex is built per source
string and never mutated afterwards.

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for tokens and error messages.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in the source string
        end_offset: Absolute end offset in the source string
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(1, 1, 0, 3, source_file="main.c")
        >>> str(loc)
        'main.c:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location as "file.c:10:5" or "10:5"."""
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to end."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            end_lineno=end.end_lineno or end.lineno,
            end_col_offset=end.end_col_offset or end.col_offset,
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create a placeholder location."""
        return cls(lineno=0, col_offset=0)


class LineIndex:
    """Offset to (line, column) lookup for one source string.

    Line starts are collected once with str.find; each lookup is a
    binary search.

    Usage:
        >>> index = LineIndex("int a;\\nint b;")
        >>> index.position(7)
        (2, 1)

    """

    __slots__ = ("_line_starts", "_length")

    def __init__(self, source: str) -> None:
        starts = [0]
        pos = source.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = source.find("\n", pos + 1)
        self._line_starts = starts
        self._length = len(source)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-indexed (lineno, col) for an absolute offset.

        Offsets past the end clamp to the end of the source.
        """
        offset = max(0, min(offset, self._length))
        line = bisect_right(self._line_starts, offset) - 1
        return line + 1, offset - self._line_starts[line] + 1

    def location(
        self, start: int, end: int, source_file: str | None = None
    ) -> SourceLocation:
        """Build a SourceLocation covering [start, end)."""
        lineno, col = self.position(start)
        end_lineno, end_col = self.position(end)
        return SourceLocation(
            lineno=lineno,
            col_offset=col,
            offset=start,
            end_offset=end,
            end_lineno=end_lineno,
            end_col_offset=end_col,
            source_file=source_file,
        )
