"""Exception classes for clex.

Lexing itself never raises; these cover the edges of the library
(decoding annotated text, configuration).
"""

from __future__ import annotations


class ClexError(Exception):
    """Base exception for all clex errors.

    Subclass this for specific error categories.
    """

    pass


class MarkerError(ClexError):
    """Malformed marker stream in annotated text.

    Raised when an END marker has no open BEGIN of the same category,
    or when a BEGIN marker is never closed.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
    ) -> None:
        """Initialize marker error with optional location.

        Args:
            message: Error description
            offset: Offset in the stripped (plain) text
            lineno: Line number where the error occurred (1-indexed)
            col_offset: Column where the error occurred (1-indexed)
        """
        self.message = message
        self.offset = offset
        self.lineno = lineno
        self.col_offset = col_offset

        location = ""
        if lineno is not None:
            location = f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ConfigError(ClexError):
    """Invalid lexer configuration.

    Raised for unknown category names or resolution rules that cannot
    be applied.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            option: Name of the offending option (e.g., "categories")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Option '{option}': {message}")
