"""Two-pass lexer for C11 source text.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer and the pass functions
├── core.py              # Lexer class (orchestrates both passes)
├── matcher.py           # Pass one: independent scans per category
└── disambiguator.py     # Pass two: ordered rules + overlap repair

Usage:
    >>> from clex.lexer import Lexer
    >>> Lexer("x = 1;").annotate()
    '\\x01x\\x81 \\x07=\\x87 \\x021\\x82\\x07;\\x87'

"""

from clex.lexer.core import Lexer
from clex.lexer.disambiguator import (
    Resolution,
    disambiguate,
    repair_overlaps,
    resolve,
    suppress,
)
from clex.lexer.matcher import match_all, match_category

__all__ = [
    "Lexer",
    "Resolution",
    "disambiguate",
    "match_all",
    "match_category",
    "repair_overlaps",
    "resolve",
    "suppress",
]
