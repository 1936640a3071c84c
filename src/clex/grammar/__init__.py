"""Grammar definitions for the clex matcher.

Architecture:
grammar/
├── __init__.py          # Re-exports GRAMMARS, COMPILED, compiled
├── combinators.py       # Pattern value type and combinators
└── c11.py               # The eight C11 category grammars

Usage:
    >>> from clex.grammar import compiled
    >>> from clex.tokens import Category
    >>> compiled(Category.PUNCTUATOR).match("<<=").group()
    '<<='

"""

from clex.grammar.c11 import COMPILED, GRAMMARS, KEYWORDS, PUNCTUATORS, compiled
from clex.grammar.combinators import Pattern

__all__ = ["COMPILED", "GRAMMARS", "KEYWORDS", "PUNCTUATORS", "Pattern", "compiled"]
