"""
clex: a two-pass lexical analyzer for C11 source text.

Classifies every lexeme as one of eight categories (keyword, identifier,
integer/float/enum/character constant, string literal, punctuator) and
annotates the text with zero-width category markers for highlighting.

Quick Start:
    >>> from clex import lex, strip_markers, tokenize
    >>> annotated = lex("int x = 0;")
    >>> strip_markers(annotated)
    'int x = 0;'
    >>> [t.category.name for t in tokenize("int x")]
    ['KEYWORD', 'IDENTIFIER']

    >>> # HTML for a highlighting page
    >>> from clex import render
    >>> render("x")
    '<span class="IDENTIFIERS">x</span>'

Configuration:
    >>> from clex import Category, LexConfig, lex_config_context
    >>> with lex_config_context(LexConfig(categories=frozenset({Category.KEYWORD}))):
    ...     annotated = lex("int x;")

"""

from collections.abc import Mapping

from clex.config import (
    LexConfig,
    get_lex_config,
    lex_config_context,
    reset_lex_config,
    set_lex_config,
)
from clex.errors import ClexError, ConfigError, MarkerError
from clex.lexer import Lexer
from clex.location import LineIndex, SourceLocation
from clex.markers import annotate, decode_spans, iter_markers, strip_markers
from clex.profiling import LexAccumulator, get_lex_accumulator, profiled_lex
from clex.renderers.html import HtmlRenderer
from clex.rules import C11_RULES, DEFAULT_RULES, ResolutionRule, rule
from clex.serialization import from_json, to_json
from clex.tokens import Category, Marker, Role, Span, Token

__version__ = "0.1.0"


def lex(source: str) -> str:
    """Lex C source and return it annotated with category markers.

    Never raises for any input: text no grammar accepts is left unmarked.
    Stripping the markers gives back ``source`` unchanged.

    Args:
        source: C source text

    Returns:
        Annotated text

    Example:
        >>> lex("int") == "\\x00int\\x80"
        True
    """
    return Lexer(source).annotate()


def tokenize(source: str, *, source_file: str | None = None) -> list[Token]:
    """Lex C source into a list of tokens in document order.

    Outer tokens come before the tokens nested inside them.

    Args:
        source: C source text
        source_file: Optional source file path recorded on each token

    Returns:
        Tokens with category, value and location
    """
    return list(Lexer(source, source_file=source_file).tokenize())


def render(source: str, *, class_names: Mapping[Category, str] | None = None) -> str:
    """Lex C source and render it as highlighted HTML.

    Args:
        source: C source text
        class_names: Optional per-category CSS class overrides

    Returns:
        HTML fragment with one ``<span class="...">`` per token
    """
    return HtmlRenderer(class_names).render(lex(source))


__all__ = [
    # Main API
    "lex",
    "tokenize",
    "render",
    "Lexer",
    # Tokens
    "Category",
    "Role",
    "Span",
    "Marker",
    "Token",
    "SourceLocation",
    "LineIndex",
    # Markers
    "annotate",
    "strip_markers",
    "iter_markers",
    "decode_spans",
    # Rules
    "ResolutionRule",
    "rule",
    "C11_RULES",
    "DEFAULT_RULES",
    # Configuration
    "LexConfig",
    "get_lex_config",
    "set_lex_config",
    "reset_lex_config",
    "lex_config_context",
    # Profiling
    "LexAccumulator",
    "get_lex_accumulator",
    "profiled_lex",
    # Rendering and serialization
    "HtmlRenderer",
    "to_json",
    "from_json",
    # Errors
    "ClexError",
    "ConfigError",
    "MarkerError",
]
