"""Two-pass C lexer: independent matching, then ordered disambiguation.

Pass one runs every enabled category's grammar over the original text.
Pass two applies the resolution rules in table order and drops any
spans left crossing each other. The survivors are the token boundaries
handed to the annotator and the renderer.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; the compiled grammars are immutable.

"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from clex.config import LexConfig, get_lex_config
from clex.lexer.disambiguator import resolve
from clex.lexer.matcher import count_by_category, match_all
from clex.location import LineIndex
from clex.markers import annotate
from clex.profiling import get_lex_accumulator
from clex.tokens import Span, Token
from clex.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer:
    """Lexer for C11 source text.

    Usage:
        >>> lexer = Lexer("int x;")
        >>> for token in lexer.tokenize():
        ...     print(token)
        Token(KEYWORD, 'int', 1:1)
        Token(IDENTIFIER, 'x', 1:5)
        Token(PUNCTUATOR, ';', 1:6)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_config",
        "_spans",  # Cached surviving spans
        "_line_index",  # Built on first tokenize()
    )

    def __init__(
        self,
        source: str,
        *,
        config: LexConfig | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: C source text
            config: Lexer configuration (defaults to the active context config)
            source_file: Optional source file path for token locations
        """
        self._source = source
        self._source_file = source_file
        self._config = config if config is not None else get_lex_config()
        self._spans: tuple[Span, ...] | None = None
        self._line_index: LineIndex | None = None

    @property
    def source(self) -> str:
        return self._source

    def spans(self) -> tuple[Span, ...]:
        """Surviving spans in document order (outer before inner)."""
        if self._spans is None:
            self._spans = self._run()
        return self._spans

    def _run(self) -> tuple[Span, ...]:
        config = self._config
        matched = match_all(self._source, config.categories)

        if logger.isEnabledFor(logging.DEBUG):
            counts = count_by_category(matched)
            summary = ", ".join(
                f"{category.name}={counts[category]}"
                for category in sorted(counts, key=lambda c: c.index)
            )
            logger.debug(
                "matched %d spans in %d chars: %s",
                len(matched),
                len(self._source),
                summary,
            )

        resolution = resolve(matched, config.rules, repair=config.repair_overlaps)
        if resolution.repaired:
            logger.debug("repair pass dropped %d crossing spans", resolution.repaired)

        accumulator = get_lex_accumulator()
        if accumulator is not None:
            accumulator.record_lex(
                source_length=len(self._source),
                matched=len(matched),
                emitted=len(resolution.spans),
                rule_hits=resolution.removed_by_rule,
            )

        return tuple(sorted(resolution.spans, key=Span.sort_key))

    def tokenize(self) -> Iterator[Token]:
        """Yield one Token per surviving span, in document order.

        Yields:
            Token objects with line/column coordinates
        """
        if self._line_index is None:
            self._line_index = LineIndex(self._source)
        index = self._line_index

        for span in self.spans():
            lineno, col = index.position(span.start)
            end_lineno, end_col = index.position(span.end)
            yield Token(
                category=span.category,
                value=span.text(self._source),
                _start_offset=span.start,
                _end_offset=span.end,
                _lineno=lineno,
                _col=col,
                _end_lineno=end_lineno,
                _end_col=end_col,
                _source_file=self._source_file,
            )

    def annotate(self) -> str:
        """Return the source with category markers around every token."""
        return annotate(self._source, self.spans())
