"""ContextVar-based lexer configuration for clex.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The Lexer reads the active config when no explicit config is passed.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from clex.config import LexConfig, lex_config_context
    from clex.tokens import Category

    # Highlight only literals
    literals = LexConfig(
        categories=frozenset({Category.STRING_LITERAL, Category.CHARACTER_CONSTANT})
    )
    with lex_config_context(literals):
        annotated = lex(source)

"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from clex.errors import ConfigError
from clex.rules import DEFAULT_RULES, ResolutionRule
from clex.tokens import ALL_CATEGORIES, Category


@dataclass(frozen=True, slots=True)
class LexConfig:
    """Immutable lexer configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Note: source_file is intentionally excluded; it's per-call state,
    not configuration. It remains on the Lexer instance.

    Attributes:
        categories: Categories the matcher runs
        rules: Ordered resolution rules applied after matching
        repair_overlaps: Drop crossing spans after the rules so output
            markers always nest properly

    """

    categories: frozenset[Category] = ALL_CATEGORIES
    rules: tuple[ResolutionRule, ...] = DEFAULT_RULES
    repair_overlaps: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "LexConfig":
        """Create LexConfig from dictionary.

        Only includes keys that are valid LexConfig fields; unknown keys
        are silently ignored. Categories may be given by name.

        Example:
            >>> config = LexConfig.from_dict({
            ...     "categories": ["KEYWORD", "STRING_LITERAL"],
            ...     "unknown_key": "ignored",
            ... })
            >>> sorted(c.name for c in config.categories)
            ['KEYWORD', 'STRING_LITERAL']

        Raises:
            ConfigError: If a category name is unknown.

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "categories" in filtered:
            filtered["categories"] = parse_categories(filtered["categories"])
        if "rules" in filtered:
            filtered["rules"] = tuple(filtered["rules"])
        return cls(**filtered)


def parse_categories(values: Iterable[Category | str]) -> frozenset[Category]:
    """Convert category members or names (case-insensitive) to a frozenset.

    Raises:
        ConfigError: If a name does not match any Category.

    """
    if isinstance(values, str | Category):
        values = [values]
    result: set[Category] = set()
    for value in values:
        if isinstance(value, Category):
            result.add(value)
            continue
        try:
            result.add(Category[str(value).upper()])
        except KeyError:
            raise ConfigError("categories", f"unknown category {value!r}") from None
    return frozenset(result)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexConfig = LexConfig()

# Thread-local configuration via ContextVar
_lex_config: ContextVar[LexConfig] = ContextVar(
    "lex_config",
    default=_DEFAULT_CONFIG,
)


def get_lex_config() -> LexConfig:
    """Get current lexer configuration (thread-local)."""
    return _lex_config.get()


def set_lex_config(config: LexConfig) -> None:
    """Set lexer configuration for current context.

    Only affects the current thread's context.
    """
    _lex_config.set(config)


def reset_lex_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton.
    """
    _lex_config.set(_DEFAULT_CONFIG)


@contextmanager
def lex_config_context(config: LexConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with lex_config_context(LexConfig(repair_overlaps=False)):
        ...     spans = Lexer("int x;").spans()
        >>> # Automatically reset to previous config

    """
    previous = _lex_config.get()
    _lex_config.set(config)
    try:
        yield
    finally:
        _lex_config.set(previous)


__all__ = [
    "LexConfig",
    "get_lex_config",
    "lex_config_context",
    "parse_categories",
    "reset_lex_config",
    "set_lex_config",
]
