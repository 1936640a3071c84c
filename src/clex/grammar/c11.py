"""C11 (ISO/IEC 9899:2011) lexical grammars, one per token category.

Each grammar is composed from the combinators in
:mod:`clex.grammar.combinators` and compiled once at import time.
Sub-patterns are exposed at module level so tests and other grammars
can reuse them (the enum grammar embeds identifier and integer).

Reference: ISO/IEC 9899:2011 §6.4 Lexical elements.

"""

from __future__ import annotations

import re

from clex.grammar.combinators import (
    Pattern,
    alt,
    charset,
    choice_of,
    compile_pattern,
    literal,
    one_or_more,
    optional,
    raw,
    repeat,
    word,
    zero_or_more,
)
from clex.tokens import Category

# §6.4.1 Keywords
KEYWORDS: frozenset[str] = frozenset(
    {
        "auto",
        "break",
        "case",
        "char",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extern",
        "float",
        "for",
        "goto",
        "if",
        "inline",
        "int",
        "long",
        "register",
        "restrict",
        "return",
        "short",
        "signed",
        "sizeof",
        "static",
        "struct",
        "switch",
        "typedef",
        "union",
        "unsigned",
        "void",
        "volatile",
        "while",
        "_Alignas",
        "_Alignof",
        "_Atomic",
        "_Bool",
        "_Complex",
        "_Generic",
        "_Imaginary",
        "_Noreturn",
        "_Static_assert",
        "_Thread_local",
    }
)

# §6.4.6 Punctuators, digraphs included
PUNCTUATORS: frozenset[str] = frozenset(
    {
        "[", "]", "(", ")", "{", "}", ".", "->",
        "++", "--", "&", "*", "+", "-", "~", "!",
        "/", "%", "<<", ">>", "<", ">", "<=", ">=", "==", "!=", "^", "|", "&&", "||",
        "?", ":", ";", "...",
        "=", "*=", "/=", "%=", "+=", "-=", "<<=", ">>=", "&=", "^=", "|=",
        ",", "#", "##",
        "<:", ":>", "<%", "%>", "%:", "%:%:",
    }
)  # fmt: skip

# =========================================================================
# Shared building blocks
# =========================================================================

digit = charset("0-9")
nonzero_digit = charset("1-9")
octal_digit = charset("0-7")
hexadecimal_digit = charset("0-9a-fA-F")
nondigit = charset("_a-zA-Z")
digit_sequence = one_or_more(digit)
hexadecimal_digit_sequence = one_or_more(hexadecimal_digit)
sign = charset("+-")
whitespace = raw(r"\s*")

# §6.4.3 Universal character names
hex_quad = repeat(hexadecimal_digit, 4)
universal_character_name = alt(
    literal("\\u") + hex_quad,
    literal("\\U") + hex_quad + hex_quad,
)

# =========================================================================
# §6.4.2 Identifiers
# =========================================================================

identifier_nondigit = alt(nondigit, universal_character_name)
identifier = identifier_nondigit + zero_or_more(alt(identifier_nondigit, digit))

# =========================================================================
# §6.4.4.1 Integer constants
# =========================================================================

unsigned_suffix = charset("uU")
long_suffix = charset("lL")
long_long_suffix = alt(literal("ll"), literal("LL"))
integer_suffix = alt(
    unsigned_suffix + optional(alt(long_long_suffix, long_suffix)),
    long_long_suffix + optional(unsigned_suffix),
    long_suffix + optional(unsigned_suffix),
)

hexadecimal_prefix = literal("0") + charset("xX")
hexadecimal_constant = hexadecimal_prefix + hexadecimal_digit_sequence
decimal_constant = nonzero_digit + zero_or_more(digit)
octal_constant = literal("0") + zero_or_more(octal_digit)

# Hexadecimal first: octal would otherwise claim the leading "0" of "0x1F"
integer_constant = alt(
    hexadecimal_constant,
    decimal_constant,
    octal_constant,
) + optional(integer_suffix)

# =========================================================================
# §6.4.4.2 Floating constants
# =========================================================================

floating_suffix = charset("flFL")
exponent_part = charset("eE") + optional(sign) + digit_sequence
binary_exponent_part = charset("pP") + optional(sign) + digit_sequence

fractional_constant = alt(
    optional(digit_sequence) + literal(".") + digit_sequence,
    digit_sequence + literal("."),
)
decimal_floating_constant = alt(
    fractional_constant + optional(exponent_part),
    digit_sequence + exponent_part,
) + optional(floating_suffix)

hexadecimal_fractional_constant = alt(
    optional(hexadecimal_digit_sequence) + literal(".") + hexadecimal_digit_sequence,
    hexadecimal_digit_sequence + literal("."),
)
hexadecimal_floating_constant = (
    hexadecimal_prefix
    + alt(hexadecimal_fractional_constant, hexadecimal_digit_sequence)
    + binary_exponent_part
    + optional(floating_suffix)
)

floating_constant = alt(hexadecimal_floating_constant, decimal_floating_constant)

# =========================================================================
# §6.7.2.2 Enumeration specifiers (highlighted as one constant)
# =========================================================================

enumerator = identifier + optional(
    whitespace + literal("=") + whitespace + integer_constant
)
enumerator_list = enumerator + zero_or_more(
    whitespace + literal(",") + whitespace + enumerator
)
enum_body = (
    literal("{")
    + whitespace
    + enumerator_list
    + optional(whitespace + literal(","))
    + whitespace
    + literal("}")
)
enum_keyword = word(literal("enum"), universal_character_name)

enumeration_constant = alt(
    enum_keyword + whitespace + optional(identifier + whitespace) + enum_body,
    enum_keyword + raw(r"\s+") + identifier,
)

# =========================================================================
# §6.4.4.4 Character constants and §6.4.5 String literals
# =========================================================================

simple_escape_sequence = literal("\\") + charset("'\"?\\\\abfnrtv")
octal_escape_sequence = literal("\\") + repeat(octal_digit, 1, 3)
hexadecimal_escape_sequence = literal("\\x") + hexadecimal_digit_sequence
escape_sequence = alt(
    simple_escape_sequence,
    octal_escape_sequence,
    hexadecimal_escape_sequence,
    universal_character_name,
)

c_char = alt(charset(r"^'\\\n"), escape_sequence)
character_constant = (
    optional(charset("LuU")) + literal("'") + one_or_more(c_char) + literal("'")
)

s_char = alt(charset(r'^"\\\n'), escape_sequence)
encoding_prefix = alt(literal("u8"), charset("uUL"))
string_literal = (
    optional(encoding_prefix) + literal('"') + zero_or_more(s_char) + literal('"')
)

# =========================================================================
# §6.4.1 / §6.4.6 word lists
# =========================================================================

keyword = word(choice_of(KEYWORDS), universal_character_name)
punctuator = choice_of(PUNCTUATORS)

GRAMMARS: dict[Category, Pattern] = {
    Category.KEYWORD: keyword,
    Category.IDENTIFIER: identifier,
    Category.INTEGER_CONSTANT: integer_constant,
    Category.FLOAT_CONSTANT: floating_constant,
    Category.ENUM_CONSTANT: enumeration_constant,
    Category.CHARACTER_CONSTANT: character_constant,
    Category.STRING_LITERAL: string_literal,
    Category.PUNCTUATOR: punctuator,
}

# Compiled once; immutable and shared by every lex() call
COMPILED: dict[Category, re.Pattern[str]] = {
    category: compile_pattern(pattern) for category, pattern in GRAMMARS.items()
}


def compiled(category: Category) -> re.Pattern[str]:
    """Return the compiled matcher for a category."""
    return COMPILED[category]
