"""Tests for the pattern combinators and the C11 category grammars."""

import pytest

from clex.grammar import KEYWORDS, PUNCTUATORS, compiled
from clex.grammar.combinators import (
    Kind,
    alt,
    charset,
    choice_of,
    compile_pattern,
    literal,
    one_or_more,
    optional,
    repeat,
    seq,
    word,
)
from clex.tokens import Category


class TestCombinators:
    """Regex source produced by the combinators."""

    def test_literal_is_escaped(self) -> None:
        dot = literal(".")
        assert dot.source == r"\."
        assert dot.kind is Kind.ATOM

    def test_alternation_grouped_inside_sequence(self) -> None:
        pattern = seq(alt(literal("a"), literal("b")), literal("c"))
        assert pattern.source == "(?:a|b)c"

    def test_operators(self) -> None:
        assert (literal("a") + literal("b")).source == "ab"
        assert (literal("a") | literal("b")).source == "a|b"

    def test_quantifiers(self) -> None:
        assert optional(literal("ab")).source == "(?:ab)?"
        assert one_or_more(charset("0-9")).source == "[0-9]+"
        assert repeat(charset("0-9"), 1, 3).source == "[0-9]{1,3}"
        assert repeat(charset("0-9"), 4).source == "[0-9]{4}"

    def test_word_boundaries(self) -> None:
        regex = compile_pattern(word(literal("if")))
        assert regex.search("iffy") is None
        assert regex.search("if (x)") is not None

    def test_word_continuation_rejected(self) -> None:
        regex = compile_pattern(word(literal("if"), literal("\\u")))
        assert regex.search("if\\u00e9") is None
        assert regex.search("if\\x") is not None

    def test_choice_of_prefers_longest(self) -> None:
        regex = compile_pattern(choice_of(["<", "<<", "<<="]))
        assert regex.match("<<= 1").group() == "<<="

    @pytest.mark.parametrize(
        "build",
        [
            lambda: seq(),
            lambda: alt(),
            lambda: literal(""),
            lambda: repeat(charset("a"), 3, 1),
            lambda: repeat(charset("a"), -1),
            lambda: choice_of([]),
        ],
    )
    def test_invalid_construction(self, build) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(ValueError):
            build()


def full(category: Category, text: str) -> bool:
    return compiled(category).fullmatch(text) is not None


class TestKeywordGrammar:
    def test_every_keyword(self) -> None:
        for kw in KEYWORDS:
            assert full(Category.KEYWORD, kw), kw

    def test_keyword_count(self) -> None:
        assert len(KEYWORDS) == 44

    @pytest.mark.parametrize("text", ["int_", "Int", "integer", "short "])
    def test_not_keywords(self, text: str) -> None:
        assert not full(Category.KEYWORD, text)

    @pytest.mark.parametrize("text", ["int\\u00e9", "enum\\U0001F600"])
    def test_universal_character_name_continues_word(self, text: str) -> None:
        assert compiled(Category.KEYWORD).search(text) is None


class TestIdentifierGrammar:
    @pytest.mark.parametrize(
        "text", ["foo", "_bar9", "foo1bar", "\\u00e9t", "x\\U0001F600"]
    )
    def test_identifiers(self, text: str) -> None:
        assert full(Category.IDENTIFIER, text)

    @pytest.mark.parametrize("text", ["9abc", "a-b", "\\u00e"])
    def test_not_identifiers(self, text: str) -> None:
        assert not full(Category.IDENTIFIER, text)


class TestIntegerGrammar:
    @pytest.mark.parametrize(
        "text",
        ["0", "017", "42", "0x1F", "0XffUL", "10ull", "10LLu", "7lu", "3uL"],
    )
    def test_integers(self, text: str) -> None:
        assert full(Category.INTEGER_CONSTANT, text)

    @pytest.mark.parametrize("text", ["08", "1.5", "0x", "10lul", "1Ll"])
    def test_not_integers(self, text: str) -> None:
        assert not full(Category.INTEGER_CONSTANT, text)

    def test_hex_prefix_not_split(self) -> None:
        assert compiled(Category.INTEGER_CONSTANT).match("0x1F").group() == "0x1F"


class TestFloatGrammar:
    @pytest.mark.parametrize(
        "text",
        [
            "3.14", ".5", "1.", "1e10", "1.5e-3", "2.0f",
            "1e+5L", "0x1p3", "0x1.8p-2f", "0X.8P1",
        ],  # fmt: skip
    )
    def test_floats(self, text: str) -> None:
        assert full(Category.FLOAT_CONSTANT, text)

    @pytest.mark.parametrize("text", ["42", "1e", "0x1.8", "e10"])
    def test_not_floats(self, text: str) -> None:
        assert not full(Category.FLOAT_CONSTANT, text)


class TestCharacterGrammar:
    @pytest.mark.parametrize(
        "text",
        ["'a'", "'\\n'", "L'x'", "'\\x41'", "'\\0'", "'\\123'", "'\\u00e9'", "u'ab'"],
    )
    def test_characters(self, text: str) -> None:
        assert full(Category.CHARACTER_CONSTANT, text)

    @pytest.mark.parametrize("text", ["''", "'a", "'\\q'", "'\n'"])
    def test_not_characters(self, text: str) -> None:
        assert not full(Category.CHARACTER_CONSTANT, text)


class TestStringGrammar:
    @pytest.mark.parametrize(
        "text",
        ['""', '"hi"', 'u8"x"', 'L"wide"', 'U"w"', '"a\\"b"', '"tab\\t"'],
    )
    def test_strings(self, text: str) -> None:
        assert full(Category.STRING_LITERAL, text)

    @pytest.mark.parametrize("text", ['"open', '"line\nbreak"', '"bad\\q"'])
    def test_not_strings(self, text: str) -> None:
        assert not full(Category.STRING_LITERAL, text)


class TestEnumGrammar:
    @pytest.mark.parametrize(
        "text",
        [
            "enum Color { RED, GREEN = 2, BLUE }",
            "enum { A }",
            "enum E {A,}",
            "enum E { A = 0x10u }",
            "enum\n{\n  A,\n  B\n}",
            "enum Color",
        ],
    )
    def test_enums(self, text: str) -> None:
        assert full(Category.ENUM_CONSTANT, text)

    @pytest.mark.parametrize(
        "text",
        [
            "myenum X",
            "enum E { A = x }",
            "enum E { A = -1 }",
            "enum {}",
            "enum\\u00e9 {A}",
        ],
    )
    def test_not_enums(self, text: str) -> None:
        assert not full(Category.ENUM_CONSTANT, text)


class TestPunctuatorGrammar:
    def test_every_punctuator(self) -> None:
        for punct in PUNCTUATORS:
            assert full(Category.PUNCTUATOR, punct), punct

    @pytest.mark.parametrize("text", ["<<=", "%:%:", "...", "->", ">>=", "##"])
    def test_longest_match(self, text: str) -> None:
        assert compiled(Category.PUNCTUATOR).match(text + "x").group() == text
