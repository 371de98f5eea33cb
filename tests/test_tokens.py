# tests/test_tokens.py
"""
Tests for the lexical scanner: source text → tokens.
"""

import pytest

from treepass.errors import ErrorCodes, LexError, UnterminatedStringError
from treepass.grammars.calls import RULES as CALLS_RULES
from treepass.grammars.optional_chaining import RULES as OPT_RULES
from treepass.tokens import Lexer, LexicalRules, Token, TokenKind, tokenize


def kinds(tokens):
    return [t.kind for t in tokens]


def texts(tokens):
    return [t.text for t in tokens]


class TestCallsTokens:

    def test_example(self):
        toks = tokenize("(add 2 (subtract 4 2))", CALLS_RULES)
        assert texts(toks) == ["(", "add", "2", "(", "subtract", "4", "2", ")", ")"]
        assert kinds(toks) == [
            TokenKind.PAREN, TokenKind.NAME, TokenKind.NUMBER,
            TokenKind.PAREN, TokenKind.NAME, TokenKind.NUMBER, TokenKind.NUMBER,
            TokenKind.PAREN, TokenKind.PAREN,
        ]

    def test_empty_input(self):
        assert tokenize("", CALLS_RULES) == []

    def test_whitespace_only(self):
        assert tokenize("  \n\t ", CALLS_RULES) == []

    def test_number_maximal_munch(self):
        toks = tokenize("42", CALLS_RULES)
        assert toks == [Token(TokenKind.NUMBER, "42", 0)]

    def test_name_maximal_munch(self):
        toks = tokenize("subtract", CALLS_RULES)
        assert len(toks) == 1
        assert toks[0].text == "subtract"

    def test_digits_then_letters_split(self):
        toks = tokenize("12ab", CALLS_RULES)
        assert texts(toks) == ["12", "ab"]
        assert kinds(toks) == [TokenKind.NUMBER, TokenKind.NAME]

    def test_positions(self):
        toks = tokenize("(add  10)", CALLS_RULES)
        assert [t.position for t in toks] == [0, 1, 6, 8]

    def test_string_keeps_quotes(self):
        toks = tokenize('(say "hi there")', CALLS_RULES)
        assert toks[2] == Token(TokenKind.STRING, '"hi there"', 5)

    def test_empty_string(self):
        toks = tokenize('""', CALLS_RULES)
        assert toks == [Token(TokenKind.STRING, '""', 0)]

    def test_mark_characters_rejected(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("(a;)", CALLS_RULES)
        assert exc_info.value.char == ";"
        assert exc_info.value.position == 2


class TestOptionalChainingTokens:

    def test_example(self):
        toks = tokenize("let o = x?.y;", OPT_RULES)
        assert texts(toks) == ["let", "o", "=", "x", "?", ".", "y", ";"]
        assert kinds(toks) == [
            TokenKind.KEYWORD, TokenKind.NAME, TokenKind.MARK, TokenKind.NAME,
            TokenKind.MARK, TokenKind.MARK, TokenKind.NAME, TokenKind.MARK,
        ]

    def test_const_is_keyword(self):
        toks = tokenize("const", OPT_RULES)
        assert toks[0].kind is TokenKind.KEYWORD

    def test_keyword_requires_exact_match(self):
        toks = tokenize("letx", OPT_RULES)
        assert toks == [Token(TokenKind.NAME, "letx", 0)]

    def test_keyword_prefix_of_name(self):
        toks = tokenize("lettuce le", OPT_RULES)
        assert kinds(toks) == [TokenKind.NAME, TokenKind.NAME]

    def test_parens_not_punctuation(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("let o = (x);", OPT_RULES)
        assert exc_info.value.char == "("
        assert exc_info.value.position == 8


class TestLexErrors:

    def test_unsupported_character(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("(add 2 #)", CALLS_RULES)
        err = exc_info.value
        assert err.char == "#"
        assert err.position == 7
        assert err.code == ErrorCodes.INVALID_CHARACTER
        assert "'#'" in str(err)

    def test_uppercase_rejected(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("(Add 1)", CALLS_RULES)
        assert exc_info.value.char == "A"

    def test_unprintable_described_by_codepoint(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("\x00", CALLS_RULES)
        assert "U+0000" in str(exc_info.value)

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('(say "oops)', CALLS_RULES)
        err = exc_info.value
        assert isinstance(err, LexError)
        assert err.position == 5
        assert err.code == "TP-0002"


class TestLexicalRules:

    def test_default_rules_have_no_punctuation(self):
        with pytest.raises(LexError):
            Lexer(LexicalRules()).tokenize("(")

    def test_custom_punctuation(self):
        rules = LexicalRules(punctuation={"+": TokenKind.MARK})
        toks = Lexer(rules).tokenize("a+b")
        assert texts(toks) == ["a", "+", "b"]

    def test_token_is(self):
        tok = Token(TokenKind.PAREN, "(", 0)
        assert tok.is_(TokenKind.PAREN)
        assert tok.is_(TokenKind.PAREN, "(")
        assert not tok.is_(TokenKind.PAREN, ")")
        assert not tok.is_(TokenKind.NAME)
