# tests/test_parser.py
"""
Tests for both grammar parsers: tokens → source AST.
"""

import pytest

from treepass import ast as A
from treepass.errors import ErrorCodes, ParseError, UnexpectedEndError, UnexpectedTokenError
from treepass.grammars import calls, optional_chaining
from treepass.grammars.optional_chaining import OptionalChainingParser, ParseMode
from treepass.parser import TokenCursor
from treepass.tokens import Token, TokenKind
from tests.conftest import (
    CALLS_EXAMPLE, CALLS_TWO_FORMS, CALLS_NO_ARGS, CALLS_STRING_ARG,
    CALLS_TRUNCATED,
    OPT_EXAMPLE, OPT_PLAIN_MEMBER, OPT_IDENTIFIER, OPT_CONST, OPT_MULTI,
    OPT_NUMBER_INIT, OPT_STRING_INIT,
)


def parse_calls(src):
    return calls.parse(calls.GRAMMAR.tokenize(src))


def parse_opt(src):
    return optional_chaining.parse(optional_chaining.GRAMMAR.tokenize(src))


class TestTokenCursor:

    def test_empty_sequence(self):
        cursor = TokenCursor([])
        assert cursor.at_end()
        assert cursor.peek() is None
        assert cursor.end_position == 0

    def test_current_at_end_raises(self):
        with pytest.raises(UnexpectedEndError) as exc_info:
            TokenCursor([]).current(expected="expression")
        assert exc_info.value.expected == "expression"

    def test_accept_leaves_mismatch_in_place(self):
        cursor = TokenCursor([Token(TokenKind.NAME, "a", 0)])
        assert cursor.accept(TokenKind.NUMBER) is None
        assert cursor.pos == 0
        assert cursor.accept(TokenKind.NAME).text == "a"
        assert cursor.at_end()

    def test_expect_mismatch(self):
        cursor = TokenCursor([Token(TokenKind.NUMBER, "1", 3)])
        with pytest.raises(UnexpectedTokenError) as exc_info:
            cursor.expect(TokenKind.NAME)
        assert exc_info.value.kind == "number"
        assert exc_info.value.span.offset == 3

    def test_end_position_past_last_token(self):
        cursor = TokenCursor([Token(TokenKind.NAME, "abc", 4)])
        assert cursor.end_position == 7


class TestParseCalls:

    def test_example(self):
        prog = parse_calls(CALLS_EXAMPLE)
        assert prog == A.Program(body=(
            A.CallExpression(name="add", params=(
                A.NumberLiteral("2"),
                A.CallExpression(name="subtract", params=(
                    A.NumberLiteral("4"),
                    A.NumberLiteral("2"),
                )),
            )),
        ))

    def test_empty_input(self):
        assert parse_calls("") == A.Program(body=())

    def test_each_top_level_form_is_one_body_entry(self):
        prog = parse_calls(CALLS_TWO_FORMS)
        assert [n.name for n in prog.body] == ["add", "mul"]

    def test_no_arguments(self):
        prog = parse_calls(CALLS_NO_ARGS)
        assert prog.body == (A.CallExpression(name="now", params=()),)

    def test_bare_literal_at_top_level(self):
        prog = parse_calls("7")
        assert prog.body == (A.NumberLiteral("7"),)

    def test_string_quotes_stripped(self):
        prog = parse_calls(CALLS_STRING_ARG)
        assert prog.body[0].params == (A.StringLiteral("foo"), A.StringLiteral("bar"))

    def test_truncated_input(self):
        with pytest.raises(UnexpectedEndError) as exc_info:
            parse_calls(CALLS_TRUNCATED)
        err = exc_info.value
        assert isinstance(err, ParseError)
        assert err.code == ErrorCodes.UNEXPECTED_END
        assert err.span.offset == 6

    def test_open_paren_only(self):
        with pytest.raises(UnexpectedEndError):
            parse_calls("(")

    def test_stray_close_paren(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_calls(")")
        assert exc_info.value.kind == "paren"
        assert exc_info.value.text == ")"

    def test_call_needs_name(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_calls("(1 2)")
        assert exc_info.value.kind == "number"
        assert exc_info.value.span.offset == 1

    def test_source_tree_is_immutable(self):
        prog = parse_calls(CALLS_EXAMPLE)
        with pytest.raises(AttributeError):
            prog.body[0].name = "mul"


class TestParseOptionalChaining:

    def test_example(self):
        prog = parse_opt(OPT_EXAMPLE)
        assert prog == A.Program(body=(
            A.VariableDeclaration(kind="let", declarations=(
                A.VariableDeclarator(
                    name="o",
                    init=A.ChainExpression(
                        A.MemberExpression(object="x", property="y", optional=True)
                    ),
                ),
            )),
        ))

    def test_plain_member(self):
        decl = parse_opt(OPT_PLAIN_MEMBER).body[0].declarations[0]
        assert decl.init == A.ChainExpression(A.MemberExpression("x", "y", optional=False))

    def test_plain_identifier(self):
        decl = parse_opt(OPT_IDENTIFIER).body[0].declarations[0]
        assert decl.init == A.Identifier("x")

    def test_const(self):
        assert parse_opt(OPT_CONST).body[0].kind == "const"

    def test_multiple_declarators(self):
        decls = parse_opt(OPT_MULTI).body[0].declarations
        assert [d.name for d in decls] == ["a", "b"]
        assert decls[0].init.expression.optional is True
        assert decls[1].init.expression.optional is False

    def test_literal_inits(self):
        assert parse_opt(OPT_NUMBER_INIT).body[0].declarations[0].init == A.NumberLiteral("42")
        assert parse_opt(OPT_STRING_INIT).body[0].declarations[0].init == A.StringLiteral("hi")

    def test_empty_input(self):
        assert parse_opt("") == A.Program(body=())

    def test_statement_must_start_with_keyword(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_opt("o = x;")
        assert exc_info.value.kind == "name"

    def test_missing_semicolon(self):
        with pytest.raises(UnexpectedEndError):
            parse_opt("let o = x?.y")

    def test_truncated_after_question_mark(self):
        with pytest.raises(UnexpectedEndError):
            parse_opt("let o = x?")

    def test_missing_property(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_opt("let o = x?.;")
        assert exc_info.value.kind == "mark"
        assert exc_info.value.text == ";"

    def test_nested_chain_rejected(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_opt("let o = a?.b?.c;")
        assert exc_info.value.kind == "mark"
        assert exc_info.value.text == "?"

    def test_keyword_as_name_rejected(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_opt("let let = x;")
        assert exc_info.value.kind == "keyword"

    def test_walk_by_mode(self):
        tokens = optional_chaining.GRAMMAR.tokenize("x?.y")
        node = OptionalChainingParser(tokens).walk(ParseMode.CHAIN)
        assert node == A.ChainExpression(A.MemberExpression("x", "y", optional=True))
