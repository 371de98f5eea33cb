# tests/test_errors.py
"""
Tests for error codes, spans and diagnostic formatting.
"""

from treepass.errors import (
    CodegenError, ErrorCode, ErrorCodes, ErrorPhase, InternalError,
    LexError, SourceSpan, TraversalError, TreepassError,
    UnexpectedEndError, UnexpectedTokenError,
)


class TestErrorCode:

    def test_format(self):
        assert ErrorCodes.INVALID_CHARACTER.code == "TP-0001"
        assert str(ErrorCodes.UNEXPECTED_END) == "TP-1001"

    def test_equality(self):
        assert ErrorCode(1000, ErrorPhase.SYNTAX, "X") == ErrorCodes.UNEXPECTED_TOKEN
        assert ErrorCodes.UNEXPECTED_TOKEN == "TP-1000"
        assert ErrorCodes.UNEXPECTED_TOKEN != ErrorCodes.UNEXPECTED_END
        assert ErrorCodes.UNEXPECTED_TOKEN != 1000

    def test_phase(self):
        assert ErrorCodes.UNTERMINATED_STRING.phase is ErrorPhase.LEXICAL
        assert ErrorCodes.CONTEXT_MISSING.phase is ErrorPhase.INTERNAL


class TestSourceSpan:

    def test_unknown(self):
        span = SourceSpan()
        assert not span.known
        assert str(span) == "<unknown location>"

    def test_known(self):
        assert str(SourceSpan(file="a.lisp", offset=3)) == "a.lisp:3"
        assert str(SourceSpan(offset=3)) == "<input>:3"


class TestHierarchy:

    def test_everything_is_a_treepass_error(self):
        for exc in (
            LexError("#", 0),
            UnexpectedTokenError("name", "x", 0),
            UnexpectedEndError(),
            TraversalError("Foo"),
            CodegenError("Foo"),
            InternalError("broken"),
        ):
            assert isinstance(exc, TreepassError)

    def test_default_code_is_internal(self):
        assert TreepassError("x").code == ErrorCodes.INTERNAL_ERROR

    def test_phase_follows_code(self):
        assert TraversalError("Foo").phase is ErrorPhase.TRAVERSAL
        assert CodegenError("Foo").phase is ErrorPhase.CODEGEN


class TestFormatting:

    def test_gcc_format_with_caret(self):
        err = LexError("#", 7).with_source("(add 2 #)", "<expr>")
        assert err.to_gcc_format() == (
            "<expr>:7: error: Unsupported character '#' at position 7 [TP-0001]\n"
            "    (add 2 #)\n"
            "           ^"
        )

    def test_caret_on_later_line(self):
        err = LexError("#", 9).with_source("(f 1)\n(g #)")
        text = err.to_gcc_format()
        assert "    (g #)\n       ^" in text

    def test_end_of_input_caret(self):
        err = UnexpectedEndError(expected="')'", position=6).with_source("(add 2")
        assert err.to_gcc_format().endswith("    (add 2\n          ^")

    def test_no_caret_without_position(self):
        err = TraversalError("Foo").with_source("(add 2)")
        assert err.to_gcc_format() == (
            "<unknown location>: error: "
            "No traversal or visitor rule for node type 'Foo' [TP-2000]"
        )

    def test_hint_line(self):
        err = TreepassError("bad", hint="try again")
        assert err.to_gcc_format().endswith("\nhint: try again")

    def test_to_json(self):
        data = UnexpectedTokenError("paren", ")", 0, expected="expression").to_json()
        assert data["code"] == "TP-1000"
        assert data["phase"] == "syntax"
        assert data["location"]["offset"] == 0
        assert "expected expression" in data["message"]

    def test_str_is_message(self):
        assert str(UnexpectedEndError()) == "Unexpected end of input"
