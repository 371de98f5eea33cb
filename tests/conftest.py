# tests/conftest.py
"""
Shared fixtures and source snippets for the treepass test-suite.
"""

import logging

import pytest

from treepass.grammars import calls, optional_chaining


# ─── Call-expression grammar ─────────────────────────────────────────

CALLS_EXAMPLE = "(add 2 (subtract 4 2))"
CALLS_EXAMPLE_OUT = "add(2, subtract(4, 2));"

CALLS_TWO_FORMS = "(add 1 2) (mul 3 4)"
CALLS_TWO_FORMS_OUT = "add(1, 2);\nmul(3, 4);"

CALLS_NO_ARGS = "(now)"
CALLS_STRING_ARG = '(concat "foo" "bar")'
CALLS_DEEP = "(a (b (c (d 1))))"
CALLS_TRUNCATED = "(add 2"


# ─── Optional-chaining grammar ───────────────────────────────────────

OPT_EXAMPLE = "let o = x?.y;"
OPT_EXAMPLE_OUT = "let o = x && x.y;"

OPT_PLAIN_MEMBER = "let o = x.y;"
OPT_IDENTIFIER = "let o = x;"
OPT_CONST = "const c = a?.b;"
OPT_MULTI = "let a = x?.y, b = p.q;"
OPT_TWO_STATEMENTS = "let a = x?.y;\nconst b = 1;"
OPT_NUMBER_INIT = "let n = 42;"
OPT_STRING_INIT = 'let s = "hi";'


@pytest.fixture
def calls_grammar():
    return calls.GRAMMAR


@pytest.fixture
def optional_grammar():
    return optional_chaining.GRAMMAR


@pytest.fixture(autouse=True)
def _no_grammar_env(monkeypatch):
    """Keep ``TREEPASS_GRAMMAR`` from the developer's shell out of tests."""
    monkeypatch.delenv("TREEPASS_GRAMMAR", raising=False)


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    """Drop handlers the CLI attached so each test gets fresh streams."""
    yield
    logger = logging.getLogger("treepass")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
