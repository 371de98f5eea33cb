"""treepass/grammars/calls.py – S-expressions to call expressions.

    (add 2 (subtract 4 2))   ──▶   add(2, subtract(4, 2));

Grammar
-------
::

    Program := Expr*
    Expr    := number | string | '(' name Expr* ')'

Every top-level form becomes exactly one statement of the output.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .. import ast as A
from .. import target as T
from ..context import ListSlot
from ..parser import TokenCursor
from ..pipeline import Grammar, compile_source
from ..tokens import LexicalRules, Token, TokenKind
from ..transformer import Transformer

__all__ = [
    "RULES",
    "CallsParser",
    "parse",
    "children_of",
    "CallsTransformer",
    "GRAMMAR",
    "transpile",
]

RULES = LexicalRules(
    punctuation={"(": TokenKind.PAREN, ")": TokenKind.PAREN},
)


# ═══════════════════════════════════════════════════════════════════════
#  Parser
# ═══════════════════════════════════════════════════════════════════════

class CallsParser:
    def __init__(self, tokens: Sequence[Token]) -> None:
        self.cursor = TokenCursor(tokens)

    def parse(self) -> A.Program:
        body: List[A.Node] = []
        while not self.cursor.at_end():
            body.append(self.walk())
        return A.Program(body=tuple(body))

    def walk(self) -> A.Expression:
        cursor = self.cursor
        token = cursor.current(expected="expression")

        if token.kind is TokenKind.NUMBER:
            cursor.advance()
            return A.NumberLiteral(value=token.text)

        if token.kind is TokenKind.STRING:
            cursor.advance()
            return A.StringLiteral(value=token.text[1:-1])

        if token.is_(TokenKind.PAREN, "("):
            cursor.advance()
            callee = cursor.expect(TokenKind.NAME, expected="function name")
            params: List[A.Expression] = []
            while not cursor.accept(TokenKind.PAREN, ")"):
                cursor.current(expected="')'")
                params.append(self.walk())
            return A.CallExpression(name=callee.text, params=tuple(params))

        cursor.unexpected(token, expected="expression")


def parse(tokens: Sequence[Token]) -> A.Program:
    return CallsParser(tokens).parse()


# ═══════════════════════════════════════════════════════════════════════
#  Transformer
# ═══════════════════════════════════════════════════════════════════════

def children_of(node: A.Node) -> Optional[Tuple[A.Node, ...]]:
    if isinstance(node, A.Program):
        return node.body
    if isinstance(node, A.CallExpression):
        return node.params
    if isinstance(node, (A.NumberLiteral, A.StringLiteral)):
        return ()
    return None


class CallsTransformer(Transformer):
    """Rewrites ``(name args...)`` into ``name(args...)`` call nodes."""

    children_of = staticmethod(children_of)

    def enter_number_literal(self, node: A.NumberLiteral, parent: A.Node) -> None:
        self.context.put(parent, self.as_statement(T.NumberLiteral(node.value), parent))

    def enter_string_literal(self, node: A.StringLiteral, parent: A.Node) -> None:
        self.context.put(parent, self.as_statement(T.StringLiteral(node.value), parent))

    def enter_call_expression(self, node: A.CallExpression, parent: A.Node) -> None:
        call = T.CallExpression(callee=T.Identifier(node.name))
        self.context.install(node, ListSlot(call.arguments))
        self.context.put(parent, self.as_statement(call, parent))


GRAMMAR = Grammar(
    name="calls",
    description="Lisp-style call forms to C-style call expressions",
    rules=RULES,
    parse=parse,
    transformer=CallsTransformer,
    example="(add 2 (subtract 4 2))",
    example_output="add(2, subtract(4, 2));",
)


def transpile(source: str) -> str:
    """``(add 2 (subtract 4 2))`` → ``add(2, subtract(4, 2));``"""
    return compile_source(source, GRAMMAR)
