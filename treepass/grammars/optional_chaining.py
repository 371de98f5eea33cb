"""treepass/grammars/optional_chaining.py – Desugar ``x?.y`` into ``x && x.y``.

    let o = x?.y;   ──▶   let o = x && x.y;

Grammar
-------
::

    Program     := Declaration*
    Declaration := ('let' | 'const') Declarator (',' Declarator)* ';'
    Declarator  := name '=' Init
    Init        := number | string | Access
    Access      := name                   -- plain reference
                 | name '?'? '.' name     -- member access

The parser is one ``walk`` function steered by a closed
:class:`ParseMode`.  Only a single level of access is recognised;
``a?.b?.c`` is a parse error.

Transform
---------
An optional access ``o?.p`` becomes the short-circuit guard
``o && o.p`` (a ``LogicalExpression`` whose right side is a
non-optional member access).  A plain access ``o.p`` is copied across
as a member access with no guard.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple, Union

from .. import ast as A
from .. import target as T
from ..context import FieldSlot, ListSlot
from ..parser import TokenCursor
from ..pipeline import Grammar, compile_source
from ..tokens import LexicalRules, Token, TokenKind
from ..transformer import Transformer

__all__ = [
    "KEYWORDS",
    "RULES",
    "ParseMode",
    "OptionalChainingParser",
    "parse",
    "children_of",
    "desugar",
    "OptionalChainingTransformer",
    "GRAMMAR",
    "transpile",
]

KEYWORDS = frozenset({"let", "const"})

RULES = LexicalRules(
    punctuation={mark: TokenKind.MARK for mark in "=?.;,"},
    keywords=KEYWORDS,
)


# ═══════════════════════════════════════════════════════════════════════
#  Parser
# ═══════════════════════════════════════════════════════════════════════

class ParseMode(Enum):
    STATEMENT = auto()   # a whole declaration
    DECLARATOR = auto()  # ``name = init`` inside a declaration
    CHAIN = auto()       # the initializer after ``=``
    MEMBER = auto()      # a name-led access, optional or not


class OptionalChainingParser:
    def __init__(self, tokens: Sequence[Token]) -> None:
        self.cursor = TokenCursor(tokens)

    def parse(self) -> A.Program:
        body: List[A.Node] = []
        while not self.cursor.at_end():
            body.append(self.walk(ParseMode.STATEMENT))
        return A.Program(body=tuple(body))

    def walk(self, mode: ParseMode) -> A.Node:
        cursor = self.cursor

        if mode is ParseMode.STATEMENT:
            token = cursor.current(expected="declaration")
            if token.kind is not TokenKind.KEYWORD:
                cursor.unexpected(token, expected="'let' or 'const'")
            cursor.advance()
            declarations = [self.walk(ParseMode.DECLARATOR)]
            while not cursor.accept(TokenKind.MARK, ";"):
                cursor.expect(TokenKind.MARK, ",", expected="',' or ';'")
                declarations.append(self.walk(ParseMode.DECLARATOR))
            return A.VariableDeclaration(kind=token.text, declarations=tuple(declarations))

        if mode is ParseMode.DECLARATOR:
            name = cursor.expect(TokenKind.NAME, expected="variable name")
            cursor.expect(TokenKind.MARK, "=")
            return A.VariableDeclarator(name=name.text, init=self.walk(ParseMode.CHAIN))

        if mode is ParseMode.CHAIN:
            token = cursor.current(expected="initializer")
            if token.kind is TokenKind.NUMBER:
                cursor.advance()
                return A.NumberLiteral(value=token.text)
            if token.kind is TokenKind.STRING:
                cursor.advance()
                return A.StringLiteral(value=token.text[1:-1])
            if token.kind is TokenKind.NAME:
                return self.walk(ParseMode.MEMBER)
            cursor.unexpected(token, expected="initializer")

        if mode is ParseMode.MEMBER:
            obj = cursor.expect(TokenKind.NAME)
            optional = cursor.accept(TokenKind.MARK, "?") is not None
            if optional:
                cursor.expect(TokenKind.MARK, ".")
            elif not cursor.accept(TokenKind.MARK, "."):
                return A.Identifier(name=obj.text)
            prop = cursor.expect(TokenKind.NAME, expected="property name")
            member = A.MemberExpression(object=obj.text, property=prop.text, optional=optional)
            return A.ChainExpression(expression=member)

        raise AssertionError(f"unhandled parse mode {mode}")


def parse(tokens: Sequence[Token]) -> A.Program:
    return OptionalChainingParser(tokens).parse()


# ═══════════════════════════════════════════════════════════════════════
#  Transformer
# ═══════════════════════════════════════════════════════════════════════

def children_of(node: A.Node) -> Optional[Tuple[A.Node, ...]]:
    if isinstance(node, A.Program):
        return node.body
    if isinstance(node, A.VariableDeclaration):
        return node.declarations
    if isinstance(node, A.VariableDeclarator):
        return (node.init,)
    if isinstance(node, A.ChainExpression):
        return (node.expression,)
    if isinstance(node, (A.MemberExpression, A.Identifier, A.NumberLiteral, A.StringLiteral)):
        return ()
    return None


def desugar(member: A.MemberExpression) -> Union[T.LogicalExpression, T.MemberExpression]:
    """``o?.p`` → ``o && o.p``; ``o.p`` → ``o.p``."""
    access = T.MemberExpression(
        object=T.Identifier(member.object),
        property=T.Identifier(member.property),
        optional=False,
    )
    if not member.optional:
        return access
    return T.LogicalExpression(
        left=T.Identifier(member.object),
        operator="&&",
        right=access,
    )


class OptionalChainingTransformer(Transformer):
    children_of = staticmethod(children_of)

    def enter_variable_declaration(self, node: A.VariableDeclaration, parent: A.Node) -> None:
        declaration = T.VariableDeclaration(kind=node.kind)
        self.context.install(node, ListSlot(declaration.declarations))
        self.context.put(parent, self.as_statement(declaration, parent))

    def enter_variable_declarator(self, node: A.VariableDeclarator, parent: A.Node) -> None:
        declarator = T.VariableDeclarator(id=T.Identifier(node.name))
        self.context.install(node, FieldSlot(declarator, "init"))
        self.context.put(parent, declarator)

    def enter_chain_expression(self, node: A.ChainExpression, parent: A.Node) -> None:
        self.context.put(parent, desugar(node.expression))

    def enter_identifier(self, node: A.Identifier, parent: A.Node) -> None:
        self.context.put(parent, T.Identifier(node.name))

    def enter_number_literal(self, node: A.NumberLiteral, parent: A.Node) -> None:
        self.context.put(parent, T.NumberLiteral(node.value))

    def enter_string_literal(self, node: A.StringLiteral, parent: A.Node) -> None:
        self.context.put(parent, T.StringLiteral(node.value))


GRAMMAR = Grammar(
    name="optional-chaining",
    description="Desugar optional member access into a logical-AND guard",
    rules=RULES,
    parse=parse,
    transformer=OptionalChainingTransformer,
    example="let o = x?.y;",
    example_output="let o = x && x.y;",
)


def transpile(source: str) -> str:
    """``let o = x?.y;`` → ``let o = x && x.y;``"""
    return compile_source(source, GRAMMAR)
