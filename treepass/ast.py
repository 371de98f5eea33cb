"""treepass/ast.py – Source syntax tree produced by the parsers.

The source tree is a tagged union of frozen dataclasses; the tag is the
class name, exposed as :attr:`Node.node_type`.  Both grammars draw from
the same pool of node classes, each using only the variants its parser
produces.

Design invariants
-----------------
* Every node is a frozen dataclass (immutable after construction).
* Nodes that carry children use tuples, never lists.
* ``Program`` is always the root, and only ever the root.
* No partially-built node survives parsing.
* The tree is read-only to every later stage; the transformer keeps its
  per-node write targets in a side table (:mod:`treepass.context`)
  instead of decorating nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

__all__ = [
    "Node",
    "Program",
    "CallExpression",
    "NumberLiteral",
    "StringLiteral",
    "Identifier",
    "VariableDeclaration",
    "VariableDeclarator",
    "ChainExpression",
    "MemberExpression",
    "Expression",
]


class Node:
    """Common base of all source nodes."""

    __slots__ = ()

    @property
    def node_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, slots=True)
class NumberLiteral(Node):
    value: str


@dataclass(frozen=True, slots=True)
class StringLiteral(Node):
    """A string literal; ``value`` excludes the surrounding quotes."""

    value: str


@dataclass(frozen=True, slots=True)
class Identifier(Node):
    """A bare variable reference (``let a = b;``)."""

    name: str


@dataclass(frozen=True, slots=True)
class CallExpression(Node):
    """``(name param...)`` in the call grammar."""

    name: str
    params: Tuple["Expression", ...] = ()


@dataclass(frozen=True, slots=True)
class MemberExpression(Node):
    object: str
    property: str
    optional: bool = False


@dataclass(frozen=True, slots=True)
class ChainExpression(Node):
    """Wraps a member access that may short-circuit (``x?.y`` or ``x.y``)."""

    expression: MemberExpression


@dataclass(frozen=True, slots=True)
class VariableDeclarator(Node):
    name: str
    init: "Expression"


@dataclass(frozen=True, slots=True)
class VariableDeclaration(Node):
    kind: str
    declarations: Tuple[VariableDeclarator, ...] = ()


Expression = Union[
    NumberLiteral,
    StringLiteral,
    Identifier,
    CallExpression,
    ChainExpression,
]


@dataclass(frozen=True, slots=True)
class Program(Node):
    body: Tuple[Node, ...] = ()
