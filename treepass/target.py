"""treepass/target.py – Target syntax tree built by the transformers.

An ESTree-shaped union, disjoint from :mod:`treepass.ast`: target nodes
never hold references to source nodes.  Unlike the source tree these
dataclasses are mutable, because a transformer grows them one child at a
time through the context slots in :mod:`treepass.context`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

__all__ = [
    "TargetNode",
    "Program",
    "ExpressionStatement",
    "CallExpression",
    "VariableDeclaration",
    "VariableDeclarator",
    "LogicalExpression",
    "MemberExpression",
    "Identifier",
    "NumberLiteral",
    "StringLiteral",
]


class TargetNode:
    __slots__ = ()

    @property
    def node_type(self) -> str:
        return type(self).__name__


@dataclass(slots=True)
class Identifier(TargetNode):
    name: str


@dataclass(slots=True)
class NumberLiteral(TargetNode):
    value: str


@dataclass(slots=True)
class StringLiteral(TargetNode):
    value: str


@dataclass(slots=True)
class CallExpression(TargetNode):
    callee: Identifier
    arguments: List[TargetNode] = field(default_factory=list)


@dataclass(slots=True)
class MemberExpression(TargetNode):
    object: TargetNode
    property: Identifier
    optional: bool = False


@dataclass(slots=True)
class LogicalExpression(TargetNode):
    left: TargetNode
    operator: str
    right: TargetNode


@dataclass(slots=True)
class VariableDeclarator(TargetNode):
    id: Identifier
    init: Optional[TargetNode] = None


@dataclass(slots=True)
class VariableDeclaration(TargetNode):
    kind: str
    declarations: List[VariableDeclarator] = field(default_factory=list)


@dataclass(slots=True)
class ExpressionStatement(TargetNode):
    expression: TargetNode


@dataclass(slots=True)
class Program(TargetNode):
    body: List[TargetNode] = field(default_factory=list)
