#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
treepass/codegen.py
===================

Renders a target tree (:mod:`treepass.target`) as source text.

One rule per target node type:

- Program: statements joined by newlines
- ExpressionStatement: the expression followed by ``;``
- CallExpression: ``callee(arg, arg, ...)``
- VariableDeclaration: ``kind id = init, id = init``
- LogicalExpression: ``left op right``
- MemberExpression: ``object.property``
- StringLiteral: the value re-quoted; NumberLiteral: verbatim

Any other type is a :class:`~treepass.errors.CodegenError`; the
transformers only build the types above, so reaching it means a
transformer bug rather than bad input.
"""

from __future__ import annotations

from . import target as T
from .errors import CodegenError, InternalError

__all__ = ["generate"]


def generate(node: T.TargetNode) -> str:
    """Return the source text for *node*."""
    if isinstance(node, T.Program):
        return "\n".join(generate(stmt) for stmt in node.body)
    if isinstance(node, T.ExpressionStatement):
        return generate(node.expression) + ";"
    if isinstance(node, T.CallExpression):
        args = ", ".join(generate(arg) for arg in node.arguments)
        return f"{generate(node.callee)}({args})"
    if isinstance(node, T.VariableDeclaration):
        decls = ", ".join(generate(d) for d in node.declarations)
        return f"{node.kind} {decls}"
    if isinstance(node, T.VariableDeclarator):
        if node.init is None:
            raise InternalError(f"declarator {node.id.name!r} has no init")
        return f"{generate(node.id)} = {generate(node.init)}"
    if isinstance(node, T.LogicalExpression):
        return f"{generate(node.left)} {node.operator} {generate(node.right)}"
    if isinstance(node, T.MemberExpression):
        return f"{generate(node.object)}.{generate(node.property)}"
    if isinstance(node, T.Identifier):
        return node.name
    if isinstance(node, T.StringLiteral):
        return f'"{node.value}"'
    if isinstance(node, T.NumberLiteral):
        return node.value
    raise CodegenError(getattr(node, "node_type", type(node).__name__))
