#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
treepass/walker.py
==================

Generic depth-first traversal of a source tree.

Provides:
- ``Visitor`` — base class whose ``enter_X`` / ``exit_X`` methods are the
  per-node-type hooks (``X`` is the snake_case node type)
- ``TableVisitor`` — the same hooks supplied as a ``{type: (enter, exit)}``
  mapping, handy for one-off passes and tests
- ``traverse`` — the walk itself

The walker knows nothing about what hooks do and never mutates the tree.
Its only grammar-specific input is a *children-of* function that names,
for each source node type, the children to recurse into: a tuple (empty
for leaves), or ``None`` for a type the grammar does not know.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Dict, Mapping, Optional, Tuple

from .ast import Node
from .errors import TraversalError

__all__ = [
    "Hook",
    "ChildrenOf",
    "Visitor",
    "TableVisitor",
    "traverse",
]

logger = logging.getLogger(__name__)

Hook = Callable[[Node, Optional[Node]], None]
ChildrenOf = Callable[[Node], Optional[Tuple[Node, ...]]]


@functools.lru_cache(maxsize=None)
def _snake(node_type: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", node_type).lower()


class Visitor:
    """Base class for traversal visitors.

    Define ``enter_call_expression(self, node, parent)`` and/or
    ``exit_call_expression(self, node, parent)`` to intercept
    ``CallExpression`` nodes.  A type with neither method is not
    intercepted; the walk still descends into its children.
    """

    def hooks_for(self, node_type: str) -> Tuple[Optional[Hook], Optional[Hook]]:
        """Return the ``(enter, exit)`` pair for *node_type*."""
        snake = _snake(node_type)
        return (
            getattr(self, f"enter_{snake}", None),
            getattr(self, f"exit_{snake}", None),
        )


class TableVisitor(Visitor):
    """Visitor backed by an explicit ``{node_type: (enter, exit)}`` table."""

    def __init__(self, table: Mapping[str, Tuple[Optional[Hook], Optional[Hook]]]) -> None:
        self._table: Dict[str, Tuple[Optional[Hook], Optional[Hook]]] = dict(table)

    def hooks_for(self, node_type: str) -> Tuple[Optional[Hook], Optional[Hook]]:
        return self._table.get(node_type, (None, None))


def traverse(root: Node, visitor: Visitor, children_of: ChildrenOf) -> int:
    """Walk *root* depth-first, calling *visitor* hooks on the way.

    For every reachable node: ``enter(node, parent)``, then its children
    in order, then ``exit(node, parent)``.  The root's parent is None.

    Returns the number of nodes visited.

    Raises
    ------
    TraversalError
        A node type that has neither a visitor hook nor a child rule.
    """
    count = _traverse_node(root, None, visitor, children_of)
    logger.debug("traversed %d nodes from %s", count, root.node_type)
    return count


def _traverse_node(
    node: Node,
    parent: Optional[Node],
    visitor: Visitor,
    children_of: ChildrenOf,
) -> int:
    enter, exit_ = visitor.hooks_for(node.node_type)
    children = children_of(node)
    if children is None and enter is None and exit_ is None:
        raise TraversalError(node.node_type)

    if enter is not None:
        enter(node, parent)
    count = 1
    for child in children or ():
        count += _traverse_node(child, node, visitor, children_of)
    if exit_ is not None:
        exit_(node, parent)
    return count
