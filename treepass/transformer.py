"""treepass/transformer.py – Build a target tree by walking a source tree.

A :class:`Transformer` is a :class:`~treepass.walker.Visitor` whose
``enter_X`` hooks, for each source node type X:

1. build the matching target node (wrapping it as a statement where
   the grammar needs one),
2. put it into the context the *parent* installed
   (``self.context.put(parent, new_node)``),
3. if the new node has children of its own, install a context for the
   *source* node pointing at them (``self.context.install(node, slot)``)
   so the children's hooks know where to go.

The walk order (``enter`` before children) guarantees every context is
installed by the parent before it is read by a child.

Subclasses supply the grammar's ``children_of`` rule and the hooks;
:meth:`transform` does the rest.
"""

from __future__ import annotations

import logging
from typing import Optional

from . import ast as A
from . import target as T
from .context import ContextTable, ListSlot
from .walker import ChildrenOf, Visitor, traverse

__all__ = ["Transformer"]

logger = logging.getLogger(__name__)


class Transformer(Visitor):
    """Base class for source-to-target tree passes."""

    #: grammar-specific children-of rule used by the walker
    children_of: ChildrenOf

    def __init__(self) -> None:
        self.context = ContextTable()
        self.visited = 0

    def transform(self, root: A.Program) -> T.Program:
        """Return a new target ``Program`` for the source *root*.

        Raises
        ------
        TraversalError
            A source node type with no rule (propagated from the walker).
        """
        program = T.Program()
        self.context = ContextTable()
        self.context.install(root, ListSlot(program.body))
        try:
            self.visited = traverse(root, self, type(self).children_of)
        finally:
            self.context.clear()
        logger.debug(
            "%s: %d source nodes -> %d top-level statements",
            type(self).__name__, self.visited, len(program.body),
        )
        return program

    @staticmethod
    def as_statement(expression: T.TargetNode, parent: Optional[A.Node]) -> T.TargetNode:
        """Wrap *expression* in an ``ExpressionStatement`` at the top level."""
        if isinstance(parent, A.Program):
            return T.ExpressionStatement(expression=expression)
        return expression
