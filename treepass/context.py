"""treepass/context.py – Write targets for rebuilding a tree while walking another.

While a transformer walks the source tree, each source node that has
children is given a *context*: the place in the new tree where the
target nodes built for those children must go.  The parent's ``enter``
hook installs the context before the walker descends, and the
children's hooks read it, so a context is always written before it is
read.

The contexts live in a :class:`ContextTable` keyed on source-node
identity rather than on the (immutable) source nodes themselves, and
the table is thrown away when the pass ends.

Two slot shapes cover both grammars:

* :class:`ListSlot` – append into a child list (``Program.body``,
  ``CallExpression.arguments``, ``VariableDeclaration.declarations``).
* :class:`FieldSlot` – assign a single field exactly once
  (``VariableDeclarator.init``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .ast import Node
from .errors import ErrorCodes, InternalError
from .target import TargetNode

__all__ = ["Slot", "ListSlot", "FieldSlot", "ContextTable"]


class Slot:
    """Somewhere a target node can be put."""

    def put(self, node: TargetNode) -> None:
        raise NotImplementedError


class ListSlot(Slot):
    def __init__(self, items: List[TargetNode]) -> None:
        self.items = items

    def put(self, node: TargetNode) -> None:
        self.items.append(node)

    def __repr__(self) -> str:
        return f"ListSlot(len={len(self.items)})"


class FieldSlot(Slot):
    """Single-assignment slot for one attribute of a target node."""

    def __init__(self, owner: TargetNode, attr: str) -> None:
        self.owner = owner
        self.attr = attr
        self.filled = False

    def put(self, node: TargetNode) -> None:
        if self.filled:
            raise InternalError(
                f"{self.owner.node_type}.{self.attr} assigned twice",
                code=ErrorCodes.CONTEXT_REWRITTEN,
            )
        setattr(self.owner, self.attr, node)
        self.filled = True

    def __repr__(self) -> str:
        return f"FieldSlot({self.owner.node_type}.{self.attr})"


class ContextTable:
    """Maps source nodes (by identity) to their slot in the new tree."""

    def __init__(self) -> None:
        # id -> (node, slot); holding the node keeps its id from being reused
        self._slots: Dict[int, Tuple[Node, Slot]] = {}

    def install(self, node: Node, slot: Slot) -> None:
        """Set *node*'s context.  Each node gets exactly one."""
        key = id(node)
        if key in self._slots:
            raise InternalError(
                f"context for {node.node_type} installed twice",
                code=ErrorCodes.CONTEXT_REWRITTEN,
            )
        self._slots[key] = (node, slot)

    def slot_of(self, node: Optional[Node]) -> Slot:
        """Return the context installed for *node*."""
        entry = self._slots.get(id(node))
        if entry is None:
            kind = node.node_type if node is not None else "None"
            raise InternalError(
                f"no context installed for {kind}",
                code=ErrorCodes.CONTEXT_MISSING,
            )
        return entry[1]

    def put(self, parent: Optional[Node], target: TargetNode) -> None:
        """Place *target* into the context *parent* established."""
        self.slot_of(parent).put(target)

    def __contains__(self, node: Any) -> bool:
        return id(node) in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def clear(self) -> None:
        self._slots.clear()
