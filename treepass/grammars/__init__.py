"""treepass.grammars – The registered pipeline instantiations.

``calls``
    ``(add 2 (subtract 4 2))`` → ``add(2, subtract(4, 2));``

``optional-chaining``
    ``let o = x?.y;`` → ``let o = x && x.y;``
"""

from __future__ import annotations

from typing import Dict, List

from ..errors import ErrorCodes, TreepassError
from ..pipeline import Grammar
from . import calls, optional_chaining

__all__ = ["UnknownGrammarError", "get_grammar", "available_grammars", "calls", "optional_chaining"]

_REGISTRY: Dict[str, Grammar] = {
    calls.GRAMMAR.name: calls.GRAMMAR,
    optional_chaining.GRAMMAR.name: optional_chaining.GRAMMAR,
}


class UnknownGrammarError(TreepassError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unknown grammar {name!r}; available: {', '.join(available_grammars())}",
            code=ErrorCodes.UNKNOWN_GRAMMAR,
        )
        self.name = name


def available_grammars() -> List[str]:
    return sorted(_REGISTRY)


def get_grammar(name: str) -> Grammar:
    """Look up a grammar by name (``_`` and ``-`` are interchangeable)."""
    grammar = _REGISTRY.get(name.replace("_", "-"))
    if grammar is None:
        raise UnknownGrammarError(name)
    return grammar
