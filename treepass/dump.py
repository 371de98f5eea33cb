"""treepass/dump.py – Printable renderings of intermediate pipeline stages.

Used by the CLI to show what each stage produced:

``to_dict(obj)``
    JSON-compatible nested dicts, every node keyed by ``"type"`` in the
    ESTree manner (tokens become ``{"type": kind, "value": text}``).

``to_sexp(obj)``
    The same structure as an S-expression, e.g.
    ``(CallExpression :name "add" :params ((NumberLiteral :value "2")))``,
    serialised with :mod:`sexpdata`.

Both accept a source node, a target node, a token, or a list of any of
those.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List

import sexpdata
from sexpdata import Symbol

from .tokens import Token

__all__ = ["to_dict", "to_sexp", "to_sexp_data"]


def _is_node(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def to_dict(obj: Any) -> Any:
    """Convert a tree, token or sequence thereof to plain JSON data."""
    if isinstance(obj, Token):
        return {"type": obj.kind.value, "value": obj.text, "position": obj.position}
    if isinstance(obj, (list, tuple)):
        return [to_dict(item) for item in obj]
    if _is_node(obj):
        out: Dict[str, Any] = {"type": type(obj).__name__}
        for f in dataclasses.fields(obj):
            out[f.name] = to_dict(getattr(obj, f.name))
        return out
    return obj


def to_sexp_data(obj: Any) -> Any:
    """Convert to the nested lists / :class:`sexpdata.Symbol` form."""
    if isinstance(obj, Token):
        return [Symbol(obj.kind.value), obj.text]
    if isinstance(obj, (list, tuple)):
        return [to_sexp_data(item) for item in obj]
    if _is_node(obj):
        form: List[Any] = [Symbol(type(obj).__name__)]
        for f in dataclasses.fields(obj):
            form.append(Symbol(f":{f.name}"))
            form.append(to_sexp_data(getattr(obj, f.name)))
        return form
    if isinstance(obj, bool):
        return Symbol("true" if obj else "false")
    if obj is None:
        return Symbol("nil")
    return obj


def to_sexp(obj: Any) -> str:
    """Render a tree, token or sequence thereof as an S-expression string."""
    return sexpdata.dumps(to_sexp_data(obj))
