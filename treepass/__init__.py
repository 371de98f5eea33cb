"""treepass — a five-stage source-to-source translation pipeline.

Source text is tokenized, parsed into a source syntax tree, walked
depth-first by a visitor that builds a separate target syntax tree,
and finally rendered back to text.  The same machinery is instantiated
by several grammars.

Submodules
----------
errors
    Exception hierarchy with structured ``TP-NNNN`` codes,
    ``SourceSpan`` and ``ErrorMessage`` for GCC-style diagnostics.

tokens
    ``Token``, ``TokenKind`` and the rule-driven ``Lexer``.

ast / target
    Immutable source-tree nodes and mutable target-tree nodes.

parser
    ``TokenCursor``, the shared recursive-descent helper.

walker
    Depth-first ``traverse`` with ``enter_*`` / ``exit_*`` hooks.

context
    ``ContextTable``: the side table that maps a source node to the
    target slot its children write into.

transformer
    ``Transformer`` base class driving the walk for one grammar.

codegen
    ``generate``: target tree → text.

dump
    JSON- and S-expression dumps of tokens and trees.

pipeline
    ``Grammar``, ``PipelineConfig``, ``run_pipeline``, ``compile_source``.

grammars
    ``calls`` (``(add 2 3)`` → ``add(2, 3);``) and
    ``optional-chaining`` (``let o = x?.y;`` → ``let o = x && x.y;``).

main
    CLI entry-point with subcommands: ``compile``, ``tokens``,
    ``parse``, ``transform``, ``check``, ``grammars``.

Usage
-----
Command-line::

    python -m treepass compile -e '(add 2 (subtract 4 2))'
    python -m treepass compile -g optional-chaining -e 'let o = x?.y;'
    python -m treepass --help

Programmatic::

    from treepass import compile_source

    compile_source("(add 2 (subtract 4 2))", "calls")
    # 'add(2, subtract(4, 2));'
"""

from __future__ import annotations

__version__: str = "0.1.0"

from .errors import TreepassError
from .pipeline import PipelineConfig, PipelineResult, compile_source, run_pipeline

__all__: list[str] = [
    "__version__",
    "TreepassError",
    "PipelineConfig",
    "PipelineResult",
    "compile_source",
    "run_pipeline",
]
