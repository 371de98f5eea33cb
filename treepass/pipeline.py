"""treepass/pipeline.py – Composing the five stages.

    text ──tokenize──▶ tokens ──parse──▶ source AST
         ──transform (walker + visitor)──▶ target AST ──generate──▶ text

Each stage consumes its whole input before the next one starts, and
every run allocates fresh trees; nothing is shared between runs, so
separate calls may run concurrently without coordination.

Public API
----------
``Grammar``
    Descriptor bundling a grammar's lexical rules, parser and
    transformer.

``run_pipeline(source, grammar) -> PipelineResult``
    Run every stage and keep each intermediate result.

``compile_source(source, grammar) -> str``
    ``generate(transform(parse(tokenize(source))))``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Type, Union

from . import ast as A
from . import target as T
from .codegen import generate
from .tokens import LexicalRules, Token, tokenize
from .transformer import Transformer

__all__ = [
    "Grammar",
    "PipelineConfig",
    "PipelineResult",
    "resolve_grammar",
    "run_pipeline",
    "compile_source",
]

logger = logging.getLogger(__name__)

GRAMMAR_ENV_VAR = "TREEPASS_GRAMMAR"
DUMP_FORMATS = ("json", "sexp")


@dataclass(frozen=True)
class Grammar:
    """One instantiation of the pipeline."""

    name: str
    description: str
    rules: LexicalRules
    parse: Callable[[Sequence[Token]], A.Program]
    transformer: Type[Transformer]
    example: str = ""
    example_output: str = ""

    def tokenize(self, source: str) -> List[Token]:
        return tokenize(source, self.rules)

    def transform(self, program: A.Program) -> T.Program:
        return self.transformer().transform(program)


@dataclass
class PipelineConfig:
    """Settings for a pipeline run, as chosen on the command line."""

    grammar: str = field(default_factory=lambda: os.environ.get(GRAMMAR_ENV_VAR, "calls"))
    capture_stages: bool = False
    dump_format: str = "json"

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        from .grammars import UnknownGrammarError, get_grammar

        try:
            get_grammar(self.grammar)
        except UnknownGrammarError as exc:
            warnings.append(str(exc))
        if self.dump_format not in DUMP_FORMATS:
            warnings.append(f"dump_format must be one of {DUMP_FORMATS}")
        return warnings


@dataclass
class PipelineResult:
    """Everything a run produced, stage by stage."""

    grammar: str
    source: str
    tokens: List[Token]
    program: A.Program
    target: T.Program
    output: str

    @property
    def statement_count(self) -> int:
        return len(self.target.body)


def resolve_grammar(grammar: Union[str, Grammar]) -> Grammar:
    if isinstance(grammar, Grammar):
        return grammar
    from .grammars import get_grammar

    return get_grammar(grammar)


def run_pipeline(source: str, grammar: Union[str, Grammar]) -> PipelineResult:
    """Run all five stages over *source* and keep every intermediate.

    Raises the first :class:`~treepass.errors.TreepassError` any stage
    hits; there is no partial result.
    """
    g = resolve_grammar(grammar)
    logger.debug("[%s] tokenizing %d chars", g.name, len(source))
    tokens = g.tokenize(source)
    logger.debug("[%s] parsing %d tokens", g.name, len(tokens))
    program = g.parse(tokens)
    logger.debug("[%s] transforming %d top-level forms", g.name, len(program.body))
    target = g.transform(program)
    output = generate(target)
    logger.debug("[%s] generated %d chars", g.name, len(output))
    return PipelineResult(
        grammar=g.name,
        source=source,
        tokens=tokens,
        program=program,
        target=target,
        output=output,
    )


def compile_source(source: str, grammar: Union[str, Grammar] = "calls") -> str:
    """Translate *source* with *grammar* and return the generated text."""
    g = resolve_grammar(grammar)
    return generate(g.transform(g.parse(g.tokenize(source))))
