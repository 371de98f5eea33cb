#!/usr/bin/env python3
"""treepass/main.py — CLI entry-point for the treepass pipelines.

Usage examples
--------------
    # Translate a file with the call-expression grammar
    treepass compile program.lisp --grammar calls

    # Translate an inline snippet and show every intermediate stage
    treepass compile -g optional-chaining -e 'let o = x?.y;' --stages

    # Inspect a single stage
    treepass tokens    -e '(add 2 (subtract 4 2))'
    treepass parse     -e '(add 2 (subtract 4 2))' --format sexp
    treepass transform -g optional-chaining -e 'let o = x?.y;'

    # Compare output against an expected string (defaults to the
    # grammar's built-in example)
    treepass check -g optional-chaining
    treepass check -e '(add 1 2)' --expect 'add(1, 2);'

    # List grammars
    treepass grammars

Exit codes
----------
    0   Success.
    1   The input was rejected by a pipeline stage.
    2   Infrastructure failure (missing file, unknown grammar, etc.).
    3   ``check``: output differs from the expected text.

The module doubles as ``python -m treepass`` via the companion
``treepass/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO, Tuple

from . import __version__
from .dump import to_dict, to_sexp
from .errors import TreepassError
from .pipeline import DUMP_FORMATS, PipelineConfig, PipelineResult, resolve_grammar, run_pipeline

_log = logging.getLogger("treepass")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2
EXIT_MISMATCH: int = 3


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``treepass`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("treepass")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        root.addHandler(handler)


def _resolve_path(raw: str, label: str = "file") -> Path:
    """Resolve *raw* to an absolute ``Path``, raising on missing files."""
    p = Path(raw).expanduser().resolve()
    if not p.exists():
        _log.error("%s not found: %s", label, p)
        raise SystemExit(EXIT_INFRA)
    return p


def _open_output(dest: Optional[str]) -> TextIO:
    """Return a writable text stream.

    *dest* ``None`` or ``"-"`` → ``sys.stdout``; otherwise open the path
    for writing (creating parent directories as needed).
    """
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


def _read_source(args: argparse.Namespace) -> Tuple[str, str]:
    """Return ``(source, label)`` from ``--expr``, a file, or stdin."""
    if args.expr is not None:
        return args.expr, "<expr>"
    if args.source_file is None or args.source_file == "-":
        return sys.stdin.read(), "<stdin>"
    path = _resolve_path(args.source_file, "source file")
    return path.read_text(encoding="utf-8"), str(path)


def _config_from_args(args: argparse.Namespace) -> PipelineConfig:
    config = PipelineConfig(
        capture_stages=getattr(args, "stages", False),
        dump_format=getattr(args, "format", "json"),
    )
    if args.grammar:
        config.grammar = args.grammar
    for warning in config.validate():
        _log.error("%s", warning)
        raise SystemExit(EXIT_INFRA)
    return config


def _render(obj: Any, fmt: str) -> str:
    if fmt == "sexp":
        return to_sexp(obj)
    return json.dumps(to_dict(obj), indent=4)


def _run(args: argparse.Namespace) -> Tuple[PipelineConfig, PipelineResult]:
    """Run the pipeline for a subcommand; pipeline errors propagate."""
    config = _config_from_args(args)
    source, label = _read_source(args)
    _log.info("Running %s pipeline on %s", config.grammar, label)
    try:
        return config, run_pipeline(source, config.grammar)
    except TreepassError as exc:
        raise exc.with_source(source, label)


def _write(args: argparse.Namespace, text: str) -> None:
    out = _open_output(args.output)
    try:
        out.write(text + "\n")
    finally:
        if out is not sys.stdout:
            out.close()


# ===========================================================================
# Subcommands
# ===========================================================================

def cmd_compile(args: argparse.Namespace) -> int:
    """Translate the input and print the generated code."""
    config, result = _run(args)
    if not config.capture_stages:
        _write(args, result.output)
        return EXIT_OK

    fmt = config.dump_format
    sections = [
        ("input", result.source),
        ("tokens", _render(result.tokens, fmt)),
        ("source ast", _render(result.program, fmt)),
        ("target ast", _render(result.target, fmt)),
        ("output", result.output),
    ]
    _write(args, "\n\n".join(f"--- {title} ---\n{body}" for title, body in sections))
    return EXIT_OK


def cmd_tokens(args: argparse.Namespace) -> int:
    """Print the token stream."""
    config, result = _run(args)
    _write(args, _render(result.tokens, config.dump_format))
    return EXIT_OK


def cmd_parse(args: argparse.Namespace) -> int:
    """Print the source AST."""
    config, result = _run(args)
    _write(args, _render(result.program, config.dump_format))
    return EXIT_OK


def cmd_transform(args: argparse.Namespace) -> int:
    """Print the target AST."""
    config, result = _run(args)
    _write(args, _render(result.target, config.dump_format))
    return EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    """Compare generated output with an expected string.

    With no input and no ``--expect`` the grammar's built-in example is
    used, which makes ``treepass check`` a smoke test of the install.
    """
    if args.expr is None and args.source_file is None:
        grammar = resolve_grammar(_config_from_args(args).grammar)
        args.expr = grammar.example
        if args.expect is None:
            args.expect = grammar.example_output

    _, result = _run(args)
    expected = args.expect if args.expect is not None else ""
    ok = result.output == expected
    _write(args, f"{result.output}\n{'OK' if ok else 'MISMATCH'}")
    if not ok:
        _log.warning("expected %r, got %r", expected, result.output)
        return EXIT_MISMATCH
    return EXIT_OK


def cmd_grammars(args: argparse.Namespace) -> int:
    """List the registered grammars."""
    from .grammars import available_grammars, get_grammar

    lines = []
    for name in available_grammars():
        g = get_grammar(name)
        lines.append(f"  {name:<20} {g.description}")
        lines.append(f"  {'':<20} {g.example}  =>  {g.example_output}")
    _write(args, "\n".join(lines))
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the full CLI argument parser with subcommands."""

    parser = argparse.ArgumentParser(
        prog="treepass",
        description=(
            "treepass — a five-stage source-to-source pipeline\n"
            "(lexer, parser, tree walker, transformer, code generator)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              treepass compile -e '(add 2 (subtract 4 2))'
              treepass compile -g optional-chaining -e 'let o = x?.y;' --stages
              treepass check -g optional-chaining
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # Shared argument groups (reusable) ------------------------------------

    def _add_input_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "source_file",
            nargs="?",
            default=None,
            help='Input file ("-" or omit for stdin).',
        )
        p.add_argument(
            "-e", "--expr",
            default=None,
            metavar="SOURCE",
            help="Inline source text instead of a file.",
        )
        p.add_argument(
            "-g", "--grammar",
            default=None,
            help="Grammar to use (default: $TREEPASS_GRAMMAR or 'calls').",
        )

    def _add_output_args(p: argparse.ArgumentParser, with_format: bool = True) -> None:
        p.add_argument(
            "-o", "--output",
            default=None,
            metavar="FILE",
            help='Output file ("-" or omit for stdout).',
        )
        if with_format:
            p.add_argument(
                "-f", "--format",
                choices=DUMP_FORMATS,
                default="json",
                help="Tree dump format (default: json).",
            )

    # --- compile -----------------------------------------------------------
    p_compile = subparsers.add_parser(
        "compile",
        help="Translate source text and print the result.",
    )
    _add_input_args(p_compile)
    _add_output_args(p_compile)
    p_compile.add_argument(
        "--stages",
        action="store_true",
        help="Also print tokens, source AST and target AST.",
    )
    p_compile.set_defaults(func=cmd_compile)

    # --- tokens / parse / transform -----------------------------------------
    for name, func, help_text in (
        ("tokens", cmd_tokens, "Print the token stream."),
        ("parse", cmd_parse, "Print the source syntax tree."),
        ("transform", cmd_transform, "Print the target syntax tree."),
    ):
        p = subparsers.add_parser(name, help=help_text)
        _add_input_args(p)
        _add_output_args(p)
        p.set_defaults(func=func)

    # --- check -------------------------------------------------------------
    p_check = subparsers.add_parser(
        "check",
        help="Compare generated output with an expected string.",
    )
    _add_input_args(p_check)
    _add_output_args(p_check, with_format=False)
    p_check.add_argument(
        "--expect",
        default=None,
        metavar="TEXT",
        help="Expected output (default: the grammar's example output).",
    )
    p_check.set_defaults(func=cmd_check)

    # --- grammars ----------------------------------------------------------
    p_grammars = subparsers.add_parser("grammars", help="List available grammars.")
    _add_output_args(p_grammars, with_format=False)
    p_grammars.set_defaults(func=cmd_grammars)

    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the treepass CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except TreepassError as exc:
        _log.debug("pipeline failed in %s phase", exc.phase.value)
        sys.stderr.write(exc.to_gcc_format() + "\n")
        return EXIT_ERROR
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130  # Standard UNIX convention for SIGINT
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
