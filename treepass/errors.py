# treepass/errors.py
"""
Error Types for the treepass Pipeline

Every stage of the pipeline is fail-fast: the first problem aborts the
whole run and surfaces as exactly one typed exception.  This module
defines that taxonomy along with the structured codes and spans used to
print it.

Error Hierarchy:
────────────────
┌─────────────────────────────────────────────────────────────────────────────┐
│  TreepassError (base)                                                       │
│  ├── LexError               - Unrecognised character                        │
│  │   └── UnterminatedStringError                                            │
│  ├── ParseError             - Grammar violation / truncated input           │
│  │   ├── UnexpectedTokenError                                               │
│  │   └── UnexpectedEndError                                                 │
│  ├── TraversalError         - Node type with no traversal or visitor rule   │
│  ├── CodegenError           - Target node type the generator cannot render  │
│  └── InternalError          - Broken pipeline invariant (context table)     │
└─────────────────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Codes follow the pattern TP-NNNN:
  - 0001-0999: Lexical errors
  - 1000-1999: Syntax errors
  - 2000-2999: Traversal errors
  - 4000-4999: Code generation errors
  - 8000-8999: Configuration errors
  - 9000-9999: Internal errors

Example Usage:
──────────────
    from treepass.errors import TreepassError

    try:
        output = compile_source("(add 2 #)", "calls")
    except TreepassError as exc:
        print(exc.to_gcc_format())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Any, Dict, Optional

__all__ = [
    "ErrorPhase",
    "ErrorCode",
    "ErrorCodes",
    "SourceSpan",
    "ErrorMessage",
    "TreepassError",
    "LexError",
    "UnterminatedStringError",
    "ParseError",
    "UnexpectedTokenError",
    "UnexpectedEndError",
    "TraversalError",
    "CodegenError",
    "InternalError",
]


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════════

@unique
class ErrorPhase(Enum):
    """Pipeline stage where the error occurred."""

    LEXICAL = "lexical"        # Tokenization
    SYNTAX = "syntax"          # Parsing
    TRAVERSAL = "traversal"    # Tree walking / transformation
    CODEGEN = "codegen"        # Rendering the target tree
    CONFIG = "config"          # Grammar selection, CLI settings
    INTERNAL = "internal"      # Pipeline internals


class ErrorCode:
    """
    Structured error code of the form ``TP-NNNN``.

    Codes compare equal to their string form, so tests and callers can
    write ``exc.code == "TP-0001"``.
    """

    __slots__ = ("prefix", "number", "phase", "name")

    def __init__(self, number: int, phase: ErrorPhase, name: str, prefix: str = "TP") -> None:
        self.prefix = prefix
        self.number = number
        self.phase = phase
        self.name = name

    @property
    def code(self) -> str:
        """Get the full error code string."""
        return f"{self.prefix}-{self.number:04d}"

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, {self.name})"

    def __hash__(self) -> int:
        return hash((self.prefix, self.number))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorCode):
            return self.prefix == other.prefix and self.number == other.number
        if isinstance(other, str):
            return self.code == other
        return False


class ErrorCodes:
    """Predefined error codes."""

    # LEXICAL ERRORS (0001-0999)
    INVALID_CHARACTER = ErrorCode(1, ErrorPhase.LEXICAL, "INVALID_CHARACTER")
    UNTERMINATED_STRING = ErrorCode(2, ErrorPhase.LEXICAL, "UNTERMINATED_STRING")

    # SYNTAX ERRORS (1000-1999)
    UNEXPECTED_TOKEN = ErrorCode(1000, ErrorPhase.SYNTAX, "UNEXPECTED_TOKEN")
    UNEXPECTED_END = ErrorCode(1001, ErrorPhase.SYNTAX, "UNEXPECTED_END")

    # TRAVERSAL ERRORS (2000-2999)
    UNKNOWN_TRAVERSAL_NODE = ErrorCode(2000, ErrorPhase.TRAVERSAL, "UNKNOWN_NODE_TYPE")

    # CODE GENERATION ERRORS (4000-4999)
    UNKNOWN_CODEGEN_NODE = ErrorCode(4000, ErrorPhase.CODEGEN, "UNKNOWN_NODE_TYPE")

    # CONFIGURATION ERRORS (8000-8999)
    UNKNOWN_GRAMMAR = ErrorCode(8000, ErrorPhase.CONFIG, "UNKNOWN_GRAMMAR")

    # INTERNAL ERRORS (9000-9999)
    INTERNAL_ERROR = ErrorCode(9000, ErrorPhase.INTERNAL, "INTERNAL_ERROR")
    CONTEXT_REWRITTEN = ErrorCode(9001, ErrorPhase.INTERNAL, "CONTEXT_REWRITTEN")
    CONTEXT_MISSING = ErrorCode(9002, ErrorPhase.INTERNAL, "CONTEXT_MISSING")


# ═══════════════════════════════════════════════════════════════════════════════
# SOURCE LOCATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SourceSpan:
    """
    A position in the pipeline input.

    ``offset`` is the zero-based character index; ``-1`` means the
    error has no meaningful source position (traversal and codegen
    failures operate on trees, not text).
    """

    file: str = ""
    offset: int = -1

    @property
    def known(self) -> bool:
        return self.offset >= 0

    def __str__(self) -> str:
        if not self.known:
            return self.file or "<unknown location>"
        return f"{self.file or '<input>'}:{self.offset}"


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR MESSAGE FORMATTING
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class ErrorMessage:
    """
    A complete error message with all context.

    This is the internal representation of an error before it is
    printed by the CLI or serialised to JSON.
    """

    code: ErrorCode
    message: str
    span: SourceSpan = field(default_factory=SourceSpan)
    hint: str = ""
    source_line: str = ""
    caret: int = -1  # column of the span within source_line

    def with_hint(self, hint: str) -> "ErrorMessage":
        self.hint = hint
        return self

    def with_source(self, line: str, caret: int) -> "ErrorMessage":
        """Attach the source line so the caret line can be rendered."""
        self.source_line = line
        self.caret = caret
        return self

    def to_gcc_format(self) -> str:
        """Format as a GCC-style error message."""
        lines = [f"{self.span}: error: {self.message} [{self.code}]"]

        if self.source_line and self.caret >= 0:
            lines.append(f"    {self.source_line}")
            lines.append(f"    {' ' * self.caret}^")

        if self.hint:
            lines.append(f"hint: {self.hint}")

        return "\n".join(lines)

    def to_json(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "code": self.code.code,
            "message": self.message,
            "phase": self.code.phase.value,
            "location": {
                "file": self.span.file,
                "offset": self.span.offset,
            },
            "hint": self.hint,
        }


# ═══════════════════════════════════════════════════════════════════════════════
# EXCEPTION CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

class TreepassError(Exception):
    """
    Base exception for all pipeline errors.

    Carries an :class:`ErrorMessage` so the CLI can render any failure
    uniformly without knowing which stage raised it.
    """

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        span: Optional[SourceSpan] = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.error_message = ErrorMessage(
            code=code or ErrorCodes.INTERNAL_ERROR,
            message=message,
            span=span or SourceSpan(),
            hint=hint,
        )

    @property
    def code(self) -> ErrorCode:
        return self.error_message.code

    @property
    def span(self) -> SourceSpan:
        return self.error_message.span

    @property
    def phase(self) -> ErrorPhase:
        return self.code.phase

    def with_source(self, source: str, file: str = "") -> "TreepassError":
        """Attach the input (and its file name) for caret display."""
        if file:
            self.error_message.span = SourceSpan(file=file, offset=self.span.offset)
        if self.span.known:
            offset = min(self.span.offset, len(source))
            start = source.rfind("\n", 0, offset) + 1
            end = source.find("\n", offset)
            line = source[start:] if end == -1 else source[start:end]
            self.error_message.with_source(line, offset - start)
        return self

    def to_gcc_format(self) -> str:
        return self.error_message.to_gcc_format()

    def to_json(self) -> Dict[str, Any]:
        return self.error_message.to_json()

    def __str__(self) -> str:
        return self.error_message.message


# ───────────────────────────────────────────────────────────────────────────────
# LEXICAL ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class LexError(TreepassError):
    """A character outside every recognised token class."""

    def __init__(
        self,
        char: str,
        position: int,
        message: str = "",
        code: Optional[ErrorCode] = None,
        **kwargs: Any,
    ) -> None:
        if len(char) == 1 and not char.isprintable():
            char_desc = f"U+{ord(char):04X}"
        else:
            char_desc = repr(char)
        super().__init__(
            message=message or f"Unsupported character {char_desc} at position {position}",
            code=code or ErrorCodes.INVALID_CHARACTER,
            span=SourceSpan(offset=position),
            **kwargs,
        )
        self.char = char
        self.position = position


class UnterminatedStringError(LexError):
    """String literal not closed before the end of input."""

    def __init__(self, position: int) -> None:
        super().__init__(
            char='"',
            position=position,
            message=f"Unterminated string literal starting at position {position}",
            code=ErrorCodes.UNTERMINATED_STRING,
            hint='Add the closing " character',
        )


# ───────────────────────────────────────────────────────────────────────────────
# SYNTAX ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class ParseError(TreepassError):
    """Error during parsing."""


class UnexpectedTokenError(ParseError):
    """A token that matches no production at the current parse mode."""

    def __init__(self, kind: str, text: str = "", position: int = -1, expected: str = "") -> None:
        expected_msg = f", expected {expected}" if expected else ""
        shown = f" {text!r}" if text else ""
        super().__init__(
            message=f"Unexpected {kind} token{shown}{expected_msg}",
            code=ErrorCodes.UNEXPECTED_TOKEN,
            span=SourceSpan(offset=position),
        )
        self.kind = kind
        self.text = text
        self.expected = expected


class UnexpectedEndError(ParseError):
    """The token sequence ran out before a terminator was found."""

    def __init__(self, expected: str = "", position: int = -1) -> None:
        msg = "Unexpected end of input"
        if expected:
            msg += f", expected {expected}"
        super().__init__(
            message=msg,
            code=ErrorCodes.UNEXPECTED_END,
            span=SourceSpan(offset=position),
        )
        self.expected = expected


# ───────────────────────────────────────────────────────────────────────────────
# TREE ERRORS
# ───────────────────────────────────────────────────────────────────────────────

class TraversalError(TreepassError):
    """The walker met a node type it has no rule for."""

    def __init__(self, node_type: str) -> None:
        super().__init__(
            message=f"No traversal or visitor rule for node type {node_type!r}",
            code=ErrorCodes.UNKNOWN_TRAVERSAL_NODE,
        )
        self.node_type = node_type


class CodegenError(TreepassError):
    """The target tree holds a node type the generator cannot render."""

    def __init__(self, node_type: str) -> None:
        super().__init__(
            message=f"Cannot generate code for node type {node_type!r}",
            code=ErrorCodes.UNKNOWN_CODEGEN_NODE,
        )
        self.node_type = node_type


class InternalError(TreepassError):
    """A pipeline invariant was broken (a bug, not bad input)."""

    def __init__(self, message: str, code: Optional[ErrorCode] = None) -> None:
        super().__init__(message=message, code=code or ErrorCodes.INTERNAL_ERROR)
