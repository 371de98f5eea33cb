"""treepass/parser.py – Shared recursive-descent machinery.

Each grammar writes its own ``walk`` over a :class:`TokenCursor`.  The
cursor is the single shared position into the token list; every
production that recognises a token consumes it through the cursor, so
no token is inspected twice across productions.

Fail-fast
---------
* Running out of tokens where a production still needs one raises
  :class:`~treepass.errors.UnexpectedEndError`.
* A token that no production accepts at the current mode raises
  :class:`~treepass.errors.UnexpectedTokenError` carrying its kind.
"""

from __future__ import annotations

from typing import NoReturn, Optional, Sequence

from .errors import UnexpectedEndError, UnexpectedTokenError
from .tokens import Token, TokenKind

__all__ = ["TokenCursor"]


class TokenCursor:
    """A read-only cursor over a token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self._tokens)

    def peek(self) -> Optional[Token]:
        """Return the current token without consuming it, or None at the end."""
        if self.at_end():
            return None
        return self._tokens[self.pos]

    def current(self, expected: str = "") -> Token:
        """Return the current token, failing with ``UnexpectedEnd`` if none."""
        token = self.peek()
        if token is None:
            raise UnexpectedEndError(expected=expected, position=self.end_position)
        return token

    def advance(self, expected: str = "") -> Token:
        """Consume and return the current token."""
        token = self.current(expected)
        self.pos += 1
        return token

    def check(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        token = self.peek()
        return token is not None and token.is_(kind, text)

    def accept(self, kind: TokenKind, text: Optional[str] = None) -> Optional[Token]:
        """Consume the current token if it matches, else leave it in place."""
        if self.check(kind, text):
            return self.advance()
        return None

    def expect(self, kind: TokenKind, text: Optional[str] = None, expected: str = "") -> Token:
        """Consume a token that must match *kind* (and *text*)."""
        expected = expected or (repr(text) if text is not None else kind.value)
        token = self.current(expected)
        if not token.is_(kind, text):
            self.unexpected(token, expected)
        self.pos += 1
        return token

    def unexpected(self, token: Token, expected: str = "") -> NoReturn:
        raise UnexpectedTokenError(
            kind=token.kind.value,
            text=token.text,
            position=token.position,
            expected=expected,
        )

    @property
    def end_position(self) -> int:
        """Offset just past the last token (where the input ran out)."""
        if not self._tokens:
            return 0
        last = self._tokens[-1]
        return last.position + len(last.text)
