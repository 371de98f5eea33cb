"""treepass/tokens.py – Tokens and the table-driven lexical scanner.

Both grammars share one scanner; what differs between them is a small
:class:`LexicalRules` record (which single characters are punctuation
and which identifiers are reserved).

Scanning policy
---------------
* Left to right, one decision per position, chosen by the class of the
  current character.  No decision looks past the current run.
* Whitespace is skipped.
* Punctuation characters each yield one token of the kind the rules map
  them to (``paren`` or ``mark``).
* Digits and lowercase letters are consumed with greedy maximal munch;
  a letter run is reclassified as ``keyword`` only after the *whole* run
  has been read and only on exact equality with a reserved word.
* A ``"`` starts a string token that ends at the next ``"`` (quotes are
  kept in the token text, no escapes).
* Anything else raises :class:`~treepass.errors.LexError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Mapping, Optional

from .errors import LexError, UnterminatedStringError

__all__ = [
    "TokenKind",
    "Token",
    "LexicalRules",
    "Lexer",
    "tokenize",
]

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    PAREN = "paren"
    NAME = "name"
    NUMBER = "number"
    STRING = "string"
    MARK = "mark"
    KEYWORD = "keyword"


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical unit: a kind tag, the literal text, and its offset."""

    kind: TokenKind
    text: str
    position: int = 0

    def is_(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        """Return True if this token has *kind* (and *text*, when given)."""
        return self.kind is kind and (text is None or self.text == text)

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.text!r}@{self.position})"


@dataclass(frozen=True)
class LexicalRules:
    """Grammar-specific lexical configuration."""

    punctuation: Mapping[str, TokenKind] = field(default_factory=dict)
    keywords: FrozenSet[str] = frozenset()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_letter(ch: str) -> bool:
    return "a" <= ch <= "z"


class Lexer:
    """Turns a source string into a list of :class:`Token` objects."""

    def __init__(self, rules: LexicalRules) -> None:
        self.rules = rules

    def tokenize(self, source: str) -> List[Token]:
        tokens: List[Token] = []
        pos = 0
        n = len(source)
        while pos < n:
            ch = source[pos]

            if ch.isspace():
                pos += 1
                continue

            kind = self.rules.punctuation.get(ch)
            if kind is not None:
                tokens.append(Token(kind, ch, pos))
                pos += 1
                continue

            if _is_digit(ch):
                end = pos + 1
                while end < n and _is_digit(source[end]):
                    end += 1
                tokens.append(Token(TokenKind.NUMBER, source[pos:end], pos))
                pos = end
                continue

            if _is_letter(ch):
                end = pos + 1
                while end < n and _is_letter(source[end]):
                    end += 1
                word = source[pos:end]
                kind = TokenKind.KEYWORD if word in self.rules.keywords else TokenKind.NAME
                tokens.append(Token(kind, word, pos))
                pos = end
                continue

            if ch == '"':
                close = source.find('"', pos + 1)
                if close == -1:
                    raise UnterminatedStringError(pos)
                tokens.append(Token(TokenKind.STRING, source[pos:close + 1], pos))
                pos = close + 1
                continue

            raise LexError(ch, pos)

        logger.debug("tokenized %d chars into %d tokens", n, len(tokens))
        return tokens


def tokenize(source: str, rules: LexicalRules) -> List[Token]:
    """Tokenize *source* with *rules*.  Total and order-preserving."""
    return Lexer(rules).tokenize(source)
