"""Splitting a command line into words and operators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_QUOTES = "'\""
_BLANKS = " \t"


class TokenType(Enum):
    """Kinds of token produced by the tokenizer."""

    WORD = 0
    PIPE = 1
    REDIRECT_IN = 2
    REDIRECT_OUT = 3
    APPEND = 4
    HEREDOC = 5
    EOF = 6


_TYPE_NAMES = {
    TokenType.WORD: "WORD",
    TokenType.PIPE: "PIPE",
    TokenType.REDIRECT_IN: "REDIRECT_IN",
    TokenType.REDIRECT_OUT: "REDIRECT_OUT",
    TokenType.APPEND: "APPEND",
    TokenType.HEREDOC: "HEREDOC",
    TokenType.EOF: "EOF",
}


@dataclass
class Token:
    """A single token.

    ``value`` holds the raw text of a word (quotes included) and is ``None``
    for operators.  ``quoted`` is 0 when no quote has been seen on the line so
    far, 1 after a single quote and 2 after a double quote.
    """

    kind: TokenType
    value: str | None = None
    quoted: int = 0


class TokenizeError(ValueError):
    """Raised when a line cannot be split into tokens."""


def unclosed_quotes(text: str) -> bool:
    """Return True if a single or double quote in ``text`` is left open."""
    in_single = False
    in_double = False
    for ch in text:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
    return in_single or in_double


def tokenize_input(text: str) -> list[Token]:
    """Split ``text`` into tokens, always ending with an EOF token."""
    tokens: list[Token] = []
    start = 0
    length = 0
    quoted = 0
    size = len(text)

    def flush() -> None:
        nonlocal start, length
        if length > 0:
            tokens.append(Token(TokenType.WORD, text[start:start + length], quoted))
            start += length
            length = 0

    while True:
        pos = start + length
        if pos >= size:
            flush()
            tokens.append(Token(TokenType.EOF, None, quoted))
            return tokens
        ch = text[pos]
        if ch in _QUOTES:
            quoted = 1 if ch == "'" else 2
            closing = text.find(ch, pos + 1)
            end = size if closing == -1 else closing + 1
            length = end - start
            continue
        if ch in _BLANKS:
            flush()
            while start < size and text[start] in _BLANKS:
                start += 1
            continue
        if ch == "|":
            flush()
            tokens.append(Token(TokenType.PIPE, None, quoted))
            start += 1
            continue
        if ch in "<>":
            flush()
            doubled = start + 1 < size and text[start + 1] == ch
            if ch == "<":
                kind = TokenType.HEREDOC if doubled else TokenType.REDIRECT_IN
            else:
                kind = TokenType.APPEND if doubled else TokenType.REDIRECT_OUT
            tokens.append(Token(kind, None, quoted))
            start += 2 if doubled else 1
            continue
        length += 1


def tokenize(text: str) -> list[Token]:
    """Tokenize a command line, rejecting empty input and open quotes."""
    if not text:
        raise TokenizeError("minishell: empty input")
    if unclosed_quotes(text):
        raise TokenizeError("minishell: unclosed quotes")
    return tokenize_input(text)


def token_type_name(kind: TokenType) -> str:
    """Return the display name of a token type."""
    return _TYPE_NAMES.get(kind, "UNKNOWN")