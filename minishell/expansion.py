"""Quote removal and variable expansion of words."""

from __future__ import annotations

import re
from collections.abc import Iterable

from minishell.environment import Environment
from minishell.tokens import Token, TokenType

_REDIRECTIONS = frozenset(
    {TokenType.REDIRECT_IN, TokenType.REDIRECT_OUT, TokenType.APPEND, TokenType.HEREDOC}
)

# Pieces of a word as seen by the expander: a quote, a variable reference,
# a run of ordinary text, or a lone dollar sign.
_EXPAND_PIECE = re.compile(r"""'|"|\$[A-Za-z_]\w*|[^'"$]+|\$""", re.ASCII)

# Pieces as seen when measuring: a whole quoted span (closing quote optional),
# a variable reference, a run of ordinary text, or a lone dollar sign.
_MEASURE_PIECE = re.compile(r"""'[^']*'?|"[^"]*"?|\$[A-Za-z_]\w*|[^'"$]+|\$""", re.ASCII)


def get_env_value(env: Environment | None, name: str | None) -> str | None:
    """Return the value of ``name`` in ``env``, or None if it is not set."""
    if env is None or not name:
        return None
    return env.get(name)


def mask_len(value: str | None, env: Environment | None) -> int:
    """Return the length ``value`` has once quotes go and variables expand.

    Text inside quotes is counted as it stands; ``$NAME`` outside quotes
    counts as the length of its value, an unset variable as nothing.
    """
    if not value:
        return 0
    total = 0
    for match in _MEASURE_PIECE.finditer(value):
        piece = match.group()
        if piece[0] in "'\"":
            inner = piece[1:]
            if inner.endswith(piece[0]):
                inner = inner[:-1]
            total += len(inner)
        elif piece.startswith("$") and len(piece) > 1:
            total += len(get_env_value(env, piece[1:]) or "")
        else:
            total += len(piece)
    return total


def expand_word(word: str | None, env: Environment | None, after_redirect: bool = False) -> str | None:
    """Remove quotes from ``word`` and expand ``$NAME`` references.

    Variables are not expanded inside single quotes, nor anywhere in a word
    that follows a redirection operator.  Unset variables expand to nothing.
    An empty word, or a missing environment, leaves the word unchanged.
    """
    if not word or env is None:
        return word
    parts: list[str] = []
    in_single = False
    in_double = False
    for match in _EXPAND_PIECE.finditer(word):
        piece = match.group()
        if piece == "'" and not in_double:
            in_single = not in_single
        elif piece == '"' and not in_single:
            in_double = not in_double
        elif (
            piece.startswith("$")
            and len(piece) > 1
            and not in_single
            and not after_redirect
        ):
            parts.append(get_env_value(env, piece[1:]) or "")
        else:
            parts.append(piece)
    return "".join(parts)


def expand_tokens(tokens: Iterable[Token], env: Environment | None) -> list[Token]:
    """Expand every word token in place, up to the EOF token.

    Returns the tokens as a list for convenience.
    """
    tokens = list(tokens)
    if env is None:
        return tokens
    previous: Token | None = None
    for token in tokens:
        if token.kind is TokenType.EOF:
            break
        if token.kind is TokenType.WORD:
            after_redirect = previous is not None and previous.kind in _REDIRECTIONS
            token.value = expand_word(token.value, env, after_redirect)
        previous = token
    return tokens