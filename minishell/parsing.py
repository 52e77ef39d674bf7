"""Building a pipeline of commands from a command line."""

from __future__ import annotations

from dataclasses import dataclass, field

from minishell.environment import Environment
from minishell.expansion import expand_tokens
from minishell.tokens import Token, TokenizeError, TokenType, tokenize

_REDIRECTIONS = frozenset(
    {TokenType.REDIRECT_IN, TokenType.REDIRECT_OUT, TokenType.APPEND, TokenType.HEREDOC}
)


class ParseError(ValueError):
    """Raised when a command line cannot be parsed."""


@dataclass
class Redirection:
    """A redirection operator and the file (or heredoc word) it names."""

    kind: TokenType
    target: str


@dataclass
class Command:
    """One command of a pipeline: its words and its redirections."""

    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)


def is_redirection(kind: TokenType) -> bool:
    """Return True for the four redirection operators."""
    return kind in _REDIRECTIONS


def parse(line: str, env: Environment | None) -> list[Command]:
    """Tokenize, expand and group ``line`` into the commands of a pipeline."""
    try:
        tokens = tokenize(line)
    except TokenizeError as exc:
        raise ParseError(str(exc)) from exc
    expand_tokens(tokens, env)

    commands = [Command()]
    following: list[Token | None] = [*tokens[1:], None]
    skip = False
    for token, nxt in zip(tokens, following):
        if skip:
            skip = False
            continue
        if token.kind is TokenType.EOF:
            break
        current = commands[-1]
        if token.kind is TokenType.WORD:
            current.args.append(token.value or "")
        elif is_redirection(token.kind):
            if nxt is None or nxt.kind is not TokenType.WORD:
                raise ParseError("Redirection without target")
            current.redirections.append(Redirection(token.kind, nxt.value or ""))
            skip = True
        elif token.kind is TokenType.PIPE:
            if nxt is None or not (nxt.kind is TokenType.WORD or is_redirection(nxt.kind)):
                raise ParseError(
                    "Syntax error: Pipe not followed by a command or redirection."
                )
            commands.append(Command())
        else:
            raise ParseError(f"Unexpected token type: {token.kind.value}")
    return commands