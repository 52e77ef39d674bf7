"""The interactive read-run loop of the shell."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable, Sequence

from minishell.environment import Environment
from minishell.executor import EXIT_REQUEST, ShellExit, execute_pipeline
from minishell.parsing import ParseError, parse

PROMPT = "minishell> "
_SPACES = frozenset(" \t\n\v\f\r")


def is_blank_line(line: str | None) -> bool:
    """Return True if ``line`` is missing or holds only whitespace."""
    return line is None or all(ch in _SPACES for ch in line)


class Shell:
    """A shell session: its environment and the last exit status."""

    def __init__(self, env: Environment | None = None) -> None:
        if env is None:
            env = Environment.from_strings(f"{k}={v}" for k, v in os.environ.items())
        self.env = env
        self.status = 0

    def run_line(self, line: str) -> int:
        """Parse and run one line; return the resulting exit status.

        Blank lines and lines that fail to parse leave the status as it was.
        Raises ShellExit when the line starts with ``exit``.
        """
        if is_blank_line(line):
            return self.status
        try:
            commands = parse(line, self.env)
        except ParseError as exc:
            print(exc, file=sys.stderr)
            return self.status
        self.status = execute_pipeline(commands, self.env, self.status)
        return self.status

    def loop(self, read_line: Callable[[], str | None]) -> int:
        """Run lines from ``read_line`` until it returns None or the shell exits."""
        while True:
            line = read_line()
            if line is None:
                break
            try:
                status = self.run_line(line)
            except ShellExit as exc:
                self.status = exc.status
                break
            if status == EXIT_REQUEST:
                break
        return self.status


def _read_line() -> str | None:
    try:
        return input(PROMPT)
    except EOFError:
        return None
    except KeyboardInterrupt:
        print()
        return ""


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive session; any argument makes it return at once."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        return 0
    try:
        import readline  # noqa: F401  (line editing and history for input())
    except ImportError:
        pass
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    return Shell().loop(_read_line)


if __name__ == "__main__":
    sys.exit(main())