"""Commands the shell carries out itself: cd, echo, env, export and exit."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

from minishell.environment import Environment, InvalidIdentifier, split_assignment

BUILTINS = frozenset({"cd", "echo", "export", "env", "exit"})

_GETCWD_ERROR = (
    "minishell: cd: error retrieving current directory: getcwd: "
    "cannot access parent directories: No such file or directory"
)


def is_builtin(name: str | None) -> bool:
    """Return True if ``name`` is handled by the shell itself."""
    return name in BUILTINS


def run_echo(args: Sequence[str], status: int = 0, out: TextIO | None = None) -> None:
    """Print the arguments after ``args[0]``, separated by spaces.

    A leading ``-n`` drops the final newline; a leading ``$?`` prints the
    previous exit status instead of the arguments.
    """
    out = sys.stdout if out is None else out
    if not args:
        out.write("\n")
        return
    rest = list(args[1:])
    newline = True
    if rest and rest[0] == "-n":
        newline = False
        rest = rest[1:]
    elif rest and rest[0] == "$?":
        out.write(f"{status}\n")
        return
    out.write(" ".join(rest) + ("\n" if newline else ""))


def _cd_parent() -> None:
    try:
        os.stat("..")
    except OSError as exc:
        print(f"minishell: cd: error retrieving parent directory: {exc.strerror}")
        return
    try:
        current = os.getcwd()
    except OSError:
        print(_GETCWD_ERROR)
        return
    try:
        os.chdir("..")
    except OSError as exc:
        print(f"minishell: cd: {exc.strerror}", file=sys.stderr)
        return
    try:
        new_dir = os.getcwd()
    except OSError:
        print(_GETCWD_ERROR)
        head, sep, _ = current.rpartition("/")
        if sep:
            os.environ["PWD"] = head
        return
    os.environ["PWD"] = new_dir


def run_cd(args: Sequence[str]) -> None:
    """Change the working directory to ``args[1]``, or to $HOME without one."""
    if len(args) < 2:
        home = os.environ.get("HOME")
        if not home:
            print("minishell: cd: HOME not set", file=sys.stderr)
            return
        try:
            os.chdir(home)
        except OSError as exc:
            print(f"minishell: cd: {exc.strerror}", file=sys.stderr)
        return
    target = args[1]
    if target == "..":
        _cd_parent()
        return
    try:
        os.chdir(target)
    except OSError as exc:
        print(f"minishell: cd: {target}: {exc.strerror}", file=sys.stderr)


def run_env(
    env: Environment,
    args: Sequence[str],
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Print every variable that has a value as ``NAME=value``."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    if not len(env):
        return 0
    if len(args) > 1:
        err.write("env: too many arguments\n")
        return 1
    for name, value in env.items():
        if name and value is not None:
            out.write(f"{name}={value}\n")
    return 0


def run_export(
    env: Environment,
    args: Sequence[str],
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Set variables from ``NAME[=value]`` arguments, or list them sorted."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    if len(args) < 2:
        for name, value in sorted(env.items(), key=lambda item: item[0]):
            if value is not None:
                out.write(f'declare -x {name}="{value}"\n')
            else:
                out.write(f"declare -x {name}\n")
        return 0
    result = 0
    for arg in args[1:]:
        try:
            name, value = split_assignment(arg)
        except InvalidIdentifier as exc:
            err.write(f"{exc}\n")
            result = 1
            continue
        env.set(name, value)
    return result