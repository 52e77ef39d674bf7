"""Running a parsed pipeline of commands."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from io import StringIO
from typing import TextIO

from minishell.builtins import is_builtin, run_cd, run_echo, run_env, run_export
from minishell.environment import Environment
from minishell.parsing import Command
from minishell.tokens import TokenType

EXIT_REQUEST = 2
NOT_FOUND = 127
NOT_EXECUTABLE = 126


class ShellExit(Exception):
    """Raised when a pipeline starts with ``exit``; carries the status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def find_executable(command: str, env: Environment | None) -> str:
    """Look ``command`` up in the directories of PATH.

    Only directories followed by a ':' are searched.  The command is
    returned unchanged when PATH is missing or nothing matches.
    """
    path = env.get("PATH") if env is not None else None
    if path is None:
        return command
    for directory in path.split(":")[:-1]:
        candidate = f"{directory}/{command}"
        if os.access(candidate, os.F_OK):
            return candidate
    return command


def run_builtin(
    args: Sequence[str],
    env: Environment,
    status: int,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run a builtin command and return its exit status (2 for ``exit``)."""
    name = args[0]
    if name == "cd":
        run_cd(args)
    elif name == "echo":
        run_echo(args, status, out)
    elif name == "export":
        run_export(env, args, out, err)
    elif name == "env":
        run_env(env, args, out, err)
    elif name == "exit":
        return EXIT_REQUEST
    else:
        raise ValueError(f"{name}: not a builtin")
    return 0


@dataclass
class _Done:
    """A stage that has already finished, possibly still feeding a pipe."""

    code: int
    feeder: threading.Thread | None = None

    def wait(self) -> int:
        if self.feeder is not None:
            self.feeder.join()
        return self.code


@contextmanager
def _isolated() -> Iterator[None]:
    """Undo changes to the working directory and PWD made inside the block."""
    try:
        cwd: str | None = os.getcwd()
    except OSError:
        cwd = None
    pwd = os.environ.get("PWD")
    try:
        yield
    finally:
        if cwd is not None:
            os.chdir(cwd)
        if pwd is None:
            os.environ.pop("PWD", None)
        else:
            os.environ["PWD"] = pwd


def _feed(fd: int, data: bytes) -> threading.Thread:
    def write() -> None:
        try:
            view = memoryview(data)
            while view:
                view = view[os.write(fd, view):]
        except OSError:
            pass
        finally:
            os.close(fd)

    thread = threading.Thread(target=write, daemon=True)
    thread.start()
    return thread


def _emit(text: str, fd: int | None) -> None:
    if fd is None:
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        try:
            os.write(fd, text.encode())
        except OSError:
            pass


def _child_env(env: Environment) -> dict[str, str]:
    return {name: value for name, value in env.items() if value is not None}


def _run_builtin_stage(
    args: Sequence[str], env: Environment, status: int, stdout_fd: int | None
) -> _Done:
    scratch = Environment(env.items())
    if stdout_fd is None:
        with _isolated():
            return _Done(run_builtin(args, scratch, status, sys.stdout, sys.stderr))
    buffer = StringIO()
    with _isolated():
        code = run_builtin(args, scratch, status, buffer, sys.stderr)
    return _Done(code, _feed(stdout_fd, buffer.getvalue().encode()))


def _spawn(
    command: Command, env: Environment, stdin_fd: int | None, stdout_fd: int | None
) -> subprocess.Popen | _Done:
    owned = [fd for fd in (stdin_fd, stdout_fd) if fd is not None]
    try:
        for redirection in command.redirections:
            if redirection.kind is TokenType.REDIRECT_IN:
                flags, label = os.O_RDONLY, "input"
            elif redirection.kind in (TokenType.REDIRECT_OUT, TokenType.APPEND):
                mode = os.O_APPEND if redirection.kind is TokenType.APPEND else os.O_TRUNC
                flags, label = os.O_WRONLY | os.O_CREAT | mode, "output"
            else:
                continue
            try:
                fd = os.open(redirection.target, flags, 0o644)
            except OSError as exc:
                print(f"Open {label} redirection failed: {exc.strerror}", file=sys.stderr)
                return _Done(1)
            owned.append(fd)
            if label == "input":
                stdin_fd = fd
            else:
                stdout_fd = fd

        program = command.args[0]
        message = f"minishell: {program}: command not found\n"
        if not program:
            _emit(message, stdout_fd)
            return _Done(NOT_FOUND)
        path = program if "/" in program else find_executable(program, env)
        if "/" not in path:
            path = f"./{path}"
        sys.stdout.flush()
        try:
            return subprocess.Popen(
                list(command.args),
                executable=path,
                stdin=stdin_fd,
                stdout=stdout_fd,
                env=_child_env(env),
            )
        except OSError as exc:
            _emit(message, stdout_fd)
            return _Done(NOT_FOUND if isinstance(exc, FileNotFoundError) else NOT_EXECUTABLE)
    finally:
        for fd in owned:
            os.close(fd)


def _start_stage(
    command: Command,
    env: Environment,
    status: int,
    stdin_fd: int | None,
    stdout_fd: int | None,
) -> subprocess.Popen | _Done:
    if is_builtin(command.args[0]):
        if stdin_fd is not None:
            os.close(stdin_fd)
        return _run_builtin_stage(command.args, env, status, stdout_fd)
    return _spawn(command, env, stdin_fd, stdout_fd)


def _wait_all(stages: Iterable[subprocess.Popen | _Done]) -> int:
    last = 0
    for stage in stages:
        code = stage.wait()
        if code >= 0:
            last = code
    return last


def execute_pipeline(
    commands: Iterable[Command], env: Environment | None, status: int = 0
) -> int:
    """Run the commands connected by pipes and return the last one's status.

    Every stage runs as if in a child process: builtins work on a copy of
    the environment and their directory changes are undone.  A pipeline
    whose first command is ``exit`` raises ShellExit with ``status``.
    """
    commands = list(commands)
    if not commands or env is None:
        return 1
    first = commands[0].args
    if first and first[0] == "exit":
        raise ShellExit(status)

    stages: list[subprocess.Popen | _Done] = []
    read_fd: int | None = None
    try:
        for index, command in enumerate(commands):
            if not command.args:
                if read_fd is not None:
                    os.close(read_fd)
                    read_fd = None
                _wait_all(stages)
                return 1
            if index < len(commands) - 1:
                next_read, write_fd = os.pipe()
            else:
                next_read, write_fd = None, None
            stdin_fd, read_fd = read_fd, next_read
            stages.append(_start_stage(command, env, status, stdin_fd, write_fd))
    finally:
        if read_fd is not None:
            os.close(read_fd)
    return _wait_all(stages)