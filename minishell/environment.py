"""The shell's table of environment variables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class InvalidIdentifier(ValueError):
    """Raised when an export argument does not name a valid variable."""

    def __init__(self, arg: str) -> None:
        super().__init__(f"minishell: export: `{arg}': not a valid identifier")
        self.arg = arg


def _is_name_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_name_char(ch: str) -> bool:
    return _is_name_start(ch) or ("0" <= ch <= "9")


def is_valid_env_name(name: str | None) -> bool:
    """Check that ``name`` is a valid variable name, up to any '='."""
    if not name or not _is_name_start(name[0]):
        return False
    for ch in name[1:]:
        if ch == "=":
            break
        if not _is_name_char(ch):
            return False
    return True


def split_assignment(arg: str) -> tuple[str, str | None]:
    """Split ``NAME=value`` into its parts; the value is None without '='.

    Raises InvalidIdentifier if the name part is not a valid name.
    """
    name, sep, value = arg.partition("=")
    if not is_valid_env_name(name):
        raise InvalidIdentifier(arg)
    return name, (value if sep else None)


class Environment:
    """An ordered collection of variables; a value may be None (unset)."""

    def __init__(self, entries: Iterable[tuple[str, str | None]] = ()) -> None:
        self._vars: dict[str, str | None] = {}
        for name, value in entries:
            self.set(name, value)

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> Environment:
        """Build from ``NAME=value`` strings, newest first.

        Strings without '=' are skipped.  Entries end up in reverse order,
        and where a name repeats the later string wins.
        """
        env = cls()
        for entry in reversed(list(entries)):
            name, sep, value = entry.partition("=")
            if sep and name not in env._vars:
                env._vars[name] = value
        return env

    def get(self, name: str | None) -> str | None:
        """Return the value of ``name``, or None if missing or unnamed."""
        if not name:
            return None
        return self._vars.get(name)

    def set(self, name: str, value: str | None) -> None:
        """Update a variable in place, or append it if it is new."""
        self._vars[name] = value

    def unset(self, *args: str) -> None:
        """Remove each named variable; unknown names are ignored."""
        for name in args:
            self._vars.pop(name, None)

    def items(self) -> list[tuple[str, str | None]]:
        """Return the (name, value) pairs in order."""
        return list(self._vars.items())

    def to_strings(self) -> list[str]:
        """Return ``NAME=value`` strings for variables that have a value."""
        return [f"{name}={value}" for name, value in self._vars.items() if value is not None]

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self.items()!r})"