"""Command-table filesystem — a directory whose entries are commands.

Real shells find programs by looking for executable files on ``PATH``.
Our commands are Python callables, not files, so a ``CommandTableFS``
bridges the two worlds: it is an ordinary in-memory store holding one
empty, executable placeholder file per registered command, while the
callables themselves live in a name → ``CommandEntry`` table on the
same instance.

Mount one at ``/bin`` and ``ls /bin`` shows the commands, tab completion
offers them, and the resolver, seeing that the mount provides commands,
asks the backend for the entry behind ``/bin/<name>``.

The store is read-only after construction, so every placeholder always
has exactly one table entry and vice versa.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from py_term.fs.filesystem import EXEC_MODE, MemoryFileSystem

if TYPE_CHECKING:
    from py_term.command import CommandEntry


class CommandTableFS(MemoryFileSystem):
    """An in-memory store exposing one placeholder file per command."""

    provides_commands = True

    def __init__(self, commands: Mapping[str, CommandEntry]) -> None:
        """Create the store and a placeholder for each command name.

        Args:
            commands: Command names mapped to their entries.

        Raises:
            ValueError: If a name is empty or contains ``/``.

        """
        super().__init__()
        self._commands: dict[str, CommandEntry] = {}
        for name, entry in commands.items():
            if not name or "/" in name:
                msg = f"Invalid command name: {name!r}"
                raise ValueError(msg)
            super().create_file(f"/{name}", mode=EXEC_MODE)
            self._commands[name] = entry

    @property
    def command_names(self) -> list[str]:
        """Return the registered command names, sorted."""
        return sorted(self._commands)

    def command_entry(self, name: str) -> CommandEntry | None:
        """Return the entry registered as *name*, or None."""
        return self._commands.get(name)

    # -- read-only guards --------------------------------------------------

    def create_file(self, path: str, *, mode: int = EXEC_MODE) -> None:  # noqa: ARG002
        """Refuse to create files."""
        _read_only(path)

    def mkdir(self, path: str, *, recursive: bool = False) -> None:  # noqa: ARG002
        """Refuse to create directories."""
        _read_only(path)

    def write_file(self, path: str, text: str) -> None:  # noqa: ARG002
        """Refuse to write files."""
        _read_only(path)


def _read_only(path: str) -> None:
    msg = f"Read-only file system: {path}"
    raise PermissionError(msg)


def is_command_table(fs: object) -> bool:
    """Return True if *fs* is a backend that provides commands."""
    return bool(getattr(fs, "provides_commands", False))


def get_command(fs: object, name: str) -> CommandEntry | None:
    """Return the command entry *fs* holds for *name*, or None.

    Backends that do not provide commands always answer None.
    """
    if not is_command_table(fs):
        return None
    return fs.command_entry(name)  # type: ignore[attr-defined]
