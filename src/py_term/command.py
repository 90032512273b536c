"""Command types — what a command is and what it receives when it runs.

A command is a plain callable taking a ``CommandContext`` and returning
an exit code.  It may be a coroutine function: the shell awaits whatever
comes back if it is awaitable.

Command tables register commands as one of two tagged entries:

- ``Direct(fn)`` — the callable itself, ready to run.
- ``Lazy(loader)`` — a zero-argument loader that produces the callable
  on first use (importing a module, building a closure, ...).  The
  resolver runs the loader once and caches what it returns.

The tag is the only thing the resolver looks at; it never inspects a
callable's signature to guess which kind it has.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, TypeAlias

from py_term.paths import resolve_path

if TYPE_CHECKING:
    from py_term.env import Environment
    from py_term.fs.mounts import MountTable


class Output(Protocol):
    """Anything with a ``write(text)`` method (terminal, buffer, socket)."""

    def write(self, text: str) -> object:
        """Write *text* to the sink."""
        ...


CommandFn: TypeAlias = "Callable[[CommandContext], int | None | Awaitable[int | None]]"
CommandLoader: TypeAlias = "Callable[[], CommandFn | Awaitable[CommandFn]]"


@dataclass(frozen=True)
class Direct:
    """A command entry holding a ready-to-run callable."""

    fn: CommandFn


@dataclass(frozen=True)
class Lazy:
    """A command entry whose callable is produced by *loader* on first use."""

    loader: CommandLoader


CommandEntry: TypeAlias = Direct | Lazy


@dataclass(frozen=True)
class HostCallbacks:
    """Optional hooks into the application embedding the shell.

    Attributes:
        on_open: Show a URL or site path (e.g. in a browser panel).
        on_editor: Open a file path in an editor.

    """

    on_open: Callable[[str], object] | None = None
    on_editor: Callable[[str], object] | None = None


@dataclass
class CommandContext:
    """Everything a command can see and touch while it runs.

    Attributes:
        name: The command name as typed.
        args: The argument words (not including the name).
        env: The live session environment.
        cwd: Snapshot of the working directory at invocation time.
        stdout: Sink for normal output.
        stderr: Sink for error messages.
        fs: The session's mount table.
        set_cwd: Change the session's working directory.
        host: Optional host callbacks.
        color_level: 0 disables ANSI colors in command output.

    """

    name: str
    args: list[str]
    env: Environment
    cwd: str
    stdout: Output
    stderr: Output
    fs: MountTable
    set_cwd: Callable[[str], None]
    host: HostCallbacks = field(default_factory=HostCallbacks)
    color_level: int = 1

    @property
    def home(self) -> str:
        """Return ``HOME`` (``/`` when unset)."""
        return self.env.get("HOME") or "/"

    def resolve(self, path: str) -> str:
        """Resolve a user-typed path against this context's cwd and HOME."""
        return resolve_path(path, cwd=self.cwd, home=self.home)

    def error(self, message: str) -> int:
        """Write ``<name>: <message>`` to stderr and return exit code 1."""
        self.stderr.write(f"{self.name}: {message}\r\n")
        return 1
