"""Command resolution and execution.

Finding a command works like ``execvp``: each ``PATH`` directory is
tried left to right and the first hit wins, so an earlier directory
shadows a same-named command later on.  For each directory:

1. Skip it unless ``<dir>/<name>`` exists.
2. If a command was already loaded from that exact path, reuse it.
3. Otherwise ask the mount that owns the path.  Only mounts that
   provide commands (``CommandTableFS``) can answer:

   - ``Lazy`` — run the loader once, cache the callable by full path.
   - ``Direct`` — return the callable as-is (nothing to cache).

A name containing ``/`` (``./tool``, ``/bin/ls``) names its path
directly and skips the search.

Execution wraps the call in a ``CommandContext``, awaits the result if
it is awaitable, and stores the exit code in ``?``.  A command that
raises never takes the session down: the error is reported on stderr
and the exit code is forced to 1.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING

from py_term.command import CommandContext, Direct, HostCallbacks, Lazy
from py_term.fs.binfs import get_command, is_command_table
from py_term.paths import join_path, resolve_path

if TYPE_CHECKING:
    from py_term.command import CommandFn, Output
    from py_term.env import Environment
    from py_term.fs.mounts import MountTable
    from py_term.logging import Logger

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 127
_EXIT_CODE_MASK = 0xFF

_SOURCE = "resolver"


class CommandNotFoundError(LookupError):
    """Raise when no PATH directory provides the requested command."""

    def __init__(self, name: str) -> None:
        """Create the error for the missing command *name*."""
        super().__init__(f"{name}: command not found")
        self.name = name


class CommandResolver:
    """Resolve command names on PATH and run them."""

    def __init__(
        self,
        *,
        fs: MountTable,
        env: Environment,
        logger: Logger,
        get_cwd: Callable[[], str],
        set_cwd: Callable[[str], None],
    ) -> None:
        """Create a resolver bound to one session.

        Args:
            fs: The session's mount table.
            env: The session environment (PATH is read on every lookup).
            logger: The session log.
            get_cwd: Returns the current working directory.
            set_cwd: Changes the working directory (handed to commands).

        """
        self._fs = fs
        self._env = env
        self._log = logger
        self._get_cwd = get_cwd
        self._set_cwd = set_cwd
        self._loaded: dict[str, CommandFn] = {}

    @property
    def loaded_paths(self) -> list[str]:
        """Return the full paths of every lazily loaded command."""
        return sorted(self._loaded)

    async def resolve(self, name: str) -> CommandFn:
        """Find the callable for *name*.

        Raises:
            CommandNotFoundError: If no candidate path provides it.

        """
        if "/" in name:
            path = resolve_path(name, cwd=self._get_cwd(), home=self._env.get("HOME"))
            found = await self._lookup(path)
        else:
            found = None
            for directory in self._env.path_dirs():
                base = resolve_path(directory, cwd=self._get_cwd(), home=self._env.get("HOME"))
                found = await self._lookup(join_path(base, name))
                if found is not None:
                    break

        if found is None:
            self._log.info(f"{name}: not found on PATH", source=_SOURCE)
            raise CommandNotFoundError(name)
        return found

    async def _lookup(self, path: str) -> CommandFn | None:
        """Return the command at *path*, loading and caching lazy entries."""
        if not self._fs.exists(path):
            return None

        cached = self._loaded.get(path)
        if cached is not None:
            return cached

        _point, backend, inner = self._fs.owner(path)
        if not is_command_table(backend):
            return None
        entry = get_command(backend, inner.lstrip("/"))

        match entry:
            case Direct(fn=fn):
                self._log.debug(f"resolved {path}", source=_SOURCE)
                return fn
            case Lazy(loader=loader):
                loaded = loader()
                if inspect.isawaitable(loaded):
                    loaded = await loaded
                self._loaded[path] = loaded
                self._log.info(f"loaded {path}", source=_SOURCE)
                return loaded
            case _:
                return None

    async def execute(
        self,
        name: str,
        args: list[str],
        *,
        stdout: Output,
        stderr: Output,
        host: HostCallbacks | None = None,
        color_level: int = 1,
    ) -> int:
        """Resolve and run *name*, returning (and recording) its exit code."""
        try:
            fn = await self.resolve(name)
        except CommandNotFoundError as exc:
            stderr.write(f"{exc}\r\n")
            return self._record(EXIT_NOT_FOUND)
        except Exception as exc:  # noqa: BLE001
            return self._fail(name, exc, stderr)

        ctx = CommandContext(
            name=name,
            args=list(args),
            env=self._env,
            cwd=self._get_cwd(),
            stdout=stdout,
            stderr=stderr,
            fs=self._fs,
            set_cwd=self._set_cwd,
            host=host or HostCallbacks(),
            color_level=color_level,
        )
        try:
            result = fn(ctx)
            if inspect.isawaitable(result):
                result = await result
            code = EXIT_SUCCESS if result is None else int(result) & _EXIT_CODE_MASK
        except Exception as exc:  # noqa: BLE001
            return self._fail(name, exc, stderr)

        return self._record(code)

    def _fail(self, name: str, exc: Exception, stderr: Output) -> int:
        """Report a failed command and record exit code 1."""
        stderr.write(f"{name}: {exc}\r\n")
        self._log.error(f"{name} failed: {exc!r}", source=_SOURCE)
        return self._record(EXIT_FAILURE)

    def _record(self, code: int) -> int:
        self._env.exit_code = code
        return code
