"""The shell — session owner and public entry point.

The shell ties the pieces together: it owns the environment and the
working directory, feeds keystrokes to the line editor, parses each
submitted line, and asks the resolver to run it.

Design choices:
    - **Writes to sinks, never prints.**  Output goes to whatever
      ``stdout``/``stderr`` objects the host supplies, which keeps the
      shell testable with plain string buffers.
    - **One line at a time.**  Submitted lines go into a queue drained by
      a single asyncio task.  While a command is suspended (a lazy load,
      an async body) keystrokes are still echoed, but the next line only
      starts once the previous one has finished and the prompt has been
      redrawn.
    - **``execute_command`` stands alone.**  Profile sourcing, the web
      front end and tests all run lines through it without touching the
      keystroke path.

Startup follows a login shell: banner, profile (``~/.profile``, else
``~/.bashrc``), first prompt, then subscribe to raw input.  A failing
profile line never stops startup; it is only recorded in the session log.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

from py_term.command import HostCallbacks
from py_term.completer import Completer
from py_term.env import Environment
from py_term.history import History
from py_term.line_editor import CRLF, LineEditor
from py_term.logging import Logger
from py_term.parser import ParseError, UnsupportedSyntaxError, parse_command
from py_term.paths import resolve_path
from py_term.resolver import CommandResolver

if TYPE_CHECKING:
    from py_term.command import Output
    from py_term.fs.mounts import MountTable

EXIT_SYNTAX_ERROR = 2

PROFILE_FILES = (".profile", ".bashrc")

DEFAULT_BANNER = (
    "\x1b[1;32mWelcome to py-term!\x1b[0m\r\n"
    "\r\n"
    'Type "help" for available commands.\r\n'
    "\r\n"
)

_SOURCE = "shell"

InputHandler: TypeAlias = Callable[[str | bytes], None]


class Shell:
    """An interactive shell session over a mount table."""

    def __init__(
        self,
        *,
        fs: MountTable,
        stdout: Output,
        stderr: Output | None = None,
        env: Environment | dict[str, str] | None = None,
        prompt: Callable[[Shell], str] | None = None,
        on_input: Callable[[InputHandler], object] | None = None,
        host: HostCallbacks | None = None,
        color_level: int = 1,
        banner: str = DEFAULT_BANNER,
    ) -> None:
        """Create a shell session.

        Args:
            fs: The mount table commands operate on.
            stdout: Sink for echo, prompts and command output.
            stderr: Sink for error messages (defaults to *stdout*).
            env: Initial environment; PATH, HOME and USER defaults are
                used when omitted.
            prompt: Builds the prompt text from the shell.
            on_input: Called once by ``start()`` with the raw-input handler.
            host: Callbacks offered to commands (``open``, ``emacs``).
            color_level: 0 disables ANSI colors in command output.
            banner: Text written first by ``start()``.

        """
        if isinstance(env, Environment):
            self.env = env
        else:
            self.env = Environment.with_defaults() if env is None else Environment(env)

        self.fs = fs
        self.stdout = stdout
        self.stderr = stderr if stderr is not None else stdout
        self.host = host or HostCallbacks()
        self.color_level = color_level
        self.log = Logger()
        self._banner = banner
        self._prompt_fn = prompt
        self._on_input = on_input

        self._cwd = resolve_path(self.env.get("HOME") or "/", cwd="/")
        self.env.set("PWD", self._cwd)

        self.resolver = CommandResolver(
            fs=fs,
            env=self.env,
            logger=self.log,
            get_cwd=lambda: self._cwd,
            set_cwd=self._set_cwd,
        )
        self.completer = Completer(fs, self.env, self._cwd)
        self.history = History()
        self._pending: deque[str] = deque()
        self._runner: asyncio.Task[None] | None = None
        self.editor = LineEditor(
            output=self.stdout,
            on_submit=self._submit,
            prompt=self._editor_prompt,
            completer=self.completer,
            history=self.history,
        )

    # -- working directory ---------------------------------------------------

    @property
    def cwd(self) -> str:
        """Return the current working directory."""
        return self._cwd

    def _set_cwd(self, path: str) -> None:
        """Change the working directory (relative paths resolve from the current one)."""
        self._cwd = resolve_path(path, cwd=self._cwd, home=self.env.get("HOME"))
        self.env.set("PWD", self._cwd)
        self.completer.cwd = self._cwd

    # -- prompt and startup --------------------------------------------------

    def prompt(self) -> str:
        """Return the prompt text."""
        if self._prompt_fn is not None:
            return self._prompt_fn(self)
        return f"{self.env.get('USER') or 'user'}@py-term:{self._cwd}$ "

    def print_prompt(self) -> None:
        """Write the prompt to stdout."""
        self.stdout.write(self.prompt())

    async def start(self) -> None:
        """Run the login sequence and subscribe to raw input.

        Raises:
            Exception: Whatever the ``on_input`` subscription raises;
                without an input source the session cannot continue.

        """
        self.stdout.write(self._banner)
        await self.source_profile()
        self.print_prompt()
        if self._on_input is not None:
            self._on_input(self.handle_input)

    async def source_profile(self) -> str | None:
        """Run the first profile file found in HOME, line by line.

        Returns:
            The path that was sourced, or None if no profile exists.

        """
        home = self.env.get("HOME") or "/"
        for name in PROFILE_FILES:
            path = resolve_path(name, cwd=home)
            try:
                if not self.fs.exists(path) or self.fs.stat(path).is_dir:
                    continue
                text = self.fs.read_file(path)
            except OSError as exc:
                self.log.warning(f"cannot read {path}: {exc}", source=_SOURCE)
                continue

            self.log.info(f"sourcing {path}", source=_SOURCE)
            for raw in text.splitlines():
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                try:
                    code = await self.execute_command(line)
                except Exception as exc:  # noqa: BLE001
                    self.log.warning(f"{path}: {line!r} raised {exc!r}", source=_SOURCE)
                    continue
                if code:
                    self.log.warning(f"{path}: {line!r} exited {code}", source=_SOURCE)
            return path
        return None

    # -- execution -------------------------------------------------------------

    async def execute_command(self, line: str) -> int:
        """Parse and run one line, returning its exit code.

        Blank lines return 0 and leave ``?`` untouched.  Syntax errors
        are reported on stderr with exit code 2.
        """
        try:
            parsed = parse_command(line)
        except (UnsupportedSyntaxError, ParseError) as exc:
            self.stderr.write(f"{exc}{CRLF}")
            self.env.exit_code = EXIT_SYNTAX_ERROR
            return EXIT_SYNTAX_ERROR

        if parsed is None:
            return 0

        return await self.resolver.execute(
            parsed.name,
            parsed.args,
            stdout=self.stdout,
            stderr=self.stderr,
            host=self.host,
            color_level=self.color_level,
        )

    # -- keystroke path --------------------------------------------------------

    def handle_input(self, data: str | bytes) -> None:
        """Feed raw terminal input to the line editor.

        Submitted lines run as a task on the running event loop, so input
        must be fed from inside that loop.

        Raises:
            RuntimeError: If no event loop is running.  Nothing has been
                echoed or recorded in history at that point.

        """
        try:
            asyncio.get_running_loop()
        except RuntimeError as exc:
            msg = "handle_input must be called from a running event loop"
            raise RuntimeError(msg) from exc
        self.editor.feed(data)

    def _submit(self, line: str) -> None:
        self._pending.append(line)
        if self._runner is None or self._runner.done():
            self._runner = asyncio.get_running_loop().create_task(self._drain())

    def _editor_prompt(self) -> str:
        # The drain task redraws the prompt once the running line finishes.
        return "" if self.busy else self.prompt()

    async def _drain(self) -> None:
        while self._pending:
            line = self._pending.popleft()
            await self.execute_command(line)
            self.print_prompt()

    @property
    def busy(self) -> bool:
        """Return True while a submitted line is queued or running."""
        return bool(self._pending) or (self._runner is not None and not self._runner.done())

    async def wait_idle(self) -> None:
        """Wait until every submitted line has run and the prompt is back."""
        while self._runner is not None and not self._runner.done():
            await self._runner
