"""Terminal REPL — run the shell on a real terminal.

The shell expects a raw keystroke stream, so the terminal is switched
to raw mode for the session: no line buffering, no local echo, and
Ctrl-C arrives as the byte ``0x03`` instead of a signal.  The shell does
its own echo and line editing.

Input is wired through the event loop: ``start()`` hands the shell's
input handler to the subscription callback, which registers the stdin
file descriptor with ``loop.add_reader``.  Each readable event reads a
chunk and feeds it to the shell.  Ctrl-D (or end of input) ends the
session, and the terminal settings are always restored.

The helpers (``TerminalOutput``, ``is_end_of_input``) are pure and
testable.  The ``run()`` function is the I/O entrypoint.
"""

from __future__ import annotations

import asyncio
import os
import sys
import termios
import tty
from typing import TYPE_CHECKING, TextIO

from py_term.bootstrap import build_filesystem
from py_term.shell import Shell

if TYPE_CHECKING:
    from py_term.shell import InputHandler

_CTRL_D = 0x04
_READ_SIZE = 1024


class TerminalOutput:
    """Output sink writing straight through to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        """Wrap *stream* (usually ``sys.stdout``)."""
        self._stream = stream

    def write(self, text: str) -> None:
        """Write *text* and flush, so echo appears immediately."""
        self._stream.write(text)
        self._stream.flush()


def is_end_of_input(chunk: bytes) -> bool:
    """Return True for EOF (an empty read) or a chunk holding Ctrl-D."""
    return not chunk or _CTRL_D in chunk


async def serve(fd: int, output: TerminalOutput) -> Shell:
    """Run a shell session reading raw bytes from *fd* until Ctrl-D.

    Returns:
        The finished shell (for inspection of history or the log).

    """
    loop = asyncio.get_running_loop()
    finished: asyncio.Future[None] = loop.create_future()

    def subscribe(handler: InputHandler) -> None:
        def on_readable() -> None:
            chunk = os.read(fd, _READ_SIZE)
            if is_end_of_input(chunk):
                if not finished.done():
                    finished.set_result(None)
                return
            handler(chunk)

        loop.add_reader(fd, on_readable)

    shell = Shell(fs=build_filesystem(), stdout=output, on_input=subscribe)
    try:
        await shell.start()
        await finished
        await shell.wait_idle()
    finally:
        loop.remove_reader(fd)
    return shell


def run() -> None:
    """Start an interactive session on the controlling terminal.

    This is the ``py-term`` console entry point.
    """
    fd = sys.stdin.fileno()
    output = TerminalOutput(sys.stdout)

    if not os.isatty(fd):
        asyncio.run(serve(fd, output))
        return

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        asyncio.run(serve(fd, output))
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        output.write("\r\nlogout\r\n")
