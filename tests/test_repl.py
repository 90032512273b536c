"""Tests for the terminal REPL helpers.

``run()`` needs a real terminal, so the tests cover the pure helpers and
drive ``serve()`` through a pipe.
"""

import io
import os

import pytest

from py_term.repl import TerminalOutput, is_end_of_input, serve


class TestTerminalOutput:
    """Verify writes pass straight through."""

    def test_write(self) -> None:
        """Text reaches the wrapped stream."""
        stream = io.StringIO()
        TerminalOutput(stream).write("hello")
        assert stream.getvalue() == "hello"


class TestEndOfInput:
    """Verify EOF detection."""

    def test_empty_chunk(self) -> None:
        """An empty read is EOF."""
        assert is_end_of_input(b"")

    def test_ctrl_d(self) -> None:
        """A chunk containing Ctrl-D ends the session."""
        assert is_end_of_input(b"ls\x04")

    def test_plain_input(self) -> None:
        """Ordinary keystrokes are not EOF."""
        assert not is_end_of_input(b"ls\r")


class TestServe:
    """Verify a full session over a pipe."""

    @pytest.mark.asyncio
    async def test_runs_until_eof(self) -> None:
        """Lines written to the pipe run; closing it ends the session."""
        read_fd, write_fd = os.pipe()
        os.write(write_fd, b"echo piped\r")
        os.close(write_fd)
        stream = io.StringIO()
        try:
            shell = await serve(read_fd, TerminalOutput(stream))
        finally:
            os.close(read_fd)
        assert "piped\r\n" in stream.getvalue()
        assert shell.history.entries == ["echo piped"]
