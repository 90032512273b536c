r"""Line editor — the raw-input state machine behind the prompt.

A terminal in raw mode hands over every keystroke as it happens: letters
as themselves, Enter as ``\r``, Backspace as ``\x7f``, and the arrow keys
as three-byte escape sequences such as ``\x1b[A``.  The line editor turns
that stream into a draft line, echoes what the user should see, and
hands each completed line to a submit callback.

It has two states::

    NORMAL --ESC--> ESCAPE --(3 bytes: match or discard)--> NORMAL

In NORMAL each character is dispatched by class:

- CR / LF — echo a line break, record and submit the trimmed line.
- DEL / BS — drop the last character and erase it on screen.
- Ctrl-C — discard the draft, echo ``^C``, redraw the prompt.
- Tab — complete the current word.
- any other control character — ignored.
- anything printable — append and echo.

In ESCAPE the bytes are collected until there are three.  A known arrow
sequence runs its action; anything else is dropped silently.
"""

from __future__ import annotations

import codecs
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING

from py_term.history import History

if TYPE_CHECKING:
    from py_term.command import Output
    from py_term.completer import Completer

CRLF = "\r\n"
ERASE_CHAR = "\b \b"

_ESCAPE_LENGTH = 3
_FIRST_PRINTABLE = 0x20

_UP = "up"
_DOWN = "down"
_RIGHT = "right"
_LEFT = "left"

# Cursor keys in normal and application mode.
_ESCAPE_SEQUENCES: dict[str, str] = {
    "\x1b[A": _UP,
    "\x1bOA": _UP,
    "\x1b[B": _DOWN,
    "\x1bOB": _DOWN,
    "\x1b[C": _RIGHT,
    "\x1bOC": _RIGHT,
    "\x1b[D": _LEFT,
    "\x1bOD": _LEFT,
}


class InputState(StrEnum):
    """Whether the editor is reading plain characters or an escape sequence."""

    NORMAL = "normal"
    ESCAPE = "escape"


class LineEditor:
    """Turn raw keystrokes into submitted lines."""

    def __init__(
        self,
        *,
        output: Output,
        on_submit: Callable[[str], None],
        prompt: Callable[[], str],
        completer: Completer | None = None,
        history: History | None = None,
    ) -> None:
        """Create a line editor.

        Args:
            output: Where echo, erase sequences and listings are written.
            on_submit: Called with each trimmed line on Enter (including
                empty lines, so the caller can redraw the prompt).
            prompt: Returns the current prompt text for redraws.
            completer: Tab completion engine (Tab is ignored without one).
            history: Line history (a fresh one is created if omitted).

        """
        self._output = output
        self._on_submit = on_submit
        self._prompt = prompt
        self._completer = completer
        self.history = history if history is not None else History()
        self.state = InputState.NORMAL
        self._buffer = ""
        self._escape = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def buffer(self) -> str:
        """Return the draft line."""
        return self._buffer

    def feed(self, data: str | bytes) -> None:
        """Process a chunk of raw input, one character at a time.

        Bytes are decoded as UTF-8; a multi-byte character split across
        two chunks is reassembled.
        """
        text = self._decoder.decode(data) if isinstance(data, bytes) else data
        for char in text:
            self.process_char(char)

    def process_char(self, char: str) -> None:
        """Apply one character to the state machine."""
        if self.state is InputState.ESCAPE:
            self._escape_char(char)
            return

        match char:
            case "\r" | "\n":
                self._submit()
            case "\x7f" | "\b":
                self._backspace()
            case "\x03":
                self._cancel()
            case "\t":
                self._complete()
            case "\x1b":
                self.state = InputState.ESCAPE
                self._escape = char
            case _ if ord(char) < _FIRST_PRINTABLE:
                pass
            case _:
                self._buffer += char
                self._output.write(char)

    # -- actions -------------------------------------------------------------

    def _submit(self) -> None:
        self._output.write(CRLF)
        line = self._buffer.strip()
        self._buffer = ""
        self.history.add(line)
        self.history.reset()
        self._on_submit(line)

    def _backspace(self) -> None:
        if self._buffer:
            self._buffer = self._buffer[:-1]
            self._output.write(ERASE_CHAR)

    def _cancel(self) -> None:
        self._buffer = ""
        self.history.reset()
        self._output.write("^C" + CRLF)
        self._output.write(self._prompt())

    def _escape_char(self, char: str) -> None:
        self._escape += char
        action = _ESCAPE_SEQUENCES.get(self._escape)
        if action is None and len(self._escape) < _ESCAPE_LENGTH:
            return
        self._escape = ""
        self.state = InputState.NORMAL
        if action == _UP:
            self._replace_line(self.history.previous(self._buffer))
        elif action == _DOWN:
            self._replace_line(self.history.next())

    def _replace_line(self, line: str | None) -> None:
        """Erase the visible draft and show *line* instead."""
        if line is None:
            return
        self._output.write(ERASE_CHAR * len(self._buffer) + line)
        self._buffer = line

    def _complete(self) -> None:
        if self._completer is None:
            return
        completion = self._completer.complete(self._buffer)
        if not completion.matches:
            return
        if len(completion.matches) == 1:
            suffix = completion.suffix()
            self._buffer += suffix
            self._output.write(suffix)
            return
        self._output.write(CRLF + " ".join(completion.display) + CRLF)
        self._output.write(self._prompt() + self._buffer)
