"""Command history — recall earlier lines with the arrow keys.

The history is an append-only list of submitted lines.  Two rules keep
it tidy without losing information:

- Blank lines are never recorded.
- A line identical to the *immediately preceding* entry is not
  recorded again.  ``ls``, ``ls``, ``pwd``, ``ls`` records three
  entries, not one: only adjacent repeats collapse.

Navigation works like bash.  The first Up saves whatever is being typed
(the *draft*) and shows the newest entry; each further Up walks older
and stops at the oldest.  Down walks newer; stepping past the newest
entry restores the draft and leaves navigation.
"""


class History:
    """Submitted lines plus a navigation cursor."""

    def __init__(self) -> None:
        """Create an empty history that is not navigating."""
        self._entries: list[str] = []
        self._cursor: int | None = None
        self._draft: str = ""

    @property
    def entries(self) -> list[str]:
        """Return all recorded lines, oldest first."""
        return list(self._entries)

    @property
    def navigating(self) -> bool:
        """Return True while the user is walking through history."""
        return self._cursor is not None

    def add(self, line: str) -> bool:
        """Record *line*, returning True if it was appended."""
        if not line or (self._entries and self._entries[-1] == line):
            return False
        self._entries.append(line)
        return True

    def reset(self) -> None:
        """Leave navigation mode (the saved draft is forgotten)."""
        self._cursor = None
        self._draft = ""

    def previous(self, draft: str) -> str | None:
        """Step to an older entry.

        Args:
            draft: The current buffer, saved when navigation starts.

        Returns:
            The line to show, or None when there is nothing to change
            (empty history, or already at the oldest entry).

        """
        if not self._entries:
            return None
        if self._cursor is None:
            self._draft = draft
            self._cursor = len(self._entries) - 1
            return self._entries[self._cursor]
        if self._cursor == 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def next(self) -> str | None:
        """Step to a newer entry, or back to the saved draft.

        Returns:
            The line to show, or None when not navigating.

        """
        if self._cursor is None:
            return None
        if self._cursor < len(self._entries) - 1:
            self._cursor += 1
            return self._entries[self._cursor]
        draft = self._draft
        self.reset()
        return draft

    def __len__(self) -> int:
        """Return the number of recorded lines."""
        return len(self._entries)
