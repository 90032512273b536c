"""Tab completion — command names and filesystem paths.

The completer separates **what to complete** (pure logic, fully
testable) from **how to show it** (the line editor decides what to echo).

The line is split on whitespace.  A trailing space starts a new, empty
word, so ``"ls "`` has two words: ``ls`` and ``""``.

- **One word or none** — complete a command name.  Candidates are the
  union of the entries of every ``PATH`` directory, de-duplicated and
  sorted.
- **Two or more words** — complete a path in the last word.  ``docs/no``
  splits into the typed directory ``docs/`` and the name prefix ``no``.
  The directory is resolved against the cwd to list it, but candidates
  keep the prefix exactly as typed (``docs/notes.txt``, not
  ``/home/guest/docs/notes.txt``).  Directories get a trailing ``/``.

Dot-files are offered only when the typed name starts with ``.``.

A single match completes with a trailing space, except a directory,
which stops after its ``/``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from py_term.paths import join_path, resolve_path

if TYPE_CHECKING:
    from py_term.env import Environment
    from py_term.fs.mounts import MountTable


class CompletionKind(StrEnum):
    """What the word under completion names."""

    COMMAND = "command"
    PATH = "path"


@dataclass(frozen=True)
class Completion:
    """The result of completing one word.

    Attributes:
        kind: Whether a command or a path was completed.
        word: The partial word as typed.
        matches: Full replacement words, sorted.
        display_prefix: Leading text stripped from matches when listing
            them (the typed directory part of a path).

    """

    kind: CompletionKind
    word: str
    matches: list[str] = field(default_factory=list)
    display_prefix: str = ""

    @property
    def display(self) -> list[str]:
        """Return the matches as shown in a multi-match listing."""
        return [match[len(self.display_prefix) :] for match in self.matches]

    def suffix(self) -> str:
        """Return the text to append for a single match (empty otherwise).

        Commands and files get a trailing space.  A directory (ending in
        ``/``) does not, so it can be completed further.
        """
        if len(self.matches) != 1:
            return ""
        match = self.matches[0]
        extra = match[len(self.word) :]
        return extra if match.endswith("/") else extra + " "


class Completer:
    """Compute completions against a mount table and environment."""

    def __init__(self, fs: MountTable, env: Environment, cwd: str = "/") -> None:
        """Create a completer.

        Args:
            fs: The mount table to list directories from.
            env: The environment (PATH and HOME are read on every call).
            cwd: The initial working directory; keep it current with
                the ``cwd`` attribute.

        """
        self._fs = fs
        self._env = env
        self.cwd = cwd

    def complete(self, line: str) -> Completion:
        """Return the completion for the last word of *line*."""
        words = line.split()
        if not line or line[-1].isspace():
            words.append("")

        if len(words) <= 1:
            word = words[0] if words else ""
            return Completion(CompletionKind.COMMAND, word, self.command_names(word))

        return self._complete_path(words[-1])

    def command_names(self, prefix: str = "") -> list[str]:
        """Return every command on PATH starting with *prefix*, sorted."""
        names: set[str] = set()
        for directory in self._env.path_dirs():
            path = resolve_path(directory, cwd=self.cwd, home=self._env.get("HOME"))
            try:
                entries = self._fs.readdir(path)
            except OSError:
                continue
            for entry in entries:
                if entry.startswith(prefix) and not self._is_directory(join_path(path, entry)):
                    names.add(entry)
        return sorted(names)

    def _complete_path(self, word: str) -> Completion:
        """Complete *word* as a filesystem path."""
        last_slash = word.rfind("/")
        typed_dir = word[: last_slash + 1]
        prefix = word[last_slash + 1 :]

        search_dir = resolve_path(typed_dir or ".", cwd=self.cwd, home=self._env.get("HOME"))
        try:
            entries = self._fs.readdir(search_dir)
        except OSError:
            return Completion(CompletionKind.PATH, word, display_prefix=typed_dir)

        matches: list[str] = []
        for entry in entries:
            if not entry.startswith(prefix):
                continue
            if entry.startswith(".") and not prefix.startswith("."):
                continue
            candidate = typed_dir + entry
            if self._is_directory(join_path(search_dir, entry)):
                candidate += "/"
            matches.append(candidate)

        return Completion(CompletionKind.PATH, word, sorted(matches), display_prefix=typed_dir)

    def _is_directory(self, path: str) -> bool:
        """Return True if *path* is a directory."""
        try:
            return self._fs.stat(path).is_dir
        except OSError:
            return False
