"""Environment variables — the shell's string-to-string configuration.

A Unix shell keeps a block of ``KEY=VALUE`` pairs that commands read to
learn where they are and who is running them.  A handful of keys have a
fixed meaning to the shell itself:

    - ``PATH`` — colon-separated directories searched for commands.
    - ``HOME`` — the target of ``cd`` with no argument and of ``~``.
    - ``USER`` — the current username (shown in the prompt).
    - ``PWD`` / ``OLDPWD`` — the current and previous working directory.
    - ``?`` — the exit code of the last command.

Key design properties:
    - **Strings only** — both keys and values are strings (no types).
    - **One per session** — commands receive the live object, so a
      command like ``cd`` can update ``OLDPWD`` for the next one.
"""

DEFAULT_PATH = "/bin:/usr/bin"
DEFAULT_HOME = "/home/guest"
DEFAULT_USER = "guest"

EXIT_CODE_KEY = "?"


class Environment:
    """A key-value store for environment variables."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Starting variables (copied, not referenced).

        """
        self._vars: dict[str, str] = dict(initial) if initial else {}

    @classmethod
    def with_defaults(cls, overrides: dict[str, str] | None = None) -> "Environment":
        """Return an environment holding PATH, HOME and USER defaults.

        Args:
            overrides: Values replacing (or adding to) the defaults.

        """
        env = cls({"PATH": DEFAULT_PATH, "HOME": DEFAULT_HOME, "USER": DEFAULT_USER})
        for key, value in (overrides or {}).items():
            env.set(key, value)
        return env

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for *key*, or *default* if not set."""
        return self._vars.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value* (creates or overwrites)."""
        self._vars[key] = value

    def items(self) -> list[tuple[str, str]]:
        """Return all (key, value) pairs, sorted by key."""
        return sorted(self._vars.items())

    def path_dirs(self) -> list[str]:
        """Return the non-empty PATH entries in search order."""
        return [entry for entry in (self.get("PATH") or "").split(":") if entry]

    @property
    def exit_code(self) -> int:
        """Return the last exit code stored under ``?`` (0 when unset)."""
        raw = self._vars.get(EXIT_CODE_KEY, "0")
        return int(raw) if raw.isdigit() else 0

    @exit_code.setter
    def exit_code(self, code: int) -> None:
        self._vars[EXIT_CODE_KEY] = str(code)

