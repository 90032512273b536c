"""Path resolution shared by the shell, the completer and commands.

Every path a user types is turned into an absolute, normalized path
before it reaches the filesystem:

- ``/etc/motd`` — absolute, used as-is.
- ``~`` or ``~/notes.txt`` — expanded against ``HOME``.
- ``docs/a.txt`` — joined onto the current working directory.

Normalization drops empty and ``.`` segments and pops one segment per
``..``.  Popping past the root is a no-op, so ``/..`` is ``/``.  The
virtual filesystem has no symbolic links, so no link is ever followed.
"""


def normalize_path(path: str) -> str:
    """Return *path* with ``.``, ``..`` and duplicate slashes removed.

    Examples::

        "/home/guest/../x" → "/home/x"
        "/a/./b//c"       → "/a/b/c"
        "/.."             → "/"

    """
    parts: list[str] = []
    for part in path.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)
    return "/" + "/".join(parts)


def resolve_path(path: str, *, cwd: str, home: str | None = None) -> str:
    """Resolve a user-typed *path* to an absolute, normalized path.

    Args:
        path: The path as typed (absolute, ``~``-prefixed or relative).
        cwd: The current working directory (absolute).
        home: The value of ``HOME``; ``/`` is used when unset.

    Returns:
        The absolute, normalized path.

    """
    if path.startswith("/"):
        return normalize_path(path)
    if path == "~" or path.startswith("~/"):
        return normalize_path((home or "/") + path[1:])
    return normalize_path(f"{cwd}/{path}")


def join_path(directory: str, name: str) -> str:
    """Join a directory and an entry name without doubling the slash."""
    return f"{directory.rstrip('/')}/{name}"


def split_path(path: str) -> tuple[str, str]:
    """Split an absolute path into (parent_path, child_name).

    Examples::

        "/foo/bar/baz.txt" → ("/foo/bar", "baz.txt")
        "/hello.txt"       → ("/", "hello.txt")
        "/"                → ("/", "")

    """
    path = normalize_path(path)
    if path == "/":
        return ("/", "")
    last_slash = path.rfind("/")
    return (path[:last_slash] or "/", path[last_slash + 1 :])
