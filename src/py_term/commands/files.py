"""Filesystem commands: ``ls``, ``cd``, ``cat`` and ``mkdir``.

These are registered lazily, so this module is only imported the first
time one of them runs.

Each command reports filesystem failures the way coreutils does and
returns 1; none of them lets an ``OSError`` escape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_term.hyperlink import hyperlink

if TYPE_CHECKING:
    from py_term.command import CommandContext

SITE_ROOT = "/site"

_DIR_COLOR = "\x1b[1;34m"
_RESET = "\x1b[0m"


def site_url(path: str) -> str:
    """Map a ``/site`` file to the URL path it is served under.

    ``/site/blog/post.md`` → ``/blog/post``.
    """
    url = path.removeprefix(SITE_ROOT).removesuffix(".md")
    return url if url.startswith("/") else "/" + url


def ls(ctx: CommandContext) -> int:
    """List a directory (default: cwd), directories first."""
    target = ctx.args[0] if ctx.args else ctx.cwd
    path = ctx.resolve(target)

    try:
        info = ctx.fs.stat(path)
    except OSError:
        return ctx.error(f"cannot access '{target}': No such file or directory")

    if not info.is_dir:
        ctx.stdout.write(f"{target}\r\n")
        return 0

    items: list[tuple[str, bool]] = []
    for entry in ctx.fs.readdir(path):
        entry_path = f"{path.rstrip('/')}/{entry}"
        try:
            items.append((entry, ctx.fs.stat(entry_path).is_dir))
        except OSError:
            items.append((entry, False))
    items.sort(key=lambda item: (not item[1], item[0]))

    for name, is_dir in items:
        entry_path = f"{path.rstrip('/')}/{name}"
        if is_dir:
            label = f"{name}/"
            if ctx.color_level > 0:
                label = f"{_DIR_COLOR}{label}{_RESET}"
            ctx.stdout.write(label + "\r\n")
        elif entry_path.startswith(SITE_ROOT + "/"):
            ctx.stdout.write(hyperlink(site_url(entry_path), name) + "\r\n")
        else:
            ctx.stdout.write(name + "\r\n")
    return 0


def cd(ctx: CommandContext) -> int:
    """Change directory: no argument → HOME, ``-`` → OLDPWD."""
    target = ctx.args[0] if ctx.args else ctx.home

    if target == "-":
        old = ctx.env.get("OLDPWD")
        if not old:
            return ctx.error("OLDPWD not set")
        path = old
    else:
        path = ctx.resolve(target)

    try:
        info = ctx.fs.stat(path)
    except OSError:
        return ctx.error(f"{target}: No such file or directory")
    if not info.is_dir:
        return ctx.error(f"{target}: Not a directory")

    ctx.env.set("OLDPWD", ctx.cwd)
    ctx.set_cwd(path)
    return 0


def cat(ctx: CommandContext) -> int:
    """Print files; a missing trailing newline is added."""
    if not ctx.args:
        return ctx.error("missing file operand")

    exit_code = 0
    for arg in ctx.args:
        path = ctx.resolve(arg)
        try:
            if ctx.fs.stat(path).is_dir:
                exit_code = ctx.error(f"{arg}: Is a directory")
                continue
            content = ctx.fs.read_file(path)
        except OSError:
            exit_code = ctx.error(f"{arg}: No such file or directory")
            continue

        ctx.stdout.write(content.replace("\n", "\r\n"))
        if content and not content.endswith("\n"):
            ctx.stdout.write("\r\n")
    return exit_code


def mkdir(ctx: CommandContext) -> int:
    """Create directories, including missing parents."""
    if not ctx.args:
        return ctx.error("missing operand")

    exit_code = 0
    for arg in ctx.args:
        try:
            ctx.fs.mkdir(ctx.resolve(arg), recursive=True)
        except FileExistsError:
            exit_code = ctx.error(f"cannot create directory '{arg}': File exists")
        except NotADirectoryError:
            exit_code = ctx.error(f"cannot create directory '{arg}': Not a directory")
        except PermissionError:
            exit_code = ctx.error(f"cannot create directory '{arg}': Read-only file system")
    return exit_code
