"""Commands that hand work to the embedding application.

``open`` and ``emacs`` (also registered as ``edit``) do nothing
themselves: they validate their argument and call the matching host
callback.  When the host did not supply one, they report the feature
as unavailable and exit 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_term.commands.files import SITE_ROOT, site_url

if TYPE_CHECKING:
    from py_term.command import CommandContext

_URL_PREFIXES = ("http://", "https://", "www.")


def open_(ctx: CommandContext) -> int:
    """Open a URL, or a file (``/site`` pages map to their URL)."""
    if not ctx.args:
        return ctx.error("missing file or URL operand")

    arg = ctx.args[0]
    if arg.startswith(_URL_PREFIXES):
        target = arg
    else:
        path = ctx.resolve(arg)
        try:
            if ctx.fs.stat(path).is_dir:
                return ctx.error(f"{arg}: Is a directory")
        except OSError:
            return ctx.error(f"{arg}: No such file or directory")
        target = site_url(path) if path.startswith(SITE_ROOT + "/") else path

    if ctx.host.on_open is None:
        return ctx.error("browser not available")
    ctx.host.on_open(target)
    return 0


def edit(ctx: CommandContext) -> int:
    """Open a file (or an empty buffer) in the host editor."""
    path = ctx.resolve(ctx.args[0]) if ctx.args else ""
    if path:
        try:
            if ctx.fs.stat(path).is_dir:
                return ctx.error(f"{ctx.args[0]}: Is a directory")
        except OSError:
            pass  # editing a new file

    if ctx.host.on_editor is None:
        return ctx.error("editor not available")
    ctx.host.on_editor(path)
    return 0
