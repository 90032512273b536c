"""Novelty commands.

Kept in their own module so that ``cowsay`` (the PyPI package) is only
imported the first time someone runs the command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import cowsay as _cowsay

if TYPE_CHECKING:
    from py_term.command import CommandContext

DEFAULT_MESSAGE = "Moo!"


def cowsay(ctx: CommandContext) -> int:
    """Have a cow say the arguments (or ``Moo!``)."""
    message = " ".join(ctx.args) or DEFAULT_MESSAGE
    art = _cowsay.get_output_string("cow", message)
    ctx.stdout.write(art.replace("\n", "\r\n") + "\r\n")
    return 0
