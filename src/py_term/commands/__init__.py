"""Default command table for ``/bin``.

The context-only builtins are registered ``Direct``.  Commands that
touch the filesystem, the host or a third-party library live in their
own modules and are registered ``Lazy``: the module is imported when the
command first runs, and the resolver caches the loaded function from
then on.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from py_term.command import Direct, Lazy
from py_term.commands import builtins

if TYPE_CHECKING:
    from py_term.command import CommandEntry, CommandFn


def lazy_import(module: str, attribute: str) -> Lazy:
    """Return a ``Lazy`` entry loading ``module.attribute`` on first use."""

    def load() -> CommandFn:
        return getattr(importlib.import_module(module), attribute)

    return Lazy(load)


def _lazy_file_command(attribute: str) -> Lazy:
    return lazy_import("py_term.commands.files", attribute)


def _lazy_host_command(attribute: str) -> Lazy:
    return lazy_import("py_term.commands.host", attribute)


def _lazy_fun_command(attribute: str) -> Lazy:
    return lazy_import("py_term.commands.fun", attribute)


def default_commands() -> dict[str, CommandEntry]:
    """Return a fresh name → entry map of the standard commands."""
    return {
        "pwd": Direct(builtins.pwd),
        "whoami": Direct(builtins.whoami),
        "echo": Direct(builtins.echo),
        "env": Direct(builtins.env),
        "clear": Direct(builtins.clear),
        "help": Direct(builtins.help_),
        "ls": _lazy_file_command("ls"),
        "cd": _lazy_file_command("cd"),
        "cat": _lazy_file_command("cat"),
        "mkdir": _lazy_file_command("mkdir"),
        "open": _lazy_host_command("open_"),
        "emacs": _lazy_host_command("edit"),
        "edit": _lazy_host_command("edit"),
        "cowsay": _lazy_fun_command("cowsay"),
    }


__all__ = ["default_commands", "lazy_import"]
