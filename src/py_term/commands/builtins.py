"""Small commands that only read the context: no filesystem access."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_term.command import CommandContext

_NEWLINE = re.compile(r"\r?\n")

CLEAR_SCREEN = "\x1b[2J\x1b[H"

HELP_TEXT = (
    "Available commands:\r\n"
    "\r\n"
    "  pwd       Print working directory\r\n"
    "  whoami    Print current user\r\n"
    "  echo      Print arguments\r\n"
    "  env       Print environment variables\r\n"
    "  ls        List directory contents\r\n"
    "  cd        Change directory\r\n"
    "  cat       Print file contents\r\n"
    "  mkdir     Create directories\r\n"
    "  open      Open a URL or site page\r\n"
    "  emacs     Open a file in the editor (alias: edit)\r\n"
    "  cowsay    Have a cow say something\r\n"
    "  clear     Clear the screen\r\n"
    "  help      Show this help message\r\n"
    "\r\n"
    "Features:\r\n"
    "  - Tab completion for commands and paths\r\n"
    "  - Command history with up/down arrows\r\n"
    '  - Quoted strings: echo "hello world"\r\n'
    "\r\n"
)


def pwd(ctx: CommandContext) -> int:
    """Print the working directory."""
    ctx.stdout.write(ctx.cwd + "\r\n")
    return 0


def whoami(ctx: CommandContext) -> int:
    """Print ``USER``."""
    ctx.stdout.write((ctx.env.get("USER") or "unknown") + "\r\n")
    return 0


def echo(ctx: CommandContext) -> int:
    """Print the arguments joined by single spaces."""
    ctx.stdout.write(_NEWLINE.sub("\r\n", " ".join(ctx.args)) + "\r\n")
    return 0


def env(ctx: CommandContext) -> int:
    """Print every variable as ``KEY=VALUE``, sorted by key."""
    for key, value in ctx.env.items():
        ctx.stdout.write(f"{key}={value}\r\n")
    return 0


def clear(ctx: CommandContext) -> int:
    """Clear the screen and home the cursor."""
    ctx.stdout.write(CLEAR_SCREEN)
    return 0


def help_(ctx: CommandContext) -> int:
    """Print the command summary."""
    ctx.stdout.write(HELP_TEXT)
    return 0
