"""py-term — an interactive shell engine over a virtual filesystem.

Re-exports the pieces an embedding application needs::

    from py_term import Shell, build_filesystem, StringOutput
"""

from py_term.bootstrap import build_filesystem
from py_term.command import CommandContext, Direct, HostCallbacks, Lazy
from py_term.commands import default_commands
from py_term.fs import CommandTableFS, MemoryFileSystem, MountTable
from py_term.hyperlink import hyperlink
from py_term.parser import ParseError, UnsupportedSyntaxError, parse_command
from py_term.resolver import CommandNotFoundError
from py_term.shell import Shell
from py_term.testing import StringOutput

__all__ = [
    "CommandContext",
    "CommandNotFoundError",
    "CommandTableFS",
    "Direct",
    "HostCallbacks",
    "Lazy",
    "MemoryFileSystem",
    "MountTable",
    "ParseError",
    "Shell",
    "StringOutput",
    "UnsupportedSyntaxError",
    "build_filesystem",
    "default_commands",
    "hyperlink",
    "parse_command",
]
