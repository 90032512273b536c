"""File system subsystem — in-memory stores, mounts, and command tables.

Re-exports public symbols so callers can write::

    from py_term.fs import MountTable, MemoryFileSystem, CommandTableFS
"""

from py_term.fs.binfs import CommandTableFS, get_command, is_command_table
from py_term.fs.filesystem import FileStat, FileType, MemoryFileSystem
from py_term.fs.mounts import MountTable

__all__ = [
    "CommandTableFS",
    "FileStat",
    "FileType",
    "MemoryFileSystem",
    "MountTable",
    "get_command",
    "is_command_table",
]
