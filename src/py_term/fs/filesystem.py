"""In-memory file system with inodes, directories, and path resolution.

Models the Unix file system architecture:

- **Inode**: metadata record for a file or directory (type, mode, data).
  The name does NOT live in the inode — it lives in the parent directory.

- **Directory**: a special inode whose data is a ``dict[str, int]``
  mapping child names to their inode numbers.

- **Path resolution**: ``/foo/bar/baz.txt`` is walked component by
  component from the root inode, looking up each name in the current
  directory's entries.

Paths given to a ``MemoryFileSystem`` are relative to its own root.  When
it is mounted (see ``py_term.fs.mounts``) the mount table strips the mount
point before calling in, so a store mounted at ``/home/guest`` sees
``/home/guest/notes.txt`` as ``/notes.txt``.

Failures use the builtin ``OSError`` family so callers can tell "not
found" from "wrong type":

- ``FileNotFoundError`` — a component of the path does not exist.
- ``NotADirectoryError`` — a directory operation met a file.
- ``IsADirectoryError`` — a file operation met a directory.
- ``FileExistsError`` — creating something that already exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from itertools import count
from typing import TYPE_CHECKING

from py_term.paths import normalize_path, split_path

if TYPE_CHECKING:
    from py_term.command import CommandEntry

FILE_MODE = 0o644
DIR_MODE = 0o755
EXEC_MODE = 0o755


class FileType(StrEnum):
    """The kind of object an inode represents."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileStat:
    """Read-only snapshot of an inode's metadata (returned by stat)."""

    inode_number: int
    file_type: FileType
    size: int
    mode: int

    @property
    def is_dir(self) -> bool:
        """Return True if this entry is a directory."""
        return self.file_type is FileType.DIRECTORY

    @property
    def is_executable(self) -> bool:
        """Return True if any execute bit is set on a regular file."""
        return not self.is_dir and bool(self.mode & 0o111)


@dataclass
class _Inode:
    """Internal inode — the core metadata record.

    For files, ``data`` holds the raw bytes.
    For directories, ``children`` maps names to inode numbers.
    """

    inode_number: int
    file_type: FileType
    mode: int
    data: bytes = b""
    children: dict[str, int] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def to_stat(self) -> FileStat:
        """Create a read-only snapshot of this inode."""
        return FileStat(
            inode_number=self.inode_number,
            file_type=self.file_type,
            size=len(self.data),
            mode=self.mode,
        )


# Module-level inode counter shared by every store.
_inode_counter = count(start=0)


class MemoryFileSystem:
    """An in-memory file system with inodes and hierarchical directories.

    The file system is initialised with a root directory at ``/``.
    All operations take absolute paths and resolve them by walking
    from the root inode.
    """

    provides_commands = False

    def __init__(self) -> None:
        """Create a file system with an empty root directory."""
        root = _Inode(
            inode_number=next(_inode_counter),
            file_type=FileType.DIRECTORY,
            mode=DIR_MODE,
        )
        self._inodes: dict[int, _Inode] = {root.inode_number: root}
        self._root_ino: int = root.inode_number

    def command_entry(self, name: str) -> CommandEntry | None:  # noqa: ARG002
        """Return the command registered as *name* (plain stores hold none)."""
        return None

    def _resolve(self, path: str) -> _Inode:
        """Walk *path* from the root and return its inode.

        Raises:
            FileNotFoundError: If a component does not exist.
            NotADirectoryError: If an intermediate component is a file.

        """
        current = self._inodes[self._root_ino]
        normalized = normalize_path(path)
        if normalized == "/":
            return current

        for part in normalized.strip("/").split("/"):
            if current.file_type is not FileType.DIRECTORY:
                msg = f"Not a directory: {path}"
                raise NotADirectoryError(msg)
            child_ino = current.children.get(part)
            if child_ino is None:
                msg = f"No such file or directory: {path}"
                raise FileNotFoundError(msg)
            current = self._inodes[child_ino]
        return current

    def _resolve_dir(self, path: str) -> _Inode:
        """Resolve *path* and insist that it is a directory."""
        inode = self._resolve(path)
        if inode.file_type is not FileType.DIRECTORY:
            msg = f"Not a directory: {path}"
            raise NotADirectoryError(msg)
        return inode

    def _resolve_file(self, path: str) -> _Inode:
        """Resolve *path* and insist that it is a regular file."""
        inode = self._resolve(path)
        if inode.file_type is FileType.DIRECTORY:
            msg = f"Is a directory: {path}"
            raise IsADirectoryError(msg)
        return inode

    def exists(self, path: str) -> bool:
        """Check whether a path exists in the file system."""
        try:
            self._resolve(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def stat(self, path: str) -> FileStat:
        """Return metadata for the given path.

        Raises:
            FileNotFoundError: If the path does not exist.

        """
        return self._resolve(path).to_stat()

    def readdir(self, path: str) -> list[str]:
        """List the names in a directory, sorted.

        Raises:
            FileNotFoundError: If the path does not exist.
            NotADirectoryError: If the path is not a directory.

        """
        return sorted(self._resolve_dir(path).children)

    def create_file(self, path: str, *, mode: int = FILE_MODE) -> None:
        """Create an empty file at the given path.

        Raises:
            FileExistsError: If the path already exists.
            FileNotFoundError: If the parent directory does not exist.

        """
        self._create(path, FileType.FILE, mode)

    def mkdir(self, path: str, *, recursive: bool = False) -> None:
        """Create a directory.

        With *recursive*, missing parents are created and an existing
        directory at *path* is not an error (like ``mkdir -p``).

        Raises:
            FileExistsError: If the path exists (non-recursive), or is a file.
            FileNotFoundError: If the parent is missing (non-recursive).
            NotADirectoryError: If a parent component is a file.

        """
        if not recursive:
            self._create(path, FileType.DIRECTORY, DIR_MODE)
            return

        current = "/"
        for part in normalize_path(path).strip("/").split("/"):
            if not part:
                continue
            current = f"{current.rstrip('/')}/{part}"
            if not self.exists(current):
                self._create(current, FileType.DIRECTORY, DIR_MODE)
            elif not self.stat(current).is_dir:
                msg = f"File exists: {current}"
                raise FileExistsError(msg)

    def _create(self, path: str, file_type: FileType, mode: int) -> None:
        """Create an inode and link it into its parent directory."""
        parent_path, name = split_path(path)
        if not name:
            msg = f"File exists: {path}"
            raise FileExistsError(msg)
        parent = self._resolve_dir(parent_path)
        if name in parent.children:
            msg = f"File exists: {path}"
            raise FileExistsError(msg)

        new_inode = _Inode(inode_number=next(_inode_counter), file_type=file_type, mode=mode)
        self._inodes[new_inode.inode_number] = new_inode
        parent.children[name] = new_inode.inode_number

    def read_file(self, path: str) -> str:
        """Read the contents of a file as UTF-8 text.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is a directory.

        """
        return self._resolve_file(path).data.decode("utf-8", errors="replace")

    def write_file(self, path: str, text: str) -> None:
        """Write *text* to a file, creating it if needed (replaces content).

        Raises:
            FileNotFoundError: If the parent directory does not exist.
            IsADirectoryError: If the path is a directory.

        """
        if not self.exists(path):
            self._create(path, FileType.FILE, FILE_MODE)
        self._resolve_file(path).data = text.encode("utf-8")
