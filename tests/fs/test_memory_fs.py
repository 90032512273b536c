"""Tests for the in-memory file system store.

The store mirrors the Unix model: inodes hold metadata, directories map
names to inode numbers, and paths are resolved by walking the tree from
the root.
"""

import pytest

from py_term.fs.filesystem import DIR_MODE, FILE_MODE, FileType, MemoryFileSystem

ROOT_PATH = "/"


class TestFileSystemCreation:
    """Verify the initial state of a fresh store."""

    def test_root_directory_exists(self) -> None:
        """A new store should have a root directory."""
        fs = MemoryFileSystem()
        assert fs.exists(ROOT_PATH)
        assert fs.stat(ROOT_PATH).is_dir

    def test_root_is_empty(self) -> None:
        """A fresh root directory should have no entries."""
        assert MemoryFileSystem().readdir(ROOT_PATH) == []

    def test_plain_store_provides_no_commands(self) -> None:
        """A plain store is not a command table."""
        fs = MemoryFileSystem()
        assert fs.provides_commands is False
        assert fs.command_entry("ls") is None


class TestFiles:
    """Verify creating, reading and writing files."""

    def test_create_file(self) -> None:
        """A created file is an empty regular file with the default mode."""
        fs = MemoryFileSystem()
        fs.create_file("/hello.txt")
        info = fs.stat("/hello.txt")
        assert info.file_type is FileType.FILE
        assert info.size == 0
        assert info.mode == FILE_MODE
        assert not info.is_executable

    def test_create_executable(self) -> None:
        """A file with an execute bit reports is_executable."""
        fs = MemoryFileSystem()
        fs.create_file("/run", mode=0o755)
        assert fs.stat("/run").is_executable

    def test_create_existing_raises(self) -> None:
        """Creating over an existing name fails."""
        fs = MemoryFileSystem()
        fs.create_file("/a")
        with pytest.raises(FileExistsError):
            fs.create_file("/a")

    def test_create_in_missing_parent_raises(self) -> None:
        """The parent directory must exist."""
        with pytest.raises(FileNotFoundError):
            MemoryFileSystem().create_file("/nope/a")

    def test_write_creates_and_reads_back(self) -> None:
        """write_file creates a missing file; read_file returns the text."""
        fs = MemoryFileSystem()
        fs.write_file("/notes.txt", "héllo\n")
        assert fs.read_file("/notes.txt") == "héllo\n"
        assert fs.stat("/notes.txt").size == len("héllo\n".encode())

    def test_write_replaces_content(self) -> None:
        """A second write replaces the first."""
        fs = MemoryFileSystem()
        fs.write_file("/a", "one")
        fs.write_file("/a", "two")
        assert fs.read_file("/a") == "two"

    def test_read_directory_raises(self) -> None:
        """Reading a directory as a file fails."""
        fs = MemoryFileSystem()
        fs.mkdir("/d")
        with pytest.raises(IsADirectoryError):
            fs.read_file("/d")

    def test_read_missing_raises(self) -> None:
        """Reading a missing file fails."""
        with pytest.raises(FileNotFoundError):
            MemoryFileSystem().read_file("/missing")


class TestDirectories:
    """Verify mkdir, readdir and resolution through files."""

    def test_mkdir(self) -> None:
        """A created directory has the directory mode and lists empty."""
        fs = MemoryFileSystem()
        fs.mkdir("/docs")
        assert fs.stat("/docs").mode == DIR_MODE
        assert fs.readdir("/docs") == []

    def test_mkdir_existing_raises(self) -> None:
        """Non-recursive mkdir of an existing name fails."""
        fs = MemoryFileSystem()
        fs.mkdir("/docs")
        with pytest.raises(FileExistsError):
            fs.mkdir("/docs")

    def test_mkdir_recursive(self) -> None:
        """Recursive mkdir creates parents and tolerates existing ones."""
        fs = MemoryFileSystem()
        fs.mkdir("/a")
        fs.mkdir("/a/b/c", recursive=True)
        assert fs.stat("/a/b/c").is_dir
        fs.mkdir("/a/b/c", recursive=True)

    def test_mkdir_recursive_through_file_raises(self) -> None:
        """A file in the way of a recursive mkdir fails."""
        fs = MemoryFileSystem()
        fs.create_file("/a")
        with pytest.raises(FileExistsError):
            fs.mkdir("/a/b", recursive=True)

    def test_readdir_sorted(self) -> None:
        """Entries come back sorted by name."""
        fs = MemoryFileSystem()
        for name in ("c", "a", "b"):
            fs.create_file(f"/{name}")
        assert fs.readdir("/") == ["a", "b", "c"]

    def test_readdir_file_raises(self) -> None:
        """Listing a file fails."""
        fs = MemoryFileSystem()
        fs.create_file("/a")
        with pytest.raises(NotADirectoryError):
            fs.readdir("/a")

    def test_path_through_file_raises(self) -> None:
        """A file used as an intermediate component is not a directory."""
        fs = MemoryFileSystem()
        fs.create_file("/a")
        with pytest.raises(NotADirectoryError):
            fs.stat("/a/b")
        assert not fs.exists("/a/b")

    def test_paths_are_normalized(self) -> None:
        """Dot segments resolve before lookup."""
        fs = MemoryFileSystem()
        fs.mkdir("/a")
        fs.write_file("/a/f", "x")
        assert fs.read_file("/a/./../a//f") == "x"

    def test_inode_numbers_unique(self) -> None:
        """Each inode gets its own number."""
        fs = MemoryFileSystem()
        fs.create_file("/a")
        fs.create_file("/b")
        assert fs.stat("/a").inode_number != fs.stat("/b").inode_number
