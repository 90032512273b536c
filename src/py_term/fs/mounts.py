"""Mount table — one directory tree stitched together from many stores.

Unix presents every disk, RAM disk and pseudo filesystem as a single
tree by *mounting* each one at a directory.  The ``MountTable`` does the
same for in-memory stores: ``/`` might be a scratch store, ``/bin`` a
``CommandTableFS`` and ``/home/guest`` a separate store for user files.

Each call on the table finds the **owning mount** — the mount point that
is the longest prefix of the path — strips the mount point, and forwards
the rest to that backend.  This is the POSIX-like contract the shell
and its commands use:

    exists · stat · read_file · write_file · mkdir · readdir

Mounting creates the mount-point directory in the covering store when
it is missing, so ``readdir("/home")`` naturally lists ``guest``.

The table is constructed once per session and handed to whoever needs
it; there is no module-level registry of mounts or backends.
"""

from __future__ import annotations

from py_term.fs.filesystem import FileStat, MemoryFileSystem
from py_term.paths import normalize_path


class MountTable:
    """Map mount points to backends and route calls to the owning one."""

    def __init__(self, root: MemoryFileSystem | None = None) -> None:
        """Create a table with *root* (or a fresh store) mounted at ``/``."""
        self._mounts: dict[str, MemoryFileSystem] = {"/": root or MemoryFileSystem()}

    # -- mount management ---------------------------------------------------

    def mount(self, point: str, backend: MemoryFileSystem) -> None:
        """Mount *backend* at *point*.

        Raises:
            FileExistsError: If something is already mounted at *point*.
            NotADirectoryError: If *point* is an existing file.

        """
        point = normalize_path(point)
        if point in self._mounts:
            msg = f"Already mounted: {point}"
            raise FileExistsError(msg)
        if self.exists(point) and not self.stat(point).is_dir:
            msg = f"Not a directory: {point}"
            raise NotADirectoryError(msg)
        if not self.exists(point):
            self.mkdir(point, recursive=True)
        self._mounts[point] = backend

    def owner(self, path: str) -> tuple[str, MemoryFileSystem, str]:
        """Return (mount_point, backend, path_inside_backend) for *path*."""
        path = normalize_path(path)
        best = "/"
        for point in self._mounts:
            if (path == point or path.startswith(point.rstrip("/") + "/")) and len(point) > len(
                best
            ):
                best = point
        inner = path[len(best) :] if best != "/" else path
        return best, self._mounts[best], normalize_path(inner)

    # -- filesystem contract -----------------------------------------------

    def exists(self, path: str) -> bool:
        """Check whether *path* exists."""
        _point, backend, inner = self.owner(path)
        return backend.exists(inner)

    def stat(self, path: str) -> FileStat:
        """Return metadata for *path*."""
        _point, backend, inner = self.owner(path)
        return backend.stat(inner)

    def readdir(self, path: str) -> list[str]:
        """List the names in the directory at *path*, sorted."""
        _point, backend, inner = self.owner(path)
        return backend.readdir(inner)

    def read_file(self, path: str) -> str:
        """Read a file as text."""
        _point, backend, inner = self.owner(path)
        return backend.read_file(inner)

    def write_file(self, path: str, text: str) -> None:
        """Write *text* to a file, creating it if needed."""
        _point, backend, inner = self.owner(path)
        backend.write_file(inner, text)

    def mkdir(self, path: str, *, recursive: bool = False) -> None:
        """Create a directory (``recursive`` behaves like ``mkdir -p``).

        A recursive create that crosses into another mount continues in
        that mount's store.
        """
        if not recursive:
            _point, backend, inner = self.owner(path)
            backend.mkdir(inner)
            return

        current = "/"
        for part in normalize_path(path).strip("/").split("/"):
            if not part:
                continue
            current = f"{current.rstrip('/')}/{part}"
            if self.exists(current):
                if not self.stat(current).is_dir:
                    msg = f"File exists: {current}"
                    raise FileExistsError(msg)
                continue
            _point, backend, inner = self.owner(current)
            backend.mkdir(inner)
