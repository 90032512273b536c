"""Session bootstrap — the default mount layout and seed content.

A fresh session gets four mounts::

    /              scratch store
    /bin           CommandTableFS holding the default commands
    /home/guest    the user's home (welcome files, .motd, .profile)
    /site          pages served by ``open`` and linked by ``ls``

The home store can be passed in, so a host that keeps the user's files
between sessions mounts the same store again; seeding only happens when
``welcome.txt`` is missing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_term.commands import default_commands
from py_term.env import DEFAULT_HOME
from py_term.fs.binfs import CommandTableFS
from py_term.fs.filesystem import MemoryFileSystem
from py_term.fs.mounts import MountTable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from py_term.command import CommandEntry

WELCOME_TEXT = (
    "Welcome to py-term!\n"
    "\n"
    "This is a simulated Unix shell running on an in-memory filesystem.\n"
    "Try ls, cd, cat and tab completion.\n"
)

MOTD_TEXT = (
    "========================================\n"
    "  Message of the Day\n"
    "  Try: ls /site\n"
    "========================================\n"
)

PROFILE_TEXT = "# Display message of the day on login\ncat ~/.motd\n"

SITE_PAGES: dict[str, str] = {
    "/about.md": "# About\n\nThis is the about page.\n",
    "/blog/hello-world.md": "# Hello World\n\nWelcome to my first post!\n",
    "/blog/second-post.md": "# Second Post\n\nAnother article.\n",
    "/projects/py-term.md": "# py-term\n\nA shell engine in Python.\n",
}


def seed_home(home: MemoryFileSystem) -> bool:
    """Write the welcome files into an (unmounted) home store.

    Returns:
        True if content was written, False if the store was already seeded.

    """
    if home.exists("/welcome.txt"):
        return False
    home.mkdir("/documents", recursive=True)
    home.write_file("/welcome.txt", WELCOME_TEXT)
    home.write_file("/documents/notes.txt", "Some notes here...\n")
    home.write_file("/.motd", MOTD_TEXT)
    home.write_file("/.profile", PROFILE_TEXT)
    return True


def seed_site(site: MemoryFileSystem) -> None:
    """Write the sample site pages into a site store."""
    for path, text in SITE_PAGES.items():
        parent = path.rsplit("/", 1)[0]
        if parent:
            site.mkdir(parent, recursive=True)
        site.write_file(path, text)


def build_filesystem(
    *,
    commands: Mapping[str, CommandEntry] | None = None,
    home: MemoryFileSystem | None = None,
    home_path: str = DEFAULT_HOME,
) -> MountTable:
    """Build the default mount table.

    Args:
        commands: The ``/bin`` command table (default: ``default_commands()``).
        home: Store to mount as the home directory (a fresh one if omitted).
        home_path: Where the home store is mounted.

    Returns:
        A mount table ready to hand to ``Shell``.

    """
    table = MountTable()
    table.mount("/bin", CommandTableFS(commands if commands is not None else default_commands()))

    home_store = home if home is not None else MemoryFileSystem()
    seed_home(home_store)
    table.mount(home_path, home_store)

    site = MemoryFileSystem()
    seed_site(site)
    table.mount("/site", site)
    return table
