"""Tests for the host-callback commands: open and emacs (alias edit)."""

import pytest

from py_term.bootstrap import build_filesystem
from py_term.command import HostCallbacks
from py_term.shell import Shell
from py_term.testing import StringOutput


def _make_shell(*, with_host: bool = True) -> tuple[Shell, StringOutput, list[tuple[str, str]]]:
    """Create a shell whose host callbacks record (action, target) pairs."""
    calls: list[tuple[str, str]] = []
    host = (
        HostCallbacks(
            on_open=lambda target: calls.append(("open", target)),
            on_editor=lambda target: calls.append(("edit", target)),
        )
        if with_host
        else None
    )
    err = StringOutput()
    shell = Shell(fs=build_filesystem(), stdout=StringOutput(), stderr=err, host=host)
    return shell, err, calls


class TestOpen:
    """Verify open."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["https://example.com", "http://x.org/a", "www.python.org"])
    async def test_urls_pass_through(self, url: str) -> None:
        """URLs are handed to the host unchanged."""
        shell, _err, calls = _make_shell()
        assert await shell.execute_command(f"open {url}") == 0
        assert calls == [("open", url)]

    @pytest.mark.asyncio
    async def test_site_page_maps_to_url(self) -> None:
        """A /site file opens as its URL path."""
        shell, _err, calls = _make_shell()
        await shell.execute_command("cd /site/blog")
        assert await shell.execute_command("open hello-world.md") == 0
        assert calls == [("open", "/blog/hello-world")]

    @pytest.mark.asyncio
    async def test_other_file_opens_by_path(self) -> None:
        """Files outside /site open by absolute path."""
        shell, _err, calls = _make_shell()
        await shell.execute_command("open welcome.txt")
        assert calls == [("open", "/home/guest/welcome.txt")]

    @pytest.mark.asyncio
    async def test_missing_file(self) -> None:
        """A missing file is reported and the host is not called."""
        shell, err, calls = _make_shell()
        assert await shell.execute_command("open nope.md") == 1
        assert str(err) == "open: nope.md: No such file or directory\r\n"
        assert calls == []

    @pytest.mark.asyncio
    async def test_missing_operand(self) -> None:
        """open needs an argument."""
        shell, err, _calls = _make_shell()
        assert await shell.execute_command("open") == 1
        assert "missing" in str(err)

    @pytest.mark.asyncio
    async def test_no_browser(self) -> None:
        """Without on_open the command fails."""
        shell, err, _calls = _make_shell(with_host=False)
        assert await shell.execute_command("open https://example.com") == 1
        assert str(err) == "open: browser not available\r\n"


class TestEdit:
    """Verify edit."""

    @pytest.mark.asyncio
    async def test_existing_file(self) -> None:
        """An existing file is opened by absolute path."""
        shell, _err, calls = _make_shell()
        assert await shell.execute_command("edit welcome.txt") == 0
        assert calls == [("edit", "/home/guest/welcome.txt")]

    @pytest.mark.asyncio
    async def test_new_file(self) -> None:
        """A file that does not exist yet can still be edited."""
        shell, _err, calls = _make_shell()
        assert await shell.execute_command("edit draft.md") == 0
        assert calls == [("edit", "/home/guest/draft.md")]

    @pytest.mark.asyncio
    async def test_no_argument(self) -> None:
        """edit alone opens an empty buffer."""
        shell, _err, calls = _make_shell()
        assert await shell.execute_command("edit") == 0
        assert calls == [("edit", "")]

    @pytest.mark.asyncio
    async def test_directory(self) -> None:
        """A directory cannot be edited."""
        shell, err, calls = _make_shell()
        assert await shell.execute_command("edit documents") == 1
        assert str(err) == "edit: documents: Is a directory\r\n"
        assert calls == []

    @pytest.mark.asyncio
    async def test_no_editor(self) -> None:
        """Without on_editor the command fails."""
        shell, err, _calls = _make_shell(with_host=False)
        assert await shell.execute_command("edit x") == 1
        assert str(err) == "edit: editor not available\r\n"


class TestEmacs:
    """Verify emacs, the name edit is an alias of."""

    @pytest.mark.asyncio
    async def test_opens_file(self) -> None:
        """emacs hands the resolved path to the host editor."""
        shell, _err, calls = _make_shell()
        assert await shell.execute_command("emacs ~/documents/notes.txt") == 0
        assert calls == [("edit", "/home/guest/documents/notes.txt")]

    @pytest.mark.asyncio
    async def test_no_editor(self) -> None:
        """Errors are reported under the name that was typed."""
        shell, err, _calls = _make_shell(with_host=False)
        assert await shell.execute_command("emacs") == 1
        assert str(err) == "emacs: editor not available\r\n"
