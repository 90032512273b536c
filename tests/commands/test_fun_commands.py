"""Tests for cowsay."""

import pytest

from py_term.bootstrap import build_filesystem
from py_term.shell import Shell
from py_term.testing import StringOutput


def _make_shell() -> tuple[Shell, StringOutput]:
    """Create a shell over the default layout, returning it and its output."""
    out = StringOutput()
    shell = Shell(fs=build_filesystem(), stdout=out, color_level=0)
    return shell, out


class TestCowsay:
    """Verify cowsay."""

    @pytest.mark.asyncio
    async def test_default_message(self) -> None:
        """With no arguments the cow says Moo!."""
        shell, out = _make_shell()
        assert await shell.execute_command("cowsay") == 0
        assert "Moo!" in str(out)

    @pytest.mark.asyncio
    async def test_arguments_joined(self) -> None:
        """Arguments are joined by single spaces into the message."""
        shell, out = _make_shell()
        assert await shell.execute_command("cowsay hello   there") == 0
        assert "hello there" in str(out)
        assert "Moo!" not in str(out)

    @pytest.mark.asyncio
    async def test_lines_end_with_crlf(self) -> None:
        """Every line break is CRLF and the output ends with one."""
        shell, out = _make_shell()
        await shell.execute_command("cowsay")
        text = str(out)
        assert text.endswith("\r\n")
        assert "\n" not in text.replace("\r\n", "")
        assert text.count("\r\n") > 3

    @pytest.mark.asyncio
    async def test_loaded_on_first_use(self) -> None:
        """cowsay is a lazy entry loaded the first time it runs."""
        shell, _out = _make_shell()
        assert shell.resolver.loaded_paths == []
        await shell.execute_command("cowsay")
        await shell.execute_command("cowsay moo")
        assert shell.resolver.loaded_paths == ["/bin/cowsay"]
