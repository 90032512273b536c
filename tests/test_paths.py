"""Tests for path resolution and normalization."""

from py_term.paths import join_path, normalize_path, resolve_path, split_path

HOME = "/home/guest"


class TestNormalizePath:
    """Verify . and .. handling."""

    def test_dot_segments_removed(self) -> None:
        """. and empty segments disappear."""
        assert normalize_path("/a/./b//c/") == "/a/b/c"

    def test_dotdot_pops(self) -> None:
        """.. removes the previous segment."""
        assert normalize_path("/a/b/../c") == "/a/c"

    def test_dotdot_at_root_is_noop(self) -> None:
        """Popping past the root stays at the root."""
        assert normalize_path("/../../x") == "/x"
        assert normalize_path("/..") == "/"


class TestResolvePath:
    """Verify absolute, home-relative and cwd-relative resolution."""

    def test_parent_of_home(self) -> None:
        """.. from /home/guest is /home."""
        assert resolve_path("..", cwd=HOME) == "/home"

    def test_grandparent_of_home(self) -> None:
        """../.. from /home/guest is /."""
        assert resolve_path("../..", cwd=HOME) == "/"

    def test_past_root_stays_at_root(self) -> None:
        """Going up more levels than exist still ends at /."""
        assert resolve_path("../../../..", cwd=HOME) == "/"

    def test_absolute_passes_through(self) -> None:
        """Absolute paths ignore the cwd."""
        assert resolve_path("/etc/motd", cwd=HOME) == "/etc/motd"

    def test_tilde(self) -> None:
        """~ and ~/x expand against HOME."""
        assert resolve_path("~", cwd="/", home=HOME) == HOME
        assert resolve_path("~/notes.txt", cwd="/", home=HOME) == f"{HOME}/notes.txt"

    def test_tilde_without_home(self) -> None:
        """Without HOME, ~ is the root."""
        assert resolve_path("~/x", cwd="/tmp") == "/x"

    def test_tilde_in_middle_is_literal(self) -> None:
        """Only a leading ~ expands."""
        assert resolve_path("a~b", cwd="/", home=HOME) == "/a~b"

    def test_relative(self) -> None:
        """Relative paths join onto the cwd."""
        assert resolve_path("docs/a.txt", cwd=HOME) == f"{HOME}/docs/a.txt"

    def test_relative_from_root(self) -> None:
        """Relative paths from / do not double the slash."""
        assert resolve_path("bin", cwd="/") == "/bin"


class TestPathHelpers:
    """Verify join and split."""

    def test_join(self) -> None:
        """join_path handles the root and trailing slashes."""
        assert join_path("/", "bin") == "/bin"
        assert join_path("/bin/", "ls") == "/bin/ls"

    def test_split(self) -> None:
        """split_path returns parent and name."""
        assert split_path("/foo/bar.txt") == ("/foo", "bar.txt")
        assert split_path("/hello") == ("/", "hello")
        assert split_path("/") == ("/", "")
