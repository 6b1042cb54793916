"""Tests for built-in commands."""

import os

import pytest

from wish.shell.builtins import ShellState, dispatch_builtin, get_registry, is_builtin
from wish.shell.parser import parse_command
from wish.shell.resolver import SearchPath


@pytest.fixture
def state():
    return ShellState(search_path=SearchPath())


class TestRegistry:
    """Test built-in recognition."""

    def test_known_builtins(self):
        """Test exit, cd and path are registered."""
        assert set(get_registry().commands) == {"exit", "cd", "path"}
        assert is_builtin("cd")

    def test_exact_name_match(self):
        """Test recognition is by exact name only."""
        assert not is_builtin("CD")
        assert not is_builtin("exit2")

    def test_non_builtin_is_not_handled(self, state):
        """Test external commands are left to the caller."""
        assert dispatch_builtin(parse_command("ls -l"), state) is False


class TestExit:
    """Test the exit built-in."""

    def test_bare_exit_terminates(self, state):
        """Test exit with no arguments exits with status 0."""
        with pytest.raises(SystemExit) as excinfo:
            dispatch_builtin(parse_command("exit"), state)
        assert excinfo.value.code == 0

    def test_exit_with_arguments_reports(self, state, capsys):
        """Test exit with arguments reports and does not exit."""
        assert dispatch_builtin(parse_command("exit now"), state) is True
        captured = capsys.readouterr()
        assert captured.err == "Either too many or too few arguments\n"
        assert captured.out == ""


class TestCd:
    """Test the cd built-in."""

    def test_changes_directory(self, state, tmp_path, monkeypatch):
        """Test cd enters the given directory."""
        monkeypatch.chdir(tmp_path)
        target = tmp_path / "sub"
        target.mkdir()
        assert dispatch_builtin(parse_command(f"cd {target}"), state) is True
        assert os.path.realpath(os.getcwd()) == os.path.realpath(target)

    @pytest.mark.parametrize("line", ["cd", "cd a b"])
    def test_wrong_argument_count(self, state, capsys, line):
        """Test cd needs exactly one argument."""
        assert dispatch_builtin(parse_command(line), state) is True
        assert capsys.readouterr().err == "Either too many or too few arguments\n"

    def test_missing_directory_reports(self, state, capsys, tmp_path, monkeypatch):
        """Test a failed chdir reports the generic error and keeps cwd."""
        monkeypatch.chdir(tmp_path)
        assert dispatch_builtin(parse_command("cd /nonexistent/wish-test"), state) is True
        assert capsys.readouterr().err == "An error has occurred\n"
        assert os.path.realpath(os.getcwd()) == os.path.realpath(tmp_path)


class TestPath:
    """Test the path built-in."""

    def test_replaces_search_path(self, state):
        """Test path replaces every entry."""
        dispatch_builtin(parse_command("path /a /b"), state)
        assert state.search_path.directories == ["/a", "/b"]

    def test_empty_path(self, state, capsys):
        """Test bare path empties the search path silently."""
        dispatch_builtin(parse_command("path /a /b"), state)
        assert dispatch_builtin(parse_command("path"), state) is True
        assert state.search_path.directories == []
        assert capsys.readouterr().err == ""


class TestCdInvalidName:
    """Test cd with names the OS cannot represent."""

    def test_nul_in_directory(self, state, capsys, tmp_path, monkeypatch):
        """Test a NUL byte in the directory reports the generic error."""
        monkeypatch.chdir(tmp_path)
        assert dispatch_builtin(parse_command("cd a\0b"), state) is True
        assert capsys.readouterr().err == "An error has occurred\n"
