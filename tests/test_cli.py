"""Tests for the command-line entry point."""

from wish.cli import main


class TestInvocation:
    """Test start-up modes and exit codes."""

    def test_too_many_arguments(self, tmp_path, capsys):
        """Test more than one batch file is an invalid invocation."""
        assert main([str(tmp_path / "a"), str(tmp_path / "b")]) == 1
        assert "Either too many or too few arguments\n" in capsys.readouterr().err

    def test_unreadable_batch_file(self, tmp_path, capsys):
        """Test a missing batch file fails with status 1."""
        assert main([str(tmp_path / "missing.txt")]) == 1
        assert "An error has occurred\n" in capsys.readouterr().err

    def test_batch_mode(self, bin_dir, tmp_path):
        """Test batch mode runs the file and exits 0 at end of input."""
        target = tmp_path / "out.txt"
        script = tmp_path / "batch.txt"
        script.write_text(f"path {bin_dir}\nhello batch > {target}\n")
        assert main([str(script)]) == 0
        assert target.read_text() == "hello batch\n"

    def test_batch_mode_has_no_prompt(self, tmp_path, capsys):
        """Test batch mode never prints the prompt."""
        script = tmp_path / "batch.txt"
        script.write_text("path\n")
        assert main([str(script)]) == 0
        assert capsys.readouterr().out == ""

    def test_exit_status_zero(self, tmp_path):
        """Test exit ends the shell with status 0."""
        script = tmp_path / "batch.txt"
        script.write_text("exit\n")
        assert main([str(script)]) == 0

    def test_interactive_mode(self, monkeypatch):
        """Test no batch file starts the prompt loop."""
        prompts = []

        def fake_input(prompt=""):
            prompts.append(prompt)
            raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)
        assert main([]) == 0
        assert prompts == ["wish> "]


class TestConfigOption:
    """Test the --config option."""

    def test_config_sets_search_path(self, bin_dir, tmp_path):
        """Test the configured search path is used from the first line."""
        config = tmp_path / "wish.yaml"
        config.write_text(f"path:\n  - {bin_dir}\n")
        target = tmp_path / "out.txt"
        script = tmp_path / "batch.txt"
        script.write_text(f"hello cfg > {target}\n")
        assert main(["--config", str(config), str(script)]) == 0
        assert target.read_text() == "hello cfg\n"

    def test_config_sets_prompt(self, tmp_path, monkeypatch):
        """Test the configured prompt is shown in interactive mode."""
        config = tmp_path / "wish.yaml"
        config.write_text("prompt: '$ '\n")
        prompts = []

        def fake_input(prompt=""):
            prompts.append(prompt)
            raise EOFError

        monkeypatch.setattr("builtins.input", fake_input)
        assert main(["-c", str(config)]) == 0
        assert prompts == ["$ "]

    def test_missing_config(self, tmp_path, capsys):
        """Test a missing config file fails start-up."""
        assert main(["--config", str(tmp_path / "nope.yaml")]) == 1
        assert "An error has occurred\n" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        """Test an invalid config file fails start-up."""
        config = tmp_path / "wish.yaml"
        config.write_text("history_length: 0\n")
        assert main(["--config", str(config)]) == 1
        assert "An error has occurred\n" in capsys.readouterr().err


class TestInvalidOptions:
    """Test argument parsing failures."""

    def test_unknown_option(self, capsys):
        """Test an unknown option is an invalid invocation with status 1."""
        assert main(["--bogus"]) == 1
        err = capsys.readouterr().err
        assert "Either too many or too few arguments\n" in err
        assert "usage" not in err

    def test_help_exits_zero(self, capsys):
        """Test --help still prints usage and succeeds."""
        assert main(["--help"]) == 0
        assert "usage" in capsys.readouterr().out
