"""Shared fixtures for shell tests."""

import stat

import pytest


def _write_program(directory, name, body="#!/bin/sh\n", executable=True):
    path = directory / name
    path.write_text(body)
    if executable:
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def make_program():
    """Factory writing a program file into a directory."""
    return _write_program


@pytest.fixture
def bin_dir(tmp_path):
    """Directory holding small shell-script programs."""
    directory = tmp_path / "bin"
    directory.mkdir()
    _write_program(directory, "hello", "#!/bin/sh\necho hello \"$@\"\n")
    _write_program(directory, "both", "#!/bin/sh\necho out\necho err 1>&2\n")
    _write_program(directory, "fail", "#!/bin/sh\nexit 3\n")
    _write_program(directory, "nap", "#!/bin/sh\nsleep \"$1\"\necho \"$2\" >> \"$3\"\n")
    return directory
