"""Shell module.

Provides the line-oriented command shell: parsing, command resolution,
built-in commands, parallel execution of external programs, and the
interactive and batch drivers.
"""

from __future__ import annotations

from wish.shell.builtins import ShellState, dispatch_builtin, is_builtin
from wish.shell.dispatcher import ChildSet, LineDispatcher, LineResult
from wish.shell.executor import ChildHandle, ProcessSpawner, launch
from wish.shell.parser import Command, CommandParser, normalize, parse_command, split_line, tokenize
from wish.shell.repl import REPL, run_command, run_repl, run_script
from wish.shell.resolver import SearchPath, resolve

__all__ = [
    "REPL",
    "Command",
    "CommandParser",
    "ChildHandle",
    "ChildSet",
    "LineDispatcher",
    "LineResult",
    "ProcessSpawner",
    "SearchPath",
    "ShellState",
    "dispatch_builtin",
    "is_builtin",
    "launch",
    "normalize",
    "parse_command",
    "resolve",
    "run_command",
    "run_repl",
    "run_script",
    "split_line",
    "tokenize",
]
