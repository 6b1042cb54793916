"""Built-in commands for the shell.

Built-ins change the shell's own state (working directory, search path, or
whether it keeps running), so they always run in the shell process and never
in a child.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict

from wish.lib.diagnostics import ArgumentCountError, ErrorKind, ShellError, report
from wish.shell.parser import Command
from wish.shell.resolver import SearchPath

logger = logging.getLogger(__name__)


@dataclass
class ShellState:
    """State owned by the top-level loop and mutated only by built-ins."""

    search_path: SearchPath = field(default_factory=SearchPath)


class BuiltinCommand:
    """Base class for built-in commands."""

    def __init__(self, name: str, description: str, func: Callable[[Command, ShellState], None]):
        """Initialize builtin command.

        Args:
            name: Command name
            description: Help text
            func: Function to execute
        """
        self.name = name
        self.description = description
        self.func = func

    def execute(self, command: Command, state: ShellState) -> None:
        """Execute the command.

        Args:
            command: Parsed command, ``args[0]`` is the built-in name
            state: Shell state to act on
        """
        self.func(command, state)


class BuiltinRegistry:
    """Registry of built-in shell commands."""

    def __init__(self):
        """Initialize registry."""
        self.commands: Dict[str, BuiltinCommand] = {}

    def register(self, name: str, description: str) -> Callable:
        """Decorator to register a built-in command.

        Args:
            name: Command name
            description: Help text

        Returns:
            Decorator function
        """
        def decorator(func: Callable) -> Callable:
            cmd = BuiltinCommand(name, description, func)
            self.commands[cmd.name] = cmd
            logger.debug(f"Registered builtin: {cmd.name}")
            return func
        return decorator

    def get(self, name: str) -> BuiltinCommand | None:
        """Get a built-in command by exact name."""
        return self.commands.get(name)


_registry = BuiltinRegistry()


def get_registry() -> BuiltinRegistry:
    """Get the global builtin registry.

    Returns:
        Registry instance
    """
    return _registry


@_registry.register("exit", "Exit the shell")
def exit_command(command: Command, state: ShellState) -> None:
    """Exit the shell.

    Raises:
        ArgumentCountError: If any argument is given
        SystemExit: To exit the shell
    """
    if command.argc != 1:
        raise ArgumentCountError(f"exit takes no arguments, got {command.argc - 1}")
    logger.info("Exiting shell...")
    raise SystemExit(0)


@_registry.register("cd", "Change the working directory")
def cd_command(command: Command, state: ShellState) -> None:
    """Change the working directory.

    Raises:
        ArgumentCountError: Unless exactly one directory is given
        ShellError: If the directory cannot be entered
    """
    if command.argc != 2:
        raise ArgumentCountError(f"cd takes one argument, got {command.argc - 1}")
    try:
        os.chdir(command.args[1])
    except (OSError, ValueError) as e:
        raise ShellError(f"cd {command.args[1]!r}: {e}") from e
    logger.debug(f"Working directory: {command.args[1]}")


@_registry.register("path", "Replace the command search path")
def path_command(command: Command, state: ShellState) -> None:
    """Replace the search path with the given directories.

    With no directories the path becomes empty and no external command can
    be found until ``path`` is called again.
    """
    try:
        directories = list(command.args[1:])
    except MemoryError:
        report(ErrorKind.MEMORY)
        return
    state.search_path.replace(directories)


def is_builtin(name: str) -> bool:
    """Check if a command is a built-in.

    Args:
        name: Command name

    Returns:
        True if builtin
    """
    return _registry.get(name) is not None


def dispatch_builtin(command: Command, state: ShellState) -> bool:
    """Run ``command`` if it names a built-in.

    Args:
        command: Parsed command
        state: Shell state the built-in may change

    Returns:
        True if the command was a built-in and has been handled (including
        when it reported an error); False if it must be run as a program

    Raises:
        SystemExit: From a valid ``exit``
    """
    builtin = _registry.get(command.name)
    if builtin is None:
        return False

    logger.debug(f"Builtin {builtin.name} ({builtin.description}): {command.args[1:]}")
    try:
        builtin.execute(command, state)
    except ShellError as e:
        report(e)
    return True
