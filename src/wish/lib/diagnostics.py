"""Diagnostics for the shell.

Every failure the shell can report maps to one fixed, user-facing message.
Errors travel through the core as exceptions and are rendered once, at the
dispatch boundary, with :func:`report`.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Closed set of diagnostic kinds and their messages."""

    GENERIC = "An error has occurred"
    MEMORY = "Failed to allocate memory"
    COMMAND_NOT_FOUND = "Command not found"
    ARGUMENT_COUNT = "Either too many or too few arguments"
    FORK = "Process failed to fork"
    WAIT = "Pid fail"
    REDIRECTION = "Redirection fail"
    FILE = "Error writing or reading file"

    @property
    def message(self) -> str:
        return self.value


class ShellError(Exception):
    """Base class for recoverable shell errors."""

    kind: ErrorKind = ErrorKind.GENERIC
    # Set once the message has been written to a redirection target.
    redirected: bool = False

    def __init__(self, detail: str = ""):
        """Initialize error.

        Args:
            detail: Free-form context for logging only; never shown to the user
        """
        super().__init__(detail or self.kind.message)
        self.detail = detail

    def render(self) -> str:
        """Render the user-facing diagnostic line."""
        return self.kind.message


class RedirectionSyntaxError(ShellError):
    """Malformed use of the ``>`` operator."""

    kind = ErrorKind.REDIRECTION


class CommandNotFoundError(ShellError):
    """No executable candidate on the search path."""

    kind = ErrorKind.COMMAND_NOT_FOUND


class ArgumentCountError(ShellError):
    """Built-in called with the wrong number of arguments."""

    kind = ErrorKind.ARGUMENT_COUNT


class RedirectionFileError(ShellError):
    """Redirection target could not be opened for writing."""

    kind = ErrorKind.FILE


class ForkError(ShellError):
    """Child process could not be created."""

    kind = ErrorKind.FORK


class WaitError(ShellError):
    """Child process could not be waited on."""

    kind = ErrorKind.WAIT


class ExecError(ShellError):
    """The OS refused to run the resolved program.

    Unlike the other kinds, this diagnostic names the command and the OS
    reason.
    """

    kind = ErrorKind.GENERIC

    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason

    def render(self) -> str:
        return f"{self.name}: {self.reason}"


def report(error: ShellError | ErrorKind, stream: Optional[TextIO] = None) -> None:
    """Write a diagnostic to the error stream.

    Args:
        error: Error instance or bare kind to render
        stream: Destination (defaults to the current ``sys.stderr``)
    """
    if stream is None:
        stream = sys.stderr

    if isinstance(error, ErrorKind):
        message = error.message
    else:
        if error.redirected:
            logger.debug(f"{type(error).__name__} already written to redirection target")
            return
        if error.detail:
            logger.debug(f"{type(error).__name__}: {error.detail}")
        message = error.render()

    stream.write(message + "\n")
    stream.flush()
