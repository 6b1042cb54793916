"""Execution of external programs.

Each external command runs as its own child process. Redirection is set up
before the program starts, so everything it writes to stdout and stderr
lands in the target file.
"""

from __future__ import annotations

import errno
import logging
import os
import subprocess
from dataclasses import dataclass
from typing import IO, Iterable, List, Optional

from wish.lib.diagnostics import (
    CommandNotFoundError,
    ExecError,
    ForkError,
    RedirectionFileError,
    WaitError,
)
from wish.shell.parser import Command
from wish.shell.resolver import resolve

logger = logging.getLogger(__name__)

# The OS refused to run this particular file; anything else is a launch failure.
EXEC_ERRNOS = {
    errno.ENOEXEC,
    errno.EACCES,
    errno.EPERM,
    errno.ENOENT,
    errno.ENOTDIR,
    errno.EISDIR,
    errno.ELOOP,
    errno.ENAMETOOLONG,
    errno.ETXTBSY,
}


@dataclass
class ChildHandle:
    """A launched child process."""

    name: str
    path: str
    process: subprocess.Popen

    @property
    def pid(self) -> int:
        return self.process.pid


class ProcessSpawner:
    """Launch and reap child processes."""

    def open_target(self, redirect_target: str) -> IO[bytes]:
        """Open a redirection target for writing, creating or truncating it.

        Raises:
            RedirectionFileError: If the file cannot be opened
        """
        try:
            return open(redirect_target, 'wb')
        except (OSError, ValueError) as e:
            raise RedirectionFileError(f"{redirect_target}: {e}") from e

    def _exec_failed(self, error: ExecError, target: Optional[IO[bytes]]) -> ExecError:
        """Route an exec failure into the redirection target, if any.

        The program's stderr is already the target by the time it would
        have run, so its failure message belongs there too.
        """
        if target is None:
            return error
        target.write((error.render() + "\n").encode('utf-8', errors='surrogateescape'))
        target.flush()
        error.redirected = True
        return error

    def spawn(
        self,
        path: str,
        argv: List[str],
        redirect_target: Optional[str] = None
    ) -> ChildHandle:
        """Start ``path`` as a child process.

        Args:
            path: Resolved executable
            argv: Argument vector; ``argv[0]`` is the command name as typed
            redirect_target: File receiving both stdout and stderr, if any

        Returns:
            Handle to the running child

        Raises:
            RedirectionFileError: If the redirection target cannot be opened
            ExecError: If the OS refuses to run the program
            ForkError: If the child cannot be created
        """
        target = self.open_target(redirect_target) if redirect_target is not None else None
        try:
            process = subprocess.Popen(
                argv,
                executable=path,
                stdout=target,
                stderr=target,
                close_fds=True
            )
        except ValueError as e:
            # Embedded NUL bytes in the path or an argument.
            raise self._exec_failed(ExecError(argv[0], str(e)), target) from e
        except OSError as e:
            if e.errno in EXEC_ERRNOS:
                error = ExecError(argv[0], e.strerror or os.strerror(e.errno))
                raise self._exec_failed(error, target) from e
            raise ForkError(f"{argv[0]}: {e}") from e
        finally:
            if target is not None:
                target.close()

        logger.debug(f"Started {argv[0]} ({path}) as pid {process.pid}")
        return ChildHandle(name=argv[0], path=path, process=process)

    def wait(self, handle: ChildHandle) -> int:
        """Block until the child terminates.

        Returns:
            Exit status (negative signal number if killed by a signal)

        Raises:
            WaitError: If the child cannot be waited on
        """
        try:
            status = handle.process.wait()
        except OSError as e:
            raise WaitError(f"pid {handle.pid}: {e}") from e
        logger.debug(f"Reaped {handle.name} (pid {handle.pid}) with status {status}")
        return status


def launch(
    command: Command,
    search_path: Iterable[str],
    spawner: ProcessSpawner
) -> ChildHandle:
    """Resolve and start an external command.

    Args:
        command: Parsed non-built-in command
        search_path: Directories to resolve against
        spawner: Process launcher

    Returns:
        Handle to the running child

    Raises:
        CommandNotFoundError: If the name does not resolve
        RedirectionFileError: If the redirection target cannot be opened
        ExecError: If the OS refuses to run the program
        ForkError: If the child cannot be created
    """
    path = resolve(command.name, search_path)
    if path is None:
        raise CommandNotFoundError(command.name)
    return spawner.spawn(path, list(command.args), command.redirect_target)
