"""REPL (Read-Eval-Print Loop) and batch driver.

Both modes feed lines one at a time to a :class:`LineDispatcher`; the next
line is only read after every child of the previous one has been reaped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from wish.lib.config_parser import DEFAULT_PROMPT
from wish.lib.diagnostics import ErrorKind, report
from wish.shell.dispatcher import LineDispatcher

logger = logging.getLogger(__name__)

try:
    import readline
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False
    logger.debug("readline not available - command history disabled")


def strip_newline(line: str) -> str:
    """Drop the line terminator and anything after it."""
    return line.split('\n', 1)[0]


class REPL:
    """Interactive shell loop."""

    def __init__(
        self,
        dispatcher: Optional[LineDispatcher] = None,
        prompt: str = DEFAULT_PROMPT,
        history_file: Optional[Path] = None,
        history_length: int = 1000
    ):
        """Initialize REPL.

        Args:
            dispatcher: Line dispatcher (creates new if None)
            prompt: Command prompt string
            history_file: Readline history location, or None to keep none
            history_length: Maximum number of history entries
        """
        self.dispatcher = dispatcher or LineDispatcher()
        self.prompt = prompt
        self.running = False

        if HAS_READLINE and history_file is not None:
            self._setup_readline(history_file, history_length)

    def _setup_readline(self, history_file: Path, history_length: int) -> None:
        """Setup readline for command history."""
        try:
            readline.read_history_file(str(history_file))
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not read history file {history_file}: {e}")

        import atexit
        atexit.register(readline.write_history_file, str(history_file))

        readline.set_history_length(history_length)

    def run(self) -> int:
        """Run the REPL loop until end of input or ``exit``.

        Returns:
            Exit status for the shell
        """
        self.running = True
        status = 0
        while self.running:
            try:
                line = input(self.prompt)
            except EOFError:
                # Ctrl+D
                break
            except KeyboardInterrupt:
                # Ctrl+C drops the partial line
                print()
                continue

            try:
                self.dispatcher.dispatch(strip_newline(line))
            except SystemExit as e:
                status = e.code if isinstance(e.code, int) else 0
                break
            except Exception:
                logger.exception("Dispatch failed")
                report(ErrorKind.GENERIC)

        self.running = False
        return status


def run_repl(
    dispatcher: Optional[LineDispatcher] = None,
    prompt: str = DEFAULT_PROMPT,
    history_file: Optional[Path] = None,
    history_length: int = 1000
) -> int:
    """Run interactive REPL.

    Returns:
        Exit status for the shell
    """
    repl = REPL(
        dispatcher=dispatcher,
        prompt=prompt,
        history_file=history_file,
        history_length=history_length
    )
    return repl.run()


def run_command(line: str, dispatcher: Optional[LineDispatcher] = None):
    """Run a single line non-interactively.

    Args:
        line: Line to execute
        dispatcher: Optional dispatcher

    Returns:
        Dispatch result
    """
    if dispatcher is None:
        dispatcher = LineDispatcher()
    return dispatcher.dispatch(strip_newline(line))


def run_script(script_path: Union[str, Path], dispatcher: Optional[LineDispatcher] = None) -> int:
    """Run every line of a batch file, in order, without a prompt.

    Args:
        script_path: Path to batch file
        dispatcher: Optional dispatcher

    Returns:
        Exit status for the shell

    Raises:
        OSError: If the file cannot be opened or read
    """
    if dispatcher is None:
        dispatcher = LineDispatcher()

    with open(script_path, encoding='utf-8', errors='surrogateescape', newline='\n') as f:
        for line_num, line in enumerate(f, 1):
            logger.debug(f"Executing line {line_num}: {line.rstrip()}")
            try:
                dispatcher.dispatch(strip_newline(line))
            except SystemExit as e:
                return e.code if isinstance(e.code, int) else 0

    return 0
