"""Line dispatcher for the shell.

Runs one input line: split on ``&``, parse every segment, run built-ins in
the shell process, launch everything else as independent children, then
wait for all of them before returning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from wish.lib.diagnostics import ShellError, report
from wish.shell.builtins import ShellState, dispatch_builtin
from wish.shell.executor import ChildHandle, ProcessSpawner, launch
from wish.shell.parser import Command, CommandParser, split_line

logger = logging.getLogger(__name__)


class ChildSet:
    """Children launched while dispatching one line, in launch order."""

    def __init__(self):
        self._handles: List[ChildHandle] = []

    def add(self, handle: ChildHandle) -> None:
        self._handles.append(handle)

    def __iter__(self) -> Iterator[ChildHandle]:
        return iter(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def wait_all(self, spawner: ProcessSpawner) -> List[Optional[int]]:
        """Wait for every child, in launch order.

        A failed wait is reported and recorded as None; the remaining
        children are still waited on.

        Returns:
            Exit status per child
        """
        statuses: List[Optional[int]] = []
        for handle in self._handles:
            try:
                statuses.append(spawner.wait(handle))
            except ShellError as e:
                report(e)
                statuses.append(None)
        self._handles.clear()
        return statuses


@dataclass
class LineResult:
    """Outcome of dispatching one line."""

    commands: List[Command] = field(default_factory=list)
    builtins: int = 0
    launched: int = 0
    failed: int = 0
    statuses: List[Optional[int]] = field(default_factory=list)


class LineDispatcher:
    """Dispatches input lines against shared shell state.

    Concurrency comes only from child processes: the dispatcher itself is
    single-threaded and never returns while a child of the current line is
    still running.
    """

    def __init__(
        self,
        state: Optional[ShellState] = None,
        spawner: Optional[ProcessSpawner] = None
    ):
        """Initialize dispatcher.

        Args:
            state: Shell state (creates a default one if None)
            spawner: Process launcher (creates a subprocess-backed one if None)
        """
        self.state = state or ShellState()
        self.spawner = spawner or ProcessSpawner()
        self.parser = CommandParser()

    def dispatch(self, line: str) -> LineResult:
        """Run one input line to completion.

        Args:
            line: Input line with the trailing newline removed

        Returns:
            Summary of what ran

        Raises:
            SystemExit: From a valid ``exit`` built-in
        """
        result = LineResult()
        result.commands = self._parse_segments(line)

        children = ChildSet()
        try:
            for command in result.commands:
                if dispatch_builtin(command, self.state):
                    result.builtins += 1
                    continue
                try:
                    children.add(launch(command, self.state.search_path, self.spawner))
                    result.launched += 1
                except ShellError as e:
                    report(e)
                    result.failed += 1
        except SystemExit:
            # exit abandons the barrier.
            raise
        except BaseException:
            children.wait_all(self.spawner)
            raise

        result.statuses = children.wait_all(self.spawner)
        if result.launched:
            logger.debug(f"Reaped {result.launched} children, statuses {result.statuses}")
        return result

    def _parse_segments(self, line: str) -> List[Command]:
        commands = []
        for segment in split_line(line):
            try:
                command = self.parser.parse_segment(segment)
            except ShellError as e:
                report(e)
                continue
            if command is not None:
                commands.append(command)
        return commands
