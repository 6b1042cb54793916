"""Parser for shell command lines.

Parses lines like: ls -la /tmp > listing.txt & date & sleep 1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from wish.lib.diagnostics import RedirectionSyntaxError

logger = logging.getLogger(__name__)

PARALLEL_MARKER = '&'
REDIRECT_OPERATOR = '>'


@dataclass
class Command:
    """Represents a single parsed invocation."""

    name: str
    args: List[str] = field(default_factory=list)
    redirect_target: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.args:
            self.args = [self.name]

    @property
    def argc(self) -> int:
        return len(self.args)

    def __repr__(self) -> str:
        """String representation."""
        args_str = ', '.join(repr(a) for a in self.args[1:])
        if self.redirect_target is not None:
            return f"Command({self.name!r}, [{args_str}] > {self.redirect_target!r})"
        return f"Command({self.name!r}, [{args_str}])"


def normalize(text: str) -> str:
    """Isolate the redirection operator and trim surrounding whitespace.

    Args:
        text: Raw segment text

    Returns:
        Normalized text; empty if ``text`` was empty or all whitespace
    """
    spaced = text.replace(REDIRECT_OPERATOR, f' {REDIRECT_OPERATOR} ')
    return spaced.strip()


def tokenize(text: str) -> List[str]:
    """Split text into whitespace-delimited tokens.

    ``a>b`` and ``a > b`` produce the same tokens.
    """
    return normalize(text).split()


def split_line(line: str) -> List[str]:
    """Split a line into segments on the parallel marker.

    A line without the marker is a single segment.

    Args:
        line: Input line with the trailing newline removed

    Returns:
        Ordered list of segments
    """
    return line.split(PARALLEL_MARKER)


class CommandParser:
    """Parser for ``&``-separated command lines.

    Converts shell syntax like:
        cat notes.txt > copy.txt & ls

    To a list of Command objects that the dispatcher can run.
    """

    def parse_segment(self, segment: str) -> Optional[Command]:
        """Parse a single segment into a Command.

        Args:
            segment: One ``&``-delimited piece of a line

        Returns:
            Command, or None if the segment holds no tokens

        Raises:
            RedirectionSyntaxError: If ``>`` is misused
        """
        tokens = tokenize(segment)
        if not tokens:
            return None

        if tokens[0] == REDIRECT_OPERATOR:
            raise RedirectionSyntaxError(f"segment starts with redirection: {segment!r}")

        args: List[str] = []
        redirect_target = None

        for index, token in enumerate(tokens):
            if token != REDIRECT_OPERATOR:
                args.append(token)
                continue
            # Exactly one filename, and it must be the last token.
            if index + 2 != len(tokens):
                raise RedirectionSyntaxError(
                    f"expected exactly one file after redirection: {segment!r}"
                )
            redirect_target = tokens[index + 1].strip()
            break

        if redirect_target is not None and REDIRECT_OPERATOR in redirect_target:
            raise RedirectionSyntaxError(f"invalid redirection target: {redirect_target!r}")

        command = Command(name=args[0], args=args, redirect_target=redirect_target)
        logger.debug(f"Parsed {command!r}")
        return command

    def parse(self, line: str) -> List[Command]:
        """Parse a full line into commands.

        Empty segments are dropped. Any malformed segment fails the call;
        use :meth:`parse_segment` to recover per segment.

        Args:
            line: Command line to parse

        Returns:
            List of Command objects

        Raises:
            RedirectionSyntaxError: If any segment misuses ``>``
        """
        commands = []
        for segment in split_line(line):
            command = self.parse_segment(segment)
            if command is not None:
                commands.append(command)
        return commands


def parse_command(segment: str) -> Optional[Command]:
    """Parse one segment.

    Convenience function that creates a parser and parses the segment.

    Args:
        segment: Segment to parse

    Returns:
        Command or None for a blank segment
    """
    parser = CommandParser()
    return parser.parse_segment(segment)
