"""Search path and command resolution."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, List, Optional

from wish.lib.config_parser import DEFAULT_SEARCH_PATH

logger = logging.getLogger(__name__)


class SearchPath:
    """Ordered list of directories consulted to resolve command names.

    Starts as ``/bin``. Only the ``path`` built-in changes it, and it always
    replaces the whole list.
    """

    def __init__(self, directories: Optional[Iterable[str]] = None):
        """Initialize search path.

        Args:
            directories: Initial directories (defaults to ``/bin``)
        """
        if directories is None:
            directories = DEFAULT_SEARCH_PATH
        self._directories: List[str] = list(directories)

    def replace(self, directories: Iterable[str]) -> None:
        """Replace every entry; an empty iterable empties the path."""
        self._directories = list(directories)
        logger.debug(f"Search path set to {self._directories}")

    @property
    def directories(self) -> List[str]:
        return list(self._directories)

    def __iter__(self) -> Iterator[str]:
        return iter(self._directories)

    def __len__(self) -> int:
        return len(self._directories)

    def __repr__(self) -> str:
        return f"SearchPath({self._directories!r})"


def resolve(name: str, search_path: Iterable[str]) -> Optional[str]:
    """Resolve a bare command name to an executable path.

    Args:
        name: Command name
        search_path: Directories to try, in order

    Returns:
        First executable candidate, or None if there is none
    """
    if not name:
        return None

    for directory in search_path:
        candidate = f"{directory}/{name}"
        try:
            executable = os.access(candidate, os.X_OK)
        except ValueError:
            # Embedded NUL byte; no file can have this name.
            continue
        if executable:
            logger.debug(f"Resolved {name} -> {candidate}")
            return candidate

    logger.debug(f"Could not resolve {name}")
    return None
