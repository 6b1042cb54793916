"""wish - a small line-oriented command shell.

Reads one line at a time, interactively or from a batch file, and runs the
commands on it.

Features:
- Built-in exit, cd and path commands
- Configurable command search path
- Output redirection with ``>``
- Parallel commands with ``&``, joined before the next line
"""

__version__ = "1.0.0"
__license__ = "MIT"

from wish.cli import main

__all__ = ["main", "__version__"]
