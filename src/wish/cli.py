from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import yaml
from pydantic import ValidationError

from wish.lib.config_parser import load_config
from wish.lib.diagnostics import ErrorKind, report
from wish.shell.builtins import ShellState
from wish.shell.dispatcher import LineDispatcher
from wish.shell.repl import run_repl, run_script
from wish.shell.resolver import SearchPath

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging.

    Log records go to stderr and stay out of the way of command output
    unless asked for.

    Args:
        verbose: Enable debug logging
        quiet: Only log errors
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


class ShellArgumentParser(argparse.ArgumentParser):
    """Argument parser that fails like the shell does: fixed message, status 1."""

    def error(self, message: str) -> None:
        logger.debug(f"Invalid invocation: {message}")
        report(ErrorKind.ARGUMENT_COUNT)
        self.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = ShellArgumentParser(
        prog='wish',
        description="Line-oriented command shell (interactive, or batch with a file)",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        'batch_file',
        nargs='*',
        metavar='FILE',
        help='Run commands from FILE instead of prompting'
    )
    parser.add_argument(
        '--config', '-c',
        default=None,
        metavar='PATH',
        help='YAML configuration file (search path, prompt, history)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only log errors'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        # --help, or an invalid invocation already reported
        return e.code if isinstance(e.code, int) else 0
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if len(args.batch_file) > 1:
        logger.error(f"Expected at most one batch file, got {len(args.batch_file)}")
        report(ErrorKind.ARGUMENT_COUNT)
        return 1

    try:
        config = load_config(args.config)
        state = ShellState(search_path=SearchPath(config.path))
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        logger.error(f"Failed to load configuration: {e}")
        report(ErrorKind.GENERIC)
        return 1
    except MemoryError:
        report(ErrorKind.MEMORY)
        return 1

    dispatcher = LineDispatcher(state=state)

    if not args.batch_file:
        logger.debug("Starting interactive shell")
        return run_repl(
            dispatcher=dispatcher,
            prompt=config.prompt,
            history_file=config.history_file,
            history_length=config.history_length
        )

    batch_file = args.batch_file[0]
    logger.debug(f"Running batch file {batch_file}")
    try:
        return run_script(batch_file, dispatcher=dispatcher)
    except OSError as e:
        logger.error(f"Cannot read batch file {batch_file}: {e}")
        report(ErrorKind.GENERIC)
        return 1


if __name__ == '__main__':
    sys.exit(main())
