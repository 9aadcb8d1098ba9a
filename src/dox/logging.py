"""Logging setup for the dox CLI.

Everything dox logs goes through one RichHandler on stderr. ``-v``
enables debug messages. ``-vv`` adds timestamps and source locations
and lets the HTTP stack log each request made during link validation.
"""

import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

# Logs one line per connection; a validation pass opens thousands
CHATTY_LOGGERS = ("urllib3",)


def level_for(verbosity: int, quiet: bool) -> int:
    """Map the -v count and --quiet onto a logging level; quiet wins."""
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbosity > 0 else logging.INFO


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
) -> Console:
    """Install the dox log handler on the root logger.

    Args:
        verbosity: Number of -v flags
        quiet: Only show warnings and errors
        no_color: Disable colored output
        stream: Where logs go (default: sys.stderr at call time)

    Returns:
        The console the handler writes to, for user-facing output
    """
    console = Console(file=stream or sys.stderr, force_terminal=not no_color, no_color=no_color)
    detailed = verbosity > 1
    logging.basicConfig(
        level=level_for(verbosity, quiet),
        format="%(message)s",
        handlers=[
            RichHandler(console=console, show_time=detailed, show_path=detailed, markup=False)
        ],
        force=True,
    )
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if detailed else logging.WARNING)
    return console
