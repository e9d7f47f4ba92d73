"""
Reusable logging and print setup for the ghactions tools.

Functions:
    setup_logging      - Configure the root logger and return it.
    set_print_logger   - Set the logger for print_and_log and print_error.
    print_and_log      - Print (rich markup) and log an info message.
    print_error        - Print to stderr and log an error message.
"""

import logging
import os
import sys
from typing import Optional

from rich import print as rich_print
from rich.markup import escape

# Module-level variable to hold the logger for print_and_log and print_error
_print_logger: Optional[logging.Logger] = None


def setup_logging(app_name: str = "ghactions", loglevel: int | str = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the application.
    Logs to ~/.<app_name>/log.txt unless a custom logfile is given.
    Returns the configured logger, which also becomes the print logger.
    """
    logger = logging.getLogger()
    logger.setLevel(loglevel.upper() if isinstance(loglevel, str) else loglevel)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(process)d [%(name)s] %(message)s')
    if logfile is None:
        log_dir = os.path.expanduser(f"~/.{app_name}")
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, "log.txt")
    else:
        parent = os.path.dirname(os.fspath(logfile))
        if parent:
            os.makedirs(parent, exist_ok=True)
    handler = logging.FileHandler(logfile, encoding="utf-8")

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    set_print_logger(logger)
    logger.debug("Logging initialized for %s (file: %s)", app_name, logfile)
    return logger


def set_print_logger(logger: Optional[logging.Logger]):
    """
    Set the logger to be used by print_and_log and print_error.
    """
    global _print_logger
    _print_logger = logger


def print_and_log(message: str, **kwargs):
    """
    Print to console via rich and log as info.
    """
    rich_print(message, **kwargs)
    if _print_logger is not None:
        _print_logger.info(message)


def print_error(message: str, **kwargs):
    """
    Print and log an error message (stderr and error level).
    The message is printed literally, rich markup is not interpreted.
    """
    rich_print(f'[bold red]{escape(message)}[/bold red]', file=sys.stderr, **kwargs)
    if _print_logger is not None:
        _print_logger.error(message)
