"""
Logging configuration for evointegration.

Metric modules log degenerate inputs at WARNING and fit details at DEBUG.
Handlers are attached to the ``evointegration`` logger only, so importing
the package as a library leaves the host application's root logger alone.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "evointegration"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route evointegration logs to stderr through rich, and optionally a file.

    Calling this again replaces the handlers from the previous call, so a
    process that runs several commands does not log each record twice.

    Args:
        verbose: Log fit iterations and other DEBUG detail
        quiet: Only log errors (takes precedence over verbose)
        log_file: Also append plain-text records to this file

    Returns:
        The configured ``evointegration`` logger
    """
    level = _level(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_path=verbose,
        log_time_format="[%X]",
    )
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger under the ``evointegration`` namespace.

    Args:
        name: Module name; prefixed with ``evointegration.`` when it is
            not already inside the package

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
