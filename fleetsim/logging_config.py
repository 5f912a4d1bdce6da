"""Logging setup for fleetsim.

Every module logs through ``logging.getLogger(__name__)`` under the
``fleetsim`` namespace. :func:`setup_logger` attaches a rich handler that
writes to the shared console, plus an optional plain-text file handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from fleetsim.config import LOG_DATE_FORMAT, LOG_FILE_FORMAT, LOG_LEVEL, LOGGER_NAME

CONSOLE = Console()


def setup_logger(
    level: int | str = LOG_LEVEL,
    log_file: str | None = None,
    console: bool = True,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Configure and return the fleetsim logger.

    Args:
        level: Logging level name or number.
        log_file: Optional file path for log output.
        console: Whether to log to the shared rich console.
        name: Logger name.

    Returns:
        The configured logger.

    Examples:
        >>> logger = setup_logger()
        >>> logger = setup_logger("DEBUG", log_file="run.log")
    """
    if isinstance(level, str):
        level_name = level
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            msg = f"Unknown log level: {level_name}"
            raise ValueError(msg)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        rich_handler = RichHandler(
            console=CONSOLE,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setLevel(level)
        logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
