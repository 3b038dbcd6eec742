"""Logging configuration using Rich and standard logging."""

import logging

from rich.logging import RichHandler

from error_control.constants import DATE_FORMAT, LOG_FORMAT
from error_control.domain_models.config import LoggingConfig


def setup_logging(config: LoggingConfig | None = None, verbose: bool = False) -> None:
    """Configure the root logger with a Rich console handler and a file handler.

    Args:
        config: Logging configuration. Defaults to ``LoggingConfig()``.
        verbose: If True, sets console level to DEBUG.
    """
    if config is None:
        config = LoggingConfig()

    log_level = "DEBUG" if verbose else config.level
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_path=False,
        show_time=True,
        show_level=True,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    log_file = config.file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    # Suppress noisy libraries
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def shutdown_logging() -> None:
    """Close all root handlers so log files are released."""
    logger = logging.getLogger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
