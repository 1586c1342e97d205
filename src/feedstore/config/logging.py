"""Logging setup for the feedstore CLI."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from feedstore.utils.errors import ConfigError

LOGGER_NAME = "feedstore"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    level: str = "INFO",
) -> logging.Logger:
    """Configure the package logger.

    Console output goes to stderr through rich so it never mixes with
    command output on stdout. Calling this again replaces the handlers
    installed by a previous call.

    Args:
        verbose: Force DEBUG level
        log_file: Optional file that also receives every record
        level: Level name used when not verbose

    Returns:
        The configured ``feedstore`` logger

    Raises:
        ConfigError: If the log file cannot be opened
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot open log file {log_file}: {e}") from e
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
