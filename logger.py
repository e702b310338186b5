"""Logging configuration for Tally.

Sets up logging to both file (with date-based naming) and console.
"""

import logging
from datetime import date
from config import Config

LOGGER_NAME = "tally"


def setup_logging(config: Config, quiet: bool = False) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.
        quiet: If True, the console only shows warnings and errors. The log
               file still receives everything at the configured level.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(levelname)s - %(message)s")

    # File handler - logs to tally-{date}.log
    log_file_path = config.log_dir / f"{LOGGER_NAME}-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if quiet else config.log_level)
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The tally logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
