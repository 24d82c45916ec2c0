"""Logging configuration for the CLI."""

import logging
import os

LOG_LEVEL_ENV_VAR = "WEALTHTRACK_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_log_level(verbose: bool = False) -> int:
    """Pick the log level from the environment, then the verbose flag.

    Raises:
        ValueError: If the environment names an unknown level
    """
    env_level = os.getenv(LOG_LEVEL_ENV_VAR)
    if env_level:
        level = logging.getLevelName(env_level.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{env_level}' in {LOG_LEVEL_ENV_VAR}")
        return level
    return logging.DEBUG if verbose else logging.WARNING


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure the ``wealthtrack`` logger to write to stderr.

    Args:
        level: Logging level (default: WARNING)

    Example:
        >>> from wealthtrack.utils.logging_config import setup_logging
        >>> setup_logging(logging.DEBUG)
    """
    logger = logging.getLogger("wealthtrack")
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    # Configure the handler once; later calls only change the level
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(level)
