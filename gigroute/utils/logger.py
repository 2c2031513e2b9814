"""Logging setup for gigroute"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "gigroute",
    level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure a logger with a console handler and an optional file handler

    Calling this twice for the same name does not duplicate handlers.

    Args:
        name: Logger name (child loggers under it inherit the handlers)
        level: Logging level name
        log_file: Optional path to also write logs to

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    level_int = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level_int)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not any(getattr(h, "_gigroute_console", False) for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler._gigroute_console = True
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level_int)

    logger.propagate = False
    return logger
