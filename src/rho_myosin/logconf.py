# logconf.py

import logging
import os
from typing import Optional

# Color mapping for console output
LOG_COLORS = {
    "DEBUG": "\033[92m",  # Green
    "INFO": "\033[94m",  # Blue
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[95m",  # Magenta
    "ENDC": "\033[0m",  # Reset
}


class ColoredFormatter(logging.Formatter):
    """Colors the level name and message by severity."""

    def format(self, record):
        color = LOG_COLORS.get(record.levelname, LOG_COLORS["INFO"])
        time_str = self.formatTime(record, self.datefmt)
        return (
            f"{time_str} - {record.name} - "
            f"{color}{record.levelname}{LOG_COLORS['ENDC']} - "
            f"{color}{record.getMessage()}{LOG_COLORS['ENDC']}"
        )


def setup_logger(
        name: str = "rho_myosin",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        color: bool = True,
) -> logging.Logger:
    """
    Configure the package logger: a console handler, plus a file handler
    when ``log_file`` is given. Calling it again replaces the handlers.

    :param name: logger name (the package name covers all modules)
    :param level: logging level
    :param log_file: optional path of a log file
    :param color: colored console output
    :return: logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    if log_file is not None:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    if color:
        stream_handler.setFormatter(ColoredFormatter())
    else:
        stream_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    stream_handler.setLevel(level)
    logger.addHandler(stream_handler)

    # Prevent double logging via root handlers
    logger.propagate = False

    return logger
