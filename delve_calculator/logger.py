"""Centralized logging configuration."""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

ROOT_LOGGER_NAME = "delve_calculator"


def setup_logger(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    stream=None,
    console: bool = True,
) -> logging.Logger:
    """Configure and return the package logger.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Also write to this file when given
        stream: Console stream (default: stderr, so stdout stays clean
            for reports and --json output)
        console: Whether to log to the console at all; full-screen
            front-ends turn it off and log to a file instead

    Returns:
        The "delve_calculator" logger; module loggers propagate to it
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            logger.warning("Not logging to %s: %s", log_file, e)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
