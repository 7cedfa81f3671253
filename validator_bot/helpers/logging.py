"""Logger module."""

import logging
import os
import sys

from typing import TextIO

import colorlog

loggers: dict[str, logging.Logger] = {}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_STREAMS: dict[str, TextIO] = {
    "stdout": sys.stdout,
    "stderr": sys.stderr,
}


def get_logger(
    name: str,
    log_handler: str = "stdout",
    log_level: str | None = None,
    log_color: bool | None = None,
) -> logging.Logger:
    """Get logger.

    Level and colour fall back to the LOG_LEVEL and LOG_COLOR environment
    variables, then to INFO without colour.

    Args:
        name: The name of the logger.
        log_handler: The log handler type ('stdout' or 'stderr').
        log_level: The logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
        log_color: Whether to use colored output.

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_color is None:
        log_color = os.getenv("LOG_COLOR", "").lower() in {"1", "true", "yes"}

    if log_handler not in LOG_STREAMS:
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    if log_level not in LOG_LEVELS:
        err_msg = f"Invalid log level: {log_level}"
        raise ValueError(err_msg)

    stream = LOG_STREAMS[log_handler]
    if log_color:
        logger = colorlog.getLogger(name)
        handler: logging.Handler = colorlog.StreamHandler(stream)
        formatter: logging.Formatter = colorlog.ColoredFormatter(
            f"%(log_color)s {LOG_FORMAT}",
            log_colors=LOG_COLORS,
        )
    else:
        logger = logging.getLogger(name)
        handler = logging.StreamHandler(stream)
        formatter = logging.Formatter(LOG_FORMAT)

    level = LOG_LEVELS[log_level]
    logger.setLevel(level)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    loggers[name] = logger
    return logger
