"""Logger module."""

import logging
import sys

import colorlog

from evm_rpc.helpers.constants import DEFAULT_LOG_LEVEL


loggers: dict[str, logging.Logger] = {}

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _resolve_level(log_level: str) -> int:
    level = LOG_LEVELS.get(log_level.upper())
    if level is None:
        err_msg = f"Invalid log level: {log_level}"
        raise ValueError(err_msg)
    return level


def get_logger(
    name: str,
    log_handler: str = "stderr",
    log_level: str = DEFAULT_LOG_LEVEL,
    log_color: bool = False,
) -> logging.Logger:
    """Get logger.

    Command output is written to stdout, so logs default to stderr.

    Args:
        name: The name of the logger.
        log_handler: The log handler type ('stderr' or 'stdout').
        log_level: The logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
        log_color: Whether to use colored output.

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    logger = logging.getLogger(name) if not log_color else colorlog.getLogger(name)

    streams = {"stderr": sys.stderr, "stdout": sys.stdout}
    if log_handler not in streams:
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    if log_color:
        handler: logging.Handler = colorlog.StreamHandler(streams[log_handler])
    else:
        handler = logging.StreamHandler(streams[log_handler])

    level = _resolve_level(log_level)

    logger.setLevel(level)
    handler.setLevel(level)

    if not log_color:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s %(asctime)s - %(name)s - %(levelname)s - %(message)s",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    loggers[name] = logger
    return logger


def set_log_level(log_level: str) -> None:
    """Apply a log level to every logger created through ``get_logger``.

    Module loggers are created at import time, before the command line is
    parsed, so the CLI calls this once it knows the requested level.

    Args:
        log_level: The logging level name.

    Raises:
        ValueError: If the log level is not recognised.
    """
    level = _resolve_level(log_level)
    for logger in loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


__all__ = ["LOG_LEVELS", "get_logger", "set_log_level"]
