"""Engine and application loggers writing to the console and a log file."""

from __future__ import annotations

import logging
import os
import sys

CORE_LOGGER_NAME = "ENGINE"
CLIENT_LOGGER_NAME = "APP"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_FORMAT = "[%(asctime)s] %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def init(log_file: str | os.PathLike[str] = "Elixir.log") -> None:
    """Set up both loggers to write every message to stdout and ``log_file``."""
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(log_file, encoding="utf-8"),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(TRACE)

    for name in (CORE_LOGGER_NAME, CLIENT_LOGGER_NAME):
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        logger.setLevel(TRACE)
        logger.propagate = False
        for handler in handlers:
            logger.addHandler(handler)

    core_logger().info("Initialized log system!")


def core_logger() -> logging.Logger:
    """The logger used by the engine itself."""
    return logging.getLogger(CORE_LOGGER_NAME)


def client_logger() -> logging.Logger:
    """The logger used by applications built on the engine."""
    return logging.getLogger(CLIENT_LOGGER_NAME)