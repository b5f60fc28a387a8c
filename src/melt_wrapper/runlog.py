from __future__ import annotations
import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator

from .config import LOG_FILE_NAME
from .errors import InvalidConfigError, WrapperError

LOGGER_NAME = "melt_wrapper.run"
LOG_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleFilter(logging.Filter):
    # errors reach the console through the CLI on stderr
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


@contextmanager
def run_log(run_dir: str) -> Iterator[logging.Logger]:
    """
    Append timestamped lines to <run_dir>/ayan_melt_wrapper.log and echo them to stdout.
    A WrapperError leaving the block is recorded in the file, then re-raised.
    Handlers are closed and detached on every exit path.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    log_path = os.path.join(run_dir, LOG_FILE_NAME)
    try:
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        raise InvalidConfigError(f"Cannot open log file: {log_path} ({e.strerror})")
    file_handler.setFormatter(formatter)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleFilter())

    logger.addHandler(file_handler)
    logger.addHandler(console)
    try:
        yield logger
    except WrapperError as e:
        logger.error("ERROR: %s", e)
        raise
    finally:
        for h in (file_handler, console):
            h.flush()
            logger.removeHandler(h)
        file_handler.close()
