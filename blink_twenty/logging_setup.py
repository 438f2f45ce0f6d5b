import os
import sys
import logging
from logging.handlers import RotatingFileHandler

from .config import LOG_FILE, LOGGER_NAME
from .utils import ensure_dir

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def setup_logger(log_file: str = LOG_FILE, verbose: bool = False) -> logging.Logger:
    """Configure the app logger once: rotating file, plus stderr when verbose.

    Verbose mode (the fast profile) also lowers the level to DEBUG so each
    countdown step shows up while testing.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    fmt = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        ensure_dir(os.path.dirname(log_file))
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    if verbose and not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        logger.addHandler(console)

    return logger
