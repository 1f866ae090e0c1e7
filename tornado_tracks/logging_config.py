"""
Logging setup for the tornado track pipeline.
"""

import logging
from pathlib import Path

LOGGER_NAME = "tornado_tracks"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(log_dir=None, level=logging.INFO):
    """
    Attach console (and optionally file) handlers to the package logger.

    Safe to call more than once; existing handlers are replaced.
    """
    logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on re-run
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    if log_dir:
        logs_path = Path(log_dir)
        logs_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(logs_path / "tornado_tracks.log")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    # Prevent propagation to root logger (avoids duplicate logs)
    logger.propagate = False

    return logger
