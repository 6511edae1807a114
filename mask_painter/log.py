"""File logging for the mask painter.

Modules log through ``logging.getLogger(__name__)``; call ``setup_logging()``
once from the application entry point to send those records to
``<LOG_DIR>/mask_painter.log``.
"""
import logging
import os

from .config import LOG_DIR, LOG_LEVEL

LOGGER_NAME = 'mask_painter'


def setup_logging(log_dir=None, level=None):
    """Attach a file handler to the package logger and return it."""
    log_dir = log_dir or LOG_DIR
    level = level or LOG_LEVEL
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'mask_painter.log')

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # Check if handler already exists to avoid duplicate logs
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        fh = logging.FileHandler(log_file)
        fh.setLevel(level)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(message)s')
        fh.setFormatter(formatter)
        logger.addHandler(fh)
    return logger
