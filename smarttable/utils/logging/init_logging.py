"""Module: init_logging.py

Date: 2026-10-19

Single entry point to initialize logging for an embedding application
with app-specific log file names.
"""

import logging
import os

from smarttable.utils.logging.logger_factory import get_cached_logger
from smarttable.utils.logging.logger_file_helper import add_file_handler


def init_logging(app_name: str = "app", log_dir: str = "logs") -> logging.Logger:
    """Add rotating activity and error logs under the given app name.

    Args:
        app_name (str): The base name for log files (e.g., 'smarttable').
        log_dir (str): Directory for the log files.

    Returns:
        logging.Logger: The logger the handlers were attached to.

    """
    logger = get_cached_logger(app_name)

    add_file_handler(logger, os.path.join(log_dir, f"{app_name}_activity.log"), level=logging.INFO)
    add_file_handler(logger, os.path.join(log_dir, f"{app_name}_errors.log"), level=logging.ERROR)

    return logger
