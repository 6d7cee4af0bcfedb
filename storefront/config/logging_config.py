# storefront/config/logging_config.py

"""Per-run timestamped logging configuration for storefront.

Each launch writes to ``logs/run_<timestamp>.log``.  Every
``storefront.*`` logger (cart, catalog, ui, cli) propagates into the
single project logger configured here, so one file holds the whole
session: catalog fetches, cart mutations and notification-worthy
failures with their tracebacks.

Only warnings reach the console by default; the TUI owns the terminal
and the headless runner reserves stdout for JSON.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from storefront.config.settings import Settings

PROJECT_LOGGER = "storefront"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _log_file_path(logs_dir: Path) -> Path:
    """Build the timestamped log file path for this run."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{timestamp}.log"


def setup_logging(console_level: int = logging.WARNING) -> Path:
    """Initialise the ``storefront`` logger for the current run.

    Args:
        console_level: Threshold for the stderr handler.  ``main.py``
            lowers it to ``INFO`` when ``--verbose`` is passed.

    Returns:
        The path of the log file for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = _log_file_path(logs_dir)

    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, re-entry from the CLI) keep one handler set
    if project_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project_logger.addHandler(file_handler)
    project_logger.addHandler(console_handler)
    project_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
