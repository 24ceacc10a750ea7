# src/config/logging_config.py

"""Per-run logging for market_watch.

Every launch writes to its own ``logs/run_<timestamp>.log``. All
``market_watch.*`` loggers propagate to the project logger configured
here, so a single file holds the poll loop, the Steam client and the UI.

While the Textual UI owns the terminal a stderr handler would corrupt
the screen, so the console handler is optional.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

PROJECT_LOGGER = "market_watch"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _log_path(logs_dir: Path) -> Path:
    logs_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{stamp}.log"


def setup_logging(
    console: bool = True,
    console_level: int = logging.WARNING,
    logs_dir: Path | None = None,
) -> Path:
    """Attach the per-run file handler (and optionally stderr).

    Args:
        console: Also echo records at ``console_level`` and above to
            stderr. Pass ``False`` when a full-screen UI is running.
        console_level: Threshold for the stderr handler.
        logs_dir: Override for ``Settings.LOGS_DIR``.

    Returns:
        Path of the log file for this run. Repeated calls keep the
        handlers from the first call and return its file.
    """
    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)
    for handler in project_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    log_file = _log_path(logs_dir or Settings.LOGS_DIR)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )
    project_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(
            logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
        )
        project_logger.addHandler(console_handler)

    project_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
