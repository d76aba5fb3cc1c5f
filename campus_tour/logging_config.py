"""
Logging setup for campus-tour runs.

Log layout under the log directory (CAMPUS_TOUR_LOG_DIR, default logs/):

    navigation.log  orientation strategy traces, dropped intents, image
                    load failures and route walks (campus_tour.navigation)
    graph.log       content loading and validation problems (campus_tour.graph)

Everything at or above the console level is also printed to stdout.

Usage:
    from campus_tour.logging_config import setup_logging
    setup_logging(log_dir="logs")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from campus_tour.config import DEFAULT_LOG_DIR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per file: 5 MB, 5 backups
MAX_LOG_SIZE_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5

# Subsystem logger -> file inside the log directory
FILE_LOGGERS = {
    "campus_tour.navigation": "navigation.log",
    "campus_tour.graph": "graph.log",
}


def setup_logging(
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """
    Route campus_tour logs to stdout and to one rotating file per subsystem.

    Safe to call more than once: the console handler and the subsystem file
    handlers from an earlier call are replaced, not stacked.

    Args:
        console_level: Minimum level printed to stdout
        file_level: Minimum level written to navigation.log and graph.log
        log_dir: Directory for the log files (created if missing)
    """
    directory = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for logger_name, file_name in FILE_LOGGERS.items():
        _replace_file_handler(logging.getLogger(logger_name), directory / file_name, file_level, formatter)

    # Plotly only matters when the view command renders a figure
    logging.getLogger("plotly").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging to {directory} (console: {logging.getLevelName(console_level)}, "
        f"files: {logging.getLevelName(file_level)})"
    )


def _replace_file_handler(
    target: logging.Logger,
    path: Path,
    level: int,
    formatter: logging.Formatter,
) -> None:
    for handler in list(target.handlers):
        if isinstance(handler, RotatingFileHandler):
            target.removeHandler(handler)
            handler.close()

    file_handler = RotatingFileHandler(
        path,
        maxBytes=MAX_LOG_SIZE_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    target.addHandler(file_handler)
