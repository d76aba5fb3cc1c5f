"""
Runtime settings read from the environment (and an optional .env file).

Variables:
    CAMPUS_TOUR_DATA: Path to the tour graph JSON file
    CAMPUS_TOUR_ENTRY: Location id where sessions start
    CAMPUS_TOUR_ASSET_ROOT: Directory holding panorama images
    CAMPUS_TOUR_SECONDS_PER_HOP: Walking pace for travel estimates (default 0.8)
    CAMPUS_TOUR_LOG_DIR: Directory for rotating log files
    CAMPUS_TOUR_LOG_LEVEL: Console log level name (default INFO)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from campus_tour.navigation.pathfinding import DEFAULT_SECONDS_PER_HOP

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DATA_PATH = PROJECT_ROOT / "data" / "sample_campus.json"
DEFAULT_LOG_DIR = PROJECT_ROOT / "logs"


@dataclass(frozen=True)
class TourSettings:
    """Resolved configuration for CLI runs and embedding applications."""

    data_path: Path = DEFAULT_DATA_PATH
    entry_location_id: Optional[str] = None
    asset_root: Optional[Path] = None
    seconds_per_hop: float = DEFAULT_SECONDS_PER_HOP
    log_dir: Path = DEFAULT_LOG_DIR
    log_level: int = logging.INFO


def load_settings(env_file: Optional[str] = None) -> TourSettings:
    """
    Build settings from environment variables.

    Values already set in the environment win over those in the .env file.

    Args:
        env_file: Explicit .env path; by default python-dotenv searches
            upwards from the working directory

    Returns:
        TourSettings with defaults for unset variables

    Raises:
        ValueError: If a numeric or log-level variable cannot be parsed
    """
    load_dotenv(env_file)

    data_path = os.getenv("CAMPUS_TOUR_DATA")
    asset_root = os.getenv("CAMPUS_TOUR_ASSET_ROOT")
    log_dir = os.getenv("CAMPUS_TOUR_LOG_DIR")

    return TourSettings(
        data_path=Path(data_path) if data_path else DEFAULT_DATA_PATH,
        entry_location_id=os.getenv("CAMPUS_TOUR_ENTRY") or None,
        asset_root=Path(asset_root) if asset_root else None,
        seconds_per_hop=_parse_seconds(os.getenv("CAMPUS_TOUR_SECONDS_PER_HOP")),
        log_dir=Path(log_dir) if log_dir else DEFAULT_LOG_DIR,
        log_level=_parse_log_level(os.getenv("CAMPUS_TOUR_LOG_LEVEL")),
    )


def _parse_seconds(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_SECONDS_PER_HOP
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"CAMPUS_TOUR_SECONDS_PER_HOP must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"CAMPUS_TOUR_SECONDS_PER_HOP must be positive, got {raw!r}")
    return value


def _parse_log_level(raw: Optional[str]) -> int:
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"CAMPUS_TOUR_LOG_LEVEL must be a logging level name, got {raw!r}")
    return level
