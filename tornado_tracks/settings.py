"""
Settings Management for the tornado track pipeline

Settings are resolved once per run, in increasing priority:
DEFAULT_SETTINGS, then settings.json in the working directory, then
TORNADO_TRACKS_* environment variables (a .env file is loaded first).
The result is frozen into a RunContext that every stage receives.
"""

import json
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .base.constants import (
    CASE_STUDY_DATE,
    CASE_STUDY_LABEL,
    CASE_STUDY_MAGNITUDE,
    CASE_STUDY_STATE,
    TIMEOUT,
)
from .errors import ConfigurationError
from .logging_config import logger

SETTINGS_FILE = Path("settings.json")
ENV_PREFIX = "TORNADO_TRACKS_"

DEFAULT_SETTINGS = {
    "data_dir": "",
    "output_dir": "output",
    "paths_shp": "",
    "points_shp": "",
    "states_shp": "",
    "log_dir": "",
    "timeout": TIMEOUT,
}


def load_settings(settings_file: Path = SETTINGS_FILE) -> dict:
    """
    Load settings from settings.json merged over the defaults.
    Returns default settings if the file doesn't exist.
    """
    settings = DEFAULT_SETTINGS.copy()
    try:
        if settings_file.exists():
            with open(settings_file, 'r', encoding='utf-8') as f:
                settings.update(json.load(f))
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")

    return settings


def apply_env_overrides(settings: dict) -> dict:
    """Overlay TORNADO_TRACKS_* environment variables onto settings."""
    load_dotenv()

    result = dict(settings)
    for key in DEFAULT_SETTINGS:
        value = os.getenv(ENV_PREFIX + key.upper())
        if value is not None:
            result[key] = value
    return result


def _optional_path(value) -> Optional[Path]:
    return Path(value) if value else None


@dataclass(frozen=True)
class RunContext:
    """Inputs, outputs and case-study parameters for one pipeline run.

    When paths_shp and points_shp are both set the download stage is
    skipped and the local shapefiles are read directly.
    """

    output_dir: Path
    data_dir: Optional[Path] = None
    paths_shp: Optional[Path] = None
    points_shp: Optional[Path] = None
    states_shp: Optional[Path] = None
    log_dir: Optional[Path] = None
    timeout: int = TIMEOUT
    case_state: str = CASE_STUDY_STATE
    case_magnitude: int = CASE_STUDY_MAGNITUDE
    case_date: date = CASE_STUDY_DATE
    case_label: str = CASE_STUDY_LABEL

    @property
    def has_local_tracks(self) -> bool:
        return self.paths_shp is not None and self.points_shp is not None

    @property
    def events_parquet(self) -> Path:
        return self.output_dir / "tornado_events.parquet"

    @property
    def scatter_png(self) -> Path:
        return self.output_dir / "energy_vs_casualties.png"

    @property
    def map_png(self) -> Path:
        return self.output_dir / "casualty_map.png"

    @classmethod
    def from_settings(cls, settings: dict) -> "RunContext":
        case_date = settings.get("case_date", CASE_STUDY_DATE)
        if isinstance(case_date, str):
            case_date = datetime.strptime(case_date, "%Y-%m-%d").date()

        return cls(
            output_dir=Path(settings.get("output_dir") or "output"),
            data_dir=_optional_path(settings.get("data_dir")),
            paths_shp=_optional_path(settings.get("paths_shp")),
            points_shp=_optional_path(settings.get("points_shp")),
            states_shp=_optional_path(settings.get("states_shp")),
            log_dir=_optional_path(settings.get("log_dir")),
            timeout=int(settings.get("timeout") or TIMEOUT),
            case_state=settings.get("case_state", CASE_STUDY_STATE),
            case_magnitude=int(settings.get("case_magnitude", CASE_STUDY_MAGNITUDE)),
            case_date=case_date,
            case_label=settings.get("case_label", CASE_STUDY_LABEL),
        )


def build_run_context(settings_file: Path = SETTINGS_FILE) -> RunContext:
    """Resolve settings from file and environment into a RunContext.

    Raises:
        ConfigurationError: a numeric or date setting cannot be parsed
    """
    settings = apply_env_overrides(load_settings(settings_file))
    try:
        return RunContext.from_settings(settings)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid setting: {e}") from e
