"""
Configuration module: run settings, column bindings, paths and constants.

A run is described by one frozen ``PipelineConfig`` built at process start
(environment first, then explicit overrides) and passed to every stage.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

# ============================================================================
# INPUT PARSING
# ============================================================================

# Tokens read as missing values in the source CSV
NA_VALUES = ("", " ", "-", "NA", "N/A")

# Suffix appended to the input stem for the cleaned copy
CLEAN_SUFFIX = "_clean"

# ============================================================================
# GEOGRAPHIC BOUNDS
# ============================================================================

LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0

# geoenrich hands records over in WGS84
CRS_WEB = "EPSG:4326"

# ============================================================================
# OUTPUT LAYOUT (relative to the project directory, never deleted)
# ============================================================================

BIODIV_DIR_NAME = "biodiv"
DATASETS_DIR_NAME = "datasets"
RESULTS_DIR_NAME = "results"
SAT_DIR_NAME = "sat"  # where downloaded .nc files may be written

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_ID_COL = "Sample_ID"
DEFAULT_DATE_COL = "Date"
DEFAULT_LAT_COL = "Lat"
DEFAULT_LON_COL = "Long"

# 19/4/2012 -> "%d/%m/%Y" | 19_4_2012 -> "%d_%m_%Y" | 2012-04-19 -> "%Y-%m-%d"
DEFAULT_DATE_FORMAT = "%d/%m/%Y"

DEFAULT_DATASET_ID = "my_dataset"
DEFAULT_VAR_ID = "chlorophyll"
DEFAULT_VAR_SOURCE = "copernicus"
DEFAULT_GEO_BUFFER_KM = 2
DEFAULT_TIME_BUFFER = (-30, 0)

ENV_PREFIX = "OCCENRICH_"

# ============================================================================
# LOGGING & VERBOSITY
# ============================================================================

LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR


def clean_file_name(input_path):
    """Return ``<stem>_clean<ext>`` for an input file path."""
    input_path = Path(input_path)
    return f"{input_path.stem}{CLEAN_SUFFIX}{input_path.suffix}"


@dataclass(frozen=True)
class ColumnBindings:
    """Physical CSV column names for the four logical occurrence fields.

    Attributes:
        id: Record identifier column.
        date: Event date column (free text, parsed downstream).
        lat: Latitude column.
        lon: Longitude column.
    """

    id: str = DEFAULT_ID_COL
    date: str = DEFAULT_DATE_COL
    lat: str = DEFAULT_LAT_COL
    lon: str = DEFAULT_LON_COL

    def __post_init__(self) -> None:
        names = self.required()
        blank = [name for name in ("id", "date", "lat", "lon") if not getattr(self, name).strip()]
        if blank:
            raise ConfigError(
                f"Blank column binding(s): {', '.join(blank)}. "
                "Set the CSV column name for every logical field."
            )
        if len(set(names)) != len(names):
            raise ConfigError(
                f"Column bindings must name four distinct columns, got {list(names)}."
            )

    def required(self) -> tuple[str, str, str, str]:
        """Required column names in declared order (id, date, lat, lon)."""
        return (self.id, self.date, self.lat, self.lon)


@dataclass(frozen=True)
class PipelineConfig:
    """Validated run configuration.

    Attributes:
        project_dir: Working directory for every relative path.
        input_csv: Source CSV, relative to ``project_dir`` unless absolute.
        columns: Column-name bindings.
        date_format: Date format handed to the geoenrich loader.
        dataset_id: Namespace of every geoenrich artifact (no ".csv").
        var_id: Environmental variable to enrich.
        var_source: Informational provider label for ``var_id``.
        geo_buffer_km: Spatial buffer in km.
        time_buffer: ``(start, end)`` day offsets relative to each record date.
        skip_clean: Load the input file as-is instead of a cleaned copy.
        clean_only: Stop once the cleaned file is written.
        skip_stats: Do not attempt the statistics export.
    """

    project_dir: Path
    input_csv: str
    columns: ColumnBindings = field(default_factory=ColumnBindings)
    date_format: str = DEFAULT_DATE_FORMAT
    dataset_id: str = DEFAULT_DATASET_ID
    var_id: str = DEFAULT_VAR_ID
    var_source: str = DEFAULT_VAR_SOURCE
    geo_buffer_km: int = DEFAULT_GEO_BUFFER_KM
    time_buffer: tuple[int, int] = DEFAULT_TIME_BUFFER
    skip_clean: bool = False
    clean_only: bool = False
    skip_stats: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "project_dir", Path(self.project_dir).expanduser().resolve())
        object.__setattr__(self, "geo_buffer_km", _parse_int(self.geo_buffer_km, "geo_buffer_km"))
        object.__setattr__(self, "time_buffer", _parse_time_buffer(self.time_buffer))
        _validate(self)

    @classmethod
    def from_env(cls, **overrides: Any) -> "PipelineConfig":
        """Build config from ``OCCENRICH_*`` variables plus explicit overrides.

        Overrides whose value is ``None`` are ignored so that unset CLI flags
        fall through to the environment and then to defaults.

        Returns:
            A validated config object.

        Raises:
            ConfigError: If values are missing or invalid.
        """
        values = {key: value for key, value in _read_env().items() if value is not None}
        values.update({key: value for key, value in overrides.items() if value is not None})
        unknown = set(values) - _OPTION_NAMES
        if unknown:
            raise ConfigError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")
        if not values.get("input_csv"):
            raise ConfigError(
                "No input CSV configured. Pass --input or set OCCENRICH_INPUT_CSV."
            )
        columns = ColumnBindings(
            id=values.pop("id_col", DEFAULT_ID_COL),
            date=values.pop("date_col", DEFAULT_DATE_COL),
            lat=values.pop("lat_col", DEFAULT_LAT_COL),
            lon=values.pop("lon_col", DEFAULT_LON_COL),
        )
        values.setdefault("project_dir", ".")
        return cls(columns=columns, **values)

    @property
    def input_path(self) -> Path:
        return self.project_dir / self.input_csv

    @property
    def clean_path(self) -> Path:
        return self.project_dir / clean_file_name(self.input_path)

    @property
    def biodiv_dir(self) -> Path:
        return self.project_dir / BIODIV_DIR_NAME

    @property
    def datasets_dir(self) -> Path:
        return self.biodiv_dir / DATASETS_DIR_NAME

    @property
    def results_dir(self) -> Path:
        return self.biodiv_dir / RESULTS_DIR_NAME

    @property
    def sat_dir(self) -> Path:
        return self.project_dir / SAT_DIR_NAME


_OPTION_NAMES = {
    "project_dir",
    "input_csv",
    "id_col",
    "date_col",
    "lat_col",
    "lon_col",
    "date_format",
    "dataset_id",
    "var_id",
    "var_source",
    "geo_buffer_km",
    "time_buffer",
    "skip_clean",
    "clean_only",
    "skip_stats",
}

_BOOL_OPTIONS = ("skip_clean", "clean_only", "skip_stats")


def _read_env():
    """Collect raw option values from the process environment."""
    values = {name: os.getenv(f"{ENV_PREFIX}{name.upper()}") for name in _OPTION_NAMES}
    for name in _BOOL_OPTIONS:
        if values[name] is not None:
            values[name] = _parse_bool(values[name], name)
    return values


def _parse_bool(raw_value: str, name: str) -> bool:
    lowered = raw_value.strip().lower()
    if lowered in ("1", "true", "yes", "y", "on"):
        return True
    if lowered in ("0", "false", "no", "n", "off", ""):
        return False
    raise ConfigError(
        f"Invalid {ENV_PREFIX}{name.upper()} value: expected a boolean, got '{raw_value}'."
    )


def _parse_int(raw_value: Any, name: str) -> int:
    """Parse an integer option.

    Args:
        raw_value: Int or numeric string.
        name: Option name for the error message.

    Returns:
        Parsed integer.

    Raises:
        ConfigError: If the value is not a whole number.
    """
    if isinstance(raw_value, bool):
        raise ConfigError(f"Invalid {name} value: expected integer, got {raw_value!r}.")
    if isinstance(raw_value, int):
        return raw_value
    if isinstance(raw_value, float) and raw_value.is_integer():
        return int(raw_value)
    try:
        return int(str(raw_value).strip())
    except ValueError as error:
        raise ConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'."
        ) from error


def _parse_time_buffer(raw_value: Any) -> tuple[int, int]:
    """Parse ``(start, end)`` from a pair or a ``"start,end"`` string."""
    if isinstance(raw_value, str):
        parts = [part for part in raw_value.replace(" ", "").split(",") if part]
    else:
        parts = list(raw_value)
    if len(parts) != 2:
        raise ConfigError(
            f"Invalid time_buffer value: expected two day offsets (start, end), got {raw_value!r}."
        )
    start = _parse_int(parts[0], "time_buffer start")
    end = _parse_int(parts[1], "time_buffer end")
    return (start, end)


def _validate(config: PipelineConfig) -> None:
    dataset_id = config.dataset_id.strip()
    if not dataset_id:
        raise ConfigError("dataset_id must not be empty.")
    if dataset_id.lower().endswith(".csv"):
        raise ConfigError(
            f"dataset_id '{config.dataset_id}' ends with '.csv'. "
            "Use a short name without extension, e.g. 'shark_bay_clean'."
        )
    if not config.var_id.strip():
        raise ConfigError("var_id must not be empty.")
    if config.geo_buffer_km < 0:
        raise ConfigError(f"geo_buffer_km must be >= 0, got {config.geo_buffer_km}.")
    start, end = config.time_buffer
    if start > end:
        raise ConfigError(
            f"time_buffer start ({start}) is after end ({end}). "
            "Give the window as (start, end), e.g. (-30, 0)."
        )
    if config.skip_clean and config.clean_only:
        raise ConfigError("skip_clean and clean_only cannot both be set.")


def print_config(config, logger=None):
    """Emit the resolved configuration (credentials are never part of it)."""
    lines = [
        "=" * 80,
        "PIPELINE CONFIGURATION",
        "=" * 80,
        f"PROJECT DIR: {config.project_dir}",
        f"INPUT CSV: {config.input_path}",
        f"CLEAN CSV: {config.clean_path}" + ("  (skipped)" if config.skip_clean else ""),
        f"COLUMNS: id={config.columns.id} date={config.columns.date} "
        f"lat={config.columns.lat} lon={config.columns.lon}",
        f"DATE FORMAT: {config.date_format}",
        f"DATASET ID: {config.dataset_id}",
        f"VARIABLE: {config.var_id} ({config.var_source})",
        f"BUFFERS: {config.geo_buffer_km} km, days {config.time_buffer}",
        "=" * 80,
    ]
    for line in lines:
        if logger is None:
            print(line)
        else:
            logger.info(line)
