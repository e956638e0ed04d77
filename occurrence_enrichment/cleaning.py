"""
Cleaning module: column validation, coordinate/date normalization and row filtering
for occurrence tables.
"""

import re
import warnings
from dataclasses import dataclass

import numpy as np
import pandas as pd

from . import config
from .errors import RowDroppedWarning, SchemaError

# First signed decimal number in a string, optional exponent
_NUMBER_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass(frozen=True)
class CleaningSummary:
    """Row counts of one cleaning pass (rows_out + rows_dropped == rows_in)."""

    rows_in: int
    rows_out: int

    @property
    def rows_dropped(self) -> int:
        return self.rows_in - self.rows_out

    @classmethod
    def from_frames(cls, df_in: pd.DataFrame, df_out: pd.DataFrame) -> "CleaningSummary":
        return cls(rows_in=len(df_in), rows_out=len(df_out))


def validate_columns(df, required):
    """
    Check that every required column is present.

    Args:
        df: Loaded occurrence DataFrame
        required: Column names that must exist

    Returns:
        The same DataFrame, unchanged

    Raises:
        SchemaError: Listing every missing column, not just the first.
    """
    present = set(df.columns)
    missing = [col for col in required if col not in present]
    if missing:
        raise SchemaError(missing, present=list(df.columns))
    return df


def parse_coordinate_series(s: pd.Series) -> pd.Series:
    """
    Parse coordinate values that may carry stray formatting characters.

    Grouping commas are dropped and the first number found in the text is
    kept, so ' 45.2 ', '45.2°N' and '"45.2"' all give 45.2. Values without
    any number ('abc', '-') become NaN instead of raising.

    Args:
        s: pd.Series of raw coordinate values (text or numeric)

    Returns:
        pd.Series of float values (NaN for unparseable)
    """
    def parse_single(val):
        if val is None or (not isinstance(val, str) and pd.isna(val)):
            return np.nan
        if isinstance(val, (int, float, np.integer, np.floating)) and not isinstance(val, bool):
            return float(val)

        val_str = str(val).strip().replace(',', '')
        match = _NUMBER_PATTERN.search(val_str)
        if match is None:
            return np.nan

        try:
            return float(match.group(0))
        except ValueError:
            return np.nan

    return s.apply(parse_single).astype('float64')


def _trim_date(val):
    if val is None or (not isinstance(val, str) and pd.isna(val)):
        return val
    return str(val).strip()


def normalize_records(df, columns):
    """
    Coerce coordinates to numbers and trim the date column.

    Dates are kept as text; geoenrich parses them with the configured
    date format.

    Args:
        df: Validated occurrence DataFrame (not modified)
        columns: config.ColumnBindings

    Returns:
        New DataFrame with float lat/lon and trimmed date strings
    """
    df_norm = df.copy()
    df_norm[columns.lat] = parse_coordinate_series(df_norm[columns.lat])
    df_norm[columns.lon] = parse_coordinate_series(df_norm[columns.lon])
    df_norm[columns.date] = df_norm[columns.date].map(_trim_date).astype('object')
    return df_norm


def filter_valid_coordinates(df, columns):
    """
    Keep rows with present, in-range latitude and longitude.

    Dropped rows are not reported one by one; a single RowDroppedWarning
    carries the count.

    Args:
        df: Normalized occurrence DataFrame
        columns: config.ColumnBindings

    Returns:
        Filtered DataFrame (original row order, index reset)
    """
    lat = df[columns.lat]
    lon = df[columns.lon]
    mask = (
        lat.notna() & lon.notna()
        & (lat >= config.LAT_MIN) & (lat <= config.LAT_MAX)
        & (lon >= config.LON_MIN) & (lon <= config.LON_MAX)
    )
    dropped = int((~mask).sum())
    if dropped > 0:
        warnings.warn(
            f"Dropped {dropped} of {len(df)} rows with missing or out-of-range coordinates",
            RowDroppedWarning,
            stacklevel=2,
        )
    return df[mask].reset_index(drop=True)


def clean_occurrences(df_raw, columns):
    """
    Validate, normalize and filter an occurrence table.

    Args:
        df_raw: Raw occurrence DataFrame as loaded from CSV
        columns: config.ColumnBindings

    Returns:
        Cleaned DataFrame and log info
    """
    log = []

    # 1. Required columns (fail fast)
    validate_columns(df_raw, columns.required())
    log.append(f"✓ Required columns present: {', '.join(columns.required())}")

    # 2. Coordinates to numbers, dates trimmed
    df_clean = normalize_records(df_raw, columns)
    unparsed_lat = int((df_clean[columns.lat].isna() & df_raw[columns.lat].notna()).sum())
    unparsed_lon = int((df_clean[columns.lon].isna() & df_raw[columns.lon].notna()).sum())
    if unparsed_lat or unparsed_lon:
        log.append(
            f"⚠️  Unparseable coordinates set to missing "
            f"({columns.lat}: {unparsed_lat}, {columns.lon}: {unparsed_lon})"
        )
    log.append(f"✓ {columns.lat}/{columns.lon} coerced to numeric, {columns.date} trimmed")

    # 3. Drop rows without valid coordinates
    df_clean = filter_valid_coordinates(df_clean, columns)
    summary = CleaningSummary.from_frames(df_raw, df_clean)
    if summary.rows_dropped > 0:
        log.append(f"⚠️  Removed {summary.rows_dropped} rows with missing or out-of-range coordinates")

    # 4. Final shape
    log.append(f"✓ Occurrence cleaning complete: {summary.rows_in} → {summary.rows_out} rows")

    return df_clean, log
