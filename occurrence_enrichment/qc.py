"""
Quality Control (QC) module: Assertions and data quality checks on cleaned occurrences.
"""

from . import config


def check_coordinate_range(df, columns):
    """Assert every coordinate is present and inside geographic bounds."""
    lat = df[columns.lat]
    lon = df[columns.lon]
    assert lat.notna().all() and lon.notna().all(), "Found missing coordinates!"
    assert lat.between(config.LAT_MIN, config.LAT_MAX).all(), f"{columns.lat} out of [-90, 90]!"
    assert lon.between(config.LON_MIN, config.LON_MAX).all(), f"{columns.lon} out of [-180, 180]!"
    return f"✓ All {len(df)} coordinates in range"


def check_dates_trimmed(df, columns):
    """Assert date values carry no leading/trailing whitespace."""
    dates = df[columns.date].dropna().astype(str)
    untrimmed = int((dates != dates.str.strip()).sum())
    assert untrimmed == 0, f"{untrimmed} untrimmed values in {columns.date}"
    missing = int(df[columns.date].isna().sum())
    if missing > 0:
        return f"⚠️  {missing} missing dates in {columns.date} (geoenrich may reject them)"
    return f"✓ {columns.date} values trimmed"


def check_row_conservation(summary):
    """Assert rows_out + rows_dropped == rows_in."""
    assert summary.rows_out + summary.rows_dropped == summary.rows_in, (
        f"Row count mismatch: {summary.rows_out} kept + {summary.rows_dropped} dropped "
        f"!= {summary.rows_in} read"
    )
    return f"✓ Rows: {summary.rows_in} read, {summary.rows_dropped} dropped, {summary.rows_out} kept"


def check_unique_ids(df, columns):
    """Report duplicated or missing identifiers (informational, ids are not validated)."""
    duplicated = int(df[columns.id].duplicated().sum())
    missing = int(df[columns.id].isna().sum())
    if duplicated > 0 or missing > 0:
        return f"⚠️  {columns.id}: {duplicated} duplicated, {missing} missing"
    return f"✓ {columns.id} is unique (n={len(df)})"


def check_geometry_validity(gdf):
    """Assert all geometries are valid."""
    assert (~gdf.geometry.is_valid).sum() == 0, "Found invalid geometries!"
    assert gdf.geometry.is_empty.sum() == 0, "Found empty geometries!"
    return f"✓ All {len(gdf)} geometries are valid"


def check_crs(gdf, expected_crs=config.CRS_WEB):
    """Assert CRS matches expected."""
    assert gdf.crs == expected_crs, f"CRS mismatch: {gdf.crs} != {expected_crs}"
    return f"✓ CRS is {expected_crs}"


def check_loaded_rows(dataset, expected):
    """Compare rows kept by the geoenrich loader with rows written."""
    loaded = len(dataset)
    if loaded != expected:
        return f"⚠️  geoenrich loaded {loaded} of {expected} rows (check dates against the date format)"
    return f"✓ geoenrich loaded all {loaded} rows"


def run_qc_report(checks, logger):
    """
    Log a QC report; failed checks are reported, never raised.

    Args:
        checks: List of (name, check_func, kwargs) tuples
        logger: structlog logger

    Returns:
        Number of failed checks
    """
    failures = 0
    logger.info("qc_report_start", checks=len(checks))

    for name, check_func, kwargs in checks:
        try:
            result = check_func(**kwargs)
            logger.info("qc_check", check=name, result=result)
        except AssertionError as e:
            failures += 1
            logger.error("qc_check_failed", check=name, error=str(e))

    logger.info("qc_report_done", failures=failures)
    return failures
