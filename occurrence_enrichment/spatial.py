"""
Spatial module: Point geometries and extent of cleaned occurrence records.
"""

import geopandas as gpd

from . import config


def occurrences_to_geodataframe(df_occurrences, columns):
    """
    Convert cleaned occurrences with numeric lat/lon to a GeoDataFrame.

    Args:
        df_occurrences: Cleaned DataFrame (float lat/lon, no missing values)
        columns: config.ColumnBindings

    Returns:
        GeoDataFrame with Point geometries in EPSG:4326 and log info
    """
    log = []

    if columns.lat not in df_occurrences.columns or columns.lon not in df_occurrences.columns:
        raise ValueError(f"'{columns.lat}' and '{columns.lon}' columns required")

    gdf = gpd.GeoDataFrame(
        df_occurrences.copy(),
        geometry=gpd.points_from_xy(df_occurrences[columns.lon], df_occurrences[columns.lat]),
        crs=config.CRS_WEB,
    )

    log.append(f"✓ Created Point geometries for {len(gdf)} occurrences (CRS: {config.CRS_WEB})")

    return gdf, log


def occurrence_extent(df_occurrences, columns):
    """
    Bounding box and date span of the records about to be enriched.

    Dates are reported as text (first and last in file order) because
    they are only parsed by geoenrich.

    Returns:
        dict with lat/lon bounds, first/last date text and row count
    """
    if df_occurrences.empty:
        return {"rows": 0}

    dates = df_occurrences[columns.date].dropna().astype(str)
    dates = dates[dates != ""]
    return {
        "rows": int(len(df_occurrences)),
        "lat_min": float(df_occurrences[columns.lat].min()),
        "lat_max": float(df_occurrences[columns.lat].max()),
        "lon_min": float(df_occurrences[columns.lon].min()),
        "lon_max": float(df_occurrences[columns.lon].max()),
        "dates": int(dates.nunique()),
        "date_first": dates.iloc[0] if len(dates) else None,
        "date_last": dates.iloc[-1] if len(dates) else None,
    }
