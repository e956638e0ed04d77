"""
Enrichment module: thin adapters over geoenrich's loader, enrichment and export functions.

Nothing here retries or wraps geoenrich errors; they propagate as raised.
"""

import importlib

from .capabilities import ENRICHMENT_FILE_PROBES, PRODUCE_STATS_PROBES, resolve_capability
from .errors import CapabilityNotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)


def load_dataset(config, csv_path, importer=importlib.import_module):
    """
    Load an occurrence CSV into a geoenrich dataset.

    Args:
        config: PipelineConfig (column bindings and date format)
        csv_path: Cleaned (or raw, with skip_clean) CSV path
        importer: Module import function

    Returns:
        geoenrich dataset (GeoDataFrame)
    """
    dataloader = importer("geoenrich.dataloader")
    dataset = dataloader.import_occurrences_csv(
        path=str(csv_path),
        id_col=config.columns.id,
        date_col=config.columns.date,
        lat_col=config.columns.lat,
        lon_col=config.columns.lon,
        date_format=config.date_format,
    )
    logger.info("dataset_loaded", path=str(csv_path), rows=len(dataset))
    return dataset


def create_enrichment_file(dataset, config, importer=importlib.import_module):
    """Create the on-disk enrichment file for ``config.dataset_id``."""
    create = resolve_capability("create_enrichment_file", ENRICHMENT_FILE_PROBES, importer)
    create(dataset, config.dataset_id)
    logger.info("enrichment_file_prepared", dataset_id=config.dataset_id)


def enrich_variable(config, importer=importlib.import_module):
    """
    Enrich every record with ``config.var_id`` over the spatial/temporal buffers.

    The temporal window is passed as an integer tuple ``(start, end)`` of day
    offsets relative to each record's own date.
    """
    enrichment = importer("geoenrich.enrichment")
    time_tuple = (int(config.time_buffer[0]), int(config.time_buffer[1]))
    logger.info(
        "enrichment_start",
        var_id=config.var_id,
        source=config.var_source,
        geo_buffer_km=config.geo_buffer_km,
        time_buffer=time_tuple,
    )
    enrichment.enrich(config.dataset_id, config.var_id, int(config.geo_buffer_km), time_tuple)
    logger.info("enrichment_done", dataset_id=config.dataset_id, var_id=config.var_id)


def produce_stats(config, out_path, importer=importlib.import_module):
    """
    Export summary statistics for the enriched variable, if geoenrich supports it.

    Returns:
        True when stats were produced, False when the capability is absent
    """
    try:
        produce = resolve_capability("produce_stats", PRODUCE_STATS_PROBES, importer)
    except CapabilityNotFoundError as error:
        logger.warning("produce_stats_skipped", reason=str(error))
        return False
    # geoenrich joins out_path and file names by string concatenation
    out_dir = str(out_path).rstrip("/") + "/"
    produce(config.dataset_id, config.var_id, out_path=out_dir)
    logger.info("stats_exported", dataset_id=config.dataset_id, var_id=config.var_id, out_path=out_dir)
    return True
