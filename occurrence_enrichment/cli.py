"""Command line entry point for the occurrence enrichment pipeline.

Every configuration option has a flag; unset flags fall back to the
``OCCENRICH_*`` environment variables and then to defaults. Credentials are
read from the Copernicus Marine environment variables only.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from . import config as config_module
from .config import PipelineConfig, print_config
from .credentials import CopernicusCredentials
from .errors import PipelineError
from .logging_config import configure_logging, get_logger
from .pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="occurrence-enrich",
        description="Clean an occurrence CSV and enrich it with geoenrich / Copernicus Marine",
    )
    paths = parser.add_argument_group("paths")
    paths.add_argument("--project-dir", help="Working directory for all relative paths")
    paths.add_argument("--input", dest="input_csv", help="Source CSV name (relative to --project-dir)")

    columns = parser.add_argument_group("columns (match exactly, incl. spaces/case)")
    columns.add_argument("--id-col", help=f"Identifier column (default: {config_module.DEFAULT_ID_COL})")
    columns.add_argument("--date-col", help=f"Date column (default: {config_module.DEFAULT_DATE_COL})")
    columns.add_argument("--lat-col", help=f"Latitude column (default: {config_module.DEFAULT_LAT_COL})")
    columns.add_argument("--lon-col", help=f"Longitude column (default: {config_module.DEFAULT_LON_COL})")
    columns.add_argument(
        "--date-format",
        help=f"Date format of the date column, e.g. %%Y-%%m-%%d (default: {config_module.DEFAULT_DATE_FORMAT.replace('%', '%%')})",
    )

    enrich = parser.add_argument_group("enrichment")
    enrich.add_argument("--dataset-id", help="Dataset id, no '.csv' (namespaces files under ./biodiv/)")
    enrich.add_argument("--var-id", help=f"Variable to enrich (default: {config_module.DEFAULT_VAR_ID})")
    enrich.add_argument("--var-source", help="Informational source label of the variable")
    enrich.add_argument("--geo-buffer", dest="geo_buffer_km", type=int, help="Spatial buffer in km")
    enrich.add_argument(
        "--time-buffer",
        nargs=2,
        type=int,
        metavar=("START", "END"),
        help="Temporal buffer in days relative to each record date, e.g. -30 0",
    )

    steps = parser.add_argument_group("steps")
    steps.add_argument("--skip-clean", action="store_true", default=None, help="Load the input CSV as-is")
    steps.add_argument("--clean-only", action="store_true", default=None, help="Stop after writing the cleaned CSV")
    steps.add_argument("--skip-stats", action="store_true", default=None, help="Do not export summary statistics")

    parser.add_argument("--log-level", default=config_module.LOG_LEVEL, help="DEBUG, INFO, WARNING, ERROR")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logger = get_logger(__name__)

    overrides = vars(args).copy()
    overrides.pop("log_level")
    if overrides["time_buffer"] is not None:
        overrides["time_buffer"] = tuple(overrides["time_buffer"])

    try:
        config = PipelineConfig.from_env(**overrides)
        print_config(config, logger)
        result = run_pipeline(config, CopernicusCredentials.from_env())
    except PipelineError as error:
        logger.error("pipeline_failed", error_type=type(error).__name__, error=str(error))
        print(f"error: {error}", file=sys.stderr)
        return 1

    if result.summary is not None:
        logger.info(
            "run_complete",
            clean_file=str(result.clean_path),
            rows=result.summary.rows_out,
            dropped=result.summary.rows_dropped,
        )
    else:
        logger.info("run_complete", dataset_rows=result.dataset_rows)
    return 0
