"""
Pipeline module: clean the occurrence CSV, then load, authenticate, enrich and export.

Validation runs before anything is written and before geoenrich or
Copernicus Marine are touched. Every step after cleaning is a pass-through
to the external library.
"""

from __future__ import annotations

import importlib
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from . import enrichment, io, qc, spatial
from .cleaning import CleaningSummary, clean_occurrences, validate_columns
from .credentials import CopernicusCredentials, copernicus_login, scoped_credentials
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one run.

    Attributes:
        clean_path: Cleaned CSV, or None with skip_clean.
        summary: Row counts of the cleaning pass, or None with skip_clean.
        dataset_rows: Rows loaded by geoenrich, or None with clean_only.
        authenticated: Whether a Copernicus login call succeeded.
        stats_exported: Whether summary statistics were written.
        outputs: Files found under biodiv/ and sat/ at the end of the run.
    """

    clean_path: Path | None
    summary: CleaningSummary | None
    dataset_rows: int | None = None
    authenticated: bool = False
    stats_exported: bool = False
    outputs: tuple[str, ...] = ()


@contextmanager
def working_directory(path: Path):
    """Run a block with ``path`` as cwd; geoenrich resolves biodiv/ and sat/ from it."""
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def clean_input(config, df_raw=None) -> tuple[Path, CleaningSummary]:
    """Validate, clean and write ``<stem>_clean<ext>``; the input is never modified.

    Args:
        config: PipelineConfig
        df_raw: Already loaded input table (read from config.input_path if None)

    Returns:
        Cleaned file path and row counts.
    """
    if df_raw is None:
        df_raw = io.load_occurrences_csv(config.input_path)
    df_clean, log = clean_occurrences(df_raw, config.columns)
    for line in log:
        logger.info(line)

    summary = CleaningSummary.from_frames(df_raw, df_clean)
    gdf, geo_log = spatial.occurrences_to_geodataframe(df_clean, config.columns)
    for line in geo_log:
        logger.info(line)
    checks = [
        ("Coordinate range", qc.check_coordinate_range, {"df": df_clean, "columns": config.columns}),
        ("Dates trimmed", qc.check_dates_trimmed, {"df": df_clean, "columns": config.columns}),
        ("Row conservation", qc.check_row_conservation, {"summary": summary}),
        ("Identifiers", qc.check_unique_ids, {"df": df_clean, "columns": config.columns}),
        ("Geometry validity", qc.check_geometry_validity, {"gdf": gdf}),
        ("CRS", qc.check_crs, {"gdf": gdf}),
    ]
    qc.run_qc_report(checks, logger)

    clean_path = io.save_csv(df_clean, config.clean_path, protect=(config.input_path,))
    logger.info(
        "clean_file_written",
        path=str(clean_path),
        rows=summary.rows_out,
        dropped=summary.rows_dropped,
        size_mb=round(io.file_size_mb(clean_path), 3),
    )
    logger.info("occurrence_extent", **spatial.occurrence_extent(df_clean, config.columns))
    return clean_path, summary


def run_pipeline(
    config,
    credentials: CopernicusCredentials | None = None,
    importer: Callable[[str], Any] = importlib.import_module,
    login: Callable[..., Any] | None = None,
) -> PipelineResult:
    """
    Run every step of the occurrence enrichment for one dataset.

    Args:
        config: PipelineConfig
        credentials: Copernicus Marine credentials, cleared once login is done
        importer: Module import function used for geoenrich
        login: Login function, defaults to copernicusmarine.login

    Returns:
        PipelineResult

    Raises:
        MissingInputError: Input CSV absent.
        SchemaError: Required columns absent (nothing has been written yet).
        CapabilityNotFoundError: No create_enrichment_file() in geoenrich.
    """
    if credentials is None:
        credentials = CopernicusCredentials()

    with scoped_credentials(credentials):
        # 1-2. Input and schema checks before any write or external call
        if config.skip_clean:
            df_raw = io.load_occurrences_csv(config.input_path, nrows=0)
        else:
            df_raw = io.load_occurrences_csv(config.input_path)
        validate_columns(df_raw, config.columns.required())

        # 3. Output folders
        io.ensure_layout(config.project_dir)

        # 4. Clean
        if config.skip_clean:
            clean_path, summary = None, None
            source_path = config.input_path
            logger.info("cleaning_skipped", path=str(source_path))
        else:
            clean_path, summary = clean_input(config, df_raw)
            source_path = clean_path

        # 5. Clean-only runs stop before geoenrich
        if config.clean_only:
            return PipelineResult(
                clean_path=clean_path,
                summary=summary,
                outputs=tuple(io.list_outputs(config.project_dir)),
            )

        with working_directory(config.project_dir):
            # 6. geoenrich dataset and enrichment file
            dataset = enrichment.load_dataset(config, source_path, importer)
            if summary is not None:
                logger.info(qc.check_loaded_rows(dataset, summary.rows_out))
            enrichment.create_enrichment_file(dataset, config, importer)

            # 7. Copernicus Marine login (one time, cached by the client)
            authenticated = copernicus_login(credentials, login=login)

            # 8. Enrich
            enrichment.enrich_variable(config, importer)

            # 9. Summary statistics (optional capability)
            stats_exported = False
            if config.skip_stats:
                logger.info("produce_stats_disabled")
            else:
                stats_exported = enrichment.produce_stats(config, config.project_dir, importer)

        # 10. Outputs
        outputs = tuple(io.list_outputs(config.project_dir))
        logger.info("outputs", files=list(outputs))

    return PipelineResult(
        clean_path=clean_path,
        summary=summary,
        dataset_rows=len(dataset),
        authenticated=authenticated,
        stats_exported=stats_exported,
        outputs=outputs,
    )
