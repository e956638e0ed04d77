"""Unit tests for run configuration."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from occurrence_enrichment.config import ColumnBindings, PipelineConfig, clean_file_name
from occurrence_enrichment.errors import ConfigError


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Config should resolve options from OCCENRICH_* variables."""
    monkeypatch.setenv("OCCENRICH_PROJECT_DIR", str(tmp_path))
    monkeypatch.setenv("OCCENRICH_INPUT_CSV", "points.csv")
    monkeypatch.setenv("OCCENRICH_LAT_COL", "latitude")
    monkeypatch.setenv("OCCENRICH_TIME_BUFFER", "-10, 5")
    monkeypatch.setenv("OCCENRICH_CLEAN_ONLY", "yes")

    config = PipelineConfig.from_env()

    assert config.project_dir == tmp_path.resolve()
    assert config.columns.lat == "latitude"
    assert config.time_buffer == (-10, 5)
    assert config.clean_only is True


def test_from_env_overrides_win_over_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Explicit overrides should replace environment values; None should not."""
    monkeypatch.setenv("OCCENRICH_INPUT_CSV", "env.csv")
    monkeypatch.setenv("OCCENRICH_VAR_ID", "sst")

    config = PipelineConfig.from_env(project_dir=tmp_path, input_csv="cli.csv", var_id=None)

    assert config.input_csv == "cli.csv"
    assert config.var_id == "sst"


def test_from_env_requires_input(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail when no input CSV is configured."""
    monkeypatch.delenv("OCCENRICH_INPUT_CSV", raising=False)

    with pytest.raises(ConfigError, match="input"):
        PipelineConfig.from_env()


def test_defaults_match_documented_values(tmp_path: Path) -> None:
    config = PipelineConfig(project_dir=tmp_path, input_csv="points.csv")

    assert config.columns.required() == ("Sample_ID", "Date", "Lat", "Long")
    assert config.date_format == "%d/%m/%Y"
    assert config.geo_buffer_km == 2
    assert config.time_buffer == (-30, 0)


def test_config_is_immutable(tmp_path: Path) -> None:
    """Config should not be mutable mid-run."""
    config = PipelineConfig(project_dir=tmp_path, input_csv="points.csv")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.dataset_id = "other"  # type: ignore[misc]


def test_derived_paths(tmp_path: Path) -> None:
    config = PipelineConfig(project_dir=tmp_path, input_csv="points.csv")

    assert config.input_path == tmp_path.resolve() / "points.csv"
    assert config.clean_path == tmp_path.resolve() / "points_clean.csv"
    assert config.datasets_dir == tmp_path.resolve() / "biodiv" / "datasets"
    assert config.results_dir == tmp_path.resolve() / "biodiv" / "results"
    assert config.sat_dir == tmp_path.resolve() / "sat"


def test_clean_file_name_appends_suffix() -> None:
    assert clean_file_name("points.csv") == "points_clean.csv"
    assert clean_file_name("/data/shark.bay.tsv") == "shark.bay_clean.tsv"


@pytest.mark.parametrize(
    "overrides",
    [
        {"dataset_id": "my_dataset.csv"},
        {"dataset_id": "  "},
        {"geo_buffer_km": "two"},
        {"geo_buffer_km": -1},
        {"time_buffer": (0, -30)},
        {"time_buffer": (1, 2, 3)},
        {"skip_clean": True, "clean_only": True},
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, overrides: dict) -> None:
    with pytest.raises(ConfigError):
        PipelineConfig(project_dir=tmp_path, input_csv="points.csv", **overrides)


def test_column_bindings_reject_duplicates_and_blanks() -> None:
    with pytest.raises(ConfigError):
        ColumnBindings(id="id", date="date", lat="coord", lon="coord")
    with pytest.raises(ConfigError):
        ColumnBindings(id="", date="date", lat="lat", lon="lon")
