"""Unit tests for tabular I/O and the output folder layout."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from occurrence_enrichment.errors import MissingInputError, PipelineError
from occurrence_enrichment.io import (
    clean_output_path,
    ensure_layout,
    list_outputs,
    load_occurrences_csv,
    save_csv,
)


def test_load_raises_for_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "nope.csv"

    with pytest.raises(MissingInputError):
        load_occurrences_csv(missing)

    assert missing.exists() is False


def test_load_reads_na_tokens_as_missing(tmp_path: Path) -> None:
    """Empty, single space, '-', 'NA' and 'N/A' should all read as missing."""
    path = tmp_path / "na.csv"
    path.write_text("id,lat\n1,\n2, \n3,-\n4,NA\n5,N/A\n6,12.5\n", encoding="utf-8")

    df = load_occurrences_csv(path)

    assert df["lat"].isna().tolist() == [True, True, True, True, True, False]
    assert df.loc[5, "lat"] == "12.5"


def test_clean_output_path_uses_stem_and_suffix(tmp_path: Path) -> None:
    assert clean_output_path(tmp_path / "points.csv") == tmp_path / "points_clean.csv"
    assert clean_output_path("in/points.csv", tmp_path) == tmp_path / "points_clean.csv"


def test_save_csv_preserves_columns_and_order(tmp_path: Path) -> None:
    df = pd.DataFrame({"b": [1, 2], "a": ["x", "y"], "extra": [None, "z"]})

    out = save_csv(df, tmp_path / "out.csv")

    assert out.read_text(encoding="utf-8").splitlines()[0] == "b,a,extra"
    assert [p.name for p in tmp_path.iterdir()] == ["out.csv"]


def test_save_csv_refuses_protected_path(tmp_path: Path) -> None:
    source = tmp_path / "points.csv"
    source.write_text("a\n1\n", encoding="utf-8")

    with pytest.raises(PipelineError):
        save_csv(pd.DataFrame({"a": [2]}), source, protect=(source,))

    assert source.read_text(encoding="utf-8") == "a\n1\n"


def test_ensure_layout_is_idempotent(tmp_path: Path) -> None:
    """Layout creation should not fail or delete anything on a second run."""
    ensure_layout(tmp_path)
    marker = tmp_path / "biodiv" / "datasets" / "keep.txt"
    marker.write_text("x", encoding="utf-8")

    folders = ensure_layout(tmp_path)

    for relative in ("biodiv", "biodiv/datasets", "biodiv/results", "sat"):
        assert (tmp_path / relative).is_dir()
    assert len(folders) == 4
    assert marker.exists()


def test_list_outputs_lists_biodiv_and_sat_files(tmp_path: Path) -> None:
    ensure_layout(tmp_path)
    (tmp_path / "biodiv" / "results" / "ds_chl.csv").write_text("x", encoding="utf-8")
    (tmp_path / "sat" / "chl.nc").write_text("x", encoding="utf-8")
    (tmp_path / "elsewhere.txt").write_text("x", encoding="utf-8")

    assert list_outputs(tmp_path) == ["biodiv/results/ds_chl.csv", "sat/chl.nc"]
