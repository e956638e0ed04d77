"""Shared fixtures: sample occurrence CSVs and a fake geoenrich."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pandas as pd
import pytest

from occurrence_enrichment.config import PipelineConfig

SAMPLE_CSV = (
    "Sample_ID,Date,Lat,Long,Species\n"
    "S1,19/4/2012,-25.5,113.4,Carcharodon carcharias\n"
    "S2, 20/4/2012 ,N/A,113.5,Tursiops aduncus\n"
    "S3,21/4/2012, -25.7 ,113.6,Chelonia mydas\n"
)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project directory holding points.csv."""
    (tmp_path / "points.csv").write_text(SAMPLE_CSV, encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_config(project_dir: Path):
    """Build a PipelineConfig rooted at the sample project."""

    def _make(**overrides) -> PipelineConfig:
        values = {"project_dir": project_dir, "input_csv": "points.csv"}
        values.update(overrides)
        return PipelineConfig(**values)

    return _make


class FakeGeoenrich:
    """Records calls made to a stand-in for the geoenrich modules.

    Attributes:
        calls: (name, args, kwargs) in call order.
        modules: Dotted module name to namespace object.
    """

    def __init__(self, create_in: str = "enrichment", stats_in: str | None = "exports") -> None:
        self.calls: list[tuple[str, tuple, dict]] = []
        dataloader = SimpleNamespace(import_occurrences_csv=self._recorder("import_occurrences_csv", self._load))
        enrichment = SimpleNamespace(enrich=self._recorder("enrich"))
        exports = SimpleNamespace()
        targets = {"enrichment": enrichment, "exports": exports}
        setattr(targets[create_in], "create_enrichment_file", self._recorder("create_enrichment_file"))
        if stats_in is not None:
            setattr(targets[stats_in], "produce_stats", self._recorder("produce_stats"))
        self.modules = {
            "geoenrich.dataloader": dataloader,
            "geoenrich.enrichment": enrichment,
            "geoenrich.exports": exports,
        }

    def __call__(self, name: str):
        if name not in self.modules:
            raise ModuleNotFoundError(f"No module named '{name}'", name=name)
        return self.modules[name]

    def names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    def _recorder(self, name, result_fn=None):
        def _call(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if result_fn is not None:
                return result_fn(*args, **kwargs)
            return None

        return _call

    @staticmethod
    def _load(path, **kwargs):
        return pd.read_csv(path)


@pytest.fixture
def fake_geoenrich() -> FakeGeoenrich:
    return FakeGeoenrich()
