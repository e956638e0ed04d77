"""Module entry point for ``python -m occurrence_enrichment``."""

from __future__ import annotations

from occurrence_enrichment.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
