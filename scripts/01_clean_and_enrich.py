#!/usr/bin/env python
"""
01_clean_and_enrich.py
- Clean the occurrence CSV (coords & dates) into <name>_clean.csv
- Create the geoenrich dataset and enrichment file
- Log in to Copernicus Marine (one-time, credentials from environment)
- Enrich one variable and export summary statistics

Usage:
    COPERNICUSMARINE_SERVICE_USERNAME=... COPERNICUSMARINE_SERVICE_PASSWORD=... \
    python scripts/01_clean_and_enrich.py --project-dir ~/shark_bay --input points.csv \
        --dataset-id shark_bay_clean --var-id chlorophyll --geo-buffer 2 --time-buffer -30 0
"""

import sys
from pathlib import Path

# ensure repo root on path for package imports when running as script
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from occurrence_enrichment.cli import main

if __name__ == "__main__":
    sys.exit(main())
