"""
Occurrence Enrichment Pipeline
Package for cleaning biological occurrence CSVs and enriching them with
Copernicus Marine environmental variables through geoenrich.
"""

__version__ = "1.0.0"

# Lazy imports: geoenrich and copernicusmarine are only imported when the
# enrichment steps actually run

__all__ = [
    "capabilities",
    "cleaning",
    "cli",
    "config",
    "credentials",
    "enrichment",
    "errors",
    "io",
    "logging_config",
    "pipeline",
    "qc",
    "spatial",
]
