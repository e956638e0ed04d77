"""Versioned entry-point negotiation for geoenrich.

geoenrich moved some functions between its ``enrichment`` and ``exports``
modules across releases. Each capability is described by an ordered tuple of
probes; the first probe that resolves to a callable wins.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from .errors import CapabilityNotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)

Importer = Callable[[str], Any]


@dataclass(frozen=True)
class CapabilityProbe:
    """One known location of an external function.

    Attributes:
        module: Dotted module path.
        attribute: Function name inside the module.
    """

    module: str
    attribute: str

    @property
    def location(self) -> str:
        return f"{self.module}.{self.attribute}"


ENRICHMENT_FILE_PROBES = (
    CapabilityProbe("geoenrich.enrichment", "create_enrichment_file"),
    CapabilityProbe("geoenrich.exports", "create_enrichment_file"),
)

PRODUCE_STATS_PROBES = (
    CapabilityProbe("geoenrich.exports", "produce_stats"),
    CapabilityProbe("geoenrich.enrichment", "produce_stats"),
)


def resolve_capability(
    name: str,
    probes: Sequence[CapabilityProbe],
    importer: Importer = importlib.import_module,
) -> Callable[..., Any]:
    """Return the first callable found among ordered probes.

    Args:
        name: Logical capability name, used in errors and logs.
        probes: Ordered candidate locations.
        importer: Module import function.

    Returns:
        The resolved callable.

    Raises:
        CapabilityNotFoundError: If no probe resolves.
    """
    for probe in probes:
        try:
            module = importer(probe.module)
        except ModuleNotFoundError as error:
            # a missing dependency inside the module is not "not found here"
            if error.name is not None and not _is_same_or_parent(error.name, probe.module):
                raise
            logger.debug("capability_module_missing", capability=name, module=probe.module)
            continue
        candidate = getattr(module, probe.attribute, None)
        if callable(candidate):
            logger.debug("capability_resolved", capability=name, location=probe.location)
            return candidate
    raise CapabilityNotFoundError(name, [probe.location for probe in probes])


def _is_same_or_parent(missing: str, module: str) -> bool:
    return module == missing or module.startswith(f"{missing}.")
