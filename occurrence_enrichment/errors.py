"""Pipeline exception hierarchy.

Fatal conditions raise a ``PipelineError`` subclass with an actionable
message. Non-fatal notices are warning categories issued via ``warnings``.
Errors raised by geoenrich or copernicusmarine are never wrapped.
"""

from __future__ import annotations

from typing import Sequence


class PipelineError(Exception):
    """Base exception for all pipeline failures."""


class ConfigError(PipelineError):
    """Raised for invalid run configuration."""


class MissingInputError(PipelineError):
    """Raised when the input CSV does not exist."""


class SchemaError(PipelineError):
    """Raised when required columns are absent from the input.

    Attributes:
        missing: Every missing column name, in declared order.
    """

    def __init__(self, missing: Sequence[str], present: Sequence[str] = ()) -> None:
        self.missing = list(missing)
        self.present = list(present)
        message = f"Missing columns in CSV: {', '.join(self.missing)}"
        if self.present:
            message += f". Found: {', '.join(self.present)}"
        super().__init__(message)


class CapabilityNotFoundError(PipelineError):
    """Raised when no known entry point for an external capability exists.

    Attributes:
        capability: Logical capability name.
        probes: Dotted locations that were tried, in order.
    """

    def __init__(self, capability: str, probes: Sequence[str]) -> None:
        self.capability = capability
        self.probes = list(probes)
        super().__init__(
            f"{capability}() not found in geoenrich (tried: {', '.join(self.probes)}). "
            "Install a geoenrich version that provides it."
        )


class RowDroppedWarning(UserWarning):
    """Issued once per filter pass when rows without valid coordinates were dropped."""


class AuthenticationSkipped(UserWarning):
    """Issued when Copernicus Marine login is bypassed because credentials are blank."""
