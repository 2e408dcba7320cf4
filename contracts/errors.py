from __future__ import annotations


class ComplianceCoreError(RuntimeError):
    """Base class for errors surfaced by the compliance core."""


class ClaimDecodeError(ComplianceCoreError):
    """Raised when a non-empty claim blob cannot be decoded."""


class TypeNotFoundError(ComplianceCoreError):
    """Raised when a configured implementation name cannot be resolved."""


class InstantiationError(ComplianceCoreError):
    """Raised when a resolved implementation cannot be built without arguments."""


class ConfigurationError(ComplianceCoreError):
    """Raised when configuration values are invalid."""
