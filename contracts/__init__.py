from .errors import (
    ClaimDecodeError,
    ComplianceCoreError,
    ConfigurationError,
    InstantiationError,
    TypeNotFoundError,
)
from .schemas import ClaimMap, DisputeLengthLimits, DisputeRecord, Environment, JwtPart, MatchingRule

__all__ = [
    "ClaimDecodeError",
    "ClaimMap",
    "ComplianceCoreError",
    "ConfigurationError",
    "DisputeLengthLimits",
    "DisputeRecord",
    "Environment",
    "InstantiationError",
    "JwtPart",
    "MatchingRule",
    "TypeNotFoundError",
]
