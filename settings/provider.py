from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

from contracts.errors import ConfigurationError
from contracts.schemas import DisputeLengthLimits

DEFAULT_SANDBOX_CLAIM_NAME = "software_environment"
DEFAULT_SANDBOX_CLAIM_VALUE = "sandbox"

ENV_PREFIX = "SSACORE_"

_TRUTHY = ("1", "true", "yes", "y", "on")


class ConfigProvider(Protocol):
    def get_sandbox_claim_name(self) -> str: ...

    def get_sandbox_claim_expected_value(self) -> str: ...

    def is_non_error_dispute_publishing_enabled(self) -> bool: ...

    def get_dispute_max_lengths(self) -> DisputeLengthLimits: ...


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _as_length(name: str, value: Any) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    if n < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {n}")
    return n


def _as_claim_setting(name: str, value: Any, default: str) -> str:
    if value is None:
        return default
    s = str(value).strip()
    if not s:
        raise ConfigurationError(f"{name} must not be blank")
    return s


@dataclass(frozen=True)
class StaticConfigProvider:
    """
    Fixed configuration, typically built from a JSON policy document:
      - sandbox_claim_name: SSA claim inspected for environment identification
      - sandbox_claim_value: claim value that marks a sandbox statement
      - publish_non_error_disputes: extend dispute publishing to status < 400
      - max_lengths: {request_body, response_body, headers} truncation limits
    """

    sandbox_claim_name: str = DEFAULT_SANDBOX_CLAIM_NAME
    sandbox_claim_value: str = DEFAULT_SANDBOX_CLAIM_VALUE
    publish_non_error_disputes: bool = False
    max_lengths: DisputeLengthLimits = field(default_factory=DisputeLengthLimits)

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "StaticConfigProvider":
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"config must be an object, got {type(raw).__name__}")
        limits_raw = raw.get("max_lengths", {}) or {}
        if not isinstance(limits_raw, Mapping):
            raise ConfigurationError(f"max_lengths must be an object, got {type(limits_raw).__name__}")
        defaults = DisputeLengthLimits()
        return cls(
            sandbox_claim_name=_as_claim_setting(
                "sandbox_claim_name", raw.get("sandbox_claim_name"), DEFAULT_SANDBOX_CLAIM_NAME
            ),
            sandbox_claim_value=_as_claim_setting(
                "sandbox_claim_value", raw.get("sandbox_claim_value"), DEFAULT_SANDBOX_CLAIM_VALUE
            ),
            publish_non_error_disputes=_as_bool(raw.get("publish_non_error_disputes", False)),
            max_lengths=DisputeLengthLimits(
                request_body=_as_length("max_lengths.request_body", limits_raw.get("request_body", defaults.request_body)),
                response_body=_as_length(
                    "max_lengths.response_body", limits_raw.get("response_body", defaults.response_body)
                ),
                headers=_as_length("max_lengths.headers", limits_raw.get("headers", defaults.headers)),
            ),
        )

    def get_sandbox_claim_name(self) -> str:
        return self.sandbox_claim_name

    def get_sandbox_claim_expected_value(self) -> str:
        return self.sandbox_claim_value

    def is_non_error_dispute_publishing_enabled(self) -> bool:
        return self.publish_non_error_disputes

    def get_dispute_max_lengths(self) -> DisputeLengthLimits:
        return self.max_lengths


class EnvConfigProvider:
    """Reads SSACORE_* environment variables on every call; nothing is cached."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX) -> None:
        self._environ = environ
        self._prefix = prefix

    def _get(self, name: str) -> str:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(self._prefix + name, "").strip()

    def get_sandbox_claim_name(self) -> str:
        return self._get("SANDBOX_CLAIM_NAME") or DEFAULT_SANDBOX_CLAIM_NAME

    def get_sandbox_claim_expected_value(self) -> str:
        return self._get("SANDBOX_CLAIM_VALUE") or DEFAULT_SANDBOX_CLAIM_VALUE

    def is_non_error_dispute_publishing_enabled(self) -> bool:
        v = self._get("PUBLISH_NON_ERROR_DISPUTES")
        if v == "":
            return False
        return _as_bool(v)

    def get_dispute_max_lengths(self) -> DisputeLengthLimits:
        defaults = DisputeLengthLimits()
        return DisputeLengthLimits(
            request_body=self._length("MAX_REQUEST_BODY_LENGTH", defaults.request_body),
            response_body=self._length("MAX_RESPONSE_BODY_LENGTH", defaults.response_body),
            headers=self._length("MAX_HEADERS_LENGTH", defaults.headers),
        )

    def _length(self, name: str, default: int) -> int:
        v = self._get(name)
        if v == "":
            return default
        return _as_length(self._prefix + name, v)
