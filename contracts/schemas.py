from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

ClaimMap = Mapping[str, Any]


class Environment(str, Enum):
    SANDBOX = "SANDBOX"
    PRODUCTION = "PRODUCTION"


class JwtPart(str, Enum):
    HEADER = "header"
    BODY = "body"


@dataclass(frozen=True)
class MatchingRule:
    # claim_name is looked up in the SSA body; expected_value marks sandbox.
    claim_name: str
    expected_value: str


@dataclass(frozen=True)
class DisputeLengthLimits:
    request_body: int = 4096
    response_body: int = 4096
    headers: int = 2048


@dataclass(frozen=True)
class DisputeRecord:
    status_code: int
    http_method: str = ""
    resource_path: str = ""
    request_body: str = ""
    response_body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    software_statement: str | None = None
