from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from contracts.schemas import DisputeLengthLimits, DisputeRecord, Environment
from dispute_policy import truncate


def _render_headers(headers: Mapping[str, str]) -> str:
    return json.dumps({str(k): str(v) for k, v in headers.items()}, sort_keys=True)


@dataclass(frozen=True)
class DisputeEvent:
    ts_utc: str
    status_code: int
    http_method: str
    resource_path: str
    environment: str
    request_body: str
    response_body: str
    headers: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts_utc": self.ts_utc,
            "status_code": self.status_code,
            "http_method": self.http_method,
            "resource_path": self.resource_path,
            "environment": self.environment,
            "request_body": self.request_body,
            "response_body": self.response_body,
            "headers": self.headers,
        }


def build_dispute_event(
    record: DisputeRecord,
    limits: DisputeLengthLimits = DisputeLengthLimits(),
    environment: Environment = Environment.PRODUCTION,
) -> DisputeEvent:
    ts = datetime.now(timezone.utc).isoformat()

    headers = record.headers if isinstance(record.headers, Mapping) else {}
    return DisputeEvent(
        ts_utc=ts,
        status_code=int(record.status_code),
        http_method=str(record.http_method).upper(),
        resource_path=str(record.resource_path),
        environment=Environment(environment).value,
        request_body=truncate(record.request_body or "", limits.request_body) or "",
        response_body=truncate(record.response_body or "", limits.response_body) or "",
        headers=truncate(_render_headers(headers) if headers else "", limits.headers) or "",
    )


def write_dispute_event(path: str, event: DisputeEvent) -> None:
    line = json.dumps(event.to_dict(), sort_keys=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")
