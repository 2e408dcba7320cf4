from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from claim_decoder import ClaimDecoder
from contracts.errors import ClaimDecodeError, ComplianceCoreError, ConfigurationError
from contracts.schemas import DisputeRecord
from factory_registry import FactoryRegistry
from orchestrator import DisputePublishingPolicy, configure_logging, process_dispute
from settings import ConfigProvider, EnvConfigProvider, StaticConfigProvider

EXIT_PUBLISHED = 0
EXIT_NOT_PUBLISHABLE = 2
EXIT_MALFORMED_STATEMENT = 4
EXIT_BAD_CONFIG = 5
EXIT_BAD_RECORD = 6

DEFAULT_DECODER_KEY = "jwt"
BUILTIN_DECODERS = {DEFAULT_DECODER_KEY: "claim_decoder.JwtClaimDecoder"}


def _load_json(path: str | None) -> dict:
    if path:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    return json.load(sys.stdin)


def _build_config(config_raw: dict[str, Any] | None) -> ConfigProvider:
    if config_raw is None:
        return EnvConfigProvider()
    return StaticConfigProvider.from_mapping(config_raw)


def _build_decoder(config_raw: dict[str, Any] | None) -> ClaimDecoder:
    raw = config_raw or {}
    names = dict(BUILTIN_DECODERS)
    names.update(raw.get("claim_decoders", {}) or {})
    registry = FactoryRegistry.from_qualified_names(names)
    return registry.instantiate(raw.get("claim_decoder", DEFAULT_DECODER_KEY))


def _status_code(record_raw: dict) -> int:
    value = record_raw.get("status_code")
    if value is None:
        raise ValueError("record is missing status_code")
    if isinstance(value, bool):
        raise ValueError(f"status_code must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"status_code must be an integer, got {value!r}") from exc


def _build_record(record_raw: Any) -> DisputeRecord:
    if not isinstance(record_raw, dict):
        raise ValueError(f"record must be an object, got {type(record_raw).__name__}")
    headers_raw = record_raw.get("headers", {}) or {}
    return DisputeRecord(
        status_code=_status_code(record_raw),
        http_method=record_raw.get("http_method", ""),
        resource_path=record_raw.get("resource_path", ""),
        request_body=record_raw.get("request_body", "") or "",
        response_body=record_raw.get("response_body", "") or "",
        headers={str(k): str(v) for k, v in headers_raw.items()} if isinstance(headers_raw, dict) else {},
        software_statement=record_raw.get("software_statement"),
    )


def _print(payload: dict) -> None:
    print(json.dumps(payload, sort_keys=True))


def _error(exc: Exception, error_type: str) -> None:
    _print({"error": str(exc), "error_type": error_type})


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Classify a software statement and publish dispute data.")
    parser.add_argument("--config", help="JSON config file; SSACORE_* environment variables when omitted")
    parser.add_argument("--record", help="JSON dispute record file; stdin when omitted")
    parser.add_argument("--dispute-log")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)

    config_raw = _load_json(args.config) if args.config else None
    try:
        config = _build_config(config_raw)
        decoder = _build_decoder(config_raw)
    except ComplianceCoreError as exc:
        _error(exc, "configuration_error")
        return EXIT_BAD_CONFIG

    try:
        record = _build_record(_load_json(args.record))
    except ValueError as exc:
        _error(exc, "record_error")
        return EXIT_BAD_RECORD

    policy = DisputePublishingPolicy(config=config, decoder=decoder, dispute_log_path=args.dispute_log)

    try:
        result = process_dispute(record, policy)
    except ClaimDecodeError as exc:
        _error(exc, "claim_decode_error")
        return EXIT_MALFORMED_STATEMENT
    except ConfigurationError as exc:
        _error(exc, "configuration_error")
        return EXIT_BAD_CONFIG

    _print(
        {
            "environment": result.environment.value,
            "publishable": result.publishable,
            "written": result.written,
            "reasons": list(result.reasons),
        }
    )
    return EXIT_PUBLISHED if result.publishable else EXIT_NOT_PUBLISHABLE


if __name__ == "__main__":
    raise SystemExit(main())
