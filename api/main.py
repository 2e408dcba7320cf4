from __future__ import annotations

import os
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Header, HTTPException, Request
from pydantic import BaseModel, Field

from contracts.errors import ClaimDecodeError, ConfigurationError
from contracts.schemas import DisputeRecord
from dispute_policy import PolicyGate
from orchestrator import DisputePublishingPolicy, configure_logging, process_dispute
from settings import ConfigProvider, EnvConfigProvider, StaticConfigProvider
from software_environment import EnvironmentClassifier


class EnvironmentRequest(BaseModel):
    software_statement: Optional[str] = None
    policy: Optional[Dict[str, Any]] = None


class PublishableRequest(BaseModel):
    status_code: int
    policy: Optional[Dict[str, Any]] = None


class DisputeRecordModel(BaseModel):
    status_code: int
    http_method: str = ""
    resource_path: str = ""
    request_body: str = ""
    response_body: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    software_statement: Optional[str] = None


class ProcessOptions(BaseModel):
    dispute_log_path: Optional[str] = None


class ProcessRequest(BaseModel):
    record: DisputeRecordModel
    policy: Optional[Dict[str, Any]] = None
    options: ProcessOptions = Field(default_factory=ProcessOptions)


def _build_config(raw: Optional[Dict[str, Any]]) -> ConfigProvider:
    if raw is None:
        return EnvConfigProvider()
    try:
        return StaticConfigProvider.from_mapping(raw)
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _build_record(model: DisputeRecordModel) -> DisputeRecord:
    return DisputeRecord(
        status_code=model.status_code,
        http_method=model.http_method,
        resource_path=model.resource_path,
        request_body=model.request_body,
        response_body=model.response_body,
        headers=dict(model.headers),
        software_statement=model.software_statement,
    )


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging(level=os.getenv("SSACORE_LOG_LEVEL", "INFO"))
    yield


app = FastAPI(title="SSA Compliance Core API", version="0.1.0", lifespan=lifespan)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


def _require_api_key(x_api_key: Optional[str]) -> None:
    required = os.getenv("SSACORE_API_KEY", "")
    if not required:
        # no key set => auth disabled (dev-friendly)
        return
    if not x_api_key or x_api_key != required:
        raise HTTPException(status_code=401, detail="Unauthorized")


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/environment")
def environment(req: EnvironmentRequest, x_api_key: Optional[str] = Header(default=None)) -> dict[str, Any]:
    _require_api_key(x_api_key)
    classifier = EnvironmentClassifier(_build_config(req.policy))
    try:
        env = classifier.classify(req.software_statement)
    except ClaimDecodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"environment": env.value}


@app.post("/v1/disputes/publishable")
def publishable(req: PublishableRequest, x_api_key: Optional[str] = Header(default=None)) -> dict[str, Any]:
    _require_api_key(x_api_key)
    decision = PolicyGate(_build_config(req.policy)).evaluate(req.status_code)
    return {"publishable": decision.publishable, "reasons": list(decision.reasons)}


@app.post("/v1/disputes/process")
def process(request: Request, req: ProcessRequest, x_api_key: Optional[str] = Header(default=None)) -> dict[str, Any]:
    _require_api_key(x_api_key)

    log_path = req.options.dispute_log_path
    # allow env overrides too
    env_log = os.getenv("SSACORE_DISPUTE_LOG_PATH")
    if env_log:
        log_path = env_log

    policy = DisputePublishingPolicy(config=_build_config(req.policy), dispute_log_path=log_path)
    try:
        result = process_dispute(_build_record(req.record), policy)
    except ClaimDecodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return {
        "request_id": getattr(request.state, "request_id", None),
        "environment": result.environment.value,
        "publishable": result.publishable,
        "written": result.written,
        "reasons": list(result.reasons),
    }
