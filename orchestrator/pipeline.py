from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from claim_decoder import ClaimDecoder, JwtClaimDecoder
from contracts.schemas import DisputeRecord, Environment
from dispute_log import build_dispute_event, write_dispute_event
from dispute_policy import PolicyGate
from settings import ConfigProvider, StaticConfigProvider
from software_environment import EnvironmentClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisputePublishingPolicy:
    config: ConfigProvider = field(default_factory=StaticConfigProvider)
    decoder: ClaimDecoder = field(default_factory=JwtClaimDecoder)
    dispute_log_path: Optional[str] = None


@dataclass(frozen=True)
class DisputeResult:
    environment: Environment
    publishable: bool
    written: bool
    reasons: Tuple[str, ...] = ()


def process_dispute(
    record: DisputeRecord,
    policy: DisputePublishingPolicy,
    dispute_log_path: Optional[str] = None,
) -> DisputeResult:
    eff_log = dispute_log_path if dispute_log_path is not None else policy.dispute_log_path

    # Environment (ClaimDecodeError propagates)
    environment = EnvironmentClassifier(policy.config, policy.decoder).classify(record.software_statement)

    # Publishing gate
    decision = PolicyGate(policy.config).evaluate(record.status_code)
    reasons: list[str] = list(decision.reasons)

    written = False
    if decision.publishable and eff_log:
        ev = build_dispute_event(record, policy.config.get_dispute_max_lengths(), environment)
        write_dispute_event(eff_log, ev)
        written = True
        reasons.append("dispute_written")

    logger.debug(
        "dispute status=%s environment=%s publishable=%s written=%s",
        record.status_code,
        environment.value,
        decision.publishable,
        written,
    )
    return DisputeResult(
        environment=environment,
        publishable=decision.publishable,
        written=written,
        reasons=tuple(reasons),
    )
