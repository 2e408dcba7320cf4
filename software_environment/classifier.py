from __future__ import annotations

import logging
from typing import Any, Optional

from claim_decoder import ClaimDecoder, JwtClaimDecoder
from contracts.schemas import Environment, JwtPart, MatchingRule
from settings import ConfigProvider

logger = logging.getLogger(__name__)


def _equals_ignore_case(a: str, b: str) -> bool:
    # Per-character comparison; no full case folding, so "straße" != "strasse".
    if len(a) != len(b):
        return False
    return all(x == y or x.upper() == y.upper() or x.lower() == y.lower() for x, y in zip(a, b))


def _claim_as_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class EnvironmentClassifier:
    """
    Decides whether a software statement (SSA) targets SANDBOX or PRODUCTION.

    The matching rule is read from the config provider on every call. Any
    statement that is absent, lacks the configured claim, or carries a
    different value is PRODUCTION; only an explicit case-insensitive match on
    the configured sandbox value yields SANDBOX.
    """

    def __init__(self, config: ConfigProvider, decoder: Optional[ClaimDecoder] = None) -> None:
        self._config = config
        self._decoder: ClaimDecoder = decoder if decoder is not None else JwtClaimDecoder()

    def matching_rule(self) -> MatchingRule:
        return MatchingRule(
            claim_name=self._config.get_sandbox_claim_name(),
            expected_value=self._config.get_sandbox_claim_expected_value(),
        )

    def classify(self, claim_blob: Optional[str]) -> Environment:
        if not claim_blob:
            logger.debug("no software statement presented; defaulting to %s", Environment.PRODUCTION.value)
            return Environment.PRODUCTION

        # ClaimDecodeError propagates to the caller.
        body = self._decoder.decode(claim_blob, JwtPart.BODY)
        rule = self.matching_rule()

        actual = _claim_as_string(body.get(rule.claim_name))
        if actual is not None and _equals_ignore_case(actual, rule.expected_value):
            environment = Environment.SANDBOX
        else:
            environment = Environment.PRODUCTION

        logger.debug("software statement claim %r classified as %s", rule.claim_name, environment.value)
        return environment


def classify_software_environment(
    claim_blob: Optional[str],
    config: ConfigProvider,
    decoder: Optional[ClaimDecoder] = None,
) -> Environment:
    return EnvironmentClassifier(config, decoder).classify(claim_blob)
