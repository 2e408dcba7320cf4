from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from settings import ConfigProvider

ERROR_STATUS_THRESHOLD = 400


@dataclass(frozen=True)
class PublishDecision:
    publishable: bool
    reasons: Tuple[str, ...] = ()


class PolicyGate:
    """
    Dispute data publishing gate:
      - status >= 400: always publishable
      - status < 400: publishable only when non-error publishing is enabled
    """

    def __init__(self, config: ConfigProvider) -> None:
        self._config = config

    def evaluate(self, status_code: int) -> PublishDecision:
        if status_code >= ERROR_STATUS_THRESHOLD:
            return PublishDecision(publishable=True, reasons=("publish_error_status",))
        if self._config.is_non_error_dispute_publishing_enabled():
            return PublishDecision(publishable=True, reasons=("publish_non_error_enabled",))
        return PublishDecision(publishable=False, reasons=("non_error_publishing_disabled",))

    def is_publishable(self, status_code: int) -> bool:
        return self.evaluate(status_code).publishable


def is_publishable_dispute_data(status_code: int, config: ConfigProvider) -> bool:
    return PolicyGate(config).is_publishable(status_code)
