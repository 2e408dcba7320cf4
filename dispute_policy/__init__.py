from .gate import ERROR_STATUS_THRESHOLD, PolicyGate, PublishDecision, is_publishable_dispute_data
from .render import truncate

__all__ = [
    "ERROR_STATUS_THRESHOLD",
    "PolicyGate",
    "PublishDecision",
    "is_publishable_dispute_data",
    "truncate",
]
