from .log import configure_logging
from .pipeline import DisputePublishingPolicy, DisputeResult, process_dispute

__all__ = [
    "DisputePublishingPolicy",
    "DisputeResult",
    "configure_logging",
    "process_dispute",
]
