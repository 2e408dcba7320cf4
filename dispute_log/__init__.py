from .dispute import DisputeEvent, build_dispute_event, write_dispute_event

__all__ = [
    "DisputeEvent",
    "build_dispute_event",
    "write_dispute_event",
]
