from .failure import FailureEnvelope
from .record import IngestResult, StoredRecord
from .resize_plan import ResizePlan, ResizeStep

__all__ = [
    "FailureEnvelope",
    "IngestResult",
    "StoredRecord",
    "ResizePlan",
    "ResizeStep",
]
