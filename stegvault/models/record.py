from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .resize_plan import ResizePlan


class StoredRecord(BaseModel):
    """Encoded image bytes and the content key derived from them."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., pattern=r"^[0-9a-f]+$")
    data: bytes


class IngestResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    record: StoredRecord
    plan: ResizePlan
    width: int = Field(..., ge=1)  # final bounds, after the plan ran
    height: int = Field(..., ge=1)
