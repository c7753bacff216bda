from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ResizeStep(BaseModel):
    """One pixel-dimension change.

    ``downsample`` is the cheap nearest-neighbour pre-pass, ``resize`` the
    smoothing pass that produces the final output.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["downsample", "resize"]
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


class ResizePlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: tuple[ResizeStep, ...] = Field(default=(), max_length=2)

    @property
    def is_empty(self) -> bool:
        return not self.steps
