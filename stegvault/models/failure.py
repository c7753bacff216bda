from __future__ import annotations

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict

from stegvault.errors import StegVaultError

_GENERIC_MESSAGE = "internal error"


class FailureEnvelope(BaseModel):
    """What the failure boundary reports for one failed request."""

    model_config = ConfigDict(frozen=True)

    message: str
    kind: str
    status_code: int = 500

    @classmethod
    def from_exception(cls, exc: BaseException) -> "FailureEnvelope":
        """Describe ``exc`` without leaking details of unexpected errors."""

        kind = type(exc).__name__
        if isinstance(exc, StegVaultError):
            return cls(message=str(exc), kind=kind, status_code=exc.status_code)
        if isinstance(exc, HTTPException):
            return cls(message=str(exc.detail), kind=kind, status_code=exc.status_code)
        if isinstance(exc, RequestValidationError):
            fields = sorted({".".join(str(p) for p in err.get("loc", ())[1:]) for err in exc.errors()})
            message = "invalid request" + (f": {', '.join(f for f in fields if f)}" if fields else "")
            return cls(message=message, kind=kind, status_code=422)
        return cls(message=_GENERIC_MESSAGE, kind="Exception", status_code=500)
