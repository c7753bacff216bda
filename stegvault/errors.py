"""Error taxonomy shared by the pipeline, the stores and the HTTP layer.

Each error carries the HTTP status the failure boundary answers with.
Adapters translate library exceptions into these types where they call the
library; nothing in between catches or retries them.
"""
from __future__ import annotations


class StegVaultError(Exception):
    """Base class for every failure the service knows how to describe."""

    status_code: int = 500


class DecodeError(StegVaultError):
    """Input is not a decodable image (or carries no annotation)."""

    status_code = 400


class PayloadTooLargeError(DecodeError):
    """Uploaded bytes exceed the configured limit."""

    status_code = 413


class EncodeError(StegVaultError):
    """Re-encoding or annotation embedding failed."""


class StoreError(StegVaultError):
    """The key-value store could not complete the request."""

    status_code = 503


class NotFoundError(StegVaultError):
    """No record exists for the requested key."""

    status_code = 404

    def __init__(self, key: str):
        super().__init__(f"No image stored under key {key!r}")
        self.key = key


class InvalidDimensionError(StegVaultError):
    """Non-positive image bounds reached the resize planner."""

    status_code = 400
