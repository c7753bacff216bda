"""Content addresses for stored images.

A key is the leading ``length`` hex characters of the SHA-256 digest of the
encoded bytes. The default of 16 characters (64 bits) keeps URLs short while
the chance of any collision stays below one in a million up to roughly six
million stored images (birthday bound n^2 / 2^65).
"""
from __future__ import annotations

import hashlib
import re

DEFAULT_KEY_LENGTH = 16


def key_of(data: bytes, length: int = DEFAULT_KEY_LENGTH) -> str:
    """Return (part of) the SHA-256 hash of the data, as a hex string."""

    if not 1 <= length <= 64:
        raise ValueError(f"key length must be between 1 and 64, got {length}")
    return hashlib.sha256(data).hexdigest()[:length]


def is_valid_key(key: str, length: int = DEFAULT_KEY_LENGTH) -> bool:
    return len(key) == length and re.fullmatch(r"[0-9a-f]+", key) is not None
