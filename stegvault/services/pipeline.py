"""Ingest and retrieval paths.

Ingest: decode -> plan -> resize -> annotate/encode -> address -> store.
Every step runs before the single store write, so a failure anywhere
leaves the store untouched. Retrieval only normalizes the format.
"""
from __future__ import annotations

import logging

from stegvault.errors import NotFoundError, PayloadTooLargeError
from stegvault.models import IngestResult, StoredRecord
from stegvault.services.addressing import DEFAULT_KEY_LENGTH, is_valid_key, key_of
from stegvault.services.annotator import LsbAnnotator
from stegvault.services.codec import PillowCodec
from stegvault.services.resize_planner import plan_resize
from stegvault.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIMENSION = 1200


class IngestPipeline:
    """Turn an upload into a stored, content-addressed, annotated image."""

    def __init__(
        self,
        codec: PillowCodec,
        annotator: LsbAnnotator,
        store: KeyValueStore,
        *,
        max_dimension: int = DEFAULT_MAX_DIMENSION,
        key_length: int = DEFAULT_KEY_LENGTH,
        max_upload_bytes: int | None = None,
    ) -> None:
        self._codec = codec
        self._annotator = annotator
        self._store = store
        self._max_dimension = max_dimension
        self._key_length = key_length
        self._max_upload_bytes = max_upload_bytes

    def check_size(self, size: int) -> None:
        """Raise PayloadTooLargeError when ``size`` bytes exceed the upload limit."""

        if self._max_upload_bytes is not None and size > self._max_upload_bytes:
            raise PayloadTooLargeError(
                f"Upload of {size} bytes exceeds the {self._max_upload_bytes} byte limit"
            )

    def prepare(self, raw: bytes, annotation: str) -> IngestResult:
        """Run every ingest step except the store write."""

        self.check_size(len(raw))

        img = self._codec.decode(raw)
        plan = plan_resize(img.width, img.height, self._max_dimension)
        for step in plan.steps:
            img = self._codec.apply(img, step)

        data = self._annotator.encode(img, annotation)
        record = StoredRecord(key=key_of(data, self._key_length), data=data)
        return IngestResult(record=record, plan=plan, width=img.width, height=img.height)

    def ingest(self, raw: bytes, annotation: str) -> str:
        """Store the annotated image and return its content key."""

        result = self.prepare(raw, annotation)
        self._store.put(result.record.key, result.record.data)
        logger.info(
            "Stored %s (%dx%d, %d resize steps, %d bytes)",
            result.record.key,
            result.width,
            result.height,
            len(result.plan.steps),
            len(result.record.data),
        )
        return result.record.key


class RetrievalPath:
    """Read stored images back by content key."""

    def __init__(
        self,
        codec: PillowCodec,
        annotator: LsbAnnotator,
        store: KeyValueStore,
        *,
        key_length: int = DEFAULT_KEY_LENGTH,
    ) -> None:
        self._codec = codec
        self._annotator = annotator
        self._store = store
        self._key_length = key_length

    def fetch(self, key: str) -> bytes:
        """Return the stored bytes exactly as written."""

        # Malformed keys can never have been produced by ingest.
        if not is_valid_key(key, self._key_length):
            raise NotFoundError(key)
        return self._store.get(key)

    def render(self, key: str) -> bytes:
        """Return the stored image re-encoded as JPEG."""

        return self._codec.encode(self._codec.decode(self.fetch(key)))

    def reveal(self, key: str) -> str:
        return self._annotator.reveal(self.fetch(key))
