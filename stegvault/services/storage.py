"""Key-value stores for encoded images.

Three backends share one interface:

* ``memory`` keeps records in a dict (tests, throwaway instances);
* ``local`` writes one file per key under ``IMAGE_STORE_DIR``;
* ``gcs`` writes one object per key to Google Cloud Storage under
  ``gs://{BUCKET_NAME}/{GCS_PREFIX}{key}``.

Stores do not interpret keys; callers validate them first.
"""
from __future__ import annotations

import contextlib
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod

import requests
from google.api_core import exceptions as gcs_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import storage

from stegvault.config import Settings
from stegvault.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

# API errors, auth failures and transport failures below the API client.
_GCS_FAILURES = (
    gcs_exceptions.GoogleAPIError,
    auth_exceptions.GoogleAuthError,
    requests.exceptions.RequestException,
)


class KeyValueStore(ABC):
    """Abstract get/put-by-key persistence."""

    name: str = "abstract"

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, replacing any previous value.

        Raises:
            StoreError: the backend could not persist the bytes.
        """

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the bytes stored under ``key``.

        Raises:
            NotFoundError: nothing is stored under ``key``.
            StoreError: the backend could not be read.
        """


class InMemoryStore(KeyValueStore):
    name = "memory"

    def __init__(self) -> None:
        self._records: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def put(self, key: str, data: bytes) -> None:
        with self._lock:
            self._records[key] = bytes(data)

    def get(self, key: str) -> bytes:
        with self._lock:
            try:
                return self._records[key]
            except KeyError:
                raise NotFoundError(key) from None

    def __len__(self) -> int:
        return len(self._records)


class LocalFileStore(KeyValueStore):
    """One file per key; writes go through a temp file and ``os.replace``."""

    name = "local"

    def __init__(self, base_dir: str) -> None:
        self._base_dir = base_dir

    def _path(self, key: str) -> str:
        return os.path.join(self._base_dir, key)

    def put(self, key: str, data: bytes) -> None:
        try:
            os.makedirs(self._base_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self._base_dir, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_path, self._path(key))
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
                raise
        except OSError as exc:
            raise StoreError(f"Could not write {key!r} to {self._base_dir}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), self._path(key))

    def get(self, key: str) -> bytes:
        try:
            with open(self._path(key), "rb") as f:
                return f.read()
        except FileNotFoundError:
            raise NotFoundError(key) from None
        except OSError as exc:
            raise StoreError(f"Could not read {key!r} from {self._base_dir}: {exc}") from exc


class GcsStore(KeyValueStore):
    """Google Cloud Storage bucket, one object per key."""

    name = "gcs"
    _CONTENT_TYPE = "image/png"

    def __init__(self, bucket_name: str, *, prefix: str = "", client: storage.Client | None = None) -> None:
        self._client = client if client is not None else storage.Client()
        self._bucket = self._client.bucket(bucket_name)
        self._bucket_name = bucket_name
        self._prefix = prefix

    def _blob(self, key: str):
        return self._bucket.blob(f"{self._prefix}{key}")

    def put(self, key: str, data: bytes) -> None:
        blob = self._blob(key)
        try:
            blob.upload_from_string(data, content_type=self._CONTENT_TYPE)
        except _GCS_FAILURES as exc:
            raise StoreError(f"Upload of {key!r} to gs://{self._bucket_name} failed: {exc}") from exc
        logger.debug("Uploaded image to gs://%s/%s", self._bucket_name, blob.name)

    def get(self, key: str) -> bytes:
        try:
            return self._blob(key).download_as_bytes()
        except gcs_exceptions.NotFound:
            raise NotFoundError(key) from None
        except _GCS_FAILURES as exc:
            raise StoreError(f"Download of {key!r} from gs://{self._bucket_name} failed: {exc}") from exc


def build_store(settings: Settings) -> KeyValueStore:
    """Instantiate the backend named by ``settings.storage_backend``."""

    backend = settings.storage_backend.lower()
    if backend == "memory":
        return InMemoryStore()
    if backend == "local":
        return LocalFileStore(settings.image_store_dir)
    if backend == "gcs":
        return GcsStore(settings.bucket_name, prefix=settings.gcs_prefix)
    raise ValueError(f"Unsupported storage backend: {backend}")
