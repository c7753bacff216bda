"""Tests for the key-value store backends."""

import os
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient
from google.api_core import exceptions as gcs_exceptions
from google.auth import exceptions as auth_exceptions

from stegvault.config import Settings
from stegvault.errors import NotFoundError, StoreError
from stegvault.main import create_app
from stegvault.services.storage import GcsStore, InMemoryStore, LocalFileStore, build_store


def test_memory_store_round_trip():
    store = InMemoryStore()
    store.put("abc", b"one")
    store.put("abc", b"two")
    assert store.get("abc") == b"two"
    assert len(store) == 1
    with pytest.raises(NotFoundError):
        store.get("missing")


def test_local_store_round_trip(tmp_path):
    store = LocalFileStore(str(tmp_path / "images"))
    store.put("deadbeef", b"\x89PNG data")
    assert store.get("deadbeef") == b"\x89PNG data"
    # no temp files are left behind
    assert os.listdir(tmp_path / "images") == ["deadbeef"]


def test_local_store_missing_key(tmp_path):
    with pytest.raises(NotFoundError):
        LocalFileStore(str(tmp_path)).get("deadbeef")


def test_local_store_keeps_write_error_when_cleanup_fails(tmp_path, monkeypatch):
    store = LocalFileStore(str(tmp_path))

    def failing_replace(src, dst):
        raise OSError("replace failed")

    def failing_unlink(path):
        raise OSError("unlink failed")

    monkeypatch.setattr("stegvault.services.storage.os.replace", failing_replace)
    monkeypatch.setattr("stegvault.services.storage.os.unlink", failing_unlink)
    with pytest.raises(StoreError, match="replace failed"):
        store.put("deadbeef", b"x")


def test_local_store_unwritable(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_bytes(b"")
    store = LocalFileStore(str(blocker / "sub"))
    with pytest.raises(StoreError):
        store.put("deadbeef", b"x")


@pytest.fixture
def gcs_client():
    client = MagicMock()
    bucket = client.bucket.return_value
    blob = bucket.blob.return_value
    blob.name = "images/deadbeef"
    return client


def test_gcs_put_uploads_under_prefix(gcs_client):
    store = GcsStore("bucket", prefix="images/", client=gcs_client)
    store.put("deadbeef", b"data")
    gcs_client.bucket.assert_called_once_with("bucket")
    gcs_client.bucket.return_value.blob.assert_called_with("images/deadbeef")
    gcs_client.bucket.return_value.blob.return_value.upload_from_string.assert_called_once_with(
        b"data", content_type="image/png"
    )


def test_gcs_get(gcs_client):
    gcs_client.bucket.return_value.blob.return_value.download_as_bytes.return_value = b"data"
    assert GcsStore("bucket", client=gcs_client).get("deadbeef") == b"data"


def test_gcs_get_missing(gcs_client):
    gcs_client.bucket.return_value.blob.return_value.download_as_bytes.side_effect = gcs_exceptions.NotFound("gone")
    with pytest.raises(NotFoundError):
        GcsStore("bucket", client=gcs_client).get("deadbeef")


def test_gcs_errors_become_store_errors(gcs_client):
    blob = gcs_client.bucket.return_value.blob.return_value
    blob.upload_from_string.side_effect = gcs_exceptions.ServiceUnavailable("down")
    blob.download_as_bytes.side_effect = gcs_exceptions.Forbidden("nope")
    store = GcsStore("bucket", client=gcs_client)
    with pytest.raises(StoreError):
        store.put("deadbeef", b"x")
    with pytest.raises(StoreError):
        store.get("deadbeef")


def test_build_store(tmp_path):
    assert isinstance(build_store(Settings(storage_backend="memory")), InMemoryStore)
    local = build_store(Settings(storage_backend="local", image_store_dir=str(tmp_path)))
    assert isinstance(local, LocalFileStore)


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.ConnectionError("connection reset"),
        auth_exceptions.TransportError("metadata server unreachable"),
        auth_exceptions.RefreshError("token expired"),
    ],
)
def test_gcs_transport_errors_become_store_errors(gcs_client, error):
    blob = gcs_client.bucket.return_value.blob.return_value
    blob.upload_from_string.side_effect = error
    blob.download_as_bytes.side_effect = error
    store = GcsStore("bucket", client=gcs_client)
    with pytest.raises(StoreError) as put_info:
        store.put("deadbeef", b"x")
    assert put_info.value.__cause__ is error
    with pytest.raises(StoreError):
        store.get("deadbeef")


def test_gcs_transport_error_answers_503(gcs_client, make_image):
    blob = gcs_client.bucket.return_value.blob.return_value
    blob.upload_from_string.side_effect = requests.exceptions.ConnectionError("connection reset")
    app = create_app(Settings(storage_backend="memory"), store=GcsStore("bucket", client=gcs_client))
    resp = TestClient(app).post(
        "/",
        files={"image": ("a.png", make_image(10, 10), "image/png")},
        data={"message": "hello"},
        follow_redirects=False,
    )
    assert resp.status_code == 503
