"""Shared fixtures: in-memory collaborators and a TestClient per test."""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from stegvault.config import Settings
from stegvault.main import create_app
from stegvault.services.annotator import LsbAnnotator
from stegvault.services.codec import PillowCodec
from stegvault.services.pipeline import IngestPipeline, RetrievalPath
from stegvault.services.storage import InMemoryStore


def image_bytes(width, height, fmt="PNG", color=(200, 120, 40)):
    """Encode a solid-colour image of the given size."""
    img = Image.new("RGB", (width, height), color=color)
    # A little structure so resizes are not trivially uniform
    img.putpixel((0, 0), (0, 0, 0))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def make_image():
    return image_bytes


@pytest.fixture
def settings(tmp_path):
    return Settings(storage_backend="memory", image_store_dir=str(tmp_path / "store"), log_level="DEBUG")


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def codec():
    return PillowCodec()


@pytest.fixture
def annotator():
    return LsbAnnotator()


@pytest.fixture
def pipeline(codec, annotator, store):
    return IngestPipeline(codec, annotator, store, max_dimension=1200, key_length=16)


@pytest.fixture
def retrieval(codec, annotator, store):
    return RetrievalPath(codec, annotator, store, key_length=16)


@pytest.fixture
def client(settings, store):
    return TestClient(create_app(settings=settings, store=store))
