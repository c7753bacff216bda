from __future__ import annotations

import logging

from fastapi import FastAPI

from stegvault import __version__
from stegvault.config import Settings, get_settings
from stegvault.handlers import image_handler, upload_handler
from stegvault.logging_setup import setup_logging
from stegvault.services.annotator import LsbAnnotator
from stegvault.services.codec import PillowCodec
from stegvault.services.pipeline import IngestPipeline, RetrievalPath
from stegvault.services.storage import KeyValueStore, build_store

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: KeyValueStore | None = None) -> FastAPI:
    """Build the app and every collaborator it needs, once."""

    if settings is None:
        settings = get_settings()
    setup_logging(settings.log_level)

    if store is None:
        store = build_store(settings)
    codec = PillowCodec(quality=settings.jpeg_quality)
    annotator = LsbAnnotator()

    app = FastAPI(title="stegvault", version=__version__)
    app.state.settings = settings
    app.state.store = store
    app.state.ingest_pipeline = IngestPipeline(
        codec,
        annotator,
        store,
        max_dimension=settings.max_dimension,
        key_length=settings.key_length,
        max_upload_bytes=settings.max_upload_bytes,
    )
    app.state.retrieval_path = RetrievalPath(codec, annotator, store, key_length=settings.key_length)

    app.include_router(upload_handler.router)
    app.include_router(image_handler.router)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok", "storage": store.name}

    logger.info("stegvault ready (storage=%s, max_dimension=%d)", store.name, settings.max_dimension)
    return app


app = create_app()
