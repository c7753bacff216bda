"""FastAPI dependencies handing out the collaborators built by ``create_app``."""
from __future__ import annotations

from fastapi import Request

from stegvault.services.pipeline import IngestPipeline, RetrievalPath


def get_ingest_pipeline(request: Request) -> IngestPipeline:
    return request.app.state.ingest_pipeline


def get_retrieval_path(request: Request) -> RetrievalPath:
    return request.app.state.retrieval_path
