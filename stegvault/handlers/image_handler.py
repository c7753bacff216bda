"""Endpoints serving stored images by content key."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, Response
from starlette.concurrency import run_in_threadpool

from stegvault.handlers import pages
from stegvault.handlers.boundary import FailureBoundaryRoute
from stegvault.handlers.dependencies import get_retrieval_path
from stegvault.services.pipeline import RetrievalPath

router = APIRouter(route_class=FailureBoundaryRoute)

# Content never changes under a key.
_IMMUTABLE = {"Cache-Control": "public, max-age=604800, immutable"}


@router.get("/view", response_class=HTMLResponse)
async def view(
    key: str = Query(..., alias="id"),
    retrieval: RetrievalPath = Depends(get_retrieval_path),
):
    await run_in_threadpool(retrieval.fetch, key)
    return HTMLResponse(pages.view_page(key))


@router.get("/img")
async def img(
    key: str = Query(..., alias="id"),
    retrieval: RetrievalPath = Depends(get_retrieval_path),
):
    """Serve the stored image as JPEG."""
    data = await run_in_threadpool(retrieval.render, key)
    return Response(content=data, media_type="image/jpeg", headers=_IMMUTABLE)


@router.get("/raw")
async def raw(
    key: str = Query(..., alias="id"),
    retrieval: RetrievalPath = Depends(get_retrieval_path),
):
    """Serve the stored bytes unchanged, annotation included."""
    data = await run_in_threadpool(retrieval.fetch, key)
    return Response(content=data, media_type="image/png", headers=_IMMUTABLE)


@router.get("/message")
async def message(
    key: str = Query(..., alias="id"),
    retrieval: RetrievalPath = Depends(get_retrieval_path),
):
    text = await run_in_threadpool(retrieval.reveal, key)
    return {"id": key, "message": text}
