"""Upload form and upload endpoint."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from stegvault.errors import DecodeError
from stegvault.handlers import pages
from stegvault.handlers.boundary import FailureBoundaryRoute
from stegvault.handlers.dependencies import get_ingest_pipeline
from stegvault.services.pipeline import IngestPipeline

router = APIRouter(route_class=FailureBoundaryRoute)
logger = logging.getLogger(__name__)


@router.get("/", response_class=HTMLResponse)
async def upload_form():
    """No upload; show the upload form."""
    return HTMLResponse(pages.upload_page())


@router.post("/")
async def upload(
    image: UploadFile | None = File(None),
    message: str = Form(""),
    pipeline: IngestPipeline = Depends(get_ingest_pipeline),
):
    if image is None:
        raise DecodeError("No image uploaded")
    # Size is known from the multipart parser; refuse before buffering.
    if image.size is not None:
        pipeline.check_size(image.size)
    raw = await image.read()
    logger.debug("Received %s (%d bytes)", image.filename, len(raw))

    key = await run_in_threadpool(pipeline.ingest, raw, message)

    # Redirect to /view using the key.
    return RedirectResponse(f"/view?id={key}", status_code=302)
