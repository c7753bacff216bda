"""Failure boundary for every HTTP entry point.

Routers built with ``route_class=FailureBoundaryRoute`` run the whole
request (parameter parsing included) inside one guard. Whatever escapes is
turned into a single :class:`FailureEnvelope`, logged once and rendered as
the error page; successful responses pass through untouched. Nothing is
retried.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Coroutine

from fastapi import HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from fastapi.routing import APIRoute

from stegvault.errors import StegVaultError
from stegvault.handlers import pages
from stegvault.models import FailureEnvelope

logger = logging.getLogger(__name__)

_EXPECTED = (StegVaultError, HTTPException, RequestValidationError)


def failure_response(request: Request, exc: Exception) -> HTMLResponse:
    """Convert ``exc`` into the uniform error page."""

    envelope = FailureEnvelope.from_exception(exc)
    if isinstance(exc, _EXPECTED):
        logger.warning(
            "%s %s failed with %s: %s",
            request.method,
            request.url.path,
            envelope.kind,
            envelope.message,
        )
    else:
        logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return HTMLResponse(pages.error_page(envelope), status_code=envelope.status_code)


class FailureBoundaryRoute(APIRoute):
    """APIRoute whose handler never lets an exception reach the server."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def guarded_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except Exception as exc:  # pylint: disable=broad-except
                return failure_response(request, exc)

        return guarded_handler
