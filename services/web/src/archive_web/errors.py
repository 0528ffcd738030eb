"""
Exception handlers for the Transcriptorator web service.

Store failures raised from JSON API routes become ``502`` responses with
the store's message as ``detail``.  HTML pages catch ``StoreError``
themselves and render an error state instead.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from archive_common.db.queries import StoreError


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message, "operation": exc.operation},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
