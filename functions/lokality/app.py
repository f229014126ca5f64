"""
FastAPI application entry point for the Lokality backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lokality.config import get_settings
from lokality.dependencies import configure_ai
from lokality.exceptions import LokalityError
from lokality.routes import router

logger = logging.getLogger(__name__)


async def handle_lokality_error(request: Request, exc: LokalityError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


def create_app() -> FastAPI:
    settings = get_settings()
    configure_ai()
    app = FastAPI(title="Lokality Backend (FastAPI)", version="0.1.0")
    app.add_exception_handler(LokalityError, handle_lokality_error)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
