"""
FastAPI application entrypoint for the regret analysis service.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relive.api.routes import router as api_router
from relive.core.config import get_settings
from relive.core.errors import AnalysisError
from relive.core.logging import configure_logging
from relive.schemas import ErrorResponse

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


async def _analysis_error_handler(_: Request, exc: AnalysisError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Analysis request failed (%s): %s", exc.category, exc)
    body = ErrorResponse(error=exc.user_message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


async def _validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    body = ErrorResponse(error="Invalid request body", details=str(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


async def _unexpected_error_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in analysis service")
    body = ErrorResponse(error="Internal server error", details=type(exc).__name__)
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="ReLiveAI Regret Analysis",
        version="0.1.0",
        description="Stateless service forwarding decision narratives to an LLM.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
    )
    app.add_exception_handler(AnalysisError, _analysis_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
