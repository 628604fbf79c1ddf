"""
FastAPI routes for the regret analysis service.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from relive.core.errors import ConfigurationError
from relive.dependencies import ServiceFactory, get_regret_analysis_service, get_service_factory
from relive.schemas import AnalysisRequest, DiagnosticResponse, ErrorResponse
from relive.services import RegretAnalysisService

router = APIRouter()
logger = logging.getLogger(__name__)

ServiceDependency = Annotated[RegretAnalysisService, Depends(get_regret_analysis_service)]
FactoryDependency = Annotated[ServiceFactory, Depends(get_service_factory)]


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post(
    "/analyze-regret",
    status_code=HTTPStatus.OK,
    responses={
        HTTPStatus.BAD_REQUEST: {"model": ErrorResponse},
        HTTPStatus.INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        HTTPStatus.BAD_GATEWAY: {"model": ErrorResponse},
        HTTPStatus.SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
async def analyze_regret(payload: AnalysisRequest, service: ServiceDependency) -> JSONResponse:
    """Analyze a decision narrative and return the structured regret analysis.

    Failures are rendered by the ``AnalysisError`` handler registered on the app.
    """
    result = await service.analyze(payload.text)
    logger.info("Analysis successful (label=%s).", result.label.value)
    return JSONResponse(status_code=HTTPStatus.OK, content=result.to_payload())


@router.post(
    "/test-connection",
    response_model=DiagnosticResponse,
    responses={HTTPStatus.INTERNAL_SERVER_ERROR: {"model": DiagnosticResponse}},
)
async def test_connection(build_service: FactoryDependency) -> JSONResponse:
    """Confirm the upstream provider answers with the configured credentials."""
    try:
        service = build_service()
    except ConfigurationError as exc:
        logger.error("Connection check could not start: %s", exc.details or exc)
        outcome = DiagnosticResponse(success=False, error=exc.user_message)
    else:
        outcome = await service.check_connection()
    status_code = HTTPStatus.OK if outcome.success else HTTPStatus.INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status_code,
        content=outcome.model_dump(exclude_none=True),
    )


__all__ = ["router"]
