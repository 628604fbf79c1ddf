"""HTTP client for a deployed analysis service."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from relive.schemas import AnalysisResult, DiagnosticResponse

logger = logging.getLogger(__name__)


class AnalysisRequestError(RuntimeError):
    """The analysis service could not produce a result for the request."""


class AnalysisApiClient:
    """Call ``/api/analyze-regret`` and ``/api/test-connection`` over HTTP."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def analyze(self, text: str) -> AnalysisResult:
        logger.info("Calling analyze-regret with %d characters.", len(text))
        try:
            async with self._client() as client:
                response = await client.post("/api/analyze-regret", json={"text": text})
        except httpx.HTTPError as exc:
            raise AnalysisRequestError(f"Function error: {exc}") from exc

        data = _json_body(response)
        if isinstance(data, dict) and data.get("error"):
            details = data.get("details")
            suffix = f" - {details}" if details else ""
            raise AnalysisRequestError(f"API Error: {data['error']}{suffix}")
        if not isinstance(data, dict) or not data.get("label"):
            logger.error("Invalid response format: %s", data)
            raise AnalysisRequestError("Invalid response from analysis service")
        try:
            return AnalysisResult.model_validate(data)
        except ValidationError as exc:
            raise AnalysisRequestError("Invalid response from analysis service") from exc

    async def check_connection(self) -> DiagnosticResponse:
        try:
            async with self._client() as client:
                response = await client.post("/api/test-connection")
        except httpx.HTTPError as exc:
            return DiagnosticResponse(success=False, error=str(exc))
        data = _json_body(response)
        if not isinstance(data, dict) or "success" not in data:
            error = data.get("error") if isinstance(data, dict) else None
            return DiagnosticResponse(
                success=False, error=str(error) if error else "Unknown error occurred"
            )
        try:
            return DiagnosticResponse.model_validate(data)
        except ValidationError:
            logger.error("Invalid diagnostic response: %s", data)
            return DiagnosticResponse(success=False, error="Unknown error occurred")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


__all__ = ["AnalysisApiClient", "AnalysisRequestError"]
