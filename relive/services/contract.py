"""Turn raw model output into a trusted ``AnalysisResult``."""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from relive.core.errors import MalformedResponseError
from relive.schemas import AnalysisResult

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?```\s*$")


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding markdown code fence, with or without a language tag."""
    cleaned = raw.strip()
    if not cleaned.startswith("```"):
        return cleaned
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def validate_analysis(payload: Any) -> AnalysisResult:
    """Structurally validate a decoded payload against the analysis contract."""
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            details=f"Expected a JSON object, received {type(payload).__name__}."
        )
    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        )
        raise MalformedResponseError(
            details=f"Invalid analysis format: {problems}"
        ) from exc


def parse_analysis(raw: str) -> AnalysisResult:
    """Strip fencing, decode JSON, and validate the provider's reply."""
    cleaned = strip_code_fences(raw or "")
    if not cleaned:
        raise MalformedResponseError(details="Empty response from provider.")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(details=f"Invalid JSON: {exc.msg}") from exc
    return validate_analysis(payload)


__all__ = ["parse_analysis", "strip_code_fences", "validate_analysis"]
