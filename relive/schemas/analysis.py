"""
Pydantic models for regret analysis requests and results.
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class RegretLabel(str, Enum):
    """Closed set of regret classifications the model may return."""

    ACTION = "Regret by Action"
    INACTION = "Regret by Inaction"
    NONE = "No Regret"


class ThreatLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ThreatScore(_CamelModel):
    level: ThreatLevel
    score: float = Field(..., strict=True, ge=1, le=5)


class ThreatAnalysis(_CamelModel):
    """Four named wellbeing risks, each scored on a 1-5 scale."""

    stress: ThreatScore
    anxiety: ThreatScore
    motivation_loss: ThreatScore
    health_risk: ThreatScore


class EmotionalTone(_CamelModel):
    primary: NonEmptyStr
    secondary: list[StrictStr] = Field(default_factory=list)


class AnalysisResult(_CamelModel):
    """Validated regret analysis returned to callers."""

    label: RegretLabel
    confidence: float = Field(
        ..., strict=True, ge=0, le=100, description="Clinical confidence level."
    )
    intensity: float = Field(
        ..., strict=True, ge=0, le=10, description="Emotional intensity score."
    )
    reflection: NonEmptyStr
    perspective: NonEmptyStr
    insights: list[StrictStr] = Field(..., min_length=1)
    suggestions: list[StrictStr] = Field(..., min_length=1)
    affected_domain: Optional[StrictStr] = None
    emotional_tone: Optional[EmotionalTone] = None
    current_impact: Optional[StrictStr] = None
    future_projection: Optional[StrictStr] = None
    irreversible_limitation: Optional[StrictStr] = None
    threat_analysis: Optional[ThreatAnalysis] = None

    def to_payload(self) -> dict:
        """Serialize with the camelCase field names used on the wire."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AnalysisRequest(BaseModel):
    """Incoming payload for the analysis endpoint."""

    text: Optional[str] = Field(
        None, description="Free-form narrative describing the decision."
    )


class ErrorResponse(BaseModel):
    """Body returned for any failed analysis request."""

    error: str
    details: Optional[str] = None


class DiagnosticResponse(BaseModel):
    """Outcome of a provider connectivity check."""

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    response: Optional[str] = None


__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "DiagnosticResponse",
    "EmotionalTone",
    "ErrorResponse",
    "RegretLabel",
    "ThreatAnalysis",
    "ThreatLevel",
    "ThreatScore",
]
