"""Public schema exports."""

from .analysis import (
    AnalysisRequest,
    AnalysisResult,
    DiagnosticResponse,
    EmotionalTone,
    ErrorResponse,
    RegretLabel,
    ThreatAnalysis,
    ThreatLevel,
    ThreatScore,
)

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
