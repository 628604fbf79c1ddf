"""Service layer exports."""

from .contract import parse_analysis, strip_code_fences, validate_analysis
from .model_fallback import invoke_with_fallback
from .prompts import build_prompt
from .regret_analysis import FALLBACK_ANALYSIS, ChatProvider, RegretAnalysisService
from .session import AnalysisSession, Notification, SessionState

__all__ = [
    "AnalysisSession",
    "ChatProvider",
    "FALLBACK_ANALYSIS",
    "Notification",
    "RegretAnalysisService",
    "SessionState",
    "build_prompt",
    "invoke_with_fallback",
    "parse_analysis",
    "strip_code_fences",
    "validate_analysis",
]
