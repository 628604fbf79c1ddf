"""Prompt text sent to the language model for a regret analysis."""

from __future__ import annotations

from dataclasses import dataclass
from textwrap import dedent

from relive.schemas import RegretLabel

_LABELS = ", ".join(f'"{label.value}"' for label in RegretLabel)

REGRET_ANALYSIS_INSTRUCTIONS = dedent(
    f"""\
    You are ReLiveAI, a compassionate AI psychologist specializing in regret analysis.
    Analyze the user's decision with empathy and provide insights.

    Respond ONLY with valid JSON in this exact format:
    {{
      "label": "string",
      "confidence": number,
      "intensity": number,
      "reflection": "string",
      "perspective": "string",
      "insights": ["string", "string", "string"],
      "suggestions": ["string", "string"],
      "affectedDomain": "string",
      "emotionalTone": {{
        "primary": "string",
        "secondary": ["string", "string"]
      }},
      "currentImpact": "string",
      "futureProjection": "string",
      "irreversibleLimitation": "string",
      "threatAnalysis": {{
        "stress": {{"level": "Low/Medium/High", "score": number}},
        "anxiety": {{"level": "Low/Medium/High", "score": number}},
        "motivationLoss": {{"level": "Low/Medium/High", "score": number}},
        "healthRisk": {{"level": "Low/Medium/High", "score": number}}
      }}
    }}

    Guidelines:
    - Be empathetic and supportive
    - label: one of {_LABELS}
    - confidence: 0-100 (clinical confidence level)
    - intensity: 0.0-10.0 (emotional intensity score, decimals ok)
    - reflection: professional therapeutic reflection (2-3 sentences)
    - perspective: alternative perspective with cognitive reframing (2-3 sentences)
    - insights: 3 research-backed psychological insights (1 sentence each)
    - suggestions: 2 evidence-based growth strategies (1 sentence each)
    - affectedDomain: Career, Relationships, Health, Education, or Financial
    - emotionalTone.secondary: array of 2-3 emotions
    - threatAnalysis scores: 1-5 scale
    """
)


CONNECTION_CHECK_PROMPT = (
    'Just respond with "API connection successful" in JSON format: '
    '{"message": "API connection successful"}'
)


@dataclass(frozen=True, slots=True)
class AnalysisPrompt:
    system: str
    user: str


def build_prompt(text: str) -> AnalysisPrompt:
    """Interpolate the user's narrative into the fixed instructions."""
    return AnalysisPrompt(
        system=REGRET_ANALYSIS_INSTRUCTIONS,
        user=f"Decision: {text}",
    )


__all__ = [
    "AnalysisPrompt",
    "CONNECTION_CHECK_PROMPT",
    "REGRET_ANALYSIS_INSTRUCTIONS",
    "build_prompt",
]
