"""Pytest configuration shared across the suite."""

import copy

import pytest

_VALID_PAYLOAD = {
    "label": "Regret by Inaction",
    "confidence": 87,
    "intensity": 6.8,
    "reflection": "You made a careful choice with the information you had.",
    "perspective": "Security was a real value for you at the time.",
    "insights": [
        "Inaction regrets tend to grow over time.",
        "Hindsight bias makes outcomes look predictable.",
        "Counterfactual thinking can fuel rumination.",
    ],
    "suggestions": [
        "List the opportunities still open to you today.",
        "Talk with someone who took a similar risk.",
    ],
    "affectedDomain": "Career",
    "emotionalTone": {"primary": "Longing", "secondary": ["Envy", "Doubt"]},
    "currentImpact": "You feel stuck in your current role.",
    "futureProjection": "This feeling eases once you act on a new goal.",
    "irreversibleLimitation": "The specific equity payout cannot be recovered.",
    "threatAnalysis": {
        "stress": {"level": "Medium", "score": 3},
        "anxiety": {"level": "Low", "score": 2},
        "motivationLoss": {"level": "High", "score": 4},
        "healthRisk": {"level": "Low", "score": 1},
    },
}


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def analysis_payload() -> dict:
    """A complete, contract-conforming analysis payload."""
    return copy.deepcopy(_VALID_PAYLOAD)


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that records the requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()
