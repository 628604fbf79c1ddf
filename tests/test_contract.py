try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import pytest

from relive.core.errors import MalformedResponseError
from relive.schemas import RegretLabel, ThreatLevel
from relive.services.contract import parse_analysis, strip_code_fences, validate_analysis


def test_validate_accepts_complete_payload(analysis_payload):
    result = validate_analysis(analysis_payload)

    assert result.label is RegretLabel.INACTION
    assert result.intensity == 6.8
    assert result.affected_domain == "Career"
    assert result.emotional_tone.secondary == ["Envy", "Doubt"]
    assert result.threat_analysis.motivation_loss.level is ThreatLevel.HIGH


def test_validate_accepts_core_fields_only(analysis_payload):
    core = {
        key: analysis_payload[key]
        for key in (
            "label",
            "confidence",
            "intensity",
            "reflection",
            "perspective",
            "insights",
            "suggestions",
        )
    }

    result = validate_analysis(core)

    assert result.threat_analysis is None
    assert result.to_payload() == core


@pytest.mark.parametrize(
    "field",
    ["label", "confidence", "intensity", "reflection", "perspective", "insights", "suggestions"],
)
def test_missing_required_field_fails(analysis_payload, field):
    del analysis_payload[field]

    with pytest.raises(MalformedResponseError) as excinfo:
        validate_analysis(analysis_payload)

    assert field in excinfo.value.details


@pytest.mark.parametrize(
    "field, value",
    [
        ("confidence", "87"),
        ("intensity", [6.8]),
        ("reflection", 42),
        ("insights", "not a list"),
        ("suggestions", [1, 2]),
        ("label", "Minimal Regret"),
        ("reflection", ""),
        ("insights", []),
    ],
)
def test_wrong_types_and_values_fail(analysis_payload, field, value):
    analysis_payload[field] = value

    with pytest.raises(MalformedResponseError):
        validate_analysis(analysis_payload)


@pytest.mark.parametrize(
    "field, value",
    [("confidence", 101), ("confidence", -1), ("intensity", 10.5)],
)
def test_out_of_range_scores_fail(analysis_payload, field, value):
    analysis_payload[field] = value

    with pytest.raises(MalformedResponseError):
        validate_analysis(analysis_payload)


def test_out_of_range_threat_score_fails(analysis_payload):
    analysis_payload["threatAnalysis"]["stress"]["score"] = 7

    with pytest.raises(MalformedResponseError):
        validate_analysis(analysis_payload)


def test_non_object_payload_fails():
    with pytest.raises(MalformedResponseError):
        validate_analysis(["label", "confidence"])


@pytest.mark.parametrize(
    "template",
    [
        "{body}",
        "```json\n{body}\n```",
        "```\n{body}\n```",
        "  ```JSON\n{body}```  ",
    ],
)
def test_fenced_and_bare_responses_parse_identically(analysis_payload, template):
    body = json.dumps(analysis_payload, indent=2)

    result = parse_analysis(template.format(body=body))

    assert result == validate_analysis(analysis_payload)


def test_strip_code_fences_leaves_plain_text_alone():
    assert strip_code_fences('  {"a": 1}\n') == '{"a": 1}'


@pytest.mark.parametrize("raw", ["", "```json\n```", "not json at all", "{\"label\": "])
def test_unparseable_responses_are_malformed(raw):
    with pytest.raises(MalformedResponseError):
        parse_analysis(raw)
