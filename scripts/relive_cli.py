#!/usr/bin/env python
"""Run a regret analysis or a provider connectivity check from the terminal."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pydantic import ValidationError  # noqa: E402

from relive.core.config import AppSettings  # noqa: E402
from relive.core.errors import AnalysisError, ConfigurationError  # noqa: E402
from relive.core.logging import configure_logging  # noqa: E402
from relive.dependencies import build_regret_analysis_service  # noqa: E402
from relive.schemas import AnalysisResult  # noqa: E402
from relive.services import RegretAnalysisService  # noqa: E402

EXIT_OK = 0
EXIT_ANALYSIS_ERROR = 1
EXIT_CONFIG_ERROR = 2

EXAMPLE_DECISION = (
    "I turned down a job offer at a startup three years ago because I thought it "
    "was too risky. The company went public last year and all early employees "
    "became millionaires. I stayed at my safe corporate job and now feel stuck "
    "and underpaid."
)


def format_report(result: AnalysisResult) -> str:
    """Render an analysis as plain text."""
    lines = [
        f"Regret Type: {result.label.value}",
        f"Confidence: {result.confidence:g}%",
        f"Intensity: {result.intensity:g}/10",
    ]
    if result.affected_domain:
        lines.append(f"Domain: {result.affected_domain}")
    if result.emotional_tone:
        lines.append(f"Primary Emotion: {result.emotional_tone.primary}")
        if result.emotional_tone.secondary:
            lines.append(
                f"Secondary Emotions: {', '.join(result.emotional_tone.secondary)}"
            )
    lines.extend(["", f"Reflection: {result.reflection}", "", f"Perspective: {result.perspective}"])
    lines.append("")
    lines.append(f"Insights ({len(result.insights)}):")
    lines.extend(f"  {index}. {item}" for index, item in enumerate(result.insights, 1))
    lines.append(f"Suggestions ({len(result.suggestions)}):")
    lines.extend(f"  {index}. {item}" for index, item in enumerate(result.suggestions, 1))
    if result.threat_analysis:
        threats = result.threat_analysis
        lines.append("Threat Analysis:")
        for name, score in (
            ("Stress", threats.stress),
            ("Anxiety", threats.anxiety),
            ("Motivation Loss", threats.motivation_loss),
            ("Health Risk", threats.health_risk),
        ):
            lines.append(f"  {name}: {score.level.value} ({score.score:g}/5)")
    return "\n".join(lines)


async def run_analysis(service: RegretAnalysisService, text: str) -> int:
    try:
        result = await service.analyze(text)
    except AnalysisError as exc:
        print(f"Analysis failed: {exc}", file=sys.stderr)
        return EXIT_ANALYSIS_ERROR
    print(format_report(result))
    return EXIT_OK


async def run_ping(service: RegretAnalysisService) -> int:
    outcome = await service.check_connection()
    if outcome.success:
        print(outcome.message or "Connection working")
        return EXIT_OK
    print(f"Connection check failed: {outcome.error}", file=sys.stderr)
    return EXIT_ANALYSIS_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze a decision for regret or check provider connectivity."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a decision narrative.")
    analyze_parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Decision to analyze. Reads stdin when omitted.",
    )
    analyze_parser.add_argument(
        "--example",
        action="store_true",
        help="Analyze a built-in example decision.",
    )
    subparsers.add_parser("ping", help="Check connectivity to the configured provider.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AppSettings()
        configure_logging(settings.log_level)
        service = build_regret_analysis_service(settings)
    except ValidationError as exc:
        print(f"Settings validation failed:\n{exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.command == "ping":
        return asyncio.run(run_ping(service))

    if args.example:
        text = EXAMPLE_DECISION
    elif args.text is not None:
        text = args.text
    else:
        text = sys.stdin.read()
    return asyncio.run(run_analysis(service, text))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
