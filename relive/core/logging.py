"""
Logging utilities for the analysis service and CLI.

Provides a consistent logging format and configuration.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


def preview(text: str, limit: int = 100) -> str:
    """Shorten user-supplied text before it reaches the logs."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


__all__ = ["configure_logging", "preview"]
