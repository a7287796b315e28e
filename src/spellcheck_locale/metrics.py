"""Shared Prometheus metrics for spell check sessions.

Metrics are created once per process and shared by every session, preventing
duplicate registration errors.
"""

from __future__ import annotations

from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry, Counter

from spellcheck_locale.logging_utils import create_service_logger

logger = create_service_logger("spellcheck_locale.metrics")

# Global metrics instances (created once, shared by all sessions)
_metrics: dict[str, Any] | None = None


def get_metrics(registry: CollectorRegistry | None = None) -> dict[str, Any]:
    """Get or create shared metrics instances.

    Args:
        registry: Registry to create metrics in on first call (defaults to REGISTRY)

    Returns:
        Dictionary of metric instances keyed by metric name
    """
    global _metrics

    if _metrics is None:
        _metrics = _create_metrics(registry or REGISTRY)
        logger.debug(f"Available metrics: {list(_metrics.keys())}")

    return _metrics


def reset_metrics() -> None:
    """Forget the shared metrics so the next call recreates them (tests only)."""
    global _metrics
    _metrics = None


def _create_metrics(registry: CollectorRegistry) -> dict[str, Any]:
    return {
        "language_switches_total": Counter(
            "spellcheck_locale_language_switches_total",
            "Language switch requests by outcome",
            ["outcome"],
            registry=registry,
        ),
        "dictionary_resolutions_total": Counter(
            "spellcheck_locale_dictionary_resolutions_total",
            "Dictionary resolutions by the step that produced the result",
            ["source"],
            registry=registry,
        ),
        "verdict_lookups_total": Counter(
            "spellcheck_locale_verdict_lookups_total",
            "Per-word misspelling lookups by how the verdict was obtained",
            ["result"],
            registry=registry,
        ),
    }
