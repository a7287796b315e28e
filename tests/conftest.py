"""
Pytest configuration and fixtures for spellcheck_locale tests.

Every test gets its own Prometheus registry and its own alternates memo so
process-wide state never leaks between tests.
"""

from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from prometheus_client import CollectorRegistry

from spellcheck_locale.metrics import get_metrics, reset_metrics
from spellcheck_locale.shared_state import LocaleResolutionState
from tests.fakes import FakeClock


@pytest.fixture(autouse=True)
def metrics_registry() -> Generator[CollectorRegistry, None, None]:
    """Recreate the shared metrics in a fresh registry before each test.

    Prevents `ValueError: Duplicated timeseries` when several tests create metrics
    in the same process.
    """
    registry = CollectorRegistry()
    reset_metrics()
    get_metrics(registry)
    yield registry
    reset_metrics()


@pytest.fixture
def counter_value(metrics_registry: CollectorRegistry) -> Callable[[str, str, str], float]:
    """Read one labelled sample of a spellcheck_locale counter."""

    def _value(metric: str, label: str, value: str) -> float:
        sample = metrics_registry.get_sample_value(
            f"spellcheck_locale_{metric}", {label: value}
        )
        return sample or 0.0

    return _value


@pytest.fixture
def resolution_state() -> LocaleResolutionState:
    """Fresh alternates memo per test, with the real fallback table."""
    return LocaleResolutionState()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
