"""Request metrics.

The orchestrator only needs something with ``inc()``; the Prometheus-backed implementation is
the default, and tests pass their own registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from prometheus_client import REGISTRY, CollectorRegistry, Counter


class MetricsCounter(Protocol):
    """Monotonic counter interface."""

    def inc(self, amount: float = 1) -> None:
        """Increment the counter."""


@dataclass
class WebSearchMetrics:
    """Web search counters registered on a Prometheus registry."""

    registry: CollectorRegistry = field(default=REGISTRY)
    request_count: Counter = field(init=False)

    def __post_init__(self) -> None:
        self.request_count = Counter(
            "websift_web_search_requests",
            "Number of web search runs started",
            registry=self.registry,
        )


_default_metrics: WebSearchMetrics | None = None


def default_metrics() -> WebSearchMetrics:
    """Return the process-wide metrics, registering them on first use."""

    global _default_metrics
    if _default_metrics is None:
        _default_metrics = WebSearchMetrics()
    return _default_metrics
