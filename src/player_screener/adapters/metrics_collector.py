"""
In-Memory Metrics Collector.

Keeps every sample recorded during a run. Besides the per-name summary
the MetricsCollector protocol asks for, samples tagged with a ``stage``
can be broken down per stage, which is how the run summary reports
where time went and which stage removed rows.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class MetricSample:
    """One recorded value."""

    name: str
    kind: str
    value: float
    tags: Mapping[str, str] = field(default_factory=dict)
    recorded_at: float = field(default_factory=time.time)


class InMemoryMetricsCollector:
    """MetricsCollector that holds samples in a list."""

    def __init__(self) -> None:
        self._samples: List[MetricSample] = []
        self._lock = Lock()

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self._append(MetricSample(name, "timing", duration_seconds, dict(tags or {})))

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self._append(MetricSample(name, "count", value, dict(tags or {})))

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self._append(MetricSample(name, "gauge", value, dict(tags or {})))

    def samples(self, name: Optional[str] = None) -> List[MetricSample]:
        """Recorded samples, optionally only those named ``name``."""
        with self._lock:
            return [s for s in self._samples if name is None or s.name == name]

    def get_metrics(self) -> Dict[str, Any]:
        """Per-name summary: how many samples, their total and the last value."""
        summary: Dict[str, Dict[str, Any]] = {}
        for sample in self.samples():
            entry = summary.setdefault(sample.name, {"count": 0, "total": 0, "last": None})
            entry["count"] += 1
            entry["total"] += sample.value
            entry["last"] = sample.value
        return summary

    def by_stage(self, name: str) -> Dict[str, float]:
        """
        Total of ``name`` per ``stage`` tag, in first-recorded order.

        Samples without a stage tag are ignored.
        """
        totals: Dict[str, float] = {}
        for sample in self.samples(name):
            stage = sample.tags.get("stage")
            if stage is not None:
                totals[stage] = totals.get(stage, 0) + sample.value
        return totals

    def clear(self) -> None:
        with self._lock:
            self._samples.clear()

    def _append(self, sample: MetricSample) -> None:
        with self._lock:
            self._samples.append(sample)
