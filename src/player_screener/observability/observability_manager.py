"""
Observability Manager - structlog Audit Trail and Run Metrics.

One object the pipeline can use both as its AuditLogger and as its
MetricsCollector:

    - Audit events go through structlog, rendered for the console or as
      JSON lines, each carrying the run's correlation ID
    - Metrics are kept by an InMemoryMetricsCollector
    - Every event is also kept in memory so a run summary can be built
      without re-parsing logs

Design Notes:
    - The correlation ID lives in a ContextVar and is bound into
      structlog's contextvars, so stdlib and structlog output agree
    - structlog configuration is process-wide; the last manager created
      decides the renderer and level
"""

from __future__ import annotations

import logging
import threading
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog

from player_screener.adapters.metrics_collector import InMemoryMetricsCollector

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# Anomaly severities logged as warnings; anything else is an error
_WARNING_SEVERITIES = frozenset({"INFO", "WARNING"})


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the current run, if one was set."""
    return _correlation_id.get()


def configure_structlog(use_json: bool = False, log_level: int = logging.INFO) -> None:
    """Point structlog at stdout with a console or JSON renderer."""
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


class ObservabilityManager:
    """structlog-backed AuditLogger and MetricsCollector."""

    def __init__(
        self,
        service_name: str = "player_screener",
        use_json: bool = False,
        log_level: int = logging.INFO,
        metrics: Optional[InMemoryMetricsCollector] = None,
    ) -> None:
        """
        Initialize observability manager.

        Args:
            service_name: Logger name attached to every event
            use_json: Render JSON lines instead of console output
            log_level: Minimum level structlog emits
            metrics: Collector to record into (a new one by default)
        """
        configure_structlog(use_json, log_level)
        self.service_name = service_name
        self.metrics = metrics or InMemoryMetricsCollector()
        self._logger = structlog.get_logger(service_name)
        self._events: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    # =========================================================================
    # Correlation
    # =========================================================================

    def set_correlation_id(self, correlation_id: str) -> None:
        _correlation_id.set(correlation_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    # =========================================================================
    # AuditLogger
    # =========================================================================

    def log_stage_start(
        self,
        stage_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._emit("info", "stage_start", stage=stage_name, input_count=input_count,
                   **(metadata or {}))

    def log_stage_end(
        self,
        stage_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._emit(
            "info",
            "stage_end",
            stage=stage_name,
            output_count=output_count,
            duration_seconds=round(duration_seconds, 6),
            **(metadata or {}),
        )

    def log_rows_filtered(self, stage_name: str, count: int) -> None:
        self._emit("debug", "rows_filtered", stage=stage_name, count=count)

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        level = "warning" if severity.upper() in _WARNING_SEVERITIES else "error"
        self._emit(level, "anomaly", message=message, severity=severity, **(context or {}))

    def get_events(self) -> List[Dict[str, Any]]:
        """Events emitted so far, oldest first."""
        with self._lock:
            return list(self._events)

    # =========================================================================
    # MetricsCollector
    # =========================================================================

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self.metrics.record_timing(name, duration_seconds, tags)

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self.metrics.record_count(name, value, tags)

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self.metrics.record_gauge(name, value, tags)

    def get_metrics(self) -> Dict[str, Any]:
        return self.metrics.get_metrics()

    def clear(self) -> None:
        """Forget recorded events and metrics."""
        with self._lock:
            self._events.clear()
        self.metrics.clear()

    def _emit(self, level: str, event: str, **fields: Any) -> None:
        with self._lock:
            self._events.append(
                {
                    "event": event,
                    "level": level,
                    "correlation_id": get_correlation_id(),
                    "recorded_at": datetime.now().isoformat(),
                    **fields,
                }
            )
        getattr(self._logger, level)(event, **fields)
