"""
Observability Package - Structured Logging and Metrics.

    - ObservabilityManager: structlog logging with correlation IDs,
      usable as both AuditLogger and MetricsCollector
"""

from player_screener.observability.observability_manager import (
    ObservabilityManager,
    get_correlation_id,
)

__all__ = ["ObservabilityManager", "get_correlation_id"]
