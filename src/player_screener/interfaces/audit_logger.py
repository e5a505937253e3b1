"""
Audit Logger Protocol.

Defines the abstract interface for audit logging. The audit logger
tracks what each stage did to the table for debugging and operations.

The audit logger is responsible for:
    - Logging stage start/end events
    - Logging how many rows a stage removed
    - Logging anomalies and warnings
    - Maintaining correlation across a pipeline run

Rows are never reported individually.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class AuditLogger(Protocol):
    """Abstract interface for audit logging."""

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        ...

    def log_stage_start(
        self,
        stage_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log the start of a stage."""
        ...

    def log_stage_end(
        self,
        stage_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log the end of a stage."""
        ...

    def log_rows_filtered(self, stage_name: str, count: int) -> None:
        """Log that a stage removed ``count`` rows."""
        ...

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log an anomaly or warning.

        Args:
            message: Description of the anomaly
            severity: INFO, WARNING, or CRITICAL
            context: Optional additional context
        """
        ...


@runtime_checkable
class Previewer(Protocol):
    """Operator-facing preview of the loaded and result tables."""

    def show_schema(self, schema: Dict[str, str]) -> None:
        """Display a schema on its own."""
        ...

    def show(self, schema: Dict[str, str], rows: List[Dict[str, Any]]) -> None:
        """Display the schema and the given rows."""
        ...
