"""
Console Audit Logger.

Keeps the audit trail of a run as AuditRecord objects and, when verbose,
echoes each one to stdout as a single line:

    [14:03:11] [3f2a9c1e] [INFO ] cleaner: 18944 rows in
    [14:03:11] [3f2a9c1e] [DEBUG] cleaner: removed 23 rows
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class AuditRecord:
    level: str
    message: str
    stage: Optional[str] = None
    correlation_id: Optional[str] = None
    logged_at: datetime = field(default_factory=datetime.now)

    def render(self) -> str:
        corr_id = self.correlation_id[:8] if self.correlation_id else "--------"
        prefix = f"{self.stage}: " if self.stage else ""
        return (
            f"[{self.logged_at:%H:%M:%S}] [{corr_id}] [{self.level:5}] "
            f"{prefix}{self.message}"
        )


class ConsoleAuditLogger:
    """AuditLogger that records to memory and optionally prints."""

    def __init__(self, verbose: bool = True) -> None:
        """
        Initialize console logger.

        Args:
            verbose: Print every record as it is logged
        """
        self._verbose = verbose
        self._correlation_id: Optional[str] = None
        self.records: List[AuditRecord] = []

    def set_correlation_id(self, correlation_id: str) -> None:
        self._correlation_id = correlation_id

    def log_stage_start(
        self,
        stage_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._add("INFO", f"{input_count} rows in", stage_name)

    def log_stage_end(
        self,
        stage_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._add("INFO", f"{output_count} rows out ({duration_seconds:.3f}s)", stage_name)

    def log_rows_filtered(self, stage_name: str, count: int) -> None:
        self._add("DEBUG", f"removed {count} rows", stage_name)

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = ", ".join(f"{k}={v}" for k, v in (context or {}).items())
        self._add(severity.upper(), f"{message} ({details})" if details else message)

    def _add(self, level: str, message: str, stage: Optional[str] = None) -> None:
        record = AuditRecord(level, message, stage, self._correlation_id)
        self.records.append(record)
        if self._verbose:
            print(record.render())
