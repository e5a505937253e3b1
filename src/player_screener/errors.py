"""
Error Taxonomy.

All fatal pipeline conditions derive from PipelineError. Each error
carries the name of the stage that raised it so the driver can report
which step of the run failed.

Data-quality outcomes (null identifying fields, null ratios) are not
errors: they remove rows and are never reported individually.
"""

from __future__ import annotations

from typing import Iterable, List, Optional


class PipelineError(Exception):
    """Base class for fatal pipeline conditions."""

    default_stage: Optional[str] = None

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage

    def describe(self) -> str:
        """Return '<stage>: <message>' for operator-facing output."""
        if self.stage:
            return f"{self.stage}: {self.message}"
        return self.message


class SourceUnavailable(PipelineError):
    """Raised when the input cannot be opened or read."""

    default_stage = "loader"


class SchemaMismatch(PipelineError):
    """Raised when a column needed downstream is absent after load."""

    default_stage = "schema_validation"

    def __init__(
        self,
        missing: Iterable[str],
        stage: Optional[str] = None,
    ) -> None:
        self.missing: List[str] = list(missing)
        super().__init__(
            f"required columns missing from source: {', '.join(self.missing)}",
            stage=stage,
        )


class ColumnMissing(PipelineError):
    """Raised when a projection references absent columns (internal invariant)."""

    def __init__(
        self,
        missing: Iterable[str],
        stage: Optional[str] = None,
    ) -> None:
        self.missing = list(missing)
        super().__init__(
            f"columns missing from table: {', '.join(self.missing)}",
            stage=stage,
        )


class SinkWriteError(PipelineError):
    """Raised when the output cannot be written or published."""

    default_stage = "sink"
