"""
Run Entities.

Results produced by a pipeline run: one StageResult per executed stage
and a PipelineResult for the whole run.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class StageResult(BaseModel):
    """Result of a single stage for the audit trail."""

    stage_name: str
    input_count: int
    output_count: int
    duration_seconds: float
    added_columns: List[str] = Field(default_factory=list)

    @property
    def rows_filtered(self) -> int:
        return self.input_count - self.output_count

    @property
    def reduction_ratio(self) -> float:
        """Calculate reduction ratio (0.0 = no reduction, 1.0 = all filtered)."""
        if self.input_count == 0:
            return 0.0
        return 1.0 - (self.output_count / self.input_count)


class PipelineResult(BaseModel):
    """Complete result of a pipeline run."""

    correlation_id: str
    source_path: str
    sink_path: str
    input_count: int
    output_count: int
    output_columns: List[str] = Field(default_factory=list)
    audit_trail: List[StageResult] = Field(default_factory=list)
    metrics: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def total_reduction_ratio(self) -> float:
        """Calculate total reduction ratio."""
        if self.input_count == 0:
            return 0.0
        return 1.0 - (self.output_count / self.input_count)

    def stage(self, name: str) -> StageResult:
        """Look up a stage result by name."""
        for result in self.audit_trail:
            if result.stage_name == name:
                return result
        raise KeyError(name)
