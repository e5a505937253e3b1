"""
Player Pipeline - Main Orchestrator.

The PlayerPipeline runs the batch job end to end:

    load -> validate schema -> stages (in order) -> preview -> write

When preview is enabled, the loaded schema is shown after validation and
the result schema and first rows are shown before the write.

Each stage receives the table the previous stage returned. A fatal
error anywhere before the write step aborts the run, so no output is
published for a failed run.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from player_screener import __version__
from player_screener.config.models import PipelineConfig
from player_screener.domain.entities import PipelineResult, StageResult
from player_screener.errors import PipelineError
from player_screener.interfaces.audit_logger import AuditLogger, Previewer
from player_screener.interfaces.metrics_collector import MetricsCollector
from player_screener.interfaces.pipeline_stage import PipelineStage
from player_screener.interfaces.tabular_engine import TabularEngine
from player_screener.validation.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)


class PlayerPipeline:
    """Main orchestrator for the player transformation run."""

    def __init__(
        self,
        engine: TabularEngine,
        stages: Sequence[PipelineStage],
        config: PipelineConfig,
        audit_logger: AuditLogger,
        metrics_collector: MetricsCollector,
        schema_validator: Optional[SchemaValidator] = None,
        previewer: Optional[Previewer] = None,
    ) -> None:
        """
        Initialize pipeline with all dependencies.

        Args:
            engine: Tabular engine used for every table operation
            stages: Ordered list of stages
            config: Pipeline configuration
            audit_logger: For audit trail
            metrics_collector: For performance metrics
            schema_validator: Checks the loaded schema (optional)
            previewer: Shows the result before it is written (optional)
        """
        self.engine = engine
        self.stages = list(stages)
        self.config = config
        self.audit_logger = audit_logger
        self.metrics_collector = metrics_collector
        self.schema_validator = schema_validator
        self.previewer = previewer

    def run(self) -> PipelineResult:
        """
        Execute the whole run.

        Returns:
            PipelineResult with counts, audit trail and metrics

        Raises:
            SourceUnavailable: If the source cannot be read
            SchemaMismatch: If a required column is absent after load
            ColumnMissing: If a stage references an absent column
            SinkWriteError: If the output cannot be published
        """
        start_time = time.perf_counter()
        correlation_id = str(uuid.uuid4())
        self.audit_logger.set_correlation_id(correlation_id)

        # 1. Load
        table = self._load()
        input_count = self.engine.count(table)

        # 2. Validate schema before any stage runs
        if self.schema_validator:
            self.schema_validator.validate(self.engine.columns(table))
        if self._previewing:
            self.previewer.show_schema(self.engine.schema(table))

        # 3. Stages
        table, audit_trail = self.transform(table)
        output_count = self.engine.count(table)
        if output_count == 0:
            self.audit_logger.log_anomaly(
                "pipeline produced no rows",
                severity="WARNING",
                context={"input_count": input_count},
            )

        # 4. Preview
        if self._previewing:
            self.previewer.show(
                self.engine.schema(table),
                self.engine.head(table, self.config.preview.rows),
            )

        # 5. Write
        self._write(table)

        total_duration = time.perf_counter() - start_time
        self.metrics_collector.record_timing("pipeline_total_seconds", total_duration)
        self.metrics_collector.record_count("output_rows_total", output_count)

        return PipelineResult(
            correlation_id=correlation_id,
            source_path=self.config.source.path,
            sink_path=self.config.sink.path,
            input_count=input_count,
            output_count=output_count,
            output_columns=self.engine.columns(table),
            audit_trail=audit_trail,
            metrics=self.metrics_collector.get_metrics(),
            metadata=self._build_metadata(correlation_id, total_duration),
        )

    @property
    def _previewing(self) -> bool:
        return self.previewer is not None and self.config.preview.enabled

    def transform(self, table: Any) -> Tuple[Any, List[StageResult]]:
        """
        Run every stage on ``table`` without touching source or sink.

        Returns:
            The final table and one StageResult per stage
        """
        audit_trail: List[StageResult] = []
        for stage in self.stages:
            table, stage_result = self._execute_stage(stage, table)
            audit_trail.append(stage_result)
        return table, audit_trail

    def _load(self) -> Any:
        """Read the configured source."""
        load_start = time.perf_counter()
        table = self.engine.load(self.config.source)
        load_duration = time.perf_counter() - load_start

        row_count = self.engine.count(table)
        self.metrics_collector.record_timing("source_load_seconds", load_duration)
        self.metrics_collector.record_count("input_rows_total", row_count)
        logger.info(f"Loaded {row_count} rows from {self.config.source.path}")
        return table

    def _write(self, table: Any) -> None:
        """Persist the final table."""
        write_start = time.perf_counter()
        self.engine.write(table, self.config.sink)
        self.metrics_collector.record_timing(
            "sink_write_seconds", time.perf_counter() - write_start
        )
        logger.info(f"Published output to {self.config.sink.path}")

    def _execute_stage(self, stage: PipelineStage, table: Any) -> Tuple[Any, StageResult]:
        """Execute a single stage."""
        input_count = self.engine.count(table)
        self.audit_logger.log_stage_start(stage.name, input_count)
        stage_start = time.perf_counter()

        try:
            result = stage.apply(table, self.engine)
        except PipelineError as exc:
            if exc.stage is None:
                exc.stage = stage.name
            logger.error(f"Stage {stage.name} failed: {exc.message}")
            raise

        stage_duration = time.perf_counter() - stage_start
        output_count = self.engine.count(result)
        filtered = input_count - output_count

        if filtered:
            self.audit_logger.log_rows_filtered(stage.name, filtered)
        self.audit_logger.log_stage_end(stage.name, output_count, stage_duration)

        self.metrics_collector.record_timing(
            "stage_duration_seconds",
            stage_duration,
            {"stage": stage.name},
        )
        self.metrics_collector.record_count(
            "rows_filtered_total",
            filtered,
            {"stage": stage.name},
        )

        stage_result = StageResult(
            stage_name=stage.name,
            input_count=input_count,
            output_count=output_count,
            duration_seconds=stage_duration,
            added_columns=list(stage.added_columns),
        )
        return result, stage_result

    def _build_metadata(self, correlation_id: str, duration: float) -> dict:
        """Build result metadata."""
        return {
            "correlation_id": correlation_id,
            "timestamp": datetime.now().isoformat(),
            "duration_seconds": duration,
            "version": __version__,
        }
