"""
Pipeline Package - Orchestration.

Components:
    - PlayerPipeline: Main orchestrator (load, validate, stages, preview, write)

The pipeline is responsible for:
    - Loading the source through the engine
    - Validating the loaded schema
    - Executing stages in sequence, each on the previous stage's output
    - Collecting metrics and audit trail
    - Persisting the final table and returning a PipelineResult

Design Principles:
    - All dependencies injected via constructor
    - No table state kept between runs
"""

from player_screener.pipeline.player_pipeline import PlayerPipeline

__all__ = ["PlayerPipeline"]
