"""
Domain Layer - Column Names, Expressions, and Results.

Components:
    - columns: Input and derived column names, required/output column sets
    - expressions: Engine-neutral expression model (col, lit, when, ...)
    - value_objects: RankSpec, TierBoundary, QualityRule
    - entities: StageResult, PipelineResult

Nothing in this package depends on a concrete tabular engine.
"""

from player_screener.domain.columns import (
    INPUT_COLUMNS,
    OUTPUT_COLUMNS,
    PlayerColumns,
)
from player_screener.domain.entities import PipelineResult, StageResult
from player_screener.domain.expressions import Expr, col, lit, when
from player_screener.domain.value_objects import QualityRule, RankSpec, TierBoundary

__all__ = [
    "INPUT_COLUMNS",
    "OUTPUT_COLUMNS",
    "PlayerColumns",
    "PipelineResult",
    "StageResult",
    "Expr",
    "col",
    "lit",
    "when",
    "QualityRule",
    "RankSpec",
    "TierBoundary",
]
