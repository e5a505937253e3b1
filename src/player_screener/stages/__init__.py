"""
Stages Package - Pipeline Stage Implementations.

This package contains the concrete stages, each a pure table-to-table
transformation expressed through a TabularEngine:
    - Cleaner: drops rows missing identifying fields
    - RankAnnotator: rank-within-partition + tier bucketing (used twice)
    - RatioComputer: overall / potential
    - QualityFilter: tier-dependent ratio threshold
    - Projector: final column selection and order

Usage:
    >>> from player_screener.stages import build_default_stages
    >>> stages = build_default_stages()
"""

from player_screener.stages.cleaner import Cleaner
from player_screener.stages.projector import Projector
from player_screener.stages.quality_filter import DEFAULT_QUALITY_RULE, QualityFilter
from player_screener.stages.rank_annotator import (
    HEIGHT_BY_POSITION,
    OVERALL_BY_NATIONALITY,
    RankAnnotator,
)
from player_screener.stages.ratio import RatioComputer


def build_default_stages() -> list:
    """Return the stages in pipeline order."""
    return [
        Cleaner(),
        RankAnnotator(HEIGHT_BY_POSITION),
        RankAnnotator(OVERALL_BY_NATIONALITY),
        RatioComputer(),
        QualityFilter(DEFAULT_QUALITY_RULE),
        Projector(),
    ]


__all__ = [
    "Cleaner",
    "Projector",
    "QualityFilter",
    "DEFAULT_QUALITY_RULE",
    "RankAnnotator",
    "HEIGHT_BY_POSITION",
    "OVERALL_BY_NATIONALITY",
    "RatioComputer",
    "build_default_stages",
]
