"""
Rank Annotator Stage.

Ranks rows within a partition and buckets the rank into labeled tiers.
One class serves every ranking category; the two the pipeline uses are
defined below as RankSpec constants.

Algorithm:
    1. Competition rank of ``order_by`` within each ``partition_by``
       group (ties share a rank, the next distinct value skips ahead)
    2. First tier whose exclusive upper bound exceeds the rank wins
    3. Otherwise the default label; this includes rows whose rank is
       null because their partition has no non-null ``order_by`` value

The temporary rank column is dropped before the stage returns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from player_screener.domain.columns import PlayerColumns
from player_screener.domain.expressions import Case, col
from player_screener.domain.value_objects import RankSpec, TierBoundary

if TYPE_CHECKING:
    from player_screener.interfaces.tabular_engine import TabularEngine


HEIGHT_BY_POSITION = RankSpec(
    output_column=PlayerColumns.CAT_HEIGHT_BY_POSITION,
    partition_by=PlayerColumns.TEAM_POSITION,
    order_by=PlayerColumns.HEIGHT_CM,
    tiers=(
        TierBoundary(upper_bound=10, label="A"),
        TierBoundary(upper_bound=50, label="B"),
    ),
    default_label="C",
)

OVERALL_BY_NATIONALITY = RankSpec(
    output_column=PlayerColumns.PLAYER_CAT,
    partition_by=PlayerColumns.NATIONALITY,
    order_by=PlayerColumns.OVERALL,
    tiers=(
        TierBoundary(upper_bound=10, label="A"),
        TierBoundary(upper_bound=20, label="B"),
        TierBoundary(upper_bound=50, label="C"),
    ),
    default_label="D",
)


def tier_expression(spec: RankSpec) -> Case:
    """Case expression mapping a RankSpec's rank column to tier labels."""
    rank = col(spec.rank_column)
    rule = Case()
    for tier in spec.tiers:
        rule = rule.when(rank.lt(tier.upper_bound), tier.label)
    return rule.otherwise(spec.default_label)


class RankAnnotator:
    """Add a tier label column derived from a within-partition rank."""

    def __init__(self, spec: RankSpec) -> None:
        """
        Initialize with ranking parameters.

        Args:
            spec: Partition/order columns and tier table
        """
        self.spec = spec

    @property
    def name(self) -> str:
        return self.spec.output_column

    @property
    def added_columns(self) -> List[str]:
        return [self.spec.output_column]

    def apply(self, table: Any, engine: "TabularEngine") -> Any:
        spec = self.spec
        ranked = engine.rank_within_partition(
            table,
            spec.rank_column,
            partition_by=spec.partition_by,
            order_by=spec.order_by,
            descending=spec.descending,
        )
        labeled = engine.with_column(ranked, spec.output_column, tier_expression(spec))
        return engine.drop(labeled, [spec.rank_column])
