"""
Quality Filter Stage.

Keeps a row when its category passes unconditionally or when its ratio
is strictly above the category's threshold:

    player_cat A or B                     -> keep
    player_cat C and ratio > 1.15         -> keep
    player_cat D and ratio > 1.25         -> keep

A null ratio never satisfies a threshold, so such rows survive only in
the unconditional categories.
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Any, List

from player_screener.domain.columns import PlayerColumns
from player_screener.domain.expressions import Expr, col
from player_screener.domain.value_objects import QualityRule

if TYPE_CHECKING:
    from player_screener.interfaces.tabular_engine import TabularEngine


DEFAULT_QUALITY_RULE = QualityRule(
    category_column=PlayerColumns.PLAYER_CAT,
    ratio_column=PlayerColumns.POTENTIAL_VS_OVERALL,
)


class QualityFilter:
    """Filter rows by a tier-dependent ratio threshold."""

    def __init__(self, rule: QualityRule = DEFAULT_QUALITY_RULE) -> None:
        """
        Initialize with a keep rule.

        Args:
            rule: Unconditional categories and per-category thresholds
        """
        if not rule.always_keep and not rule.min_ratio:
            raise ValueError("QualityRule keeps nothing")
        self.rule = rule

    @property
    def name(self) -> str:
        return "quality_filter"

    @property
    def added_columns(self) -> List[str]:
        return []

    def predicate(self) -> Expr:
        """The keep condition as a single expression."""
        category = col(self.rule.category_column)
        ratio = col(self.rule.ratio_column)

        branches: List[Expr] = [category.eq(label) for label in self.rule.always_keep]
        for label, threshold in self.rule.min_ratio.items():
            branches.append(category.eq(label) & ratio.gt(threshold))

        return reduce(lambda acc, expr: acc | expr, branches)

    def apply(self, table: Any, engine: "TabularEngine") -> Any:
        return engine.filter(table, self.predicate())
