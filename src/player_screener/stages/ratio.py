"""
Ratio Computer Stage.

Adds ``potential_vs_overall = overall / potential``. A null or zero
potential yields a null ratio for that row.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from player_screener.domain.columns import PlayerColumns
from player_screener.domain.expressions import col

if TYPE_CHECKING:
    from player_screener.interfaces.tabular_engine import TabularEngine


class RatioComputer:
    """Derive the overall-to-potential ratio column."""

    def __init__(
        self,
        output_column: str = PlayerColumns.POTENTIAL_VS_OVERALL,
        numerator: str = PlayerColumns.OVERALL,
        denominator: str = PlayerColumns.POTENTIAL,
    ) -> None:
        self.output_column = output_column
        self.numerator = numerator
        self.denominator = denominator

    @property
    def name(self) -> str:
        return self.output_column

    @property
    def added_columns(self) -> List[str]:
        return [self.output_column]

    def apply(self, table: Any, engine: "TabularEngine") -> Any:
        ratio = col(self.numerator).div(col(self.denominator))
        return engine.with_column(table, self.output_column, ratio)
