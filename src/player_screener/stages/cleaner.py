"""
Cleaner Stage.

Drops rows whose identifying fields (team position, short name,
overall) are null. No columns change.
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Any, List, Sequence

from player_screener.domain.columns import IDENTIFYING_COLUMNS
from player_screener.domain.expressions import col

if TYPE_CHECKING:
    from player_screener.interfaces.tabular_engine import TabularEngine


class Cleaner:
    """Keep rows where every identifying column is non-null."""

    def __init__(self, required: Sequence[str] = IDENTIFYING_COLUMNS) -> None:
        if not required:
            raise ValueError("Cleaner needs at least one required column")
        self.required = tuple(required)

    @property
    def name(self) -> str:
        return "cleaner"

    @property
    def added_columns(self) -> List[str]:
        return []

    def apply(self, table: Any, engine: "TabularEngine") -> Any:
        predicate = reduce(
            lambda acc, expr: acc & expr,
            (col(c).is_not_null() for c in self.required),
        )
        return engine.filter(table, predicate)
