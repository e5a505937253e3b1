"""
Projector Stage.

Selects and orders the output columns. A missing column here means an
earlier stage did not run; the engine raises ColumnMissing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Sequence

from player_screener.domain.columns import OUTPUT_COLUMNS

if TYPE_CHECKING:
    from player_screener.interfaces.tabular_engine import TabularEngine


class Projector:
    """Select the final output columns."""

    def __init__(self, columns: Sequence[str] = OUTPUT_COLUMNS) -> None:
        self.columns = tuple(columns)

    @property
    def name(self) -> str:
        return "projector"

    @property
    def added_columns(self) -> List[str]:
        return []

    def apply(self, table: Any, engine: "TabularEngine") -> Any:
        return engine.project(table, self.columns)
