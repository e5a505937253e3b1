"""
Pipeline Stage Protocol.

Each stage is a pure function from table to table, expressed through a
TabularEngine so it runs unchanged on any engine.

Design Notes:
    - Stages are stateless (configuration injected via constructor)
    - ``name`` identifies the stage in audit trail, metrics and errors
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Protocol, runtime_checkable

if TYPE_CHECKING:
    from player_screener.interfaces.tabular_engine import TabularEngine


@runtime_checkable
class PipelineStage(Protocol):
    """Abstract interface for pipeline stages."""

    @property
    def name(self) -> str:
        """Unique name of this stage."""
        ...

    @property
    def added_columns(self) -> List[str]:
        """Columns this stage appends to the table."""
        ...

    def apply(self, table: Any, engine: "TabularEngine") -> Any:
        """
        Transform ``table`` and return the new table.

        Args:
            table: Output of the previous stage
            engine: Engine used to evaluate the transformation

        Returns:
            A new table value
        """
        ...
