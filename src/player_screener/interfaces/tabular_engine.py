"""
Tabular Engine Protocol.

Defines the narrow capability set the pipeline needs from a dataframe or
query engine. Every table-producing operation returns a new table value
and leaves its input untouched; the table type itself is opaque to the
pipeline.

The engine is responsible for:
    - Reading the delimited source into a table
    - Evaluating expressions (see domain.expressions) for filters and
      derived columns
    - Ranking rows within partitions
    - Projecting and persisting the final table

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - Library errors are translated into the errors module taxonomy
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from player_screener.config.models import SinkConfig, SourceConfig
    from player_screener.domain.expressions import Expr


@runtime_checkable
class TabularEngine(Protocol):
    """Abstract interface for table operations."""

    def load(self, source: "SourceConfig") -> Any:
        """
        Read the source into a table.

        Raises:
            SourceUnavailable: If the source cannot be opened or parsed
        """
        ...

    def columns(self, table: Any) -> List[str]:
        """Column names in order."""
        ...

    def count(self, table: Any) -> int:
        """Number of rows."""
        ...

    def schema(self, table: Any) -> Dict[str, str]:
        """Column name -> type name, in column order."""
        ...

    def head(self, table: Any, n: int) -> List[Dict[str, Any]]:
        """First ``n`` rows as dicts (nulls as None)."""
        ...

    def filter(self, table: Any, predicate: "Expr") -> Any:
        """Keep rows for which ``predicate`` is true."""
        ...

    def with_column(self, table: Any, name: str, expr: "Expr") -> Any:
        """Append (or replace) column ``name`` computed from ``expr``."""
        ...

    def rank_within_partition(
        self,
        table: Any,
        name: str,
        partition_by: str,
        order_by: str,
        descending: bool = True,
    ) -> Any:
        """
        Append a competition rank column.

        Rank 1 is the first value in the requested order; equal values
        share a rank and the next distinct value skips accordingly. Null
        partition keys form their own partition. Null order values rank
        after every non-null value in their partition; when a partition
        has no non-null order value, its rank is null.
        """
        ...

    def project(self, table: Any, columns: Sequence[str]) -> Any:
        """
        Select and order ``columns``.

        Raises:
            ColumnMissing: If any column is absent
        """
        ...

    def drop(self, table: Any, columns: Sequence[str]) -> Any:
        """Remove ``columns`` (absent names are ignored)."""
        ...

    def write(self, table: Any, sink: "SinkConfig") -> None:
        """
        Persist the table as a single columnar artifact.

        The output becomes visible all at once or not at all.

        Raises:
            SinkWriteError: If the destination cannot be written
        """
        ...
