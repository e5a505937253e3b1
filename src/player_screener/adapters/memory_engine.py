"""
In-Memory Tabular Engine.

A fake engine for development and testing. Tables are immutable
row tuples held in memory, sources are registered up front, and writes
are recorded instead of touching the filesystem.

Semantics match PandasEngine for every operation, so stage and
pipeline tests can run without pandas in the loop.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from player_screener.config.models import SinkConfig, SourceConfig
from player_screener.domain.expressions import (
    COMPARISONS,
    And,
    Case,
    Column,
    Compare,
    Divide,
    Expr,
    IsNotNull,
    IsNull,
    Literal,
    Or,
    is_null,
)
from player_screener.errors import ColumnMissing, SinkWriteError, SourceUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemoryTable:
    """Immutable table: ordered column names plus rows keyed by column."""

    columns: Tuple[str, ...]
    rows: Tuple[Mapping[str, Any], ...]

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, name: str) -> List[Any]:
        """All values of one column."""
        return [row[name] for row in self.rows]

    def to_records(self) -> List[Dict[str, Any]]:
        return [dict(row) for row in self.rows]


class InMemoryEngine:
    """Fake TabularEngine for development and testing."""

    def __init__(self) -> None:
        self._sources: Dict[str, MemoryTable] = {}
        self._failing_sinks: Set[str] = set()
        self.written: Dict[str, MemoryTable] = {}

    # =========================================================================
    # Test setup
    # =========================================================================

    def register_source(
        self,
        path: str,
        rows: Iterable[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Make ``rows`` loadable from ``path``.

        Args:
            path: Source path used by SourceConfig
            rows: Row mappings; missing keys become nulls
            columns: Column order (defaults to first-seen key order)
        """
        self._sources[path] = self.create_table(rows, columns)

    def fail_writes_to(self, path: str) -> None:
        """Make every write to ``path`` raise SinkWriteError."""
        self._failing_sinks.add(path)

    @staticmethod
    def create_table(
        rows: Iterable[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
    ) -> MemoryTable:
        """Build a MemoryTable, filling absent keys with None."""
        materialized = [dict(row) for row in rows]
        if columns is None:
            seen: Dict[str, None] = {}
            for row in materialized:
                for key in row:
                    seen.setdefault(key, None)
            columns = list(seen)
        names = tuple(columns)
        return MemoryTable(
            columns=names,
            rows=tuple({name: row.get(name) for name in names} for row in materialized),
        )

    # =========================================================================
    # TabularEngine
    # =========================================================================

    def load(self, source: SourceConfig) -> MemoryTable:
        if source.path not in self._sources:
            raise SourceUnavailable(f"source not found: {source.path}")
        table = self._sources[source.path]
        logger.debug(f"Loaded {len(table)} rows from memory source {source.path}")
        return table

    def columns(self, table: MemoryTable) -> List[str]:
        return list(table.columns)

    def count(self, table: MemoryTable) -> int:
        return len(table.rows)

    def schema(self, table: MemoryTable) -> Dict[str, str]:
        return {name: self._type_name(table.column(name)) for name in table.columns}

    def head(self, table: MemoryTable, n: int) -> List[Dict[str, Any]]:
        return [
            {k: (None if is_null(v) else v) for k, v in row.items()}
            for row in table.rows[:n]
        ]

    def filter(self, table: MemoryTable, predicate: Expr) -> MemoryTable:
        self._require(table, sorted(predicate.columns()))
        kept = tuple(row for row in table.rows if self._evaluate(predicate, row) is True)
        return MemoryTable(columns=table.columns, rows=kept)

    def with_column(self, table: MemoryTable, name: str, expr: Expr) -> MemoryTable:
        self._require(table, sorted(expr.columns()))
        columns = table.columns if name in table.columns else table.columns + (name,)
        rows = tuple({**row, name: self._evaluate(expr, row)} for row in table.rows)
        return MemoryTable(columns=columns, rows=rows)

    def rank_within_partition(
        self,
        table: MemoryTable,
        name: str,
        partition_by: str,
        order_by: str,
        descending: bool = True,
    ) -> MemoryTable:
        self._require(table, [partition_by, order_by])

        # Sorted non-null order values per partition; null keys share one partition
        partitions: Dict[Tuple[bool, Any], List[Any]] = {}
        for row in table.rows:
            key = self._partition_key(row[partition_by])
            values = partitions.setdefault(key, [])
            if not is_null(row[order_by]):
                values.append(row[order_by])
        for values in partitions.values():
            values.sort()

        ranked = []
        for row in table.rows:
            values = partitions[self._partition_key(row[partition_by])]
            value = row[order_by]
            if is_null(value):
                rank = len(values) + 1 if values else None
            elif descending:
                rank = len(values) - bisect.bisect_right(values, value) + 1
            else:
                rank = bisect.bisect_left(values, value) + 1
            ranked.append({**row, name: rank})

        columns = table.columns if name in table.columns else table.columns + (name,)
        return MemoryTable(columns=columns, rows=tuple(ranked))

    def project(self, table: MemoryTable, columns: Sequence[str]) -> MemoryTable:
        self._require(table, columns)
        names = tuple(columns)
        return MemoryTable(
            columns=names,
            rows=tuple({name: row[name] for name in names} for row in table.rows),
        )

    def drop(self, table: MemoryTable, columns: Sequence[str]) -> MemoryTable:
        remaining = [c for c in table.columns if c not in set(columns)]
        return self.project(table, remaining)

    def write(self, table: MemoryTable, sink: SinkConfig) -> None:
        if sink.path in self._failing_sinks:
            raise SinkWriteError(f"cannot write to {sink.path}")
        self.written[sink.path] = table
        logger.debug(f"Recorded {len(table)} rows for {sink.path}")

    # =========================================================================
    # Expression evaluation
    # =========================================================================

    def _evaluate(self, expr: Expr, row: Mapping[str, Any]) -> Any:
        if isinstance(expr, Column):
            value = row[expr.name]
            return None if is_null(value) else value

        if isinstance(expr, Literal):
            return expr.value

        if isinstance(expr, Compare):
            left = self._evaluate(expr.left, row)
            right = self._evaluate(expr.right, row)
            if left is None or right is None:
                return None
            return COMPARISONS[expr.op](left, right)

        if isinstance(expr, IsNull):
            return self._evaluate(expr.operand, row) is None

        if isinstance(expr, IsNotNull):
            return self._evaluate(expr.operand, row) is not None

        if isinstance(expr, Divide):
            left = self._evaluate(expr.left, row)
            right = self._evaluate(expr.right, row)
            if left is None or right is None or right == 0:
                return None
            return left / right

        if isinstance(expr, And):
            left = self._evaluate(expr.left, row)
            right = self._evaluate(expr.right, row)
            if left is False or right is False:
                return False
            if left is None or right is None:
                return None
            return True

        if isinstance(expr, Or):
            left = self._evaluate(expr.left, row)
            right = self._evaluate(expr.right, row)
            if left is True or right is True:
                return True
            if left is None or right is None:
                return None
            return False

        if isinstance(expr, Case):
            for condition, value in expr.branches:
                if self._evaluate(condition, row) is True:
                    return self._evaluate(value, row)
            return self._evaluate(expr.default, row)

        raise TypeError(f"Unsupported expression: {type(expr).__name__}")

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _partition_key(value: Any) -> Tuple[bool, Any]:
        if is_null(value):
            return (True, None)
        return (False, value)

    @staticmethod
    def _require(table: MemoryTable, names: Sequence[str]) -> None:
        missing = [n for n in names if n not in table.columns]
        if missing:
            raise ColumnMissing(missing)

    @staticmethod
    def _type_name(values: List[Any]) -> str:
        present = [v for v in values if not is_null(v)]
        if not present:
            return "null"
        if all(isinstance(v, bool) for v in present):
            return "boolean"
        if all(isinstance(v, int) and not isinstance(v, bool) for v in present):
            return "integer"
        if all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in present):
            return "double"
        return "string"
