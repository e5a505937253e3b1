"""
Pandas Tabular Engine.

Production engine: reads the delimited source with pandas, evaluates
expressions as vectorized Series operations and persists the result as a
single Parquet file through pyarrow.

Design Notes:
    - Every operation returns a new DataFrame (assign/loc/drop), inputs
      are never modified in place
    - Boolean expression results collapse "unknown" (NaN, None or pd.NA)
      to False; without a negation operator this never changes which rows
      a filter keeps
    - Writes go to a hidden temporary file in the destination directory
      and are published with os.replace, so a failed write leaves any
      previous output untouched
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd
import pyarrow as pa

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


class PandasEngine:
    """TabularEngine backed by pandas DataFrames."""

    def __init__(self, parquet_compression: str = "snappy") -> None:
        """
        Initialize engine.

        Args:
            parquet_compression: Codec passed to pyarrow when writing
        """
        self.parquet_compression = parquet_compression

    # =========================================================================
    # Source / Sink
    # =========================================================================

    def load(self, source: SourceConfig) -> pd.DataFrame:
        """
        Read the delimited source.

        Without a header row, columns are named ``_c0``, ``_c1``, ...
        Inferred columns use pandas' nullable dtypes, so an integer column
        with blank cells stays integer. With type inference disabled, every
        column is read as text.
        """
        kwargs: Dict[str, Any] = {"sep": source.delimiter}
        if not source.header:
            kwargs["header"] = None
        if source.infer_schema:
            kwargs["dtype_backend"] = "numpy_nullable"
        else:
            kwargs["dtype"] = str

        try:
            df = pd.read_csv(source.path, **kwargs)
        except FileNotFoundError as exc:
            raise SourceUnavailable(f"source not found: {source.path}") from exc
        except (
            OSError,
            UnicodeDecodeError,
            pd.errors.EmptyDataError,
            pd.errors.ParserError,
        ) as exc:
            raise SourceUnavailable(f"cannot read {source.path}: {exc}") from exc

        if not source.header:
            df.columns = [f"_c{i}" for i in range(len(df.columns))]

        logger.info(f"Loaded {len(df)} rows, {len(df.columns)} columns from {source.path}")
        return df

    def write(self, table: pd.DataFrame, sink: SinkConfig) -> None:
        """Write one Parquet file and publish it atomically."""
        path = Path(sink.path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            os.close(fd)
        except OSError as exc:
            raise SinkWriteError(f"cannot prepare {path}: {exc}") from exc

        tmp_path = Path(tmp_name)
        try:
            table.to_parquet(
                tmp_path,
                index=False,
                engine="pyarrow",
                compression=self.parquet_compression,
            )
            os.replace(tmp_path, path)
        except (OSError, ValueError, pa.ArrowException) as exc:
            tmp_path.unlink(missing_ok=True)
            raise SinkWriteError(f"cannot write {path}: {exc}") from exc

        logger.info(f"Wrote {len(table)} rows to {path}")

    # =========================================================================
    # Inspection
    # =========================================================================

    def columns(self, table: pd.DataFrame) -> List[str]:
        return [str(c) for c in table.columns]

    def count(self, table: pd.DataFrame) -> int:
        return len(table)

    def schema(self, table: pd.DataFrame) -> Dict[str, str]:
        return {str(name): self._type_name(dtype) for name, dtype in table.dtypes.items()}

    def head(self, table: pd.DataFrame, n: int) -> List[Dict[str, Any]]:
        top = table.head(n).astype(object)
        return top.where(top.notna(), None).to_dict(orient="records")

    # =========================================================================
    # Transformations
    # =========================================================================

    def filter(self, table: pd.DataFrame, predicate: Expr) -> pd.DataFrame:
        self._require(table, sorted(predicate.columns()))
        mask = self._as_mask(table, self._evaluate(table, predicate))
        return table.loc[mask].reset_index(drop=True)

    def with_column(self, table: pd.DataFrame, name: str, expr: Expr) -> pd.DataFrame:
        self._require(table, sorted(expr.columns()))
        return table.assign(**{name: self._evaluate(table, expr)})

    def rank_within_partition(
        self,
        table: pd.DataFrame,
        name: str,
        partition_by: str,
        order_by: str,
        descending: bool = True,
    ) -> pd.DataFrame:
        self._require(table, [partition_by, order_by])
        grouped = table[order_by].groupby(table[partition_by], dropna=False)
        rank = grouped.rank(method="min", ascending=not descending, na_option="bottom")
        rank = pd.Series(
            rank.to_numpy(dtype="float64", na_value=float("nan")), index=table.index
        )
        non_null = grouped.transform("count")
        return table.assign(**{name: rank.where(non_null > 0)})

    def project(self, table: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
        self._require(table, columns)
        return table.loc[:, list(columns)].copy()

    def drop(self, table: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
        return table.drop(columns=[c for c in columns if c in table.columns])

    # =========================================================================
    # Expression evaluation
    # =========================================================================

    def _evaluate(self, df: pd.DataFrame, expr: Expr) -> Any:
        """Evaluate to a Series aligned with ``df`` or a scalar."""
        if isinstance(expr, Column):
            return df[expr.name]

        if isinstance(expr, Literal):
            return expr.value

        if isinstance(expr, Compare):
            return self._compare(
                df,
                expr.op,
                self._evaluate(df, expr.left),
                self._evaluate(df, expr.right),
            )

        if isinstance(expr, IsNull):
            value = self._evaluate(df, expr.operand)
            if isinstance(value, pd.Series):
                return value.isna()
            return is_null(value)

        if isinstance(expr, IsNotNull):
            value = self._evaluate(df, expr.operand)
            if isinstance(value, pd.Series):
                return value.notna()
            return not is_null(value)

        if isinstance(expr, Divide):
            numerator = self._numeric(df, self._evaluate(df, expr.left))
            denominator = self._numeric(df, self._evaluate(df, expr.right))
            return numerator / denominator.where(denominator != 0)

        if isinstance(expr, And):
            left = self._as_mask(df, self._evaluate(df, expr.left))
            return left & self._as_mask(df, self._evaluate(df, expr.right))

        if isinstance(expr, Or):
            left = self._as_mask(df, self._evaluate(df, expr.left))
            return left | self._as_mask(df, self._evaluate(df, expr.right))

        if isinstance(expr, Case):
            result = self._broadcast(df, self._evaluate(df, expr.default))
            # Apply in reverse so the first matching branch wins
            for condition, value in reversed(expr.branches):
                mask = self._as_mask(df, self._evaluate(df, condition))
                result = result.mask(mask, self._broadcast(df, self._evaluate(df, value)))
            return result

        raise TypeError(f"Unsupported expression: {type(expr).__name__}")

    def _compare(self, df: pd.DataFrame, op: str, left: Any, right: Any) -> Any:
        func = COMPARISONS[op]
        if not isinstance(left, pd.Series) and not isinstance(right, pd.Series):
            if is_null(left) or is_null(right):
                return False
            return bool(func(left, right))

        valid = pd.Series(True, index=df.index)
        for side in (left, right):
            if isinstance(side, pd.Series):
                valid &= side.notna()
            elif is_null(side):
                valid[:] = False

        result = pd.Series(False, index=df.index)
        if valid.any():
            lhs = left[valid] if isinstance(left, pd.Series) else left
            rhs = right[valid] if isinstance(right, pd.Series) else right
            result.loc[valid] = func(lhs, rhs).astype(bool).to_numpy()
        return result

    @staticmethod
    def _as_mask(df: pd.DataFrame, value: Any) -> pd.Series:
        if isinstance(value, pd.Series):
            return value.eq(True).fillna(False).astype(bool)
        return pd.Series(value is True, index=df.index)

    @staticmethod
    def _broadcast(df: pd.DataFrame, value: Any) -> pd.Series:
        if isinstance(value, pd.Series):
            return value.astype(object)
        return pd.Series([value] * len(df), index=df.index, dtype=object)

    @staticmethod
    def _numeric(df: pd.DataFrame, value: Any) -> pd.Series:
        if isinstance(value, pd.Series):
            numbers = pd.to_numeric(value, errors="coerce")
            return pd.Series(
                numbers.to_numpy(dtype="float64", na_value=float("nan")), index=df.index
            )
        if is_null(value):
            return pd.Series(float("nan"), index=df.index)
        return pd.Series(float(value), index=df.index)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _require(table: pd.DataFrame, names: Sequence[str]) -> None:
        missing = [n for n in names if n not in table.columns]
        if missing:
            raise ColumnMissing(missing)

    @staticmethod
    def _type_name(dtype: Any) -> str:
        if pd.api.types.is_bool_dtype(dtype):
            return "boolean"
        if pd.api.types.is_integer_dtype(dtype):
            return "integer"
        if pd.api.types.is_float_dtype(dtype):
            return "double"
        if pd.api.types.is_object_dtype(dtype) or pd.api.types.is_string_dtype(dtype):
            return "string"
        return str(dtype)
