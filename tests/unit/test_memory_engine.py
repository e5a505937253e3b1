"""
Unit Tests for InMemoryEngine.

Test Aspects Covered:
    ✅ Business Logic: Filter, derive, rank, project, drop
    ✅ Edge Cases: Null comparisons, ties, null partitions, zero division
    ✅ Error Handling: Unknown source, failing sink, missing columns
    ✅ Immutability: Inputs are never modified
"""

from __future__ import annotations

import pytest

from player_screener.adapters.memory_engine import InMemoryEngine
from player_screener.config.models import SinkConfig, SourceConfig
from player_screener.domain.expressions import col, when
from player_screener.errors import ColumnMissing, SinkWriteError, SourceUnavailable


@pytest.fixture
def engine() -> InMemoryEngine:
    return InMemoryEngine()


def _ranks(table, name="rank"):
    return table.column(name)


class TestSourceAndSink:
    """Test cases for load and write."""

    def test_loads_registered_source(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Source registered under a path
        EXPECTED: Loaded table has the registered rows and column order
        """
        # Arrange
        engine.register_source("mem://a", [{"b": 1, "a": 2}], columns=["a", "b"])

        # Act
        table = engine.load(SourceConfig(path="mem://a"))

        # Assert
        assert engine.columns(table) == ["a", "b"]
        assert table.to_records() == [{"a": 2, "b": 1}]

    def test_missing_keys_become_nulls(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Rows with different key sets
        EXPECTED: Columns are the union in first-seen order, gaps are null
        """
        table = engine.create_table([{"a": 1}, {"b": 2}])

        assert table.columns == ("a", "b")
        assert table.to_records() == [{"a": 1, "b": None}, {"a": None, "b": 2}]

    def test_unknown_source_raises(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Load a path nobody registered
        EXPECTED: SourceUnavailable attributed to the loader
        """
        with pytest.raises(SourceUnavailable) as exc_info:
            engine.load(SourceConfig(path="mem://missing"))

        assert exc_info.value.stage == "loader"

    def test_write_records_table(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"a": 1}])

        engine.write(table, SinkConfig(path="mem://out"))

        assert engine.written["mem://out"] is table

    def test_failing_sink_raises_and_records_nothing(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Sink configured to fail
        EXPECTED: SinkWriteError, nothing recorded
        """
        # Arrange
        engine.fail_writes_to("mem://out")
        table = engine.create_table([{"a": 1}])

        # Act & Assert
        with pytest.raises(SinkWriteError):
            engine.write(table, SinkConfig(path="mem://out"))
        assert "mem://out" not in engine.written


class TestInspection:
    """Test cases for schema and head."""

    def test_schema_type_names(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Columns of int, float, mixed numeric, text, bool and all-null
        EXPECTED: integer, double, double, string, boolean, null
        """
        # Arrange
        table = engine.create_table(
            [
                {"i": 1, "f": 1.5, "m": 1, "s": "x", "b": True, "n": None},
                {"i": 2, "f": None, "m": 2.5, "s": None, "b": False, "n": None},
            ]
        )

        # Act
        schema = engine.schema(table)

        # Assert
        assert schema == {
            "i": "integer",
            "f": "double",
            "m": "double",
            "s": "string",
            "b": "boolean",
            "n": "null",
        }

    def test_head_limits_rows_and_normalizes_nan(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"a": float("nan")}, {"a": 1.0}, {"a": 2.0}])

        assert engine.head(table, 2) == [{"a": None}, {"a": 1.0}]


class TestFilterAndDerive:
    """Test cases for filter and with_column."""

    def test_filter_drops_unknown_predicates(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Comparison against a null value
        EXPECTED: Row dropped, since only true predicates keep rows
        """
        # Arrange
        table = engine.create_table([{"x": 5}, {"x": None}, {"x": 1}])

        # Act
        result = engine.filter(table, col("x").gt(2))

        # Assert
        assert result.column("x") == [5]

    def test_or_is_true_when_one_side_is_true(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: (null > 1) OR (b == "x") with b == "x"
        EXPECTED: Row kept under three-valued logic
        """
        # Arrange
        table = engine.create_table([{"a": None, "b": "x"}, {"a": None, "b": "y"}])

        # Act
        result = engine.filter(table, col("a").gt(1) | col("b").eq("x"))

        # Assert
        assert result.column("b") == ["x"]

    def test_and_with_false_side_is_false(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"a": None, "b": "y"}])

        expr = col("a").gt(1) & col("b").eq("x")

        assert engine._evaluate(expr, table.rows[0]) is False

    def test_filter_does_not_modify_input(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"x": 1}, {"x": 2}])

        engine.filter(table, col("x").gt(1))

        assert len(table) == 2

    def test_divide_null_and_zero_yield_null(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Denominators 2, 0 and null
        EXPECTED: 0.5, null, null
        """
        # Arrange
        table = engine.create_table([{"n": 1, "d": 2}, {"n": 1, "d": 0}, {"n": 1, "d": None}])

        # Act
        result = engine.with_column(table, "r", col("n").div(col("d")))

        # Assert
        assert result.column("r") == [0.5, None, None]
        assert result.columns == ("n", "d", "r")
        assert table.columns == ("n", "d")

    def test_with_column_replaces_existing(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"a": 1, "b": 2}])

        result = engine.with_column(table, "a", col("b"))

        assert result.columns == ("a", "b")
        assert result.column("a") == [2]

    def test_case_first_true_branch_wins(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Overlapping branches and a null input
        EXPECTED: Earliest true branch, default for the null row
        """
        # Arrange
        table = engine.create_table([{"r": 3}, {"r": 30}, {"r": 300}, {"r": None}])
        rule = when(col("r").lt(10), "A").when(col("r").lt(50), "B").otherwise("C")

        # Act
        result = engine.with_column(table, "cat", rule)

        # Assert
        assert result.column("cat") == ["A", "B", "C", "C"]

    def test_filter_on_missing_column_raises(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"a": 1}])

        with pytest.raises(ColumnMissing) as exc_info:
            engine.filter(table, col("zzz").gt(1))

        assert exc_info.value.missing == ["zzz"]


class TestRankWithinPartition:
    """Test cases for competition ranking."""

    def test_ties_share_rank_and_next_rank_skips(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Heights 190, 185, 185, 180 in one partition, descending
        EXPECTED: Ranks 1, 2, 2, 4
        """
        # Arrange
        table = engine.create_table(
            [{"p": "ST", "h": h} for h in (190, 185, 185, 180)]
        )

        # Act
        result = engine.rank_within_partition(table, "rank", "p", "h")

        # Assert
        assert _ranks(result) == [1, 2, 2, 4]

    def test_ascending_order(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"p": "x", "h": h} for h in (3, 1, 2, 1)])

        result = engine.rank_within_partition(table, "rank", "p", "h", descending=False)

        assert _ranks(result) == [4, 1, 3, 1]

    def test_partitions_are_ranked_independently(self, engine: InMemoryEngine) -> None:
        table = engine.create_table(
            [
                {"p": "GK", "h": 190},
                {"p": "ST", "h": 170},
                {"p": "GK", "h": 200},
                {"p": "ST", "h": 180},
            ]
        )

        result = engine.rank_within_partition(table, "rank", "p", "h")

        assert _ranks(result) == [2, 2, 1, 1]

    def test_null_order_value_ranks_last(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: One null height among three non-null heights
        EXPECTED: Null row gets rank 4 (after every non-null value)
        """
        table = engine.create_table([{"p": "x", "h": h} for h in (None, 180, 190, 170)])

        result = engine.rank_within_partition(table, "rank", "p", "h")

        assert _ranks(result) == [4, 2, 1, 3]

    def test_all_null_partition_has_null_rank(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Partition where every order value is null
        EXPECTED: Rank is null for every row in it
        """
        table = engine.create_table(
            [{"p": "x", "h": None}, {"p": "x", "h": None}, {"p": "y", "h": 1}]
        )

        result = engine.rank_within_partition(table, "rank", "p", "h")

        assert _ranks(result) == [None, None, 1]

    def test_null_partition_keys_form_one_partition(self, engine: InMemoryEngine) -> None:
        table = engine.create_table(
            [{"p": None, "h": 1}, {"p": "x", "h": 5}, {"p": None, "h": 2}]
        )

        result = engine.rank_within_partition(table, "rank", "p", "h")

        assert _ranks(result) == [2, 1, 1]


class TestProjectAndDrop:
    """Test cases for project and drop."""

    def test_project_orders_columns(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"a": 1, "b": 2, "c": 3}])

        result = engine.project(table, ["c", "a"])

        assert result.columns == ("c", "a")
        assert result.to_records() == [{"c": 3, "a": 1}]

    def test_project_missing_columns_listed_in_order(self, engine: InMemoryEngine) -> None:
        """
        SCENARIO: Project two absent columns
        EXPECTED: ColumnMissing naming both, in requested order
        """
        table = engine.create_table([{"a": 1}])

        with pytest.raises(ColumnMissing) as exc_info:
            engine.project(table, ["z", "a", "y"])

        assert exc_info.value.missing == ["z", "y"]

    def test_drop_ignores_absent_columns(self, engine: InMemoryEngine) -> None:
        table = engine.create_table([{"a": 1, "b": 2}])

        result = engine.drop(table, ["b", "nope"])

        assert result.columns == ("a",)
