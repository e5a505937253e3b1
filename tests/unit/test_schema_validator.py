"""
Unit Tests for SchemaValidator and the error taxonomy.

Test Aspects Covered:
    ✅ Business Logic: Every input column is required
    ✅ Edge Cases: Extra columns allowed
    ✅ Error Handling: Missing columns reported in declaration order
"""

from __future__ import annotations

import pytest

from player_screener.domain.columns import INPUT_COLUMNS
from player_screener.errors import (
    ColumnMissing,
    PipelineError,
    SchemaMismatch,
    SinkWriteError,
    SourceUnavailable,
)
from player_screener.validation.schema_validator import SchemaValidator


class TestSchemaValidator:
    """Test cases for SchemaValidator."""

    def test_accepts_all_input_columns_plus_extras(self) -> None:
        """
        SCENARIO: The ten input columns plus unrelated ones
        EXPECTED: No error
        """
        SchemaValidator().validate(list(INPUT_COLUMNS) + ["sofifa_id", "player_url"])

    def test_reports_every_missing_column(self) -> None:
        """
        SCENARIO: height_cm and team_position absent
        EXPECTED: SchemaMismatch listing both in declaration order
        """
        # Arrange
        columns = [c for c in INPUT_COLUMNS if c not in ("team_position", "height_cm")]

        # Act
        with pytest.raises(SchemaMismatch) as exc_info:
            SchemaValidator().validate(reversed(columns))

        # Assert
        assert exc_info.value.missing == ["height_cm", "team_position"]
        assert exc_info.value.stage == "schema_validation"
        assert "height_cm, team_position" in exc_info.value.message

    def test_custom_required_columns(self) -> None:
        validator = SchemaValidator(required_columns=["a"])

        assert validator.missing_columns(["b"]) == ["a"]
        assert validator.missing_columns(["a"]) == []


class TestErrors:
    """Test cases for the error hierarchy."""

    @pytest.mark.parametrize(
        "error, stage",
        [
            (SourceUnavailable("gone"), "loader"),
            (SinkWriteError("disk full"), "sink"),
            (SchemaMismatch(["age"]), "schema_validation"),
            (ColumnMissing(["age"]), None),
        ],
    )
    def test_default_stages(self, error: PipelineError, stage) -> None:
        assert isinstance(error, PipelineError)
        assert error.stage == stage

    def test_describe_includes_stage(self) -> None:
        error = ColumnMissing(["player_cat"], stage="projector")

        assert error.describe() == "projector: columns missing from table: player_cat"

    def test_describe_without_stage(self) -> None:
        assert PipelineError("boom").describe() == "boom"
