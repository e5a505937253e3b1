"""
Schema Validator - Validate the Loaded Schema.

Runs right after the loader, before any stage executes, so a source
missing a column that a later stage reads fails immediately rather than
halfway through the run.

Design Notes:
    - Fail-fast principle
    - Reports every missing column at once, in declaration order
    - Extra columns are allowed
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from player_screener.domain.columns import INPUT_COLUMNS
from player_screener.errors import SchemaMismatch

logger = logging.getLogger(__name__)


class SchemaValidator:
    """Validates that a table exposes every required column."""

    def __init__(self, required_columns: Sequence[str] = INPUT_COLUMNS) -> None:
        """
        Initialize schema validator.

        Args:
            required_columns: Columns the pipeline reads. Defaults to all
                              ten input columns.
        """
        self.required_columns = tuple(required_columns)

    def missing_columns(self, columns: Iterable[str]) -> List[str]:
        """Required columns absent from ``columns``."""
        present = set(columns)
        return [c for c in self.required_columns if c not in present]

    def validate(self, columns: Iterable[str]) -> None:
        """
        Validate a loaded schema.

        Args:
            columns: Column names of the loaded table

        Raises:
            SchemaMismatch: If any required column is absent
        """
        missing = self.missing_columns(columns)
        if missing:
            logger.error(f"Schema validation failed, missing: {', '.join(missing)}")
            raise SchemaMismatch(missing)

        logger.debug(f"Schema validated: {len(self.required_columns)} required columns present")
