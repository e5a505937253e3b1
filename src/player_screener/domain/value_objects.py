"""
Value Objects for Domain Layer.

Immutable descriptions of the ranking and filtering rules the stages
apply. Validation happens at construction time.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

from pydantic import BaseModel, Field, model_validator


class TierBoundary(BaseModel):
    """A tier label assigned to ranks strictly below ``upper_bound``."""

    upper_bound: int = Field(..., ge=1, description="Exclusive rank upper bound")
    label: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class RankSpec(BaseModel):
    """
    Parameters of a rank-and-bucket annotation.

    Rows are ranked within each ``partition_by`` group by ``order_by``
    (descending by default). The rank is mapped through ``tiers`` in
    order; the first boundary whose upper bound exceeds the rank wins,
    and ``default_label`` applies when none does.
    """

    output_column: str
    partition_by: str
    order_by: str
    descending: bool = True
    tiers: Tuple[TierBoundary, ...]
    default_label: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_tiers(self) -> "RankSpec":
        bounds = [t.upper_bound for t in self.tiers]
        if any(b >= nxt for b, nxt in zip(bounds, bounds[1:])):
            raise ValueError(f"tier bounds must be strictly increasing: {bounds}")
        return self

    @property
    def labels(self) -> FrozenSet[str]:
        """Every label this ranking can produce."""
        return frozenset(t.label for t in self.tiers) | {self.default_label}

    @property
    def rank_column(self) -> str:
        """Name of the temporary rank column."""
        return f"_rank_{self.output_column}"


class QualityRule(BaseModel):
    """
    Tier-dependent keep rule.

    Categories in ``always_keep`` pass unconditionally; categories in
    ``min_ratio`` pass only when the ratio column is strictly greater
    than the threshold. Other categories are dropped.
    """

    category_column: str
    ratio_column: str
    always_keep: Tuple[str, ...] = ("A", "B")
    min_ratio: Dict[str, float] = Field(
        default_factory=lambda: {"C": 1.15, "D": 1.25}
    )

    model_config = {"frozen": True}
