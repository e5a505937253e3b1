"""
Engine-Neutral Expression Model.

Filter predicates and derived columns are described with small immutable
expression trees that each TabularEngine evaluates in its own way:

    >>> rule = (
    ...     when(col("rank").lt(10), "A")
    ...     .when(col("rank").lt(50), "B")
    ...     .otherwise("C")
    ... )
    >>> keep = col("player_cat").eq("C") & col("ratio").gt(1.15)

Null Semantics:
    - Comparisons with a null operand are unknown (never true)
    - Division by a null or zero denominator yields null
    - A filter keeps a row only when its predicate is true
    - There is no negation, so unknown and false are interchangeable
      for filter outcomes
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Tuple

COMPARISONS: Dict[str, Callable[[Any, Any], Any]] = {
    "eq": operator.eq,
    "gt": operator.gt,
    "lt": operator.lt,
    "ge": operator.ge,
    "le": operator.le,
}


def is_null(value: Any) -> bool:
    """True for None and float NaN."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def _wrap(value: Any) -> "Expr":
    if isinstance(value, Expr):
        return value
    return Literal(value)


@dataclass(frozen=True)
class Expr:
    """Base class for all expressions."""

    def eq(self, other: Any) -> "Compare":
        return Compare("eq", self, _wrap(other))

    def gt(self, other: Any) -> "Compare":
        return Compare("gt", self, _wrap(other))

    def lt(self, other: Any) -> "Compare":
        return Compare("lt", self, _wrap(other))

    def ge(self, other: Any) -> "Compare":
        return Compare("ge", self, _wrap(other))

    def le(self, other: Any) -> "Compare":
        return Compare("le", self, _wrap(other))

    def is_null(self) -> "IsNull":
        return IsNull(self)

    def is_not_null(self) -> "IsNotNull":
        return IsNotNull(self)

    def div(self, other: Any) -> "Divide":
        return Divide(self, _wrap(other))

    def __and__(self, other: Any) -> "And":
        return And(self, _wrap(other))

    def __or__(self, other: Any) -> "Or":
        return Or(self, _wrap(other))

    def columns(self) -> FrozenSet[str]:
        """Names of all columns this expression reads."""
        return frozenset()


@dataclass(frozen=True)
class Column(Expr):
    name: str

    def columns(self) -> FrozenSet[str]:
        return frozenset({self.name})


@dataclass(frozen=True)
class Literal(Expr):
    value: Any


@dataclass(frozen=True)
class Compare(Expr):
    op: str
    left: Expr
    right: Expr

    def __post_init__(self) -> None:
        if self.op not in COMPARISONS:
            raise ValueError(f"Unknown comparison: {self.op}")

    def columns(self) -> FrozenSet[str]:
        return self.left.columns() | self.right.columns()


@dataclass(frozen=True)
class IsNull(Expr):
    operand: Expr

    def columns(self) -> FrozenSet[str]:
        return self.operand.columns()


@dataclass(frozen=True)
class IsNotNull(Expr):
    operand: Expr

    def columns(self) -> FrozenSet[str]:
        return self.operand.columns()


@dataclass(frozen=True)
class Divide(Expr):
    left: Expr
    right: Expr

    def columns(self) -> FrozenSet[str]:
        return self.left.columns() | self.right.columns()


@dataclass(frozen=True)
class And(Expr):
    left: Expr
    right: Expr

    def columns(self) -> FrozenSet[str]:
        return self.left.columns() | self.right.columns()


@dataclass(frozen=True)
class Or(Expr):
    left: Expr
    right: Expr

    def columns(self) -> FrozenSet[str]:
        return self.left.columns() | self.right.columns()


@dataclass(frozen=True)
class Case(Expr):
    """First branch whose condition is true wins; otherwise the default."""

    branches: Tuple[Tuple[Expr, Expr], ...] = ()
    default: Expr = field(default_factory=lambda: Literal(None))

    def when(self, condition: Expr, value: Any) -> "Case":
        return Case(self.branches + ((condition, _wrap(value)),), self.default)

    def otherwise(self, value: Any) -> "Case":
        return Case(self.branches, _wrap(value))

    def columns(self) -> FrozenSet[str]:
        names = self.default.columns()
        for condition, value in self.branches:
            names = names | condition.columns() | value.columns()
        return names


def col(name: str) -> Column:
    """Reference a column by name."""
    return Column(name)


def lit(value: Any) -> Literal:
    """Wrap a constant value."""
    return Literal(value)


def when(condition: Expr, value: Any) -> Case:
    """Start a case expression."""
    return Case().when(condition, value)
