"""
Column Names.

Input columns as they appear in the source header, plus the three
columns the pipeline derives.
"""

from __future__ import annotations

from typing import Tuple


class PlayerColumns:
    """Column name constants."""

    # Input
    SHORT_NAME = "short_name"
    LONG_NAME = "long_name"
    AGE = "age"
    HEIGHT_CM = "height_cm"
    WEIGHT_KG = "weight_kg"
    NATIONALITY = "nationality"
    CLUB_NAME = "club_name"
    OVERALL = "overall"
    POTENTIAL = "potential"
    TEAM_POSITION = "team_position"

    # Derived
    CAT_HEIGHT_BY_POSITION = "cat_height_by_position"
    PLAYER_CAT = "player_cat"
    POTENTIAL_VS_OVERALL = "potential_vs_overall"


INPUT_COLUMNS: Tuple[str, ...] = (
    PlayerColumns.SHORT_NAME,
    PlayerColumns.LONG_NAME,
    PlayerColumns.AGE,
    PlayerColumns.HEIGHT_CM,
    PlayerColumns.WEIGHT_KG,
    PlayerColumns.NATIONALITY,
    PlayerColumns.CLUB_NAME,
    PlayerColumns.OVERALL,
    PlayerColumns.POTENTIAL,
    PlayerColumns.TEAM_POSITION,
)

# Rows missing any of these are dropped by the cleaner
IDENTIFYING_COLUMNS: Tuple[str, ...] = (
    PlayerColumns.TEAM_POSITION,
    PlayerColumns.SHORT_NAME,
    PlayerColumns.OVERALL,
)

OUTPUT_COLUMNS: Tuple[str, ...] = (
    PlayerColumns.SHORT_NAME,
    PlayerColumns.LONG_NAME,
    PlayerColumns.AGE,
    PlayerColumns.HEIGHT_CM,
    PlayerColumns.WEIGHT_KG,
    PlayerColumns.NATIONALITY,
    PlayerColumns.CLUB_NAME,
    PlayerColumns.OVERALL,
    PlayerColumns.POTENTIAL,
    PlayerColumns.TEAM_POSITION,
    PlayerColumns.PLAYER_CAT,
    PlayerColumns.POTENTIAL_VS_OVERALL,
    PlayerColumns.CAT_HEIGHT_BY_POSITION,
)
