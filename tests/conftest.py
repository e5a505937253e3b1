"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from player_screener.adapters.console_logger import ConsoleAuditLogger
from player_screener.adapters.memory_engine import InMemoryEngine
from player_screener.adapters.metrics_collector import InMemoryMetricsCollector
from player_screener.config.models import PipelineConfig
from tests.fixtures.players import MEMORY_SINK, MEMORY_SOURCE, make_player


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def player_factory() -> Callable[..., Dict[str, Any]]:
    """Factory for single player rows."""
    return make_player


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def sample_csv_path() -> Path:
    """Path to a small players CSV with one extra column and two dirty rows."""
    return Path(__file__).parent / "fixtures" / "players_sample.csv"


@pytest.fixture
def memory_engine() -> InMemoryEngine:
    """Create in-memory engine for testing."""
    return InMemoryEngine()


@pytest.fixture
def console_logger() -> ConsoleAuditLogger:
    """Create console logger for testing."""
    return ConsoleAuditLogger(verbose=False)


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    """Create metrics collector for testing."""
    return InMemoryMetricsCollector()


@pytest.fixture
def memory_config() -> PipelineConfig:
    """Configuration pointing at the in-memory source and sink."""
    return PipelineConfig(
        source={"path": MEMORY_SOURCE},
        sink={"path": MEMORY_SINK},
        preview={"enabled": False},
    )


@pytest.fixture
def sample_players() -> List[Dict[str, Any]]:
    """
    A small, hand-checked dataset.

    Every nationality and position is unique except where noted, so
    ranks are 1 and every surviving row is category A.
    """
    return [
        make_player("L. Messi", nationality="Argentina", overall=93, potential=93,
                    team_position="RW", height_cm=170),
        make_player("Cristiano Ronaldo", nationality="Portugal", overall=92,
                    potential=92, team_position="LS", height_cm=187),
        make_player("J. Oblak", nationality="Slovenia", overall=91, potential=93,
                    team_position="GK", height_cm=188),
        make_player("Neymar Jr", nationality="Brazil", overall=91, potential=91,
                    team_position=None, height_cm=175),
        make_player(None, nationality="France", overall=80, potential=85,
                    team_position="CB"),
        make_player("Ghost", nationality="Italy", overall=None, potential=85,
                    team_position="CM"),
    ]
