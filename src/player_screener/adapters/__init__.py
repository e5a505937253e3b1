"""
Adapters Package - Infrastructure Implementations.

This package contains concrete implementations of the abstract
interfaces defined in the interfaces package. Following the
Hexagonal Architecture (Ports & Adapters) pattern.

Engines:
    - PandasEngine: pandas + pyarrow, used for real runs
    - InMemoryEngine: Fake engine for development/testing

Loggers:
    - ConsoleAuditLogger: Simple console output

Metrics:
    - InMemoryMetricsCollector: Simple in-memory collection

Preview:
    - ConsolePreviewer: Schema tree and row table on stdout

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No business logic in adapters
"""

from player_screener.adapters.console_logger import ConsoleAuditLogger
from player_screener.adapters.console_previewer import ConsolePreviewer
from player_screener.adapters.memory_engine import InMemoryEngine, MemoryTable
from player_screener.adapters.metrics_collector import InMemoryMetricsCollector
from player_screener.adapters.pandas_engine import PandasEngine

__all__ = [
    "ConsoleAuditLogger",
    "ConsolePreviewer",
    "InMemoryEngine",
    "MemoryTable",
    "InMemoryMetricsCollector",
    "PandasEngine",
]
