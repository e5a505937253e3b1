"""
Interfaces Layer - Abstract Protocols for Dependencies.

This package defines the abstract interfaces (using typing.Protocol) for all
external dependencies. Following the Dependency Inversion Principle, the
pipeline and its stages depend on these abstractions, not on pandas or any
other concrete implementation.

Protocols:
    - TabularEngine: load/filter/derive/rank/project/write capability set
    - PipelineStage: Base protocol for pipeline stages
    - AuditLogger: Logging abstraction for audit trail
    - MetricsCollector: Performance metrics abstraction
    - Previewer: Operator-facing schema and row preview
"""

from player_screener.interfaces.audit_logger import AuditLogger, Previewer
from player_screener.interfaces.metrics_collector import MetricsCollector
from player_screener.interfaces.pipeline_stage import PipelineStage
from player_screener.interfaces.tabular_engine import TabularEngine

__all__ = [
    "AuditLogger",
    "MetricsCollector",
    "PipelineStage",
    "Previewer",
    "TabularEngine",
]
