"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of the Player Screener:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles

Configuration Structure:
    - PipelineConfig: Root configuration object
    - SourceConfig: Input location and read options
    - SinkConfig: Output location
    - PreviewConfig: Console preview of the result
    - LoggingConfig: Log level and renderer

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Profiles and CLI overrides merged over the base document
"""

from player_screener.config.loader import ConfigLoader, load_config
from player_screener.config.models import (
    LoggingConfig,
    PipelineConfig,
    PreviewConfig,
    SinkConfig,
    SourceConfig,
)

__all__ = [
    "ConfigLoader",
    "load_config",
    "LoggingConfig",
    "PipelineConfig",
    "PreviewConfig",
    "SinkConfig",
    "SourceConfig",
]
