"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SourceConfig(BaseModel):
    """Delimited input file and read options."""

    path: str = Field(..., min_length=1)
    header: bool = True
    infer_schema: bool = True
    delimiter: str = Field(default=",", min_length=1, max_length=1)


class SinkConfig(BaseModel):
    """Columnar output destination (a single Parquet file)."""

    path: str = Field(..., min_length=1)


class PreviewConfig(BaseModel):
    """Diagnostic preview printed after the transformation."""

    enabled: bool = True
    rows: int = Field(default=100, ge=0)


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}


class PipelineConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    source: SourceConfig
    sink: SinkConfig
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
