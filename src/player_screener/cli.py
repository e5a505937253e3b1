"""Command-line driver for the player screening batch job."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from player_screener import configure_logging
from player_screener.adapters.console_previewer import ConsolePreviewer
from player_screener.adapters.metrics_collector import InMemoryMetricsCollector
from player_screener.adapters.pandas_engine import PandasEngine
from player_screener.config.loader import ConfigLoader, load_config
from player_screener.config.models import PipelineConfig
from player_screener.errors import PipelineError
from player_screener.interfaces.audit_logger import AuditLogger, Previewer
from player_screener.interfaces.metrics_collector import MetricsCollector
from player_screener.interfaces.tabular_engine import TabularEngine
from player_screener.observability.observability_manager import ObservabilityManager
from player_screener.pipeline.player_pipeline import PlayerPipeline
from player_screener.stages import build_default_stages
from player_screener.validation.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PIPELINE_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="player-screener",
        description="Rank, filter and project a player attributes table to Parquet",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--profile", default=None, help="Profile under config/profiles/ to merge")
    parser.add_argument("--input", default=None, help="Delimited input file (overrides config)")
    parser.add_argument("--output", default=None, help="Parquet output file (overrides config)")
    parser.add_argument("--delimiter", default=None, help="Input field delimiter")
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Input has no header row",
    )
    parser.add_argument(
        "--no-infer-schema",
        action="store_true",
        help="Read every input column as text",
    )
    parser.add_argument("--preview-rows", type=int, default=None, help="Rows to preview")
    parser.add_argument("--no-preview", action="store_true", help="Skip the console preview")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return parser.parse_args(argv)


def _overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate CLI flags into a nested config overlay."""
    source: Dict[str, Any] = {}
    if args.input is not None:
        source["path"] = args.input
    if args.delimiter is not None:
        source["delimiter"] = args.delimiter
    if args.no_header:
        source["header"] = False
    if args.no_infer_schema:
        source["infer_schema"] = False

    preview: Dict[str, Any] = {}
    if args.preview_rows is not None:
        preview["rows"] = args.preview_rows
    if args.no_preview:
        preview["enabled"] = False

    log: Dict[str, Any] = {}
    if args.log_level is not None:
        log["level"] = args.log_level
    if args.json_logs:
        log["json"] = True

    overrides: Dict[str, Any] = {}
    if source:
        overrides["source"] = source
    if args.output is not None:
        overrides["sink"] = {"path": args.output}
    if preview:
        overrides["preview"] = preview
    if log:
        overrides["logging"] = log
    return overrides


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """
    Resolve the run configuration.

    Raises:
        FileNotFoundError: If the config or profile file is missing
        ValidationError: If the merged configuration is invalid
    """
    overrides = _overrides_from_args(args)
    if args.config is not None:
        return load_config(args.config, profile=args.profile, overrides=overrides)
    return ConfigLoader().load_from_dict(overrides)


def build_pipeline(
    config: PipelineConfig,
    engine: Optional[TabularEngine] = None,
    audit_logger: Optional[AuditLogger] = None,
    metrics_collector: Optional[MetricsCollector] = None,
    previewer: Optional[Previewer] = None,
) -> PlayerPipeline:
    """Wire the default stages and adapters into a pipeline."""
    observability = None
    if audit_logger is None or metrics_collector is None:
        observability = ObservabilityManager(
            use_json=config.logging.json_output,
            log_level=getattr(logging, config.logging.level),
        )

    return PlayerPipeline(
        engine=engine or PandasEngine(),
        stages=build_default_stages(),
        config=config,
        audit_logger=audit_logger or observability,
        metrics_collector=metrics_collector or observability,
        schema_validator=SchemaValidator(),
        previewer=previewer,
    )


def _log_stage_summary(metrics: InMemoryMetricsCollector) -> None:
    """Log rows removed and time spent per stage, in run order."""
    durations = metrics.by_stage("stage_duration_seconds")
    removed = metrics.by_stage("rows_filtered_total")
    for stage, seconds in durations.items():
        logger.info(f"  {stage}: removed {int(removed.get(stage, 0))} rows ({seconds:.3f}s)")


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        config = build_config(args)
    except FileNotFoundError as exc:
        print(f"error: configuration file not found: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except ValidationError as exc:
        print(f"error: invalid configuration:\n{exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except (ValueError, yaml.YAMLError) as exc:
        print(f"error: unreadable configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(getattr(logging, config.logging.level))
    observability = ObservabilityManager(
        use_json=config.logging.json_output,
        log_level=getattr(logging, config.logging.level),
    )
    pipeline = build_pipeline(
        config,
        audit_logger=observability,
        metrics_collector=observability,
        previewer=ConsolePreviewer(),
    )

    try:
        result = pipeline.run()
    except PipelineError as exc:
        logger.error(f"Run failed at {exc.describe()}")
        print(f"error: {exc.describe()}", file=sys.stderr)
        return EXIT_PIPELINE_ERROR

    _log_stage_summary(observability.metrics)
    logger.info(
        f"Kept {result.output_count} of {result.input_count} rows "
        f"({result.total_reduction_ratio:.1%} filtered), wrote {result.sink_path}"
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
