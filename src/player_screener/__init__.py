"""
Player Screener - Player Ranking and Filtering Pipeline.

A batch job that reads a table of football player attributes, ranks
players by height within their position and by overall score within
their nationality, derives an overall-to-potential ratio, keeps the
players that pass a tier-dependent quality rule and writes the reduced
table to Parquet.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - Engine-neutral stages over a narrow TabularEngine protocol
    - Configuration-driven behavior via YAML

Main Components:
    - domain: Columns, expression model, rank specs, run results
    - interfaces: Abstract protocols for all dependencies
    - stages: Cleaner, RankAnnotator, RatioComputer, QualityFilter, Projector
    - pipeline: Orchestration
    - adapters: Engines (pandas, in-memory), loggers, metrics, preview
    - config: Configuration models and loaders

Example:
    >>> from player_screener.cli import build_pipeline
    >>> pipeline = build_pipeline(config)
    >>> result = pipeline.run()
    >>> print(f"Kept {result.output_count} of {result.input_count} players")

"""

import logging

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Player Screener.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import player_screener
        >>> player_screener.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("player_screener").setLevel(level)
