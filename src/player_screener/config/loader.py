"""
Configuration Loader - Layered YAML Configuration.

A run's configuration is built from up to three layers, later layers
winning key by key:

    1. The config file passed on the command line
    2. An optional profile, ``<base_path>/config/profiles/<name>.yaml``
    3. Overrides from command-line flags

The merged mapping is validated once, as a whole, by PipelineConfig.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from player_screener.config.models import PipelineConfig

PathLike = Union[str, Path]


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``overlay`` into a copy of ``base``; nested mappings merge recursively."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_yaml_mapping(path: Path) -> Dict[str, Any]:
    """
    Read a YAML file whose top level is a mapping.

    An empty file reads as an empty mapping.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If the top level is not a mapping
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


class ConfigLoader:
    """Builds a PipelineConfig from YAML layers and overrides."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Directory relative config paths and profiles resolve
                       against (defaults to the working directory)
        """
        self._base_path = Path(base_path) if base_path is not None else Path(".")

    @property
    def profiles_dir(self) -> Path:
        return self._base_path / "config" / "profiles"

    def load(
        self,
        config_path: PathLike,
        profile: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> PipelineConfig:
        """
        Load, merge and validate configuration.

        Args:
            config_path: YAML config file
            profile: Profile name merged over the file
            overrides: Values merged last (e.g. from CLI flags)

        Raises:
            FileNotFoundError: If the config file or profile is missing
            ValidationError: If the merged configuration is invalid
        """
        layers: List[Mapping[str, Any]] = [read_yaml_mapping(self._resolve(config_path))]
        if profile:
            layers.append(self._profile_layer(profile))
        if overrides:
            layers.append(overrides)
        return self._validate(layers)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> PipelineConfig:
        """Validate a configuration given as a plain mapping."""
        return self._validate([config_dict])

    def with_overrides(
        self,
        config: PipelineConfig,
        overrides: Dict[str, Any],
    ) -> PipelineConfig:
        """Return a copy of ``config`` with ``overrides`` merged in."""
        return self._validate([config.model_dump(by_alias=True), overrides])

    def _resolve(self, path: PathLike) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self._base_path / candidate

    def _profile_layer(self, profile: str) -> Dict[str, Any]:
        path = self.profiles_dir / f"{profile}.yaml"
        if not path.is_file():
            raise FileNotFoundError(f"Profile not found: {profile} (looked in {self.profiles_dir})")
        return read_yaml_mapping(path)

    @staticmethod
    def _validate(layers: List[Mapping[str, Any]]) -> PipelineConfig:
        merged: Dict[str, Any] = {}
        for layer in layers:
            merged = deep_merge(merged, layer)
        return PipelineConfig.model_validate(merged)


def load_config(
    config_path: PathLike,
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> PipelineConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to YAML config file
        profile: Optional profile name
        base_path: Base path for resolving relative paths
        overrides: Optional values merged over file and profile

    Returns:
        Validated PipelineConfig object
    """
    return ConfigLoader(base_path=base_path).load(config_path, profile, overrides)
