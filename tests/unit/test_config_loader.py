"""
Unit Tests for ConfigLoader.

Test Aspects Covered:
    ✅ Business Logic: Config loading, profile merging, overrides
    ✅ Error Handling: Invalid values, missing files and profiles
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from player_screener.config.loader import ConfigLoader, load_config
from player_screener.config.models import PipelineConfig


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """
        SCENARIO: Valid YAML configuration file
        EXPECTED: PipelineConfig object created
        """
        # Arrange
        config_content = """
version: "1.0"
source:
  path: "data/players.csv"
  delimiter: ";"
sink:
  path: "out/players.parquet"
preview:
  rows: 5
"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(config_content)

        loader = ConfigLoader(base_path=tmp_path)

        # Act
        config = loader.load("config.yaml")

        # Assert
        assert isinstance(config, PipelineConfig)
        assert config.source.path == "data/players.csv"
        assert config.source.delimiter == ";"
        assert config.sink.path == "out/players.parquet"
        assert config.preview.rows == 5

    def test_applies_defaults(self) -> None:
        """
        SCENARIO: Minimal config with only required fields
        EXPECTED: Defaults applied for missing fields
        """
        # Arrange
        loader = ConfigLoader()
        config_dict = {"source": {"path": "in.csv"}, "sink": {"path": "out.parquet"}}

        # Act
        config = loader.load_from_dict(config_dict)

        # Assert
        assert config.source.header is True
        assert config.source.infer_schema is True
        assert config.source.delimiter == ","
        assert config.preview.enabled is True
        assert config.preview.rows == 100
        assert config.logging.level == "INFO"
        assert config.logging.json_output is False

    def test_sample_config_fixture(self, sample_config_path: Path) -> None:
        config = load_config(sample_config_path)

        assert config.preview.rows == 20
        assert config.sink.path == "output/players.parquet"

    def test_validates_invalid_config(self, tmp_path: Path) -> None:
        """
        SCENARIO: Config with invalid values
        EXPECTED: ValidationError raised
        """
        # Arrange
        config_content = """
source:
  path: "in.csv"
  delimiter: ";;"   # Invalid: single character
sink:
  path: "out.parquet"
"""
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text(config_content)

        loader = ConfigLoader(base_path=tmp_path)

        # Act & Assert
        with pytest.raises(ValidationError):
            loader.load("invalid.yaml")

    def test_missing_sink_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            ConfigLoader().load_from_dict({"source": {"path": "in.csv"}})

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """
        SCENARIO: Config file does not exist
        EXPECTED: FileNotFoundError raised
        """
        loader = ConfigLoader(base_path=tmp_path)

        with pytest.raises(FileNotFoundError):
            loader.load("nonexistent.yaml")

    def test_merges_profile(self, tmp_path: Path) -> None:
        """
        SCENARIO: Base config plus a profile overriding part of a section
        EXPECTED: Profile values win, untouched keys keep base values
        """
        # Arrange
        base = {
            "source": {"path": "in.csv", "delimiter": ";"},
            "sink": {"path": "out.parquet"},
            "logging": {"level": "INFO"},
        }
        (tmp_path / "config.yaml").write_text(yaml.dump(base))
        profiles = tmp_path / "config" / "profiles"
        profiles.mkdir(parents=True)
        (profiles / "quiet.yaml").write_text(
            yaml.dump({"logging": {"level": "WARNING", "json": True}})
        )

        loader = ConfigLoader(base_path=tmp_path)

        # Act
        config = loader.load("config.yaml", profile="quiet")

        # Assert
        assert config.logging.level == "WARNING"
        assert config.logging.json_output is True
        assert config.source.delimiter == ";"

    def test_missing_profile_raises(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text(
            yaml.dump({"source": {"path": "a"}, "sink": {"path": "b"}})
        )

        with pytest.raises(FileNotFoundError, match="Profile not found"):
            ConfigLoader(base_path=tmp_path).load("config.yaml", profile="nope")

    def test_overrides_merged_last(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text(
            yaml.dump({"source": {"path": "a.csv", "header": False}, "sink": {"path": "b"}})
        )

        config = load_config(
            "config.yaml",
            base_path=tmp_path,
            overrides={"source": {"path": "other.csv"}},
        )

        assert config.source.path == "other.csv"
        assert config.source.header is False

    def test_with_overrides_keeps_aliases(self) -> None:
        """
        SCENARIO: Override a validated config
        EXPECTED: New config with the override applied, json flag preserved
        """
        # Arrange
        loader = ConfigLoader()
        config = loader.load_from_dict(
            {"source": {"path": "a"}, "sink": {"path": "b"}, "logging": {"json": True}}
        )

        # Act
        updated = loader.with_overrides(config, {"preview": {"enabled": False}})

        # Assert
        assert updated.preview.enabled is False
        assert updated.logging.json_output is True
        assert config.preview.enabled is True

    def test_shipped_default_config_is_valid(self) -> None:
        root = Path(__file__).resolve().parents[2]

        config = load_config("config/default.yaml", profile="quiet", base_path=root)

        assert config.preview.enabled is False
        assert config.logging.level == "WARNING"
