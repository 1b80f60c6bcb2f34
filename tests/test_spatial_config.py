"""
Tests for Component 42: Spatial Reasoning Configuration

Tests for:
- Default settings
- Validation of values
- Loading from YAML files

Author: SRS Development Team
Date: 2026-10-16
"""

import pytest

from common.constants import (
    BOUNDARY_SAMPLES_PER_EDGE,
    CACHE_MAXSIZE_SPATIAL_QUERIES,
    CACHE_TTL_SPATIAL_QUERIES,
)
from component_42_spatial_config import SpatialReasoningConfig, load_config
from srs_exceptions import InvalidConfigError


def _write(tmp_path, text):
    path = tmp_path / "spatial_reasoning.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestConfigDefaults:
    """Test the built-in defaults."""

    def test_defaults(self):
        """Test that defaults come from common.constants."""
        config = SpatialReasoningConfig()
        assert config.enable_result_caching is True
        assert config.cache_maxsize == CACHE_MAXSIZE_SPATIAL_QUERIES
        assert config.cache_ttl == CACHE_TTL_SPATIAL_QUERIES
        assert config.boundary_samples_per_edge == BOUNDARY_SAMPLES_PER_EDGE
        assert config.enable_performance_logging is True


class TestConfigValidation:
    """Test value validation."""

    @pytest.mark.parametrize(
        "key,value",
        [
            ("cache_maxsize", 0),
            ("cache_ttl", -5),
            ("boundary_samples_per_edge", 2.5),
            ("boundary_samples_per_edge", True),
            ("enable_result_caching", "yes"),
            ("enable_performance_logging", 1),
        ],
    )
    def test_invalid_values(self, key, value):
        """Test that wrong types and ranges are refused."""
        with pytest.raises(InvalidConfigError) as exc_info:
            SpatialReasoningConfig(**{key: value})
        assert exc_info.value.context["config_key"] == key

    def test_from_dict_ignores_unknown_keys(self):
        """Test that unknown keys are dropped."""
        config = SpatialReasoningConfig.from_dict({"cache_ttl": 10, "colour": "blue"})
        assert config.cache_ttl == 10


class TestLoadConfig:
    """Test loading YAML files."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test that an absent file falls back to the defaults."""
        assert load_config(tmp_path / "absent.yaml") == SpatialReasoningConfig()

    def test_load_values(self, tmp_path):
        """Test that values in the section are applied."""
        path = _write(
            tmp_path,
            "spatial_reasoning:\n"
            "  cache_maxsize: 32\n"
            "  cache_ttl: 5\n"
            "  enable_performance_logging: false\n",
        )
        config = load_config(path)
        assert config.cache_maxsize == 32
        assert config.cache_ttl == 5
        assert config.enable_performance_logging is False
        assert config.enable_result_caching is True

    def test_empty_file_gives_defaults(self, tmp_path):
        """Test that an empty file yields the defaults."""
        assert load_config(_write(tmp_path, "")) == SpatialReasoningConfig()

    def test_missing_section_gives_defaults(self, tmp_path):
        """Test that other sections are ignored."""
        path = _write(tmp_path, "logging:\n  level: DEBUG\n")
        assert load_config(path) == SpatialReasoningConfig()

    def test_malformed_yaml_raises(self, tmp_path):
        """Test that YAML syntax errors become InvalidConfigError."""
        path = _write(tmp_path, "spatial_reasoning: [unclosed\n")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.original_exception is not None

    def test_non_mapping_root_raises(self, tmp_path):
        """Test that a list at the top level is refused."""
        with pytest.raises(InvalidConfigError):
            load_config(_write(tmp_path, "- 1\n- 2\n"))

    def test_non_mapping_section_raises(self, tmp_path):
        """Test that a scalar section is refused."""
        with pytest.raises(InvalidConfigError):
            load_config(_write(tmp_path, "spatial_reasoning: 3\n"))

    def test_invalid_value_in_file_raises(self, tmp_path):
        """Test that file values are validated."""
        path = _write(tmp_path, "spatial_reasoning:\n  cache_maxsize: -1\n")
        with pytest.raises(InvalidConfigError):
            load_config(path)

    def test_shipped_config_file_loads(self):
        """Test the sample file in config/."""
        from pathlib import Path

        shipped = Path(__file__).resolve().parent.parent / "config" / "spatial_reasoning.yaml"
        assert load_config(shipped) == SpatialReasoningConfig()
