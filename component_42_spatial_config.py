"""
Component 42: Spatial Reasoning Configuration

Loads tunable settings for the query dispatcher and the engines from a
YAML file. The geometric epsilon is not configurable; it lives in
common.constants.

Example file (config/spatial_reasoning.yaml):

    spatial_reasoning:
      enable_result_caching: true
      cache_maxsize: 256
      cache_ttl: 300
      boundary_samples_per_edge: 8
      enable_performance_logging: true

Author: SRS Development Team
Date: 2026-10-16
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from common.constants import (
    BOUNDARY_SAMPLES_PER_EDGE,
    CACHE_MAXSIZE_SPATIAL_QUERIES,
    CACHE_TTL_SPATIAL_QUERIES,
)
from component_15_logging_config import get_logger
from srs_exceptions import InvalidConfigError, wrap_exception

logger = get_logger(__name__)

CONFIG_SECTION = "spatial_reasoning"
DEFAULT_CONFIG_PATH = Path("config") / "spatial_reasoning.yaml"


@dataclass(frozen=True)
class SpatialReasoningConfig:
    """Settings for the query dispatcher and relation engines."""

    enable_result_caching: bool = True
    cache_maxsize: int = CACHE_MAXSIZE_SPATIAL_QUERIES
    cache_ttl: int = CACHE_TTL_SPATIAL_QUERIES
    boundary_samples_per_edge: int = BOUNDARY_SAMPLES_PER_EDGE
    enable_performance_logging: bool = True

    def __post_init__(self):
        for name in ("enable_result_caching", "enable_performance_logging"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfigError(
                    f"{name} must be a boolean, got {getattr(self, name)!r}",
                    config_key=name,
                )
        for name in ("cache_maxsize", "cache_ttl", "boundary_samples_per_edge"):
            value = getattr(self, name)
            # bool is a subclass of int and is rejected explicitly
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidConfigError(
                    f"{name} must be a positive integer, got {value!r}",
                    config_key=name,
                )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpatialReasoningConfig":
        """
        Build a config from a mapping, ignoring unknown keys with a warning.

        Raises:
            InvalidConfigError: If a value has the wrong type or range
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(
                "Ignoring unknown config keys", extra={"keys": ", ".join(unknown)}
            )
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(config_path: Optional[Union[str, Path]] = None) -> SpatialReasoningConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file (default: config/spatial_reasoning.yaml)

    Returns:
        SpatialReasoningConfig; defaults if the file does not exist

    Raises:
        InvalidConfigError: If the file is malformed or holds invalid values
    """
    config_file = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not config_file.exists():
        logger.warning(f"Config file not found: {config_file}, using defaults")
        return SpatialReasoningConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.log_exception(e, "Failed to parse config", path=str(config_file))
        raise wrap_exception(
            e, InvalidConfigError, "Malformed YAML config", path=str(config_file)
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigError(
            f"Config root must be a mapping in {config_file}", config_key=None
        )

    section = data.get(CONFIG_SECTION, {})
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise InvalidConfigError(
            f"'{CONFIG_SECTION}' must be a mapping", config_key=CONFIG_SECTION
        )

    config = SpatialReasoningConfig.from_dict(section)
    logger.info(f"[OK] Configuration loaded from {config_file}")
    return config
