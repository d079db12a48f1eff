"""
Configuration Loader for the Aggregator

This module loads and validates aggregator settings from aggregator.yml:

    cache:
      ttl_seconds: 600
      key_includes_filters: false
    fallback:
      enabled: true
    filters:
      strict: false
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .cache import DEFAULT_TTL_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class AggregatorSettings:
    """Runtime settings for JobAggregator."""

    cache_ttl_seconds: float = DEFAULT_TTL_SECONDS
    cache_key_includes_filters: bool = False
    fallback_enabled: bool = True
    strict_filters: bool = False

    def validate(self) -> None:
        """Reject settings the aggregator cannot run with."""
        if self.cache_ttl_seconds <= 0:
            raise ValueError(
                f"cache ttl_seconds must be positive, got {self.cache_ttl_seconds}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "AggregatorSettings":
        """Create AggregatorSettings from a parsed YAML mapping."""
        cache = config_dict.get("cache") or {}
        fallback = config_dict.get("fallback") or {}
        filters = config_dict.get("filters") or {}

        for name, section in (("cache", cache), ("fallback", fallback), ("filters", filters)):
            if not isinstance(section, dict):
                raise ValueError(f"`{name}` section must be a mapping")

        try:
            ttl = float(cache.get("ttl_seconds", DEFAULT_TTL_SECONDS))
        except (TypeError, ValueError) as e:
            raise ValueError(f"cache ttl_seconds must be a number: {e}") from e

        settings = cls(
            cache_ttl_seconds=ttl,
            cache_key_includes_filters=bool(cache.get("key_includes_filters", False)),
            fallback_enabled=bool(fallback.get("enabled", True)),
            strict_filters=bool(filters.get("strict", False)),
        )
        settings.validate()
        return settings


def load_aggregator_settings(config_path: Optional[str] = None) -> AggregatorSettings:
    """
    Load aggregator settings from a YAML file.

    Args:
        config_path: Path to aggregator.yml. If None, uses config/aggregator.yml
            under the project root.

    Returns:
        AggregatorSettings; defaults when the file is missing or empty

    Raises:
        ValueError: If the file is not valid YAML or has invalid values

    Example:
        >>> settings = load_aggregator_settings('config/aggregator.yml')
        >>> settings.cache_ttl_seconds
        600.0
    """
    if config_path is None:
        project_root = Path(__file__).parent.parent.parent
        config_path = str(project_root / "config" / "aggregator.yml")

    logger.info("Loading aggregator settings", extra={"config_path": config_path})

    try:
        with open(config_path, encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning(f"Aggregator settings not found at {config_path}, using defaults")
        return AggregatorSettings()
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML: {e}")
        raise ValueError(f"Invalid YAML in config file: {e}") from e

    if not config_dict:
        logger.warning("Empty aggregator settings file, using defaults")
        return AggregatorSettings()

    if not isinstance(config_dict, dict):
        raise ValueError("Aggregator settings must be a YAML mapping")

    settings = AggregatorSettings.from_dict(config_dict)

    logger.info(
        "Aggregator settings loaded successfully",
        extra={
            "cache_ttl_seconds": settings.cache_ttl_seconds,
            "cache_key_includes_filters": settings.cache_key_includes_filters,
            "fallback_enabled": settings.fallback_enabled,
            "strict_filters": settings.strict_filters,
        },
    )
    return settings
