"""
Provider configuration loader for the source extractor.

Reads `config/sources.yml`, which lists the job search providers in the order
their results are concatenated:

    providers:
      indeed:
        adapter: jsearch
        enabled: true
        params:
          default_query: accessibility

The provider key becomes the record source name, so it must be a short
lower-case identifier.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_PROVIDER_NAME = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


@dataclass
class ProviderConfig:
    """Configuration for a single job search provider."""

    adapter: str
    enabled: bool = True
    params: dict[str, Any] = field(default_factory=dict)


def _project_root() -> Path:
    """Return the project root path based on this file's location."""
    return Path(__file__).resolve().parent.parent.parent


def parse_sources_config(raw_config: Mapping[str, Any] | None) -> dict[str, ProviderConfig]:
    """
    Validate an already-parsed configuration mapping.

    Raises:
        ValueError: If the structure is invalid.
    """
    if not raw_config:
        return {}

    providers_section = raw_config.get("providers")
    if providers_section is None:
        return {}
    if not isinstance(providers_section, Mapping):
        raise ValueError("`providers` section must be a mapping in sources configuration")

    providers: dict[str, ProviderConfig] = {}
    for provider_name, provider_data in providers_section.items():
        if not isinstance(provider_name, str) or not _PROVIDER_NAME.match(provider_name):
            raise ValueError(
                f"Provider name '{provider_name}' must be a lower-case identifier"
            )
        if not isinstance(provider_data, Mapping):
            raise ValueError(f"Invalid provider configuration for '{provider_name}'")

        adapter = provider_data.get("adapter")
        if not isinstance(adapter, str) or not adapter.strip():
            raise ValueError(f"Provider '{provider_name}' must define a non-empty `adapter` string")

        params = provider_data.get("params") or {}
        if not isinstance(params, Mapping):
            raise ValueError(f"`params` for provider '{provider_name}' must be a mapping")

        providers[provider_name] = ProviderConfig(
            adapter=adapter.strip(),
            enabled=bool(provider_data.get("enabled", True)),
            params=dict(params),
        )

    return providers


def load_sources_config(config_path: str | None = None) -> dict[str, ProviderConfig]:
    """
    Load provider configuration from a YAML file.

    Args:
        config_path: Optional override for the config file path. When omitted,
            the function reads `config/sources.yml` relative to the project root.

    Returns:
        Dictionary mapping provider names to `ProviderConfig` objects, in file order.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If the YAML file cannot be parsed or has invalid structure.
    """
    path = Path(config_path) if config_path else _project_root() / "config" / "sources.yml"
    if not path.exists():
        logger.error("Sources configuration file not found: %s", path)
        raise FileNotFoundError(f"Sources configuration file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            raw_config: Mapping[str, Any] | None = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        logger.error("Failed to parse sources configuration: %s", exc)
        raise ValueError(f"Invalid YAML in sources configuration: {exc}") from exc

    if raw_config is not None and not isinstance(raw_config, Mapping):
        raise ValueError("Sources configuration must be a YAML mapping")

    providers = parse_sources_config(raw_config)
    if not providers:
        logger.warning("Sources configuration lists no providers: %s", path)

    logger.info(
        "Loaded sources configuration",
        extra={
            "sources_count": len(providers),
            "enabled_sources": [name for name, cfg in providers.items() if cfg.enabled],
        },
    )
    return providers


__all__ = ["ProviderConfig", "load_sources_config", "parse_sources_config"]
