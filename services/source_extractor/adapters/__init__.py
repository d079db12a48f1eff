"""Job Search Provider Adapters.

This package contains concrete implementations of the SourceAdapter interface
for different job search providers, and a small registry that builds them
from `config/sources.yml`.

Available adapters:
- JSearchAdapter: RapidAPI JSearch (jsearch_adapter.py), source "indeed"
- GoogleJobsAdapter: SerpApi Google Jobs (google_jobs_adapter.py), source "google"
- MockAdapter: Offline fake provider for tests and demos (mock_adapter.py)
"""

import logging
from collections.abc import Mapping

from ..base import SourceAdapter
from ..source_config import ProviderConfig
from .google_jobs_adapter import GoogleJobsAdapter
from .jsearch_adapter import JSearchAdapter
from .mock_adapter import MockAdapter

logger = logging.getLogger(__name__)

ADAPTER_CLASSES: dict[str, type[SourceAdapter]] = {
    "jsearch": JSearchAdapter,
    "google_jobs": GoogleJobsAdapter,
    "mock": MockAdapter,
}


def build_adapters(providers: Mapping[str, ProviderConfig]) -> list[SourceAdapter]:
    """
    Instantiate adapters for every enabled provider, in configuration order.

    The provider name becomes the adapter's source name, so record ids read
    `ext_{provider}_...`.

    Raises:
        ValueError: If a provider references an unknown adapter or its params
            do not fit the adapter constructor.
    """
    adapters: list[SourceAdapter] = []
    for provider_name, config in providers.items():
        if not config.enabled:
            logger.info("Provider disabled in configuration", extra={"source": provider_name})
            continue

        adapter_cls = ADAPTER_CLASSES.get(config.adapter)
        if adapter_cls is None:
            raise ValueError(
                f"Provider '{provider_name}' references unknown adapter '{config.adapter}'"
            )

        try:
            adapters.append(adapter_cls(source_name=provider_name, **config.params))
        except TypeError as e:
            raise ValueError(f"Invalid params for provider '{provider_name}': {e}") from e

    return adapters


__all__ = [
    "ADAPTER_CLASSES",
    "GoogleJobsAdapter",
    "JSearchAdapter",
    "MockAdapter",
    "build_adapters",
]
__version__ = "0.1.0"
