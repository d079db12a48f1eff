"""
Aggregator Service

Fans a job search out to every configured provider, caches the union of
their normalized records, and applies job type and accessibility filters.

Main components:
- JobAggregator: Orchestrates adapters, cache, fallback and filtering
- TTLCache: In-memory result cache with a fixed time-to-live
- AggregatorSettings: Runtime settings loaded from config/aggregator.yml
- get_fallback_records: Static seed listings served when providers are empty
"""

from .aggregator import JobAggregator, create_aggregator
from .cache import CacheEntry, TTLCache, build_cache_key
from .config_loader import AggregatorSettings, load_aggregator_settings
from .fallback import get_fallback_records

__all__ = [
    "AggregatorSettings",
    "CacheEntry",
    "JobAggregator",
    "TTLCache",
    "build_cache_key",
    "create_aggregator",
    "get_fallback_records",
    "load_aggregator_settings",
]
__version__ = "0.1.0"
