"""
Job Aggregator

Fans a search out to every configured source adapter, concatenates their
normalized results, caches the union, and applies type / tag filters.

Flow for one call:
    cache key -> fresh entry? reuse payload
              -> otherwise fan out to configured adapters concurrently,
                 concatenate in registration order, substitute the fallback
                 seed list when empty, store a new cache entry
    -> type filter -> tag filters -> return

Nothing in this path raises to the caller: provider failures degrade to
fewer results and, at worst, to the fallback list.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from services.common.models import CanonicalRecord
from services.filters.tag_filters import apply_filters
from services.source_extractor.adapters import build_adapters
from services.source_extractor.base import AdapterResult, SourceAdapter
from services.source_extractor.source_config import load_sources_config

from .cache import TTLCache, build_cache_key
from .config_loader import AggregatorSettings, load_aggregator_settings
from .fallback import get_fallback_records

logger = logging.getLogger(__name__)

FallbackProvider = Callable[[Optional[str], Optional[str]], list[CanonicalRecord]]


class JobAggregator:
    """
    Orchestrates adapters, the result cache and the fallback list.

    The cache is owned by the instance (inject one with a fake clock in
    tests). Concurrent cache misses for the same key share one in-flight
    fan-out instead of each calling every provider.

    `last_statuses` holds the provider results of the fan-out that produced
    the entry the most recent call was served from (empty when that call
    fell back after an error).
    """

    def __init__(
        self,
        adapters: Sequence[SourceAdapter],
        *,
        settings: Optional[AggregatorSettings] = None,
        cache: Optional[TTLCache] = None,
        fallback: FallbackProvider = get_fallback_records,
    ):
        self.settings = settings or AggregatorSettings()
        self.adapters = list(adapters)
        self.cache = cache or TTLCache(ttl_seconds=self.settings.cache_ttl_seconds)
        self._fallback = fallback
        self._in_flight: dict[str, asyncio.Task] = {}
        self.last_statuses: list[AdapterResult] = []
        self._statuses_by_key: dict[str, list[AdapterResult]] = {}
        self.fetch_count = 0

    @property
    def configured_adapters(self) -> list[SourceAdapter]:
        """Adapters whose credential is present, in registration order."""
        return [adapter for adapter in self.adapters if adapter.is_configured]

    def cache_key_for(
        self,
        query: Optional[str] = None,
        location: Optional[str] = None,
        job_type: Optional[str] = None,
        tag_filters: Optional[Iterable[str]] = None,
    ) -> str:
        """Cache key for a request; filters only take part when configured to."""
        if self.settings.cache_key_includes_filters:
            return build_cache_key(query, location, job_type, tag_filters)
        return build_cache_key(query, location)

    async def get_aggregated_records(
        self,
        query: Optional[str] = None,
        location: Optional[str] = None,
        job_type: Optional[str] = None,
        tag_filters: Optional[Iterable[str]] = None,
    ) -> list[CanonicalRecord]:
        """
        Return aggregated, normalized and filtered job records.

        Args:
            query: Free-text search query
            location: Free-text location
            job_type: One of the JOB_TYPES, or None / "all" for no type filter
            tag_filters: Accessibility filter ids, combined with AND (a single
                id string is treated as one filter)

        Returns:
            Filtered list of CanonicalRecord (never raises)
        """
        if isinstance(tag_filters, str):
            filters = [tag_filters]
        else:
            filters = list(tag_filters or [])

        key = self.cache_key_for(query, location, job_type, filters)

        try:
            base = await self._load(key, query, location)
            self.last_statuses = list(self._statuses_by_key.get(key, []))
        except Exception as e:
            self.last_statuses = []
            logger.error(
                "Aggregation failed, serving fallback listings",
                extra={"cache_key": key, "error": str(e), "error_type": type(e).__name__},
                exc_info=True,
            )
            base = tuple(self._fallback_records(query, location))

        results = apply_filters(
            base, job_type, filters, strict=self.settings.strict_filters
        )

        logger.info(
            "Aggregated job search completed",
            extra={
                "cache_key": key,
                "base_count": len(base),
                "returned": len(results),
                "job_type": job_type,
                "tag_filters": filters,
            },
        )
        return results

    def clear_cache(self) -> None:
        """Drop every cached entry."""
        self.cache.clear()
        self._statuses_by_key.clear()
        logger.info("Aggregator cache cleared")

    async def _load(
        self, key: str, query: Optional[str], location: Optional[str]
    ) -> tuple[CanonicalRecord, ...]:
        entry = self.cache.get(key)
        if entry is not None:
            logger.debug("Cache hit", extra={"cache_key": key, "records": len(entry.payload)})
            return entry.payload

        task = self._in_flight.get(key)
        if task is None:
            logger.debug("Cache miss, starting fan-out", extra={"cache_key": key})
            task = asyncio.create_task(self._refresh(key, query, location))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            logger.debug("Joining in-flight fan-out", extra={"cache_key": key})

        # A cancelled caller must not cancel the fetch other callers are awaiting
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _refresh(
        self, key: str, query: Optional[str], location: Optional[str]
    ) -> tuple[CanonicalRecord, ...]:
        records, statuses = await self._fetch_union(query, location)
        self._statuses_by_key[key] = statuses
        entry = self.cache.set(key, records)
        return entry.payload

    async def _fetch_union(
        self, query: Optional[str], location: Optional[str]
    ) -> tuple[list[CanonicalRecord], list[AdapterResult]]:
        adapters = self.configured_adapters
        self.fetch_count += 1

        results: list[AdapterResult] = []
        if adapters:
            results = list(
                await asyncio.gather(*(adapter.search(query, location) for adapter in adapters))
            )
        records = [record for result in results for record in result.records_or_empty()]

        logger.info(
            "Provider fan-out finished",
            extra={
                "providers": [result.source for result in results],
                "statuses": {result.source: result.status for result in results},
                "records": len(records),
            },
        )

        if not records:
            records = self._fallback_records(query, location)

        return records, results

    def _fallback_records(
        self, query: Optional[str], location: Optional[str]
    ) -> list[CanonicalRecord]:
        if not self.settings.fallback_enabled:
            return []

        records = self._fallback(query, location)
        logger.info(
            "No provider results, serving fallback listings",
            extra={"query": query, "location": location, "records": len(records)},
        )
        return records


def create_aggregator(
    sources_config_path: Optional[str] = None,
    settings_path: Optional[str] = None,
) -> JobAggregator:
    """
    Build a JobAggregator from the YAML configuration files.

    Raises:
        FileNotFoundError: If the sources configuration is missing
        ValueError: If either configuration file is invalid
    """
    providers = load_sources_config(sources_config_path)
    settings = load_aggregator_settings(settings_path)
    return JobAggregator(build_adapters(providers), settings=settings)
