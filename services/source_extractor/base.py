"""Source Adapter Base Class.

This module defines the interface that all job search provider adapters must
implement, plus the AdapterResult type returned at the adapter boundary.

An adapter never propagates errors to its caller: `search()` always returns an
AdapterResult whose records collapse to an empty list on any failure.
"""

import asyncio
import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from services.common.models import CanonicalRecord
from services.normalizer.normalize import normalize_job_posting

logger = logging.getLogger(__name__)

AdapterStatus = Literal["ok", "unavailable", "failed"]


@dataclass
class JobPostingRaw:
    """Raw job posting data from an API provider.

    This is a simple container for one provider record and its metadata.
    The actual job data structure varies by provider, so we store it as a dict.
    """

    source: str  # Provider name (e.g., "indeed")
    payload: Dict[str, Any]  # Raw JSON record from the API
    provider_job_id: Optional[str] = None  # Provider's unique job ID (if available)


@dataclass
class AdapterResult:
    """Outcome of one adapter call.

    - ok: the provider answered; `records` holds the normalized postings
    - unavailable: the adapter has no credential and made no call
    - failed: the call raised; `reason` says why
    """

    source: str
    status: AdapterStatus
    records: List[CanonicalRecord] = field(default_factory=list)
    reason: Optional[str] = None
    latency_ms: Optional[int] = None

    @classmethod
    def ok(
        cls, source: str, records: List[CanonicalRecord], latency_ms: Optional[int] = None
    ) -> "AdapterResult":
        return cls(source=source, status="ok", records=list(records), latency_ms=latency_ms)

    @classmethod
    def unavailable(cls, source: str) -> "AdapterResult":
        return cls(source=source, status="unavailable", reason="missing credential")

    @classmethod
    def failed(
        cls, source: str, reason: str, latency_ms: Optional[int] = None
    ) -> "AdapterResult":
        return cls(source=source, status="failed", reason=reason, latency_ms=latency_ms)

    def records_or_empty(self) -> List[CanonicalRecord]:
        """Collapse the result to a plain list (empty unless status is ok)."""
        return list(self.records) if self.status == "ok" else []


class SourceAdapter(ABC):
    """Abstract base class for job search provider adapters.

    All job search providers must implement this interface. This ensures:
    - Consistent fetching mechanism across providers
    - Standard mapping to the common format consumed by the normalizer
    - A single error boundary (`search`) that never raises

    Usage:
        class MyProviderAdapter(SourceAdapter):
            credential_env = "MY_PROVIDER_KEY"

            def __init__(self, api_key=None):
                super().__init__(source_name="my_provider", credential=api_key)

            def fetch(self, query=None, location=None):
                # One HTTP call, may raise
                ...

            def map_to_common(self, raw):
                # Map provider fields to the common format
                ...
    """

    # Environment variable holding the provider credential (None = no credential needed)
    credential_env: Optional[str] = None

    def __init__(self, source_name: str, credential: Optional[str] = None):
        """Initialize the adapter.

        Args:
            source_name: Unique identifier for this data source
                        (e.g., "indeed", "google")
            credential: API key; falls back to the `credential_env` variable
        """
        self.source_name = source_name
        self.credential = credential or (
            os.getenv(self.credential_env) if self.credential_env else None
        )

        if not self.is_configured:
            logger.info(
                "Adapter disabled: credential not configured",
                extra={"source": self.source_name, "credential_env": self.credential_env},
            )

    @property
    def is_configured(self) -> bool:
        """True when the adapter has everything it needs to call its provider."""
        return self.credential_env is None or bool(self.credential)

    @abstractmethod
    def fetch(
        self, query: Optional[str] = None, location: Optional[str] = None
    ) -> List[JobPostingRaw]:
        """Fetch job postings from the provider.

        This method should handle:
        - Substituting provider defaults when query/location are absent
        - Making exactly one HTTP request (no retries)
        - Raising on non-2xx responses or malformed payloads

        Args:
            query: Free-text search query
            location: Free-text location

        Returns:
            List of JobPostingRaw objects
        """

    @abstractmethod
    def map_to_common(self, raw: JobPostingRaw) -> Dict[str, Any]:
        """Map one provider record to the common format.

        Returns:
            Dictionary with any of the keys read by normalize_job_posting():
            - provider_job_id, job_title, company, location, job_type
            - salary_min, salary_max, salary_text
            - description, requirements, posted_at, apply_url
            - remote_flag (bool), tag_text (extra text scanned for tags)
        """

    def normalize(self, raw: JobPostingRaw, today: Optional[date] = None) -> CanonicalRecord:
        """Map and normalize one raw record."""
        return normalize_job_posting(self.map_to_common(raw), self.source_name, today=today)

    def collect(
        self, query: Optional[str] = None, location: Optional[str] = None
    ) -> List[CanonicalRecord]:
        """Fetch and normalize in one blocking call.

        A fetch failure raises. A record that fails to map or normalize is
        logged and skipped so the rest of the batch survives.
        """
        records: List[CanonicalRecord] = []
        for raw in self.fetch(query, location):
            try:
                records.append(self.normalize(raw))
            except Exception as e:
                logger.warning(
                    "Skipping job posting that failed to normalize",
                    extra={
                        "source": self.source_name,
                        "provider_job_id": raw.provider_job_id,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
        return records

    async def search(
        self, query: Optional[str] = None, location: Optional[str] = None
    ) -> AdapterResult:
        """Run one provider call without ever raising.

        The blocking HTTP call runs in a worker thread so several adapters
        can be awaited concurrently on one event loop.
        """
        if not self.is_configured:
            return AdapterResult.unavailable(self.source_name)

        started = time.monotonic()
        try:
            records = await asyncio.to_thread(self.collect, query, location)
        except Exception as e:
            elapsed_ms = int((time.monotonic() - started) * 1000)
            logger.error(
                "Failed to fetch jobs from provider",
                extra={
                    "source": self.source_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "latency_ms": elapsed_ms,
                },
            )
            return AdapterResult.failed(
                self.source_name, f"{type(e).__name__}: {str(e)[:200]}", elapsed_ms
            )

        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "Fetched jobs from provider",
            extra={
                "source": self.source_name,
                "jobs_returned": len(records),
                "latency_ms": elapsed_ms,
            },
        )
        return AdapterResult.ok(self.source_name, records, elapsed_ms)

    def __repr__(self) -> str:
        """String representation of the adapter."""
        return (
            f"{self.__class__.__name__}(source='{self.source_name}', "
            f"configured={self.is_configured})"
        )
