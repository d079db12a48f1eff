"""
Canonical Job Record

The provider-agnostic shape every adapter result is normalized into. Records
are immutable once built; the aggregator caches and filters them as-is.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

# Fixed job type enumeration (the only values `type_tag` may take)
JOB_TYPES = ("full-time", "part-time", "remote", "hybrid", "contract")
DEFAULT_JOB_TYPE = "full-time"

# Placeholders used when a provider omits a required text field
DEFAULT_TITLE = "Position Available"
DEFAULT_ORGANIZATION = "Company"
DEFAULT_LOCATION = "Location Not Specified"
DEFAULT_REQUIREMENTS = "See job description for requirements"

ID_PREFIX = "ext"


@dataclass(frozen=True)
class CanonicalRecord:
    """
    A normalized job posting.

    Notes:
    - `id` is `ext_{source_name}_{provider id or random suffix}`. For providers
      without a stable id it is only stable within one cache epoch.
    - `derived_tags` is heuristic. An empty tuple means "unknown", not
      "no accessibility features".
    - `posted_at` is a calendar date (YYYY-MM-DD), never a timestamp.
    """

    id: str
    title: str
    organization: str
    location_text: str
    description: str
    requirements_text: str
    type_tag: str
    posted_at: str
    source_name: str
    compensation_text: Optional[str] = None
    derived_tags: tuple[str, ...] = field(default_factory=tuple)
    source_id: Optional[str] = None
    apply_url: Optional[str] = None
    accommodations: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation."""
        data = asdict(self)
        data["derived_tags"] = list(self.derived_tags)
        return data


__all__ = [
    "CanonicalRecord",
    "JOB_TYPES",
    "DEFAULT_JOB_TYPE",
    "DEFAULT_TITLE",
    "DEFAULT_ORGANIZATION",
    "DEFAULT_LOCATION",
    "DEFAULT_REQUIREMENTS",
    "ID_PREFIX",
]
