"""
Accessibility Tag Filters

Pure predicates that narrow a list of CanonicalRecord to those matching a
caller-supplied set of filter ids.

A record matches a filter set only if it matches EVERY filter (logical AND).
For one filter, a record matches when any of these holds:
- its type_tag equals the filter's expected type
- one of its derived tags contains one of the filter's tag substrings
- its description, compensation or accommodations text contains one of the
  filter's phrases

All comparisons are case-insensitive. Unknown filter ids match everything
unless `strict=True` is passed.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from services.common.models import CanonicalRecord

logger = logging.getLogger(__name__)

ALL_TYPES = "all"


@dataclass(frozen=True)
class TagFilter:
    """One entry of the filter taxonomy."""

    filter_id: str
    label: str
    type_tag: Optional[str] = None
    tag_substrings: tuple[str, ...] = ()
    text_phrases: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()


FILTER_TAXONOMY: tuple[TagFilter, ...] = (
    TagFilter(
        filter_id="remote",
        label="Remote Work Available",
        type_tag="remote",
        tag_substrings=("remote", "work from home"),
        text_phrases=("remote", "work from home", "work from anywhere"),
    ),
    TagFilter(
        filter_id="flexible-hours",
        label="Flexible Hours",
        tag_substrings=("flexible",),
        text_phrases=("flexible hours", "flexible schedule", "set your own hours"),
        aliases=("flexible",),
    ),
    TagFilter(
        filter_id="wheelchair-accessible",
        label="Wheelchair Accessible",
        tag_substrings=("wheelchair", "accommodation"),
        text_phrases=("wheelchair", "accessible office", "accessibility features", "step-free"),
        aliases=("wheelchair",),
    ),
    TagFilter(
        filter_id="screen-reader-compatible",
        label="Screen Reader Compatible",
        tag_substrings=("screen reader", "assistive"),
        text_phrases=("screen reader", "assistive technolog", "wcag"),
        aliases=("screen-reader",),
    ),
    TagFilter(
        filter_id="mental-health-support",
        label="Mental Health Support",
        tag_substrings=("mental health", "wellness"),
        text_phrases=("mental health", "wellness", "employee assistance"),
        aliases=("mental-health",),
    ),
    TagFilter(
        filter_id="quiet-workspace",
        label="Quiet Workspace",
        tag_substrings=("quiet",),
        text_phrases=("quiet", "private office", "low-noise"),
        aliases=("quiet-space",),
    ),
)

_FILTERS_BY_ID: dict[str, TagFilter] = {}
for _entry in FILTER_TAXONOMY:
    _FILTERS_BY_ID[_entry.filter_id] = _entry
    for _alias in _entry.aliases:
        _FILTERS_BY_ID[_alias] = _entry


def resolve_filter(filter_id: str) -> Optional[TagFilter]:
    """Look up a filter by id or alias (case-insensitive)."""
    return _FILTERS_BY_ID.get(filter_id.strip().lower())


def _record_text(record: CanonicalRecord) -> str:
    parts = [record.description, record.compensation_text or "", record.accommodations or ""]
    return " ".join(parts).lower()


def matches_filter(record: CanonicalRecord, filter_id: str, *, strict: bool = False) -> bool:
    """
    Test one record against one filter id.

    Unknown ids match (permissive) unless `strict` is set, in which case
    they match nothing.
    """
    tag_filter = resolve_filter(filter_id)
    if tag_filter is None:
        logger.debug(
            "Unknown tag filter",
            extra={"filter_id": filter_id, "strict": strict},
        )
        return not strict

    if tag_filter.type_tag and record.type_tag == tag_filter.type_tag:
        return True

    lowered_tags = [tag.lower() for tag in record.derived_tags]
    if any(sub in tag for tag in lowered_tags for sub in tag_filter.tag_substrings):
        return True

    text = _record_text(record)
    return any(phrase in text for phrase in tag_filter.text_phrases)


def matches_tag_filters(
    record: CanonicalRecord, filters: Optional[Iterable[str]], *, strict: bool = False
) -> bool:
    """True when the record matches every filter in the set (empty set matches)."""
    return all(matches_filter(record, filter_id, strict=strict) for filter_id in filters or ())


def filter_by_type(
    records: Sequence[CanonicalRecord], job_type: Optional[str]
) -> list[CanonicalRecord]:
    """Keep records whose type_tag equals `job_type`; None or "all" keeps everything."""
    if not job_type or job_type.strip().lower() == ALL_TYPES:
        return list(records)

    wanted = job_type.strip().lower()
    return [record for record in records if record.type_tag == wanted]


def apply_filters(
    records: Sequence[CanonicalRecord],
    job_type: Optional[str] = None,
    tag_filters: Optional[Iterable[str]] = None,
    *,
    strict: bool = False,
) -> list[CanonicalRecord]:
    """Apply the type filter, then the conjunctive tag filters."""
    selected = filter_by_type(records, job_type)

    filters = [f for f in (tag_filters or ()) if f and f.strip()]
    if not filters:
        return selected

    return [record for record in selected if matches_tag_filters(record, filters, strict=strict)]
