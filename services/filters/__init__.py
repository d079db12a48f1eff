"""
Filters package.

Post-cache predicates for narrowing aggregated job records by job type and
accessibility tag filters.
"""

from .tag_filters import (
    FILTER_TAXONOMY,
    TagFilter,
    apply_filters,
    filter_by_type,
    matches_filter,
    matches_tag_filters,
    resolve_filter,
)

__all__ = [
    "FILTER_TAXONOMY",
    "TagFilter",
    "apply_filters",
    "filter_by_type",
    "matches_filter",
    "matches_tag_filters",
    "resolve_filter",
]
