"""
Normalizer Service

This package maps provider-specific job data into the CanonicalRecord shape
shared by the rest of the aggregator.

Key responsibilities:
- Classify each posting into a fixed job type
- Infer accessibility / flexibility tags from free text
- Parse absolute and relative posting dates into calendar dates
- Apply placeholders so normalization never fails
"""

from .normalize import (
    JOB_TYPE_RULES,
    TAG_RULES,
    build_record_id,
    classify_job_type,
    format_compensation,
    infer_tags,
    normalize_job_posting,
)
from .posted_date import parse_posted_date

__all__ = [
    "JOB_TYPE_RULES",
    "TAG_RULES",
    "build_record_id",
    "classify_job_type",
    "format_compensation",
    "infer_tags",
    "normalize_job_posting",
    "parse_posted_date",
]
__version__ = "0.1.0"
