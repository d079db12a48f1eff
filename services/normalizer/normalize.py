"""
Job Posting Normalization Logic

This module transforms the common-format dictionaries produced by each
SourceAdapter.map_to_common() into CanonicalRecord instances.

Key Responsibilities:
- Apply placeholder values for missing text fields
- Classify the job into one of the fixed JOB_TYPES
- Infer accessibility / flexibility tags from free text
- Format compensation from numeric salary bounds
- Reduce absolute or relative posting dates to calendar dates
- Build globally unique record ids

Normalization never fails: absent or malformed fields degrade to
placeholders or None.

Common-format keys read (all optional):
    provider_job_id, job_title, company, location, job_type, salary_min,
    salary_max, salary_text, description, requirements, posted_at,
    apply_url, remote_flag, tag_text
"""

import logging
import random
import string
from datetime import date
from typing import Any, Optional

from services.common.models import (
    DEFAULT_JOB_TYPE,
    DEFAULT_LOCATION,
    DEFAULT_ORGANIZATION,
    DEFAULT_REQUIREMENTS,
    DEFAULT_TITLE,
    ID_PREFIX,
    JOB_TYPES,
    CanonicalRecord,
)

from .posted_date import parse_posted_date
from .text import fold, normalize_whitespace, parse_numeric, safe_string

logger = logging.getLogger(__name__)

ACCOMMODATIONS_NOTE = "This employer may offer workplace accommodations"
RANDOM_ID_LENGTH = 9
_ID_ALPHABET = string.ascii_lowercase + string.digits

# Provider employment-type spellings that map onto JOB_TYPES
JOB_TYPE_ALIASES = {
    "full-time": "full-time",
    "full time": "full-time",
    "fulltime": "full-time",
    "full_time": "full-time",
    "part-time": "part-time",
    "part time": "part-time",
    "parttime": "part-time",
    "part_time": "part-time",
    "contract": "contract",
    "contractor": "contract",
    "remote": "remote",
    "hybrid": "hybrid",
}

# Ordered (keywords, job type) table; first match wins, default full-time
JOB_TYPE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("remote", "work from home"), "remote"),
    (("part-time", "part time"), "part-time"),
    (("contract",), "contract"),
    (("hybrid",), "hybrid"),
)

# Ordered (label, keyword family) table; every matching family adds its label
TAG_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Remote Work", ("remote",)),
    ("Flexible Hours", ("flexible",)),
    ("Accommodations Available", ("accommodat", "accessible")),
    ("Disability Inclusive", ("disability", "inclusive")),
    ("Work From Home", ("work from home", "wfh")),
    ("Mental Health Support", ("mental health", "wellness", "employee assistance")),
    ("Quiet Workspace", ("quiet", "low-noise", "private office")),
)


def classify_job_type(
    explicit: Optional[str], title: Optional[str], description: Optional[str]
) -> str:
    """
    Resolve the job type tag.

    An explicit provider value wins when it maps onto JOB_TYPES. Otherwise
    the lower-cased title + description is tested against JOB_TYPE_RULES in
    order: remote, part-time, contract, hybrid, falling back to full-time.

    Examples:
        >>> classify_job_type("FULLTIME", "Engineer", "")
        'full-time'
        >>> classify_job_type(None, "Support Agent", "Work from home role")
        'remote'
        >>> classify_job_type(None, "", "")
        'full-time'
    """
    if isinstance(explicit, str):
        alias = JOB_TYPE_ALIASES.get(fold(explicit))
        if alias:
            return alias

    haystack = f"{fold(title)} {fold(description)}"
    for keywords, job_type in JOB_TYPE_RULES:
        if any(keyword in haystack for keyword in keywords):
            return job_type

    return DEFAULT_JOB_TYPE


def infer_tags(text: Optional[str], *, remote_flag: bool = False) -> tuple[str, ...]:
    """
    Infer accessibility and flexibility tags from free text.

    This is a non-exclusive multi-label classifier: each family in TAG_RULES
    is tested independently and contributes its label once. A provider-level
    remote flag also yields "Remote Work".

    Returns:
        Ordered tuple of labels; empty when nothing matched
    """
    haystack = fold(text)
    tags: list[str] = []
    for label, keywords in TAG_RULES:
        matched = any(keyword in haystack for keyword in keywords)
        if label == "Remote Work" and remote_flag:
            matched = True
        if matched and label not in tags:
            tags.append(label)
    return tuple(tags)


def format_compensation(
    salary_min: Any, salary_max: Any, salary_text: Any = None
) -> Optional[str]:
    """
    Build a display string for compensation.

    Both numeric bounds present -> "$80,000 - $120,000"; otherwise the
    provider's own text (if any) is passed through.
    """
    low = parse_numeric(salary_min)
    high = parse_numeric(salary_max)

    if low is not None and high is not None and low > 0 and high > 0:
        if low > high:
            logger.warning(
                "salary_min > salary_max, swapping values",
                extra={"salary_min": low, "salary_max": high},
            )
            low, high = high, low
        return f"${low:,.0f} - ${high:,.0f}"

    return safe_string(salary_text)


def build_record_id(source: str, provider_job_id: Any = None) -> str:
    """
    Build a record id of the form `ext_{source}_{provider id}`.

    When the provider supplies no id a random 9-character suffix is used, so
    the same posting fetched twice gets two different ids.
    """
    suffix = safe_string(provider_job_id)
    if suffix is None:
        suffix = "".join(random.choices(_ID_ALPHABET, k=RANDOM_ID_LENGTH))
    return f"{ID_PREFIX}_{source}_{suffix}"


def _text_or_default(value: Any, default: str) -> str:
    text = normalize_whitespace(safe_string(value))
    return text if text else default


def normalize_job_posting(
    common: Optional[dict[str, Any]],
    source: str,
    *,
    today: Optional[date] = None,
) -> CanonicalRecord:
    """
    Normalize a common-format job dictionary into a CanonicalRecord.

    Args:
        common: Dictionary returned by SourceAdapter.map_to_common()
        source: Name of the producing source (e.g. "indeed", "google")
        today: Reference date for relative posted-at phrases (tests freeze it)

    Returns:
        CanonicalRecord with placeholders applied and derived fields filled in

    Example:
        >>> record = normalize_job_posting(
        ...     {"job_title": "QA Tester", "description": "Remote role"}, "google"
        ... )
        >>> record.type_tag, record.derived_tags
        ('remote', ('Remote Work',))
    """
    if not isinstance(common, dict):
        logger.warning(
            "Common-format payload is not a mapping, using placeholders",
            extra={"source": source, "type": type(common).__name__},
        )
        common = {}

    title = _text_or_default(common.get("job_title"), DEFAULT_TITLE)
    description = safe_string(common.get("description")) or ""
    provider_job_id = safe_string(common.get("provider_job_id"))

    type_tag = classify_job_type(
        common.get("job_type"), common.get("job_title"), description
    )

    tag_text = description
    extra_text = safe_string(common.get("tag_text"))
    if extra_text:
        tag_text = f"{extra_text} {description}"
    derived_tags = infer_tags(tag_text, remote_flag=bool(common.get("remote_flag")))

    record = CanonicalRecord(
        id=build_record_id(source, provider_job_id),
        title=title,
        organization=_text_or_default(common.get("company"), DEFAULT_ORGANIZATION),
        location_text=_text_or_default(common.get("location"), DEFAULT_LOCATION),
        description=description,
        requirements_text=_text_or_default(
            common.get("requirements"), DEFAULT_REQUIREMENTS
        ),
        type_tag=type_tag if type_tag in JOB_TYPES else DEFAULT_JOB_TYPE,
        posted_at=parse_posted_date(common.get("posted_at"), today=today),
        source_name=source,
        compensation_text=format_compensation(
            common.get("salary_min"), common.get("salary_max"), common.get("salary_text")
        ),
        derived_tags=derived_tags,
        source_id=provider_job_id,
        apply_url=safe_string(common.get("apply_url")),
        accommodations=ACCOMMODATIONS_NOTE if derived_tags else None,
    )

    logger.debug(
        "Normalized job posting",
        extra={
            "record_id": record.id,
            "source": source,
            "type_tag": record.type_tag,
            "derived_tags": list(record.derived_tags),
        },
    )

    return record
