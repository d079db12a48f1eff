"""
Common models shared across the aggregator services.

This package is intentionally small: the CanonicalRecord dataclass and the
fixed job type enumeration every other package depends on.
"""

from .models import JOB_TYPES, CanonicalRecord

__all__ = ["CanonicalRecord", "JOB_TYPES"]
