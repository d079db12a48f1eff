"""Accessible Job Aggregator Services Package.

This package contains the services behind the aggregated job search:
- source_extractor: Fetches job postings from external provider APIs
- normalizer: Maps provider records to the canonical record shape
- filters: Job type and accessibility tag filters
- aggregator: Concurrent fan-out, result cache, fallback listings and CLI
- common: Shared record model
"""

__version__ = "0.1.0"
