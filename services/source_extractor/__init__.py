"""Source Extractor Service.

This service is responsible for calling external job search providers and
handing their records to the normalizer.

Main components:
- SourceAdapter: Abstract base class for all provider adapters
- JobPostingRaw: Data class for one raw provider record
- AdapterResult: Outcome of one adapter call (ok / unavailable / failed)
- Adapters: Provider-specific implementations (in adapters/ directory)
"""

from .base import AdapterResult, JobPostingRaw, SourceAdapter
from .source_config import ProviderConfig, load_sources_config

__all__ = [
    "AdapterResult",
    "SourceAdapter",
    "JobPostingRaw",
    "ProviderConfig",
    "load_sources_config",
]
__version__ = "0.1.0"
