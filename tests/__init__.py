"""Accessible Job Aggregator Test Suite.

This package contains unit and integration tests for the job aggregator.

Test Structure:
- unit/: Unit tests for individual functions and classes (no network)
- integration/: Live provider tests, skipped without API credentials
"""

__version__ = "0.1.0"
