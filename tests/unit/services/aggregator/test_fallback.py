"""Unit tests for the static fallback listings."""

import pytest

from services.aggregator.fallback import FALLBACK_SOURCE, SEED_RECORDS, get_fallback_records
from services.common.models import JOB_TYPES

pytestmark = pytest.mark.unit


def test_seed_records_are_well_formed():
    assert len(SEED_RECORDS) == 8
    ids = [record.id for record in SEED_RECORDS]
    assert len(set(ids)) == len(ids)
    for record in SEED_RECORDS:
        assert record.id.startswith(f"ext_{FALLBACK_SOURCE}_")
        assert record.source_name == FALLBACK_SOURCE
        assert record.type_tag in JOB_TYPES


def test_no_query_returns_everything():
    assert get_fallback_records() == list(SEED_RECORDS)


def test_query_matches_title_company_or_description():
    assert [r.organization for r in get_fallback_records("data entry")] == ["Automattic"]
    assert [r.organization for r in get_fallback_records("MOZILLA")] == ["Mozilla"]


def test_location_remote_matches_remote_type():
    results = get_fallback_records(location="remote")

    assert results
    assert all(r.type_tag == "remote" or "remote" in r.location_text.lower() for r in results)
    # Belay is part-time but located "Remote"
    assert "Belay Solutions" in [r.organization for r in results]


def test_location_substring():
    assert [r.organization for r in get_fallback_records(location="Redmond")] == ["Microsoft"]


def test_no_match():
    assert get_fallback_records("astronaut", "Mars") == []
