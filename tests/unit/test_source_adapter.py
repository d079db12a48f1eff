"""Contract tests for SourceAdapter implementations.

These tests ensure that any implementation of SourceAdapter follows the interface contract.
They can be run against any adapter (MockAdapter, RealAPIAdapter, etc.) to verify compliance.
"""

import pytest

from services.common.models import JOB_TYPES, CanonicalRecord
from services.source_extractor import AdapterResult, JobPostingRaw, SourceAdapter
from services.source_extractor.adapters.mock_adapter import MockAdapter

pytestmark = pytest.mark.unit


class TestSourceAdapterContract:
    """Contract tests that all SourceAdapter implementations must pass."""

    @pytest.fixture
    def adapter(self) -> SourceAdapter:
        """Provide an adapter instance for testing.

        This fixture returns a MockAdapter by default, but can be overridden
        to test other adapter implementations.
        """
        return MockAdapter(num_jobs=5)

    def test_adapter_has_source_name(self, adapter: SourceAdapter):
        """Adapter must have a source_name attribute."""
        assert isinstance(adapter.source_name, str)
        assert len(adapter.source_name) > 0

    def test_fetch_returns_raw_postings(self, adapter: SourceAdapter):
        """fetch() must return a list of JobPostingRaw."""
        jobs = adapter.fetch("support", "Remote")

        assert isinstance(jobs, list)
        assert len(jobs) == 5
        for job in jobs:
            assert isinstance(job, JobPostingRaw)
            assert job.source == adapter.source_name
            assert isinstance(job.payload, dict)

    def test_map_to_common_returns_dict(self, adapter: SourceAdapter):
        """map_to_common() must return the common-format dictionary."""
        raw = adapter.fetch()[0]
        common = adapter.map_to_common(raw)

        assert isinstance(common, dict)
        assert common["job_title"]
        assert common["company"]

    def test_collect_returns_canonical_records(self, adapter: SourceAdapter):
        """collect() must return normalized records stamped with the source name."""
        records = adapter.collect()

        assert len(records) == 5
        for record in records:
            assert isinstance(record, CanonicalRecord)
            assert record.source_name == adapter.source_name
            assert record.id.startswith(f"ext_{adapter.source_name}_")
            assert record.type_tag in JOB_TYPES

    def test_cannot_instantiate_abstract_base(self):
        """SourceAdapter itself cannot be instantiated."""
        with pytest.raises(TypeError):
            SourceAdapter(source_name="abstract")  # type: ignore[abstract]


class TestAdapterResult:
    """Tests for the adapter boundary result type."""

    def test_ok_result_exposes_records(self):
        records = MockAdapter(num_jobs=2).collect()
        result = AdapterResult.ok("mock", records, latency_ms=12)

        assert result.status == "ok"
        assert result.records_or_empty() == records
        assert result.latency_ms == 12

    def test_unavailable_result_is_empty(self):
        result = AdapterResult.unavailable("indeed")

        assert result.status == "unavailable"
        assert result.records_or_empty() == []
        assert result.reason == "missing credential"

    def test_failed_result_is_empty(self):
        result = AdapterResult.failed("google", "HTTPError: 500")

        assert result.status == "failed"
        assert result.records_or_empty() == []


class TestSearchBoundary:
    """search() never raises and reports what happened."""

    @pytest.mark.asyncio
    async def test_search_ok(self):
        adapter = MockAdapter(num_jobs=3, source_name="mock")
        result = await adapter.search("tester", "Remote")

        assert result.status == "ok"
        assert result.source == "mock"
        assert len(result.records) == 3
        assert result.latency_ms is not None
        assert adapter.calls == [("tester", "Remote")]

    @pytest.mark.asyncio
    async def test_search_unconfigured_makes_no_call(self):
        adapter = MockAdapter(configured=False)
        result = await adapter.search("tester", None)

        assert result.status == "unavailable"
        assert result.records_or_empty() == []
        assert adapter.call_count == 0

    @pytest.mark.asyncio
    async def test_search_failure_is_contained(self):
        adapter = MockAdapter(fail_with=ConnectionError("provider down"))
        result = await adapter.search("tester", None)

        assert result.status == "failed"
        assert "ConnectionError" in result.reason
        assert "provider down" in result.reason
        assert result.records_or_empty() == []
        assert adapter.call_count == 1

    @pytest.mark.asyncio
    async def test_search_skips_only_the_record_that_fails(self, monkeypatch):
        adapter = MockAdapter(
            payloads=[{"id": "g1", "title": "QA Tester"}, {"id": "b1", "title": "Broken"}],
            source_name="indeed",
        )
        original_map = adapter.map_to_common

        def map_or_fail(raw):
            if raw.provider_job_id == "b1":
                raise KeyError("job_title")
            return original_map(raw)

        monkeypatch.setattr(adapter, "map_to_common", map_or_fail)
        result = await adapter.search()

        assert result.status == "ok"
        assert [r.id for r in result.records] == ["ext_indeed_g1"]

    @pytest.mark.asyncio
    async def test_search_keeps_batch_with_out_of_range_posted_date(self):
        adapter = MockAdapter(
            payloads=[
                {"id": "g1", "title": "QA Tester", "posted_at": "2024-12-05"},
                {"id": "b1", "title": "Data Entry", "posted_at": "99999999 days ago"},
            ],
            source_name="indeed",
        )

        result = await adapter.search()

        assert result.status == "ok"
        assert [r.id for r in result.records] == ["ext_indeed_g1", "ext_indeed_b1"]


class TestMockAdapter:
    """Tests specific to MockAdapter behaviour."""

    def test_explicit_payloads(self):
        adapter = MockAdapter(payloads=[{"id": "a1", "title": "QA Tester", "remote": True}])
        records = adapter.collect()

        assert len(records) == 1
        assert records[0].id == "ext_mock_a1"
        assert records[0].type_tag == "full-time"
        assert "Remote Work" in records[0].derived_tags

    def test_filter_by_query(self):
        adapter = MockAdapter(
            payloads=[
                {"id": "1", "title": "Data Entry Clerk"},
                {"id": "2", "title": "Content Writer"},
            ],
            filter_by_query=True,
        )
        jobs = adapter.fetch("data entry")

        assert [job.provider_job_id for job in jobs] == ["1"]

    def test_generated_jobs_have_relative_dates(self, today):
        adapter = MockAdapter(num_jobs=2)
        raw = adapter.fetch()[1]
        record = adapter.normalize(raw, today=today)

        assert record.posted_at == "2024-12-08"

    def test_repr(self):
        assert repr(MockAdapter(source_name="demo")) == "MockAdapter(source='demo', configured=True)"


class KeyedAdapter(SourceAdapter):
    """Minimal adapter that requires a credential from DEMO_PROVIDER_KEY."""

    credential_env = "DEMO_PROVIDER_KEY"

    def fetch(self, query=None, location=None):
        return []

    def map_to_common(self, raw):
        return {}


class OpenAdapter(KeyedAdapter):
    """Same adapter without a credential requirement."""

    credential_env = None


class TestCredentialContract:
    """How credential_env drives is_configured."""

    def test_missing_credential_is_unconfigured(self, monkeypatch):
        monkeypatch.delenv("DEMO_PROVIDER_KEY", raising=False)

        assert KeyedAdapter(source_name="demo").is_configured is False

    def test_credential_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEMO_PROVIDER_KEY", "secret")
        adapter = KeyedAdapter(source_name="demo")

        assert adapter.credential == "secret"
        assert adapter.is_configured is True

    def test_explicit_credential_wins(self, monkeypatch):
        monkeypatch.setenv("DEMO_PROVIDER_KEY", "from-env")

        assert KeyedAdapter(source_name="demo", credential="explicit").credential == "explicit"

    def test_no_credential_required(self):
        adapter = OpenAdapter(source_name="open")

        assert adapter.credential is None
        assert adapter.is_configured is True
