"""
Unit tests for JSearch API Adapter.

These tests use mocked API responses to verify adapter behavior
without making real API calls.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from services.source_extractor.adapters.jsearch_adapter import JSearchAdapter
from services.source_extractor.base import JobPostingRaw

pytestmark = pytest.mark.unit

REQUESTS_GET = "services.source_extractor.adapters.jsearch_adapter.requests.get"


def make_response(status_code=200, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = text
    return response


class TestJSearchAdapterInit:
    """Test adapter initialization."""

    def test_init_with_api_key(self):
        """Test initialization with API key parameter."""
        adapter = JSearchAdapter(api_key="test-key")

        assert adapter.source_name == "indeed"
        assert adapter.credential == "test-key"
        assert adapter.is_configured is True
        assert adapter.base_url == "https://jsearch.p.rapidapi.com"
        assert adapter.api_call_count == 0

    def test_init_with_env_var(self, monkeypatch):
        """Test initialization with environment variables."""
        monkeypatch.setenv("RAPIDAPI_KEY", "env-test-key")
        monkeypatch.setenv("JSEARCH_BASE_URL", "https://test.api.com/")

        adapter = JSearchAdapter()

        assert adapter.credential == "env-test-key"
        assert adapter.base_url == "https://test.api.com"

    def test_init_without_api_key_is_unconfigured(self):
        """Without a key the adapter is disabled rather than failing."""
        adapter = JSearchAdapter()

        assert adapter.is_configured is False

    def test_repr(self):
        """Test string representation."""
        adapter = JSearchAdapter(api_key="test-key", source_name="jsearch")

        assert repr(adapter) == "JSearchAdapter(source='jsearch', configured=True, api_calls=0)"


class TestJSearchAdapterFetch:
    """Test fetching from the API."""

    @pytest.fixture
    def adapter(self) -> JSearchAdapter:
        return JSearchAdapter(api_key="test-key")

    @patch(REQUESTS_GET)
    def test_fetch_success(self, mock_get, adapter, sample_jsearch_job):
        """Test a successful single-page fetch."""
        mock_get.return_value = make_response(json_data={"status": "OK", "data": [sample_jsearch_job]})

        jobs = adapter.fetch("support", "Austin, TX")

        assert len(jobs) == 1
        assert isinstance(jobs[0], JobPostingRaw)
        assert jobs[0].source == "indeed"
        assert jobs[0].provider_job_id == "abc123"
        assert adapter.api_call_count == 1

        args, kwargs = mock_get.call_args
        assert args[0] == "https://jsearch.p.rapidapi.com/search"
        assert kwargs["params"] == {"query": "support jobs in Austin, TX", "page": 1, "num_pages": 1}
        assert kwargs["headers"]["X-RapidAPI-Key"] == "test-key"
        assert kwargs["headers"]["X-RapidAPI-Host"] == "jsearch.p.rapidapi.com"
        assert kwargs["timeout"] == 30

    @patch(REQUESTS_GET)
    def test_fetch_uses_defaults(self, mock_get, adapter):
        """Absent query/location fall back to the adapter defaults."""
        mock_get.return_value = make_response(json_data={"data": []})

        adapter.fetch()

        assert mock_get.call_args.kwargs["params"]["query"] == "accessibility jobs in United States"

    @patch(REQUESTS_GET)
    def test_fetch_empty_data(self, mock_get, adapter):
        mock_get.return_value = make_response(json_data={"status": "OK", "data": None})

        assert adapter.fetch("support", None) == []

    @pytest.mark.parametrize("status_code,message", [
        (401, "Invalid API key"),
        (429, "Rate limit exceeded"),
        (500, "API error 500"),
    ])
    @patch(REQUESTS_GET)
    def test_fetch_http_errors(self, mock_get, status_code, message, adapter):
        mock_get.return_value = make_response(status_code=status_code, text="boom")

        with pytest.raises(requests.exceptions.HTTPError, match=message):
            adapter.fetch("support", None)

    @patch(REQUESTS_GET)
    def test_fetch_malformed_payload(self, mock_get, adapter):
        mock_get.return_value = make_response(json_data=["not", "an", "object"])

        with pytest.raises(ValueError):
            adapter.fetch("support", None)

    @patch(REQUESTS_GET)
    def test_fetch_makes_exactly_one_call_on_error(self, mock_get, adapter):
        """No retries: one failed call means one request."""
        mock_get.side_effect = requests.exceptions.ConnectionError("unreachable")

        with pytest.raises(requests.exceptions.ConnectionError):
            adapter.fetch("support", None)

        assert mock_get.call_count == 1


class TestJSearchAdapterMapping:
    """Test mapping JSearch records to the common format."""

    @pytest.fixture
    def adapter(self) -> JSearchAdapter:
        return JSearchAdapter(api_key="test-key")

    def test_map_to_common(self, adapter, sample_jsearch_job):
        raw = JobPostingRaw(source="indeed", payload=sample_jsearch_job, provider_job_id="abc123")

        common = adapter.map_to_common(raw)

        assert common["provider_job_id"] == "abc123"
        assert common["job_title"] == "Customer Support Specialist"
        assert common["company"] == "Acme Corp"
        assert common["location"] == "Austin, TX"
        assert common["job_type"] == "FULLTIME"
        assert common["salary_min"] == 40000
        assert common["salary_max"] == 55000
        assert common["requirements"] == "Communication, Zendesk"
        assert common["posted_at"] == "2024-12-05T14:30:00.000Z"
        assert common["remote_flag"] is False

    def test_remote_flag_overrides_employment_type(self, adapter, sample_jsearch_job):
        sample_jsearch_job["job_is_remote"] = True
        raw = JobPostingRaw(source="indeed", payload=sample_jsearch_job)

        assert adapter.map_to_common(raw)["job_type"] == "remote"

    def test_city_without_state(self, adapter, sample_jsearch_job):
        sample_jsearch_job["job_state"] = None
        raw = JobPostingRaw(source="indeed", payload=sample_jsearch_job)

        assert adapter.map_to_common(raw)["location"] == "Austin"

    def test_normalize_record(self, adapter, sample_jsearch_job, today):
        raw = JobPostingRaw(source="indeed", payload=sample_jsearch_job, provider_job_id="abc123")

        record = adapter.normalize(raw, today=today)

        assert record.id == "ext_indeed_abc123"
        assert record.type_tag == "full-time"
        assert record.compensation_text == "$40,000 - $55,000"
        assert record.posted_at == "2024-12-05"
        assert record.derived_tags == ("Flexible Hours", "Accommodations Available")


class TestJSearchAdapterSearch:
    """Test the non-raising search boundary."""

    @pytest.mark.asyncio
    @patch(REQUESTS_GET)
    async def test_search_http_error_yields_failed_result(self, mock_get):
        mock_get.return_value = make_response(status_code=503, text="unavailable")
        adapter = JSearchAdapter(api_key="test-key")

        result = await adapter.search("support", None)

        assert result.status == "failed"
        assert result.records_or_empty() == []

    @pytest.mark.asyncio
    @patch(REQUESTS_GET)
    async def test_search_without_key_makes_no_request(self, mock_get):
        adapter = JSearchAdapter()

        result = await adapter.search("support", None)

        assert result.status == "unavailable"
        mock_get.assert_not_called()
