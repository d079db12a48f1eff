"""
Pytest configuration and shared fixtures

This file contains test fixtures that can be used across all tests.
Fixtures are reusable components that set up test preconditions.

Learn more: https://docs.pytest.org/en/stable/fixture.html
"""

from datetime import date

import pytest

# Reference date used by every test that resolves relative posting dates
FROZEN_TODAY = date(2024, 12, 10)


@pytest.fixture(scope="session")
def today() -> date:
    """
    Provide the frozen reference date for relative date parsing.

    Scope: session (created once per test run)
    """
    return FROZEN_TODAY


@pytest.fixture(autouse=True)
def no_provider_credentials(request, monkeypatch):
    """
    Remove provider credentials from the environment for non-integration tests.

    Adapters read their keys from the environment (and a local .env), so unit
    tests start from an unconfigured state and opt in explicitly.
    """
    if request.node.get_closest_marker("integration"):
        return

    for name in ("RAPIDAPI_KEY", "SERPAPI_KEY", "JSEARCH_BASE_URL", "SERPAPI_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="function")
def sample_jsearch_job() -> dict:
    """
    Provide one JSearch API record.

    Scope: function (created fresh for each test)

    Returns:
        dict: Sample JSearch job record
    """
    return {
        "job_id": "abc123",
        "employer_name": "Acme Corp",
        "job_title": "Customer Support Specialist",
        "job_employment_type": "FULLTIME",
        "job_is_remote": False,
        "job_city": "Austin",
        "job_state": "TX",
        "job_country": "US",
        "job_min_salary": 40000,
        "job_max_salary": 55000,
        "job_description": (
            "Help our customers every day. We offer flexible hours and "
            "workplace accommodations on request."
        ),
        "job_required_skills": ["Communication", "Zendesk"],
        "job_posted_at_datetime_utc": "2024-12-05T14:30:00.000Z",
        "job_apply_link": "https://example.com/apply/abc123",
    }


@pytest.fixture(scope="function")
def sample_google_job() -> dict:
    """
    Provide one SerpApi Google Jobs record.

    Scope: function (created fresh for each test)

    Returns:
        dict: Sample Google Jobs record
    """
    return {
        "job_id": "eyJqb2JfdGl0bGUiOiJEYXRhIEVudHJ5In0=",
        "title": "Data Entry Clerk - Remote",
        "company_name": "Globex Inc",
        "location": "Anywhere",
        "description": "Enter data from home. Our team is disability inclusive.",
        "detected_extensions": {
            "posted_at": "3 days ago",
            "schedule_type": "Part-time",
            "work_from_home": True,
            "salary": "18–22 an hour",
        },
        "job_highlights": [
            {"title": "Qualifications", "items": ["Typing speed 50 wpm", "Attention to detail"]},
            {"title": "Benefits", "items": ["Health insurance"]},
        ],
        "apply_options": [
            {"title": "Globex Careers", "link": "https://globex.example.com/jobs/1"},
        ],
        "share_link": "https://www.google.com/search?ibp=htl;jobs",
    }


# Mark tests based on their type for selective running
def pytest_configure(config):
    """
    Register custom pytest markers.

    This allows us to run specific test categories:
    - pytest -m unit        (run only unit tests)
    - pytest -m integration (run only integration tests)
    - pytest -m "not slow"  (skip slow tests)
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (isolated, fast)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires provider credentials)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (>1 second)"
    )
