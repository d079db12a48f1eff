"""Mock Adapter for Testing.

This adapter simulates an external job search provider. It doesn't make real
HTTP requests, but follows the same fetch / map_to_common contract, so it can
stand in for a provider in tests and in offline demo configurations.
"""

from typing import Any, Optional

from ..base import JobPostingRaw, SourceAdapter


class MockAdapter(SourceAdapter):
    """Mock adapter that returns fake job postings.

    This adapter is useful for:
    - Unit testing the aggregator without hitting real APIs
    - Demonstrating how to implement SourceAdapter
    - Simulating provider failures and missing credentials

    Example:
        adapter = MockAdapter(num_jobs=3)
        jobs = adapter.fetch()
        assert len(jobs) == 3

        failing = MockAdapter(fail_with=ConnectionError("down"))
        result = await failing.search()
        assert result.status == "failed"
    """

    def __init__(
        self,
        payloads: Optional[list[dict[str, Any]]] = None,
        num_jobs: int = 5,
        source_name: str = "mock",
        configured: bool = True,
        fail_with: Optional[Exception] = None,
        filter_by_query: bool = False,
    ):
        """Initialize the mock adapter.

        Args:
            payloads: Explicit raw records to return (overrides num_jobs)
            num_jobs: Number of generated fake jobs when no payloads are given
            source_name: Name stamped on produced records
            configured: False simulates a provider with no credential
            fail_with: Exception raised by fetch() to simulate an outage
            filter_by_query: Only return payloads whose title/description
                contain the query (case-insensitive)
        """
        self._configured = configured
        super().__init__(source_name=source_name)
        self.payloads = payloads
        self.num_jobs = num_jobs
        self.fail_with = fail_with
        self.filter_by_query = filter_by_query
        self.call_count = 0
        self.calls: list[tuple[Optional[str], Optional[str]]] = []

    @property
    def is_configured(self) -> bool:
        return self._configured

    def fetch(
        self, query: Optional[str] = None, location: Optional[str] = None
    ) -> list[JobPostingRaw]:
        """Return fake job postings, or raise `fail_with` when set."""
        self.call_count += 1
        self.calls.append((query, location))

        if self.fail_with is not None:
            raise self.fail_with

        if self.payloads is not None:
            records = list(self.payloads)
        else:
            records = [self._generate_fake_job(i) for i in range(self.num_jobs)]

        if self.filter_by_query and query:
            needle = query.lower()
            records = [
                r
                for r in records
                if needle in str(r.get("title", "")).lower()
                or needle in str(r.get("description", "")).lower()
            ]

        return [
            JobPostingRaw(
                source=self.source_name,
                payload=record,
                provider_job_id=record.get("id"),
            )
            for record in records
        ]

    def map_to_common(self, raw: JobPostingRaw) -> dict[str, Any]:
        """Map mock job data to the common format."""
        payload = raw.payload

        return {
            "provider_job_id": raw.provider_job_id,
            "job_title": payload.get("title"),
            "company": payload.get("company"),
            "location": payload.get("location"),
            "job_type": payload.get("type"),
            "salary_min": payload.get("salary_min"),
            "salary_max": payload.get("salary_max"),
            "salary_text": payload.get("salary"),
            "description": payload.get("description"),
            "requirements": payload.get("requirements"),
            "posted_at": payload.get("posted_at"),
            "apply_url": payload.get("apply_url"),
            "remote_flag": payload.get("remote", False),
        }

    def _generate_fake_job(self, index: int) -> dict[str, Any]:
        """Generate a fake job posting.

        Args:
            index: Job index for unique data

        Returns:
            Dictionary with fake job data
        """
        job_titles = [
            "Accessibility Tester",
            "Customer Support Specialist",
            "Content Writer",
            "Data Entry Clerk",
            "Junior Web Developer",
        ]

        companies = [
            "Acme Corp",
            "Globex Inc",
            "Initech LLC",
            "Umbrella Corporation",
        ]

        locations = [
            "Remote",
            "Austin, TX",
            "Chicago, IL",
            "Denver, CO",
        ]

        perks = [
            "This is a remote position with flexible hours.",
            "We provide workplace accommodations on request.",
            "Our inclusive team welcomes applicants with a disability.",
            "Part-time schedule with a quiet, private office.",
        ]

        title = job_titles[index % len(job_titles)]
        company = companies[index % len(companies)]

        return {
            "id": f"mock_{index}",
            "title": title,
            "company": company,
            "location": locations[index % len(locations)],
            "salary_min": 40000 + (index * 1000 % 20000),
            "salary_max": 60000 + (index * 1000 % 20000),
            "description": f"{company} is hiring a {title}. {perks[index % len(perks)]}",
            "requirements": "Strong communication skills.",
            "posted_at": f"{index + 1} days ago",
            "apply_url": f"https://example.com/apply/{index}",
        }
