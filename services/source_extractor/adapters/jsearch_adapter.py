"""
JSearch API Adapter (RapidAPI).

This adapter queries the JSearch aggregator on RapidAPI, which mirrors
listings from Indeed, LinkedIn and other boards. Records it produces carry
the source name "indeed" by default.
"""

import logging
import os
from typing import Any, Optional

import requests
from dotenv import load_dotenv

from ..base import JobPostingRaw, SourceAdapter

# Load environment variables from .env
load_dotenv()

logger = logging.getLogger(__name__)

# Constants
API_TIMEOUT_SECONDS = 30
DEFAULT_BASE_URL = "https://jsearch.p.rapidapi.com"
DEFAULT_HOST = "jsearch.p.rapidapi.com"
DEFAULT_QUERY = "accessibility"
DEFAULT_LOCATION = "United States"


class JSearchAdapter(SourceAdapter):
    """
    Adapter for the JSearch API on RapidAPI.

    Environment Variables:
        RAPIDAPI_KEY: Your RapidAPI key (adapter is disabled when absent)
        JSEARCH_BASE_URL: Base URL for the API (default: https://jsearch.p.rapidapi.com)
    """

    credential_env = "RAPIDAPI_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        source_name: str = "indeed",
        default_query: str = DEFAULT_QUERY,
        default_location: str = DEFAULT_LOCATION,
        num_pages: int = 1,
    ):
        """
        Initialize the JSearch adapter.

        Args:
            api_key: RapidAPI key (defaults to RAPIDAPI_KEY env var)
            base_url: API base URL (defaults to JSEARCH_BASE_URL env var)
            source_name: Name stamped on produced records (default: "indeed")
            default_query: Query used when the caller gives none
            default_location: Location used when the caller gives none
            num_pages: Number of result pages requested in the single call
        """
        super().__init__(source_name=source_name, credential=api_key)

        self.base_url = (base_url or os.getenv("JSEARCH_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.default_query = default_query
        self.default_location = default_location
        self.num_pages = num_pages
        self.api_call_count = 0

    def _make_api_call(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        Make one API call to JSearch.

        Raises:
            requests.exceptions.RequestException: On network or HTTP errors
            ValueError: If the response body is not a JSON object
        """
        url = f"{self.base_url}/{endpoint}"
        headers = {
            "X-RapidAPI-Key": self.credential or "",
            "X-RapidAPI-Host": DEFAULT_HOST,
        }

        self.api_call_count += 1

        logger.debug(
            "Making JSearch API call",
            extra={"endpoint": endpoint, "params": params, "call_count": self.api_call_count},
        )

        response = requests.get(
            url, headers=headers, params=params, timeout=API_TIMEOUT_SECONDS
        )

        if response.status_code == 401:
            raise requests.exceptions.HTTPError("Invalid API key - check RAPIDAPI_KEY")
        elif response.status_code == 429:
            raise requests.exceptions.HTTPError("Rate limit exceeded - too many API calls")
        elif response.status_code >= 400:
            raise requests.exceptions.HTTPError(
                f"API error {response.status_code}: {response.text[:200]}"
            )

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected JSearch payload type: {type(data).__name__}")

        return data

    def fetch(
        self, query: Optional[str] = None, location: Optional[str] = None
    ) -> list[JobPostingRaw]:
        """
        Fetch one page of job postings from JSearch.

        Args:
            query: Search query (defaults to "accessibility")
            location: Location (defaults to "United States")

        Returns:
            List of JobPostingRaw objects (empty when the API returns no data)
        """
        search_query = query or self.default_query
        search_location = location or self.default_location

        params = {
            "query": f"{search_query} jobs in {search_location}",
            "page": 1,
            "num_pages": self.num_pages,
        }

        logger.info(
            "Fetching jobs from JSearch",
            extra={"source": self.source_name, "query": search_query, "location": search_location},
        )

        response_data = self._make_api_call("search", params)
        jobs_data = response_data.get("data") or []
        if not isinstance(jobs_data, list):
            raise ValueError("JSearch `data` field is not a list")

        return [
            JobPostingRaw(
                source=self.source_name,
                payload=job_data,
                provider_job_id=job_data.get("job_id"),
            )
            for job_data in jobs_data
            if isinstance(job_data, dict)
        ]

    def map_to_common(self, raw: JobPostingRaw) -> dict[str, Any]:
        """
        Map a JSearch record to the common format.

        JSearch fields used: job_id, job_title, employer_name, job_city,
        job_state, job_employment_type, job_is_remote, job_min_salary,
        job_max_salary, job_description, job_required_skills,
        job_posted_at_datetime_utc, job_apply_link.
        """
        payload = raw.payload

        city = payload.get("job_city")
        if city:
            location = f"{city}, {payload.get('job_state') or ''}".strip().rstrip(",")
        else:
            location = payload.get("job_location") or payload.get("location")

        skills = payload.get("job_required_skills")
        requirements = ", ".join(str(skill) for skill in skills) if isinstance(skills, list) and skills else None

        is_remote = bool(payload.get("job_is_remote"))

        return {
            "provider_job_id": payload.get("job_id") or raw.provider_job_id,
            "job_title": payload.get("job_title"),
            "company": payload.get("employer_name"),
            "location": location,
            "job_type": "remote" if is_remote else payload.get("job_employment_type"),
            "salary_min": payload.get("job_min_salary"),
            "salary_max": payload.get("job_max_salary"),
            "salary_text": None,
            "description": payload.get("job_description"),
            "requirements": requirements,
            "posted_at": payload.get("job_posted_at_datetime_utc"),
            "apply_url": payload.get("job_apply_link"),
            "remote_flag": is_remote,
        }

    def __repr__(self) -> str:
        """String representation of the adapter."""
        return (
            f"JSearchAdapter(source='{self.source_name}', "
            f"configured={self.is_configured}, "
            f"api_calls={self.api_call_count})"
        )
