"""
Google Jobs Adapter (SerpApi).

Queries the Google Jobs engine through SerpApi. Google reports posting age as
a relative phrase ("3 days ago"), which the normalizer resolves to a date.
Titles are scanned for tags together with the description.
"""

import logging
import os
from typing import Any, Optional

import requests
from dotenv import load_dotenv

from ..base import JobPostingRaw, SourceAdapter

load_dotenv()

logger = logging.getLogger(__name__)

API_TIMEOUT_SECONDS = 30
DEFAULT_BASE_URL = "https://serpapi.com"
DEFAULT_QUERY = "disability inclusive"
DEFAULT_LOCATION = "United States"


def _qualifications(payload: dict[str, Any]) -> Optional[str]:
    """Join the "Qualifications" highlight items into one string."""
    for highlight in payload.get("job_highlights") or []:
        if not isinstance(highlight, dict):
            continue
        if str(highlight.get("title", "")).lower() != "qualifications":
            continue
        items = [str(item).strip() for item in highlight.get("items") or [] if str(item).strip()]
        if items:
            return " ".join(items)
    return None


def _apply_link(payload: dict[str, Any]) -> Optional[str]:
    for option in payload.get("apply_options") or []:
        if isinstance(option, dict) and option.get("link"):
            return option["link"]
    return payload.get("share_link")


class GoogleJobsAdapter(SourceAdapter):
    """
    Adapter for Google Jobs results via SerpApi.

    Environment Variables:
        SERPAPI_KEY: Your SerpApi key (adapter is disabled when absent)
        SERPAPI_BASE_URL: Base URL for the API (default: https://serpapi.com)
    """

    credential_env = "SERPAPI_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        source_name: str = "google",
        default_query: str = DEFAULT_QUERY,
        default_location: str = DEFAULT_LOCATION,
        language: str = "en",
    ):
        super().__init__(source_name=source_name, credential=api_key)

        self.base_url = (base_url or os.getenv("SERPAPI_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.default_query = default_query
        self.default_location = default_location
        self.language = language
        self.api_call_count = 0

    def fetch(
        self, query: Optional[str] = None, location: Optional[str] = None
    ) -> list[JobPostingRaw]:
        """
        Fetch one page of Google Jobs results.

        Raises:
            requests.exceptions.RequestException: On network or HTTP errors
            ValueError: If the response body is malformed
        """
        params = {
            "engine": "google_jobs",
            "q": query or self.default_query,
            "location": location or self.default_location,
            "hl": self.language,
            "api_key": self.credential,
        }

        self.api_call_count += 1
        logger.info(
            "Fetching jobs from Google Jobs",
            extra={"source": self.source_name, "query": params["q"], "location": params["location"]},
        )

        response = requests.get(
            f"{self.base_url}/search.json", params=params, timeout=API_TIMEOUT_SECONDS
        )
        if response.status_code >= 400:
            raise requests.exceptions.HTTPError(
                f"API error {response.status_code}: {response.text[:200]}"
            )

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected SerpApi payload type: {type(data).__name__}")
        if data.get("error"):
            # SerpApi reports "no results" as an error string with a 200 status
            logger.warning(
                "SerpApi returned an error message",
                extra={"source": self.source_name, "error": data["error"]},
            )
            return []

        jobs_data = data.get("jobs_results") or []
        if not isinstance(jobs_data, list):
            raise ValueError("SerpApi `jobs_results` field is not a list")

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
        """Map a Google Jobs record to the common format."""
        payload = raw.payload
        extensions = payload.get("detected_extensions") or {}
        if not isinstance(extensions, dict):
            extensions = {}

        work_from_home = bool(extensions.get("work_from_home"))

        return {
            "provider_job_id": payload.get("job_id") or raw.provider_job_id,
            "job_title": payload.get("title"),
            "company": payload.get("company_name"),
            "location": payload.get("location"),
            "job_type": "remote" if work_from_home else extensions.get("schedule_type"),
            "salary_min": None,
            "salary_max": None,
            "salary_text": extensions.get("salary"),
            "description": payload.get("description"),
            "requirements": _qualifications(payload),
            "posted_at": extensions.get("posted_at"),
            "apply_url": _apply_link(payload),
            "remote_flag": work_from_home,
            "tag_text": payload.get("title"),
        }
