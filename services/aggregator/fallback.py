"""
Static fallback listings.

When every provider returns nothing (no credentials configured, or all of
them failed) the aggregator serves this seed list instead, filtered by the
same query/location predicate, so the job board is never empty in
development or demos.
"""

from typing import Optional

from services.common.models import CanonicalRecord
from services.normalizer.normalize import build_record_id

FALLBACK_SOURCE = "internal"


def _seed(
    provider_id: str,
    title: str,
    organization: str,
    location_text: str,
    type_tag: str,
    compensation_text: str,
    description: str,
    requirements_text: str,
    accommodations: str,
    posted_at: str,
    derived_tags: tuple[str, ...],
    apply_url: str,
) -> CanonicalRecord:
    return CanonicalRecord(
        id=build_record_id(FALLBACK_SOURCE, provider_id),
        title=title,
        organization=organization,
        location_text=location_text,
        description=description,
        requirements_text=requirements_text,
        type_tag=type_tag,
        posted_at=posted_at,
        source_name=FALLBACK_SOURCE,
        compensation_text=compensation_text,
        derived_tags=derived_tags,
        source_id=provider_id,
        apply_url=apply_url,
        accommodations=accommodations,
    )


SEED_RECORDS: tuple[CanonicalRecord, ...] = (
    _seed(
        "google_acc_123",
        "Accessibility Specialist",
        "Google",
        "Mountain View, CA",
        "full-time",
        "$120,000 - $160,000",
        "Join Google's Accessibility team to help make products usable by everyone. "
        "We're looking for someone passionate about inclusive design and assistive "
        "technologies. You'll work on Chrome, Android, and other Google products to "
        "ensure they meet WCAG standards and provide great experiences for users with "
        "disabilities.",
        "5+ years experience in accessibility. Knowledge of WCAG, ARIA, screen readers. "
        "Experience with assistive technologies.",
        "Comprehensive disability accommodations, flexible work arrangements, "
        "on-site accessibility features",
        "2024-12-05",
        ("Remote Work", "Flexible Hours", "Accommodations Available", "Disability Inclusive"),
        "https://careers.google.com",
    ),
    _seed(
        "zapier_support_456",
        "Remote Customer Support Representative",
        "Zapier",
        "Remote",
        "remote",
        "$55,000 - $75,000",
        "Provide exceptional support to Zapier customers from anywhere in the world. "
        "We're a fully remote company that values work-life balance and diverse "
        "perspectives. Help customers automate their work and solve technical challenges.",
        "Strong written communication. Problem-solving skills. Tech-savvy. "
        "Experience with SaaS products preferred.",
        "100% remote work, flexible schedules, mental health support, "
        "ergonomic equipment stipend",
        "2024-12-06",
        ("Remote Work", "Flexible Hours", "Mental Health Support"),
        "https://zapier.com/jobs",
    ),
    _seed(
        "msft_dev_789",
        "Junior Software Developer",
        "Microsoft",
        "Redmond, WA",
        "hybrid",
        "$85,000 - $110,000",
        "Start your career at Microsoft working on products that reach billions of users. "
        "Our inclusive culture welcomes developers from all backgrounds. You'll learn from "
        "experienced engineers and contribute to real products.",
        "CS degree or equivalent experience. Knowledge of one programming language. "
        "Eagerness to learn.",
        "Hybrid work options, comprehensive benefits, disability accommodations, "
        "mentorship programs",
        "2024-12-07",
        ("Hybrid Work", "Accommodations Available", "Mentorship Programs"),
        "https://careers.microsoft.com",
    ),
    _seed(
        "buffer_writer_012",
        "Content Writer",
        "Buffer",
        "Remote",
        "remote",
        "$60,000 - $80,000",
        "Create engaging content for Buffer's blog, social media, and marketing materials. "
        "We're a fully distributed team that prioritizes transparent communication and "
        "diverse voices. Share your unique perspective through content.",
        "Excellent writing skills. Social media experience. SEO knowledge. "
        "Portfolio of published work.",
        "Fully remote, flexible hours, wellness benefits, professional development budget",
        "2024-12-04",
        ("Remote Work", "Flexible Hours", "Wellness Benefits"),
        "https://buffer.com/journey",
    ),
    _seed(
        "auto_data_345",
        "Data Entry Specialist",
        "Automattic",
        "Remote",
        "remote",
        "$45,000 - $60,000",
        "Help maintain and organize data for WordPress.com and other Automattic products. "
        "Work from anywhere in the world with a flexible schedule. Attention to detail and "
        "accuracy are key.",
        "Strong attention to detail. Proficiency in spreadsheets. Good typing speed. "
        "Organizational skills.",
        "Fully distributed company, set your own hours, home office equipment provided",
        "2024-12-03",
        ("Remote Work", "Flexible Hours", "Equipment Provided"),
        "https://automattic.com/work-with-us",
    ),
    _seed(
        "sf_hr_678",
        "HR Coordinator",
        "Salesforce",
        "San Francisco, CA",
        "hybrid",
        "$65,000 - $85,000",
        "Support Salesforce's HR team in creating an inclusive workplace. Coordinate "
        "onboarding, manage employee programs, and help maintain our culture of equality. "
        "We believe business is a platform for change.",
        "HR experience or degree. Strong organizational skills. Excellent communication. "
        "HRIS experience preferred.",
        "Hybrid work, comprehensive benefits, employee resource groups, "
        "accessibility accommodations",
        "2024-12-02",
        ("Hybrid Work", "Employee Resource Groups", "Accommodations Available"),
        "https://salesforce.com/careers",
    ),
    _seed(
        "moz_qa_901",
        "QA Tester",
        "Mozilla",
        "Remote",
        "remote",
        "$70,000 - $90,000",
        "Test Firefox and other Mozilla products to ensure quality and accessibility. "
        "Help us build an internet that's open and accessible to all. Work with a "
        "mission-driven team that values privacy and inclusion.",
        "Testing experience. Familiarity with bug tracking systems. Attention to detail. "
        "Passion for web standards.",
        "Remote-first, flexible schedule, mission-driven work, inclusive culture",
        "2024-12-01",
        ("Remote Work", "Flexible Hours", "Mission-Driven"),
        "https://careers.mozilla.org",
    ),
    _seed(
        "belay_va_234",
        "Virtual Assistant",
        "Belay Solutions",
        "Remote",
        "part-time",
        "$20 - $30/hour",
        "Provide virtual administrative support to busy professionals. Work from home with "
        "flexible hours. Great opportunity for those seeking part-time remote work with "
        "schedule flexibility.",
        "Administrative experience. Strong organization. Proficient in Google Workspace or "
        "Microsoft Office. Reliable internet.",
        "100% remote, flexible part-time hours, choose your clients, work-life balance focus",
        "2024-12-08",
        ("Remote Work", "Part-Time", "Flexible Schedule"),
        "https://belaysolutions.com/careers",
    ),
)


def get_fallback_records(
    query: Optional[str] = None, location: Optional[str] = None
) -> list[CanonicalRecord]:
    """
    Return the seed records matching the query/location predicate.

    - query: substring of title, organization or description
    - location: substring of the location text; "remote" also matches
      records whose type_tag is remote
    Absent query/location match everything.
    """
    search = (query or "").strip().lower()
    place = (location or "").strip().lower()

    def _matches(record: CanonicalRecord) -> bool:
        matches_search = (
            not search
            or search in record.title.lower()
            or search in record.organization.lower()
            or search in record.description.lower()
        )
        matches_location = (
            not place
            or (place == "remote" and record.type_tag == "remote")
            or place in record.location_text.lower()
        )
        return matches_search and matches_location

    return [record for record in SEED_RECORDS if _matches(record)]
