import logging
import re

from pydantic import ValidationError as PydanticValidationError

from linkedin_job_scraper.errors import ValidationError
from linkedin_job_scraper.models import DEFAULT_LIMIT, DEFAULT_RECENCY_SECONDS, SearchSpec

logger = logging.getLogger(__name__)

DAY_SECONDS = 86400

# Named and shorthand recency tokens -> number of days
RECENCY_TOKENS: dict[str, int] = {
    "day": 1,
    "1": 1,
    "3": 3,
    "week": 7,
    "7": 7,
    "month": 30,
    "30": 30,
}

EXPERIENCE_CODES: dict[str, str] = {
    "internship": "1",
    "entry_level": "2",
    "associate": "3",
    "mid_senior_level": "4",
    "director": "5",
    "executive": "6",
}

# Mirrors parseInt(): optional leading whitespace and sign, then digits
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_SEPARATORS = re.compile(r"[-\s]+")


def _leading_int(raw: str) -> int | None:
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def parse_limit(raw: str | int | None) -> int:
    """Parse the requested result count, falling back to the default for bad input."""
    if raw is None:
        return DEFAULT_LIMIT
    value = _leading_int(str(raw))
    if value is None or value < 1:
        return DEFAULT_LIMIT
    return value


def parse_skills(raw: str | None) -> frozenset[str]:
    """Split a comma-separated skill list. Case is left for the result filter."""
    if not raw:
        return frozenset()
    return frozenset(token.strip() for token in raw.split(",") if token.strip())


def parse_recency(raw: str | int | None) -> int:
    """
    Map a date-range token to a recency window in seconds.

    "day"/"1", "3", "week"/"7" and "month"/"30" are named windows; any other
    positive number is read as a count of days. Zero, negative numbers and
    anything unparseable mean one day.
    """
    if raw is None or raw == "":
        return DEFAULT_RECENCY_SECONDS

    token = str(raw).lower()
    if token in RECENCY_TOKENS:
        return RECENCY_TOKENS[token] * DAY_SECONDS

    days = _leading_int(token)
    if days is None or days < 1:
        return DEFAULT_RECENCY_SECONDS
    return days * DAY_SECONDS


def parse_experience(raw: str | None) -> str | None:
    """
    Map an experience-level token (e.g. "Mid-Senior Level") to the site's code.
    Unknown levels are logged and dropped; they never fail the request.
    """
    if not raw:
        return None

    key = _SEPARATORS.sub("_", str(raw).strip().lower())
    code = EXPERIENCE_CODES.get(key)
    if code is None:
        logger.warning(f"Unsupported experience level: {raw}")
    return code


def normalize_query(
    job_title: str | None,
    location: str | None = None,
    limit: str | int | None = None,
    skills: str | None = None,
    date_range: str | int | None = None,
    experience: str | None = None,
) -> SearchSpec:
    """
    Validate and canonicalize raw query parameters into a SearchSpec.

    Raises:
        ValidationError: if the job title is missing or blank.
    """
    title = (job_title or "").strip()
    if not title:
        raise ValidationError("Job title is required")

    try:
        return SearchSpec(
            job_title=title,
            location=(location or "").strip() or None,
            limit=parse_limit(limit),
            skills=parse_skills(skills),
            recency_window_seconds=parse_recency(date_range),
            experience_code=parse_experience(experience),
        )
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e
