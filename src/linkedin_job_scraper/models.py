from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator

DEFAULT_LIMIT = 10
DEFAULT_RECENCY_SECONDS = 86400
UNKNOWN_LOCATION = "Unknown Location"

_HTTP_URL = TypeAdapter(HttpUrl)


class SearchSpec(BaseModel):
    """
    Normalized search request, built by the query normalizer.
    Lives for a single pipeline invocation.
    """

    model_config = ConfigDict(frozen=True)

    job_title: str = Field(min_length=1)
    location: str | None = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    skills: frozenset[str] = frozenset()
    recency_window_seconds: int = DEFAULT_RECENCY_SECONDS
    experience_code: str | None = None


class ListingRecord(BaseModel):
    """
    A single job posting extracted from the search results page.
    Title, company and link are always present; location falls back to a sentinel.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = UNKNOWN_LOCATION
    link: str
    date_posted: str = Field(default="", alias="datePosted")

    @field_validator("link")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        # Keep the raw string; ids are derived from it
        _HTTP_URL.validate_python(value)
        return value


class SearchResult(BaseModel):
    """Success payload returned to callers: the filtered, ordered listings."""

    count: int
    jobs: list[ListingRecord]

    @classmethod
    def from_records(cls, records: list[ListingRecord]) -> "SearchResult":
        return cls(count=len(records), jobs=list(records))
