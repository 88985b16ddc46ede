from urllib.parse import quote

from linkedin_job_scraper.models import SearchSpec

SEARCH_URL = "https://www.linkedin.com/jobs/search"

# Characters encodeURIComponent leaves untouched (besides alphanumerics)
_UNRESERVED = "-_.!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a query value the way browsers' encodeURIComponent does."""
    return quote(value, safe=_UNRESERVED)


def build_search_url(spec: SearchSpec) -> str:
    """
    Build the job search URL for a SearchSpec.

    The output depends only on the SearchSpec's fields, so equal searches
    always produce byte-identical URLs. Skills and limit are applied after
    extraction and never appear in the URL.
    """
    url = f"{SEARCH_URL}?keywords={encode_component(spec.job_title)}"
    if spec.location:
        url += f"&location={encode_component(spec.location)}"
    url += f"&f_TPR=r{spec.recency_window_seconds}"
    if spec.experience_code:
        url += f"&f_E={spec.experience_code}"
    return url
