import logging

from linkedin_job_scraper.filters import filter_results
from linkedin_job_scraper.models import SearchResult
from linkedin_job_scraper.query import normalize_query
from linkedin_job_scraper.scrapers.base import BaseScraper
from linkedin_job_scraper.scrapers.linkedin_scraper import LinkedInScraper

logger = logging.getLogger(__name__)


async def search_jobs(
    job_title: str | None,
    location: str | None = None,
    limit: str | int | None = None,
    skills: str | None = None,
    date_range: str | int | None = None,
    experience: str | None = None,
    *,
    scraper: BaseScraper | None = None,
) -> SearchResult:
    """
    Run one normalize-scrape-filter cycle for raw query parameters.

    Input is validated before any browser is launched. Every invocation owns
    its own browser process; callers running many searches at once are
    responsible for bounding how many run concurrently.

    Raises:
        ValidationError: if the job title is missing.
        ScrapeError: if launching, navigating, or extracting fails.
    """
    spec = normalize_query(
        job_title,
        location=location,
        limit=limit,
        skills=skills,
        date_range=date_range,
        experience=experience,
    )

    scraper = scraper or LinkedInScraper()
    candidates = await scraper.scrape(spec)

    jobs = filter_results(candidates, spec.skills, spec.limit)
    if spec.skills:
        logger.info(
            f"{len(jobs)} of {len(candidates)} listings match skills: {', '.join(sorted(spec.skills))}"
        )
    return SearchResult.from_records(jobs)
