from abc import ABC, abstractmethod

from linkedin_job_scraper.models import ListingRecord, SearchSpec


class BaseScraper(ABC):
    """
    Abstract base class for job-board scrapers.
    """

    @abstractmethod
    async def scrape(self, spec: SearchSpec) -> list[ListingRecord]:
        """
        Scrape listings matching the search spec, in the site's order,
        returning at most spec.limit records.
        """
        pass
