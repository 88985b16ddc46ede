import asyncio
import logging

from playwright.async_api import Error as PlaywrightError

from linkedin_job_scraper import config
from linkedin_job_scraper.errors import ScrapeError
from linkedin_job_scraper.models import ListingRecord, SearchSpec
from linkedin_job_scraper.scrapers.base import BaseScraper
from linkedin_job_scraper.scrapers.browser import BrowserOptions, BrowserSession
from linkedin_job_scraper.scrapers.extractor import DEFAULT_SELECTORS, SelectorTable, extract_listings
from linkedin_job_scraper.scrapers.loader import auto_scroll
from linkedin_job_scraper.url_builder import build_search_url

logger = logging.getLogger(__name__)


class LinkedInScraper(BaseScraper):
    """
    Scrapes job postings from LinkedIn's public job search page.

    Each call to scrape() launches its own headless browser, loads the search
    URL, scrolls the result list until it stops growing, and extracts the
    cards. The browser is closed before scrape() returns or raises, so
    instances hold no state between calls and may be shared by concurrent
    callers.
    """

    SOURCE_NAME = "LinkedIn"

    def __init__(
        self,
        options: BrowserOptions | None = None,
        selectors: SelectorTable = DEFAULT_SELECTORS,
        settle_delay: float | None = None,
        scroll_step: int | None = None,
        scroll_interval: float | None = None,
        max_scroll_steps: int | None = None,
    ):
        self.options = options
        self.selectors = selectors
        self.settle_delay = config.SETTLE_DELAY if settle_delay is None else settle_delay
        self.scroll_step = config.SCROLL_STEP if scroll_step is None else scroll_step
        self.scroll_interval = config.SCROLL_INTERVAL if scroll_interval is None else scroll_interval
        self.max_scroll_steps = config.SCROLL_MAX_STEPS if max_scroll_steps is None else max_scroll_steps

    async def scrape(self, spec: SearchSpec) -> list[ListingRecord]:
        """
        Scrape up to spec.limit listings for the given search.

        Raises:
            ScrapeError: (or a subclass) if launch, navigation, or extraction fails.
        """
        url = build_search_url(spec)
        logger.info(f"Navigating to: {url}")

        try:
            async with BrowserSession(self.options) as session:
                await session.navigate(url)

                # Let first-paint dynamic content mount before scrolling
                await asyncio.sleep(self.settle_delay)

                steps = await auto_scroll(
                    session.page,
                    self.selectors.container_selector,
                    step=self.scroll_step,
                    interval=self.scroll_interval,
                    max_steps=self.max_scroll_steps,
                )
                logger.debug(f"Scrolled results list in {steps} steps")

                jobs = await extract_listings(session.page, spec.limit, self.selectors)
        except PlaywrightError as e:
            raise ScrapeError(f"Browser error while scraping {url}: {e}") from e

        logger.info(f"Scraped {len(jobs)} listings from {self.SOURCE_NAME}")
        return jobs
