from unittest.mock import AsyncMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from linkedin_job_scraper.errors import ExtractionError, NavigationError, ScrapeError
from linkedin_job_scraper.models import SearchSpec
from linkedin_job_scraper.scrapers.browser import BrowserOptions
from linkedin_job_scraper.scrapers.linkedin_scraper import LinkedInScraper

from conftest import make_raw_item

BROWSER_MODULE = "linkedin_job_scraper.scrapers.browser"


@pytest.fixture
def scraper():
    return LinkedInScraper(
        options=BrowserOptions(executable_path=None),
        settle_delay=3,
        scroll_step=200,
        scroll_interval=0,
        max_scroll_steps=50,
    )


@pytest.fixture
def patched_playwright(playwright_mocks):
    with (
        patch(f"{BROWSER_MODULE}.Stealth", playwright_mocks["stealth_cls"]),
        patch(f"{BROWSER_MODULE}.async_playwright"),
        # asyncio.sleep is shared by the settle delay and the scroll loop
        patch("linkedin_job_scraper.scrapers.linkedin_scraper.asyncio.sleep", new_callable=AsyncMock) as sleep,
    ):
        playwright_mocks["sleep"] = sleep
        yield playwright_mocks


@pytest.mark.asyncio
async def test_scrape_success(scraper, patched_playwright):
    """Test navigate -> settle -> scroll -> extract, then teardown."""
    page = patched_playwright["page"]
    raw_items = [make_raw_item(i) for i in range(1, 4)]
    # Scroll steps report extents until settled, then the extraction payload
    page.evaluate.side_effect = [400, 400, raw_items]

    spec = SearchSpec(job_title="Backend Engineer", limit=5)
    jobs = await scraper.scrape(spec)

    assert [j.id for j in jobs] == ["1", "2", "3"]
    page.goto.assert_awaited_once()
    assert page.goto.await_args.args[0] == (
        "https://www.linkedin.com/jobs/search?keywords=Backend%20Engineer&f_TPR=r86400"
    )
    patched_playwright["sleep"].assert_any_await(3)

    # Extraction receives the search limit
    _script, payload = page.evaluate.await_args_list[-1].args
    assert payload["limit"] == 5

    patched_playwright["browser"].close.assert_awaited_once()


@pytest.mark.asyncio
async def test_scrape_extraction_failure_releases_browser_once(scraper, patched_playwright):
    """Test that a failure after a successful launch still closes the browser exactly once."""
    page = patched_playwright["page"]
    page.evaluate.side_effect = [0, PlaywrightError("Execution context was destroyed")]

    with pytest.raises(ExtractionError):
        await scraper.scrape(SearchSpec(job_title="QA"))

    patched_playwright["browser"].close.assert_awaited_once()
    patched_playwright["context"].close.assert_awaited_once()


@pytest.mark.asyncio
async def test_scrape_navigation_failure_skips_extraction(scraper, patched_playwright):
    page = patched_playwright["page"]
    page.goto.side_effect = PlaywrightError("net::ERR_CONNECTION_RESET")

    with pytest.raises(NavigationError):
        await scraper.scrape(SearchSpec(job_title="QA"))

    page.evaluate.assert_not_awaited()
    patched_playwright["browser"].close.assert_awaited_once()


@pytest.mark.asyncio
async def test_scrape_wraps_stray_browser_errors(scraper, patched_playwright):
    """Test that Playwright errors outside the known steps surface as ScrapeError."""
    patched_playwright["context"].close.side_effect = PlaywrightError("Target closed")
    patched_playwright["page"].evaluate.side_effect = [0, [make_raw_item(1)]]

    with pytest.raises(ScrapeError, match="Target closed"):
        await scraper.scrape(SearchSpec(job_title="QA"))

    patched_playwright["browser"].close.assert_awaited_once()


def test_scraper_reads_timing_from_config(monkeypatch):
    monkeypatch.setattr("linkedin_job_scraper.config._cfg._config", None)
    monkeypatch.setenv("SETTLE_DELAY", "1500")
    monkeypatch.setenv("SCROLL_STEP", "300")
    monkeypatch.setenv("SCROLL_INTERVAL", "100")
    monkeypatch.setenv("SCROLL_MAX_STEPS", "40")

    scraper = LinkedInScraper()

    assert scraper.settle_delay == 1.5
    assert scraper.scroll_step == 300
    assert scraper.scroll_interval == 0.1
    assert scraper.max_scroll_steps == 40
