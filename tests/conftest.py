import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set environment variables for tests before any imports happen
os.environ["CORS_ORIGIN"] = "http://localhost:3000"
os.environ["MAX_CONCURRENT_SEARCHES"] = "2"
os.environ.pop("CHROME_PATH", None)

from linkedin_job_scraper.models import ListingRecord  # noqa: E402


def make_raw_item(
    job_id: int,
    title: str = "Backend Engineer",
    company: str = "Acme Corp",
    location: str | None = "Berlin, Germany",
    date_posted: str = "2026-10-18",
) -> dict[str, str]:
    """A raw listing dict shaped like the in-page extraction output."""
    slug = title.lower().replace(" ", "-")
    return {
        "title": title,
        "company": company,
        "location": location or "",
        "link": f"https://www.linkedin.com/jobs/view/{slug}-at-acme-{job_id}?refId=abc&trackingId=xyz",
        "datePosted": date_posted,
    }


@pytest.fixture
def sample_record():
    """A reusable sample ListingRecord for tests."""
    return ListingRecord(
        id="3812345678",
        title="Senior Backend Engineer",
        company="Tech Corp",
        location="Berlin, Germany",
        link="https://www.linkedin.com/jobs/view/senior-backend-engineer-at-tech-corp-3812345678",
        date_posted="2026-10-18",
    )


@pytest.fixture
def fake_page():
    """A Playwright Page stand-in whose evaluate() results are set per test."""
    page = MagicMock()
    page.evaluate = AsyncMock()
    page.goto = AsyncMock(return_value=MagicMock(status=200))
    return page


@pytest.fixture
def playwright_mocks():
    """
    Mock chain for Stealth().use_async(async_playwright()) -> pw -> browser -> context -> page.
    Returns a namespace-like dict of the individual mocks.
    """
    page = MagicMock()
    page.evaluate = AsyncMock()
    page.goto = AsyncMock(return_value=MagicMock(status=200))

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)

    manager = MagicMock()
    manager.__aenter__.return_value = pw
    manager.__aexit__.return_value = False

    stealth_cls = MagicMock()
    stealth_cls.return_value.use_async.return_value = manager

    return {
        "stealth_cls": stealth_cls,
        "manager": manager,
        "pw": pw,
        "browser": browser,
        "context": context,
        "page": page,
    }
