import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from pydantic import ValidationError as PydanticValidationError

from linkedin_job_scraper.errors import ExtractionError
from linkedin_job_scraper.models import DEFAULT_LIMIT, UNKNOWN_LOCATION, ListingRecord

logger = logging.getLogger(__name__)

SITE_URL = "https://www.linkedin.com"

# A hyphen and digits at the end of the path, e.g. ".../backend-engineer-at-acme-3812345678?refId=..."
JOB_ID_PATTERN = re.compile(r"-(\d+)(?:\?|$)")


@dataclass(frozen=True)
class FieldSelector:
    """
    One way of locating a field inside a listing card.
    With no attribute the element's text is used; "href" yields the absolute URL.
    """

    css: str
    attribute: str | None = None


@dataclass(frozen=True)
class SelectorTable:
    """
    Ordered selector candidates for the listing container and each field.
    Candidates are tried in order; the first one yielding a value wins.
    """

    containers: tuple[str, ...]
    title: tuple[FieldSelector, ...]
    company: tuple[FieldSelector, ...]
    location: tuple[FieldSelector, ...]
    link: tuple[FieldSelector, ...]
    date_posted: tuple[FieldSelector, ...]

    @property
    def fields(self) -> dict[str, tuple[FieldSelector, ...]]:
        """Field name (as returned by the page) -> candidates."""
        return {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "link": self.link,
            "datePosted": self.date_posted,
        }

    @property
    def container_selector(self) -> str:
        """All container candidates as one CSS selector list."""
        return ", ".join(self.containers)

    def to_payload(self, limit: int) -> dict[str, Any]:
        """Plain-value form of the table, passed into the page."""
        return {
            "limit": limit,
            "containers": list(self.containers),
            "fields": {
                name: [{"css": c.css, "attribute": c.attribute} for c in candidates]
                for name, candidates in self.fields.items()
            },
        }


# Guest search markup ("base-search-card") first, then the signed-in
# "job-card-container" / "job-card-list" markup.
DEFAULT_SELECTORS = SelectorTable(
    containers=(
        "ul.jobs-search__results-list",
        "ul.scaffold-layout__list-container",
        "div.jobs-search-results-list ul",
    ),
    title=(
        FieldSelector("h3.base-search-card__title"),
        FieldSelector("a.job-card-list__title"),
        FieldSelector(".job-card-container__link strong"),
    ),
    company=(
        FieldSelector("h4.base-search-card__subtitle"),
        FieldSelector(".artdeco-entity-lockup__subtitle"),
        FieldSelector("span.job-card-container__primary-description"),
    ),
    location=(
        FieldSelector("span.job-search-card__location"),
        FieldSelector("li.job-card-container__metadata-item"),
    ),
    link=(
        FieldSelector("a.base-card__full-link", "href"),
        FieldSelector("a.job-card-list__title", "href"),
        FieldSelector("a.job-card-container__link", "href"),
        FieldSelector("a.base-card", "href"),
    ),
    date_posted=(
        FieldSelector("time.job-search-card__listdate", "datetime"),
        FieldSelector("time.job-search-card__listdate--new", "datetime"),
        FieldSelector("time", "datetime"),
    ),
)

# Runs inside the page. Receives SelectorTable.to_payload() and returns a list
# of plain objects, or null when no listing container matched.
_EXTRACT_JS = """
({ limit, containers, fields }) => {
    const pick = (node, candidates) => {
        for (const c of candidates) {
            const el = node.matches(c.css) ? node : node.querySelector(c.css);
            if (!el) continue;
            let value;
            if (c.attribute === "href") value = el.href;
            else if (c.attribute) value = el.getAttribute(c.attribute);
            else value = el.textContent;
            value = (value || "").trim();
            if (value) return value;
        }
        return "";
    };

    let container = null;
    for (const sel of containers) {
        container = document.querySelector(sel);
        if (container) break;
    }
    if (!container) return null;

    const items = [];
    for (const node of container.children) {
        if (items.length >= limit) break;
        const item = {};
        for (const [name, candidates] of Object.entries(fields)) {
            item[name] = pick(node, candidates);
        }
        if (!item.title || !item.company || !item.link) continue;
        items.push(item);
    }
    return items;
}
"""


def resolve_job_id(link: str) -> str:
    """
    Derive a listing id from its detail link: the trailing number after the
    last hyphen of the path. Links without one are their own id.
    """
    match = JOB_ID_PATTERN.search(link)
    return match.group(1) if match else link


def _clean(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return " ".join(value.split())


def build_records(raw_items: Iterable[Any], limit: int = DEFAULT_LIMIT) -> list[ListingRecord]:
    """
    Turn raw field dicts into ListingRecords, in order, up to `limit`.
    Items missing a title, company or link are skipped.
    """
    records: list[ListingRecord] = []
    for raw in raw_items:
        if len(records) >= limit:
            break
        if not isinstance(raw, dict):
            continue

        title = _clean(raw.get("title"))
        company = _clean(raw.get("company"))
        link = str(raw.get("link") or "").strip()
        if not title or not company or not link:
            logger.debug(f"Skipping incomplete listing: {raw}")
            continue

        try:
            record = ListingRecord(
                id=resolve_job_id(link),
                title=title,
                company=company,
                location=_clean(raw.get("location")) or UNKNOWN_LOCATION,
                link=link,
                date_posted=str(raw.get("datePosted") or "").strip(),
            )
        except PydanticValidationError as e:
            logger.debug(f"Skipping invalid listing {link}: {e}")
            continue
        records.append(record)

    return records


async def extract_listings(
    page: Page,
    limit: int = DEFAULT_LIMIT,
    selectors: SelectorTable = DEFAULT_SELECTORS,
) -> list[ListingRecord]:
    """
    Extract up to `limit` listings from the rendered search results page.

    Only plain values cross into the page (the limit and the selector table)
    and only plain dicts come back.

    Raises:
        ExtractionError: if evaluation fails or no listing container is found.
    """
    try:
        raw = await page.evaluate(_EXTRACT_JS, selectors.to_payload(limit))
    except PlaywrightError as e:
        raise ExtractionError(f"Failed to evaluate listings: {e}") from e

    if raw is None:
        raise ExtractionError(f"No listing container found (tried: {selectors.container_selector})")
    if not isinstance(raw, list):
        raise ExtractionError(f"Unexpected extraction result of type {type(raw).__name__}")

    records = build_records(raw, limit)
    logger.info(f"Extracted {len(records)} listings from {len(raw)} cards")
    return records


def _pick(node: Tag, candidates: Iterable[FieldSelector], base_url: str) -> str:
    for candidate in candidates:
        el = node if node.css.match(candidate.css) else node.select_one(candidate.css)
        if el is None:
            continue
        if candidate.attribute == "href":
            href = str(el.get("href") or "").strip()
            value = urljoin(base_url, href) if href else ""
        elif candidate.attribute:
            value = str(el.get(candidate.attribute) or "")
        else:
            value = el.get_text(" ")
        value = value.strip()
        if value:
            return value
    return ""


def extract_from_html(
    html: str,
    limit: int = DEFAULT_LIMIT,
    selectors: SelectorTable = DEFAULT_SELECTORS,
    base_url: str = SITE_URL,
) -> list[ListingRecord]:
    """
    Apply the selector table to saved search-results HTML.
    Same semantics as extract_listings, without a browser.
    """
    soup = BeautifulSoup(html, "html.parser")

    container = None
    for selector in selectors.containers:
        container = soup.select_one(selector)
        if container is not None:
            break
    if container is None:
        raise ExtractionError(f"No listing container found (tried: {selectors.container_selector})")

    raw_items = (
        {name: _pick(node, candidates, base_url) for name, candidates in selectors.fields.items()}
        for node in container.find_all(recursive=False)
    )
    return build_records(raw_items, limit)
