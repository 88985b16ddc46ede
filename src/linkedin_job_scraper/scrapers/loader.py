import asyncio
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from linkedin_job_scraper.errors import ExtractionError

logger = logging.getLogger(__name__)

SCROLL_STEP = 200  # pixels
SCROLL_INTERVAL = 0.15  # seconds
MAX_SCROLL_STEPS = 500

# Scrolls the container (or the whole document when it is missing) by one
# step and reports the container's current scroll extent.
_SCROLL_STEP_JS = """
({ selector, step }) => {
    const container = document.querySelector(selector)
        || document.scrollingElement
        || document.documentElement;
    container.scrollBy(0, step);
    window.scrollBy(0, step);
    return container.scrollHeight;
}
"""


async def auto_scroll(
    page: Page,
    selector: str,
    step: int = SCROLL_STEP,
    interval: float = SCROLL_INTERVAL,
    max_steps: int = MAX_SCROLL_STEPS,
) -> int:
    """
    Scroll the listing container until it stops growing, so lazily loaded
    cards get rendered.

    The extent is re-read after every step because it grows as new cards
    load. Scrolling also stops after `max_steps` for pages that never settle.

    Returns:
        The number of scroll steps taken.
    """
    position = 0
    steps = 0
    while steps < max_steps:
        try:
            extent = await page.evaluate(_SCROLL_STEP_JS, {"selector": selector, "step": step})
        except PlaywrightError as e:
            raise ExtractionError(f"Failed to scroll '{selector}': {e}") from e

        position += step
        steps += 1
        if position >= int(extent or 0):
            logger.debug(f"Scrolling settled after {steps} steps ({position}px)")
            return steps
        await asyncio.sleep(interval)

    logger.warning(f"Stopped scrolling '{selector}' after {max_steps} steps; page kept growing")
    return steps
