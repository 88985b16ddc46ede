import logging
import sys
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright_stealth import Stealth

from linkedin_job_scraper import config
from linkedin_job_scraper.errors import BrowserLaunchError, NavigationError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/116.0.0.0 Safari/537.36"
)
LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--window-size=1920,1080",
)
EXTRA_HTTP_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://www.google.com",
}
NAVIGATION_TIMEOUT = 60000  # milliseconds

DEFAULT_EXECUTABLE_PATHS = {
    "win32": "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
    "darwin": "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "linux": "/usr/bin/google-chrome-stable",
}


def resolve_executable_path(override: str | None = None, platform: str = sys.platform) -> str | None:
    """
    Pick the Chrome executable: an explicit override wins, otherwise the
    platform's standard install location. Returns None when that location
    does not exist, which makes Playwright use its bundled Chromium.
    """
    if override:
        return override

    default = DEFAULT_EXECUTABLE_PATHS.get(platform, DEFAULT_EXECUTABLE_PATHS["linux"])
    if Path(default).exists():
        return default

    logger.debug(f"No Chrome found at {default}; using Playwright's bundled Chromium")
    return None


@dataclass(frozen=True)
class BrowserOptions:
    """
    Launch and page settings for one BrowserSession.
    Each session gets its own copy, so concurrent sessions never share state.
    """

    headless: bool = True
    executable_path: str | None = None
    args: tuple[str, ...] = LAUNCH_ARGS
    user_agent: str = USER_AGENT
    viewport: tuple[int, int] = (1366, 768)
    extra_http_headers: dict[str, str] = field(default_factory=lambda: dict(EXTRA_HTTP_HEADERS))
    locale: str = "en-US"
    navigation_timeout: int = NAVIGATION_TIMEOUT
    stealth: bool = True

    @classmethod
    def from_config(cls) -> "BrowserOptions":
        """Build options from environment configuration."""
        return cls(
            headless=config.HEADLESS,
            executable_path=resolve_executable_path(config.CHROME_PATH),
            navigation_timeout=config.NAVIGATION_TIMEOUT,
        )


class BrowserSession:
    """
    Owns one browser process and one page for the duration of an `async with` block.

    The browser is always closed when the block exits, whether it finishes
    normally, fails during navigation or extraction, or launch itself fails
    half-way through.

    Usage:
        async with BrowserSession(options) as session:
            await session.navigate(url)
            html = await session.page.content()
    """

    def __init__(self, options: BrowserOptions | None = None):
        self.options = options or BrowserOptions.from_config()
        self._stack: AsyncExitStack | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("BrowserSession is not open")
        return self._page

    def _playwright_manager(self) -> AbstractAsyncContextManager[Playwright]:
        manager = async_playwright()
        if self.options.stealth:
            return Stealth().use_async(manager)
        return manager

    async def __aenter__(self) -> "BrowserSession":
        self._stack = AsyncExitStack()
        try:
            await self._open(self._stack)
        except PlaywrightError as e:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e
        except BaseException:
            await self.close()
            raise
        return self

    async def _open(self, stack: AsyncExitStack) -> None:
        pw = await stack.enter_async_context(self._playwright_manager())

        browser = await pw.chromium.launch(
            headless=self.options.headless,
            executable_path=self.options.executable_path,
            args=list(self.options.args),
        )
        stack.push_async_callback(browser.close)

        width, height = self.options.viewport
        context = await browser.new_context(
            user_agent=self.options.user_agent,
            viewport={"width": width, "height": height},
            extra_http_headers=self.options.extra_http_headers,
            locale=self.options.locale,
        )
        stack.push_async_callback(context.close)

        self._page = await context.new_page()
        logger.debug(
            f"Browser launched (headless={self.options.headless}, "
            f"executable={self.options.executable_path or 'bundled'})"
        )

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the page's context, the browser, and the Playwright driver. Idempotent."""
        stack, self._stack, self._page = self._stack, None, None
        if stack is not None:
            await stack.aclose()
            logger.debug("Browser closed")

    async def navigate(self, url: str) -> None:
        """
        Load `url` and wait until network activity settles.

        Raises:
            NavigationError: on timeout, network failure, or an HTTP error status.
        """
        timeout = self.options.navigation_timeout
        try:
            response = await self.page.goto(url, wait_until="networkidle", timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise NavigationError(f"Timed out after {timeout} ms loading {url}") from e
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e}") from e

        if response is not None and response.status >= 400:
            raise NavigationError(f"HTTP {response.status} for {url}")
