class JobSearchError(Exception):
    """
    Base class for every failure surfaced by the job search pipeline.
    Callers can catch this to handle "bad input" and "scrape failed" alike.
    """


class ValidationError(JobSearchError):
    """Raised when the raw query parameters cannot form a valid SearchSpec."""


class ScrapeError(JobSearchError):
    """Raised when anything between browser launch and extraction fails."""


class BrowserLaunchError(ScrapeError):
    """The browser process, context, or page could not be created."""


class NavigationError(ScrapeError):
    """The search page could not be reached (timeout, network, or HTTP error)."""


class ExtractionError(ScrapeError):
    """The rendered page could not be turned into listing records."""
