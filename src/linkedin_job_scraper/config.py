import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

_DEFAULTS: dict[str, str] = {
    "HEADLESS": "true",
    "NAVIGATION_TIMEOUT": "60000",
    "SETTLE_DELAY": "3000",
    "SCROLL_STEP": "200",
    "SCROLL_INTERVAL": "150",
    "SCROLL_MAX_STEPS": "500",
    "MAX_CONCURRENT_SEARCHES": "4",
    "HOST": "127.0.0.1",
    "PORT": "8000",
}


def get_config() -> dict[str, str]:
    """
    Read configuration from environment variables, applying defaults.
    Called lazily to avoid crashing on import.
    """
    config = {name: os.getenv(name, default) for name, default in _DEFAULTS.items()}
    config["CHROME_PATH"] = os.getenv("CHROME_PATH", "")
    config["CORS_ORIGIN"] = os.getenv("CORS_ORIGIN", "")
    return config


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a positive integer, got '{raw}'") from None
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


class _Config:
    """Lazy configuration that only validates when values are actually accessed."""

    def __init__(self) -> None:
        self._config: dict[str, str] | None = None

    def _get(self, name: str) -> str:
        if self._config is None:
            self._config = get_config()
        return self._config[name]

    @property
    def CHROME_PATH(self) -> str | None:
        """Browser executable override. Empty means "use the platform default"."""
        return self._get("CHROME_PATH") or None

    @property
    def HEADLESS(self) -> bool:
        return self._get("HEADLESS").strip().lower() not in ("0", "false", "no", "off")

    @property
    def NAVIGATION_TIMEOUT(self) -> int:
        """Navigation timeout in milliseconds."""
        return _positive_int("NAVIGATION_TIMEOUT", self._get("NAVIGATION_TIMEOUT"))

    @property
    def SETTLE_DELAY(self) -> float:
        """Pause after navigation, in seconds (configured in milliseconds)."""
        return _positive_int("SETTLE_DELAY", self._get("SETTLE_DELAY")) / 1000

    @property
    def SCROLL_STEP(self) -> int:
        """Pixels advanced per scroll step."""
        return _positive_int("SCROLL_STEP", self._get("SCROLL_STEP"))

    @property
    def SCROLL_INTERVAL(self) -> float:
        """Pause between scroll steps, in seconds (configured in milliseconds)."""
        return _positive_int("SCROLL_INTERVAL", self._get("SCROLL_INTERVAL")) / 1000

    @property
    def SCROLL_MAX_STEPS(self) -> int:
        return _positive_int("SCROLL_MAX_STEPS", self._get("SCROLL_MAX_STEPS"))

    @property
    def MAX_CONCURRENT_SEARCHES(self) -> int:
        return _positive_int("MAX_CONCURRENT_SEARCHES", self._get("MAX_CONCURRENT_SEARCHES"))

    @property
    def CORS_ORIGIN(self) -> str | None:
        return self._get("CORS_ORIGIN") or None

    @property
    def HOST(self) -> str:
        """Interface the HTTP server binds to."""
        return self._get("HOST").strip() or "127.0.0.1"

    @property
    def PORT(self) -> int:
        return _positive_int("PORT", self._get("PORT"))


_cfg = _Config()

# Module-level type declarations for mypy.
# The actual values come from __getattr__ below.
CHROME_PATH: str | None
HEADLESS: bool
NAVIGATION_TIMEOUT: int
SETTLE_DELAY: float
SCROLL_STEP: int
SCROLL_INTERVAL: float
SCROLL_MAX_STEPS: int
MAX_CONCURRENT_SEARCHES: int
CORS_ORIGIN: str | None
HOST: str
PORT: int

_NAMES = frozenset(
    {
        "CHROME_PATH",
        "HEADLESS",
        "NAVIGATION_TIMEOUT",
        "SETTLE_DELAY",
        "SCROLL_STEP",
        "SCROLL_INTERVAL",
        "SCROLL_MAX_STEPS",
        "MAX_CONCURRENT_SEARCHES",
        "CORS_ORIGIN",
        "HOST",
        "PORT",
    }
)


# Module-level lazy access using __getattr__ (PEP 562).
# `from linkedin_job_scraper.config import NAVIGATION_TIMEOUT` still works,
# but the value is only resolved when first accessed, not at import time.
def __getattr__(name: str) -> str | bool | int | float | None:
    if name in _NAMES:
        return getattr(_cfg, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
