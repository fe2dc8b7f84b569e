"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.google.com"
DEFAULT_NAVIGATION_TIMEOUT_MS = 60000
DEFAULT_DETAIL_TIMEOUT_MS = 10000
DEFAULT_FIELD_TIMEOUT_MS = 5000
DEFAULT_FEED_TIMEOUT_MS = 10000


class ConfigError(RuntimeError):
    """Raised when an environment value cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    headless: bool = True
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    detail_timeout_ms: int = DEFAULT_DETAIL_TIMEOUT_MS
    field_timeout_ms: int = DEFAULT_FIELD_TIMEOUT_MS
    feed_timeout_ms: int = DEFAULT_FEED_TIMEOUT_MS
    run_timeout_s: Optional[float] = None
    output_dir: str = "output"
    worker_port: int = 5500

    @property
    def field_timeout_s(self) -> float:
        return self.field_timeout_ms / 1000

    @property
    def feed_timeout_s(self) -> float:
        return self.feed_timeout_ms / 1000


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _get_timeout_ms(name: str, default: int) -> int:
    value = _get_int(name, default)
    if value <= 0:
        logger.warning("%s=%s is not a positive timeout; using %s ms.", name, value, default)
        return default
    return value


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def _get_run_timeout(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}") from exc
    return value if value > 0 else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    base_url = (os.getenv("SCRAPER_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/")
    output_dir = os.getenv("SCRAPER_OUTPUT_DIR") or "output"
    worker_port = _get_int("WORKER_PORT", _get_int("PORT", 5500))

    settings = Settings(
        base_url=base_url,
        headless=_get_bool("SCRAPER_HEADLESS", True),
        navigation_timeout_ms=_get_timeout_ms("SCRAPER_NAVIGATION_TIMEOUT_MS", DEFAULT_NAVIGATION_TIMEOUT_MS),
        detail_timeout_ms=_get_timeout_ms("SCRAPER_DETAIL_TIMEOUT_MS", DEFAULT_DETAIL_TIMEOUT_MS),
        field_timeout_ms=_get_timeout_ms("SCRAPER_FIELD_TIMEOUT_MS", DEFAULT_FIELD_TIMEOUT_MS),
        feed_timeout_ms=_get_timeout_ms("SCRAPER_FEED_TIMEOUT_MS", DEFAULT_FEED_TIMEOUT_MS),
        run_timeout_s=_get_run_timeout("SCRAPER_RUN_TIMEOUT_S"),
        output_dir=output_dir,
        worker_port=worker_port,
    )

    if not settings.headless:
        logger.warning("SCRAPER_HEADLESS is disabled; a visible browser window will be opened.")

    return settings
