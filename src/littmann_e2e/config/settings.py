from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Real environment variables win over values from .env
load_dotenv(override=False)

DEFAULT_BASE_URL = "https://www.littmann.in/3M/en_IN/littmann-stethoscopes-in/"


def _env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


@dataclass
class Settings:
    base_url: str = field(default_factory=lambda: os.getenv("BASE_URL", DEFAULT_BASE_URL))
    browser: str = field(default_factory=lambda: os.getenv("BROWSER", "firefox"))  # chromium|firefox|webkit
    headless: bool = field(default_factory=lambda: _env_bool("HEADLESS", True))
    action_timeout_ms: int = field(default_factory=lambda: _env_int("ACTION_TIMEOUT_MS", 30000))
    navigation_timeout_ms: int = field(
        default_factory=lambda: _env_int("NAVIGATION_TIMEOUT_MS", 60000)
    )
    expect_timeout_ms: int = field(default_factory=lambda: _env_int("EXPECT_TIMEOUT_MS", 10000))
    click_grace_ms: int = field(default_factory=lambda: _env_int("CLICK_GRACE_MS", 5000))
    poll_interval_ms: int = field(default_factory=lambda: _env_int("POLL_INTERVAL_MS", 100))
    ignore_https_errors: bool = field(
        default_factory=lambda: _env_bool("IGNORE_HTTPS_ERRORS", True)
    )
    artifacts_root: str = field(default_factory=lambda: os.getenv("ARTIFACTS_ROOT", "artifacts"))
    screenshot_on_failure: bool = field(
        default_factory=lambda: _env_bool("SCREENSHOT_ON_FAILURE", True)
    )

    @classmethod
    def from_env(cls) -> Settings:
        """Build a fresh instance from the current environment."""
        return cls()


settings = Settings()
