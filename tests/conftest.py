import os
import sys
from pathlib import Path

# Ensure src/ and tests/ are importable when running pytest without installation
_root = Path(__file__).resolve().parents[1]
for _p in (_root / "src", _root / "tests"):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))

os.environ.setdefault("HEADLESS", "true")
# Unit tests must not pick up a developer's .env timeouts
os.environ.setdefault("EXPECT_TIMEOUT_MS", "10000")

import pytest  # noqa: E402

from littmann_e2e.config.settings import Settings  # noqa: E402
from littmann_e2e.pages.base import PageSession  # noqa: E402

from fakes import FakePage  # noqa: E402


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def fast_settings():
    """Settings with short budgets so timeout paths finish quickly."""
    s = Settings()
    s.base_url = "https://shop.example/3M/en_IN/home/"
    s.expect_timeout_ms = 300
    s.click_grace_ms = 50
    s.poll_interval_ms = 10
    return s


@pytest.fixture
def session(fake_page, fast_settings):
    return PageSession.create(fake_page, fast_settings)
