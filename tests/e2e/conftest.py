"""Live storefront fixtures.

Every case gets its own browser, context and ``PageSession``. A failing case
leaves a full-page screenshot under ``ARTIFACTS_ROOT``; all outcomes are
written to ``outcomes.json`` when the session ends.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

import pytest
import pytest_asyncio

from littmann_e2e.adapters.playwright import capture_failure, launch_browser, open_page
from littmann_e2e.config.settings import Settings
from littmann_e2e.config.settings import settings as env_settings
from littmann_e2e.pages.base import PageSession
from littmann_e2e.runtime.outcomes import OutcomeLog
from littmann_e2e.runtime.storage import case_screenshot_dir, outcomes_path

logger = logging.getLogger(__name__)

OUTCOMES = OutcomeLog()


def pytest_collection_modifyitems(config, items):
    e2e_dir = Path(__file__).parent
    for item in items:
        if e2e_dir in Path(str(item.fspath)).parents:
            item.add_marker(pytest.mark.e2e)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
    if rep.when == "call" or (rep.when == "setup" and not rep.passed):
        exc = call.excinfo.value if rep.failed and call.excinfo is not None else None
        OUTCOMES.record(item.nodeid, rep.outcome, rep.duration, exc)


def pytest_sessionfinish(session, exitstatus):
    if not OUTCOMES.outcomes:
        return
    path = outcomes_path(Path(env_settings.artifacts_root))
    OUTCOMES.dump(path)
    logger.info(f"[Session] outcomes written to {path}")


@pytest.fixture(autouse=True)
def _require_live_site():
    if os.getenv("RUN_E2E") != "1":
        pytest.skip("live storefront checks run only with RUN_E2E=1")


@pytest.fixture
def settings() -> Settings:
    return Settings.from_env()


@pytest_asyncio.fixture
async def site(request, settings):
    """A fresh ``PageSession`` on the live site."""
    async with launch_browser(settings) as browser:
        async with open_page(browser, settings) as (_, page):
            session = PageSession.create(page, settings)
            start = time.monotonic()
            try:
                yield session
            finally:
                rep = getattr(request.node, "rep_call", None)
                if rep is not None and rep.failed and settings.screenshot_on_failure:
                    shots = case_screenshot_dir(Path(settings.artifacts_root), request.node.nodeid)
                    path = await capture_failure(page, shots)
                    logger.info(f"[Session] failure screenshot: {path}")
                logger.info(f"[Session] {request.node.name} took {time.monotonic() - start:.1f}s")
                await session.close()
