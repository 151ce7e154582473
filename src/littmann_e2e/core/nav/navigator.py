"""Navigation coordinator.

Decides per resolved element whether to follow its address directly or to
simulate a click, executes the choice and confirms the destination through
the readiness detector.

Hover menus and animated overlays make simulated clicks racy, so a usable
``href`` is treated as ground truth and preferred whenever present.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urldefrag, urljoin

from playwright.async_api import Error as PlaywrightError

from ..errors import NavigationError
from ..ir.model import NavigationIntent, NavigationOutcome

if TYPE_CHECKING:
    from collections.abc import Iterable

    from playwright.async_api import Page

    from ..ir.model import ReadinessCondition, ReadinessSet, ResolvedElement
    from ..readiness.detector import ReadinessDetector

logger = logging.getLogger(__name__)

_NON_NAVIGATING_SCHEMES = ("javascript:", "mailto:", "tel:")


def direct_address(href: str | None, current_url: str) -> str | None:
    """Return the absolute address to navigate to, or None when a click is needed."""
    if href is None:
        return None
    href = href.strip()
    if not href or href.startswith("#"):
        return None
    if href.lower().startswith(_NON_NAVIGATING_SCHEMES):
        return None

    absolute = urljoin(current_url, href)
    target_doc, fragment = urldefrag(absolute)
    current_doc, _ = urldefrag(current_url)
    if fragment and target_doc == current_doc:
        # Anchor on the document we are already on
        return None
    return absolute


# --- Step Executors ---


async def _execute_direct(page: Page, address: str, timeout_ms: int) -> None:
    try:
        await page.goto(address, wait_until="domcontentloaded", timeout=timeout_ms)
    except PlaywrightError as e:
        raise NavigationError("direct-address", e) from e


async def _execute_click(element: ResolvedElement, grace_ms: int) -> bool:
    """Click ``element``; escalate once to a dispatched event. Returns True if escalated."""
    try:
        await element.handle.click(timeout=grace_ms)
        return False
    except PlaywrightError as e:
        logger.warning(
            f"[Navigator] click on '{element.target.name}' blocked ({e.__class__.__name__}), "
            "dispatching click event"
        )

    try:
        await element.handle.dispatch_event("click")
    except PlaywrightError as e:
        raise NavigationError("simulate-click", e) from e
    return True


class NavigationCoordinator:
    def __init__(
        self,
        page: Page,
        readiness: ReadinessDetector,
        click_grace_ms: int = 5000,
        navigation_timeout_ms: int = 60000,
    ):
        self.page = page
        self.readiness = readiness
        self.click_grace_ms = click_grace_ms
        self.navigation_timeout_ms = navigation_timeout_ms

    async def plan(self, element: ResolvedElement) -> NavigationIntent:
        """Inspect the element's address and decide how to navigate."""
        try:
            href = await element.handle.get_attribute("href")
        except PlaywrightError as e:
            logger.debug(f"[Navigator] no href readable on '{element.target.name}': {e}")
            href = None

        address = direct_address(href, self.page.url)
        if address is not None:
            return NavigationIntent(mode="direct-address", source_element=element, target_address=address)
        return NavigationIntent(mode="simulate-click", source_element=element)

    async def navigate(
        self,
        element: ResolvedElement,
        destination: ReadinessSet | Iterable[ReadinessCondition] | None = None,
    ) -> NavigationOutcome:
        """Navigate through ``element`` and, if given, wait for ``destination``.

        Raises:
            NavigationError: the chosen action failed; no fallback to the other mode
            ReadinessTimeoutError: the destination never became ready
        """
        intent = await self.plan(element)
        logger.info(
            f"[Navigator] '{element.target.name}': {intent.mode}"
            + (f" -> {intent.target_address}" if intent.target_address else "")
        )

        escalated = False
        if intent.mode == "direct-address":
            await _execute_direct(self.page, intent.target_address, self.navigation_timeout_ms)
        else:
            escalated = await _execute_click(element, self.click_grace_ms)

        ready = None
        if destination is not None:
            ready = await self.readiness.await_ready(destination)

        return NavigationOutcome(intent=intent, url=self.page.url, escalated=escalated, ready=ready)
