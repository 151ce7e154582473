"""Standing watcher that dismisses transient overlays (cookie consent).

Rules are installed once per page visit. Two triggers share one dismissal
path:

- a background task on the page's event loop samples every rule while any
  other wait of the test step is suspended,
- Playwright locator handlers fire when an action is blocked by the overlay.

The dismiss click itself is forced: an unforced click would run the locator
handler checkpoint and wait on the rule's own handler.

Dismissal is serialized per rule and re-checks visibility under the lock, so
both triggers firing together click once. Failures are logged and retried on
the next sample; they never reach the test step.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterable

    from playwright.async_api import Locator, Page

    from ..ir.model import OverlayRule
    from ..resolver.resolve import ElementResolver

logger = logging.getLogger(__name__)


class OverlayWatcher:
    def __init__(
        self,
        page: Page,
        resolver: ElementResolver,
        poll_interval_ms: int = 250,
        dismiss_timeout_ms: int = 2000,
    ):
        self.page = page
        self.resolver = resolver
        self.poll_interval_ms = poll_interval_ms
        self.dismiss_timeout_ms = dismiss_timeout_ms
        self.dismissals: Counter[str] = Counter()
        self._rules: dict[str, OverlayRule] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._handler_locators: dict[str, Locator] = {}
        self._task: asyncio.Task | None = None

    @property
    def rules(self) -> list[OverlayRule]:
        return list(self._rules.values())

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def _handler_locator(self, rule: OverlayRule) -> Locator:
        candidates = rule.target.candidates
        loc = self.resolver.locator_for(candidates[0])
        for spec in candidates[1:]:
            loc = loc.or_(self.resolver.locator_for(spec))
        return loc.first

    def _blocked_handler(self, key: str):
        async def _on_blocked(_locator: Locator) -> None:
            await self.dismiss(key)

        return _on_blocked

    async def install(self, rules: Iterable[OverlayRule]) -> None:
        """Register ``rules``; a rule whose key is already installed is ignored."""
        for rule in rules:
            if rule.key in self._rules:
                logger.debug(f"[Overlay] rule '{rule.key}' already installed")
                continue
            self._rules[rule.key] = rule
            self._locks[rule.key] = asyncio.Lock()

            loc = self._handler_locator(rule)
            await self.page.add_locator_handler(loc, self._blocked_handler(rule.key))
            self._handler_locators[rule.key] = loc
            logger.info(f"[Overlay] installed rule '{rule.key}'")

        if self._rules and not self.active:
            self._task = asyncio.create_task(self._watch_loop(), name="overlay-watcher")

    async def uninstall(self) -> None:
        """Stop the watcher and drop every locator handler. Safe to call twice."""
        if self._task is not None:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            self._task = None

        for key, loc in list(self._handler_locators.items()):
            try:
                await self.page.remove_locator_handler(loc)
            except PlaywrightError as e:
                # Page already closed on the failure path
                logger.debug(f"[Overlay] could not remove handler '{key}': {e}")
        self._handler_locators.clear()
        self._rules.clear()
        self._locks.clear()

    @asynccontextmanager
    async def installed(self, rules: Iterable[OverlayRule]) -> AsyncGenerator[OverlayWatcher, None]:
        try:
            await self.install(rules)
            yield self
        finally:
            await self.uninstall()

    async def dismiss(self, key: str) -> bool:
        """Dismiss the overlay of rule ``key`` if it is showing right now."""
        rule = self._rules.get(key)
        lock = self._locks.get(key)
        if rule is None or lock is None:
            return False

        async with lock:
            resolved = await self.resolver.probe(rule.target)
            if resolved is None:
                return False
            try:
                if rule.action == "dispatch":
                    await resolved.handle.dispatch_event("click")
                else:
                    await resolved.handle.click(timeout=self.dismiss_timeout_ms, force=True)
            except PlaywrightError as e:
                logger.warning(f"[Overlay] dismissing '{key}' failed, will retry: {e}")
                return False

        self.dismissals[key] += 1
        logger.info(f"[Overlay] dismissed '{key}' (#{self.dismissals[key]})")
        return True

    async def _watch_loop(self) -> None:
        while True:
            for key in list(self._rules):
                await self.dismiss(key)
            await asyncio.sleep(self.poll_interval_ms / 1000)
