"""Page readiness as a race between mutually exclusive conditions.

A search results page is "ready" when the result grid, the empty-state
message or the results heading shows up, whichever comes first. Each
condition is polled by its own task; the first one to hold wins and the rest
are cancelled. Without a winner the detector raises once the whole budget has
elapsed.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError

from ..errors import ReadinessTimeoutError
from ..ir.model import ReadinessSet, ReadyResult, conditions_of

if TYPE_CHECKING:
    from collections.abc import Iterable

    from playwright.async_api import Page

    from ..ir.model import Pattern, ReadinessCondition
    from ..resolver.resolve import ElementResolver

logger = logging.getLogger(__name__)


def _matches(pattern: Pattern, value: str) -> bool:
    if isinstance(pattern, re.Pattern):
        return pattern.search(value) is not None
    return pattern in value


class ReadinessDetector:
    def __init__(
        self,
        page: Page,
        resolver: ElementResolver,
        default_timeout_ms: int = 10000,
        poll_interval_ms: int = 100,
    ):
        self.page = page
        self.resolver = resolver
        self.default_timeout_ms = default_timeout_ms
        self.poll_interval_ms = poll_interval_ms

    async def is_satisfied(self, condition: ReadinessCondition) -> bool:
        """Sample ``condition`` once."""
        if condition.url is not None and not _matches(condition.url, self.page.url):
            return False
        try:
            if condition.title is not None and not _matches(condition.title, await self.page.title()):
                return False
        except PlaywrightError as e:
            logger.debug(f"[Readiness] {condition.name}: title unavailable: {e}")
            return False
        if condition.target is not None:
            return await self.resolver.probe(condition.target) is not None
        return True

    async def _watch(self, condition: ReadinessCondition) -> ReadinessCondition:
        while not await self.is_satisfied(condition):
            await asyncio.sleep(self.poll_interval_ms / 1000)
        return condition

    async def await_ready(
        self,
        conditions: ReadinessSet | Iterable[ReadinessCondition],
        timeout_ms: int | None = None,
    ) -> ReadyResult:
        """Wait until any condition holds and report which one fired.

        Raises:
            ReadinessTimeoutError: no condition held within the budget
        """
        conds = conditions_of(conditions)
        if not conds:
            raise ValueError("await_ready needs at least one condition")
        if timeout_ms is None and isinstance(conditions, ReadinessSet):
            timeout_ms = conditions.timeout_ms
        budget = self.default_timeout_ms if timeout_ms is None else timeout_ms
        names = [c.name for c in conds]

        loop = asyncio.get_running_loop()
        start = loop.time()
        tasks = [asyncio.create_task(self._watch(c), name=f"ready:{c.name}") for c in conds]
        try:
            done, _ = await asyncio.wait(
                tasks, timeout=budget / 1000, return_when=asyncio.FIRST_COMPLETED
            )
            if not done:
                logger.info(f"[Readiness] none of {names} fired within {budget}ms")
                raise ReadinessTimeoutError(names, budget)
            # Several tasks may finish in the same loop iteration; keep declaration order
            winner = next(t for t in tasks if t in done)
            fired = winner.result()
        finally:
            for t in tasks:
                if not t.done():
                    t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        elapsed = loop.time() - start
        logger.info(f"[Readiness] '{fired.name}' fired after {elapsed:.2f}s")
        return ReadyResult(fired=fired.name, elapsed=elapsed)
