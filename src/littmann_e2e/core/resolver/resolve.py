"""Element resolution over an ordered list of candidate selectors.

A ``SemanticTarget`` names one logical element and declares several ways to
find it. Candidates are tried strictly in declaration order on every sweep;
the first candidate with a visible match wins. Sweeps repeat until the
timeout budget elapses, then a single ``ElementNotFoundError`` is raised.
Resolution only reads the DOM (count / visibility / enabled state).
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError

from ..errors import AmbiguousMatchError, ElementNotFoundError
from ..ir.model import BoundingState, ResolvedElement

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

    from ..ir.model import SelectorSpec, SemanticTarget

logger = logging.getLogger(__name__)


def _css_attribute(spec: SelectorSpec) -> str:
    if spec.pattern is None:
        return f"[{spec.attribute}]"
    value = str(spec.pattern).replace('"', '\\"')
    op = "=" if spec.exact else "*="
    return f'[{spec.attribute}{op}"{value}"]'


def build_locator(root: Any, spec: SelectorSpec) -> Locator:
    """Build the Playwright locator for one candidate, relative to ``root``.

    ``root`` is a Page or a Locator; scoping is applied before the query so
    matches outside the scope can never be returned.
    """
    if spec.scope:
        root = root.locator(spec.scope)

    if spec.kind == "role":
        kwargs: dict[str, Any] = {}
        if spec.pattern is not None:
            kwargs["name"] = spec.pattern
            kwargs["exact"] = spec.exact
        if spec.level is not None:
            kwargs["level"] = spec.level
        loc = root.get_by_role(spec.role, **kwargs)
    elif spec.kind == "text":
        loc = root.get_by_text(spec.pattern, exact=spec.exact)
    elif spec.kind == "placeholder":
        loc = root.get_by_placeholder(spec.pattern, exact=spec.exact)
    elif spec.kind == "label":
        loc = root.get_by_label(spec.pattern, exact=spec.exact)
    elif spec.kind == "attribute":
        loc = root.locator(_css_attribute(spec))
    else:
        loc = root.locator(spec.pattern)

    if spec.has_text is not None:
        loc = loc.filter(has_text=spec.has_text)
    return loc


class ElementResolver:
    """Resolves semantic targets against one page.

    The page is injected; a resolver never reaches for global browser state,
    so independent browsing contexts can run side by side.
    """

    def __init__(self, page: Page, default_timeout_ms: int = 10000, poll_interval_ms: int = 100):
        self.page = page
        self.default_timeout_ms = default_timeout_ms
        self.poll_interval_ms = poll_interval_ms

    def locator_for(self, spec: SelectorSpec) -> Locator:
        return build_locator(self.page, spec)

    async def _visible_indexes(self, loc: Locator, stop_at_first: bool) -> list[int]:
        count = await loc.count()
        visible: list[int] = []
        for i in range(count):
            if await loc.nth(i).is_visible():
                visible.append(i)
                if stop_at_first:
                    break
        return visible

    async def _try_candidate(
        self, target: SemanticTarget, index: int, spec: SelectorSpec
    ) -> ResolvedElement | None:
        loc = self.locator_for(spec)
        try:
            # Uniqueness and collections need every visible match; .first semantics only the first one
            visible = await self._visible_indexes(
                loc, stop_at_first=not (target.unique or target.collection)
            )
            if not visible:
                return None
            if target.unique and len(visible) > 1:
                raise AmbiguousMatchError(target.name, len(visible), spec.describe())
            if target.collection:
                return ResolvedElement(
                    target=target,
                    handle=loc,
                    matched_candidate_index=index,
                    bounding_state=BoundingState(visible=True, attached=True),
                    match_count=len(visible),
                    visible_indexes=tuple(visible),
                )
            handle = loc.nth(visible[0])
            enabled = await handle.is_enabled()
        except PlaywrightError as e:
            # Detached nodes and destroyed execution contexts during transitions
            logger.debug(f"[Resolver] {target.name}: candidate {index} probe failed: {e}")
            return None

        return ResolvedElement(
            target=target,
            handle=handle,
            matched_candidate_index=index,
            bounding_state=BoundingState(visible=True, attached=True, enabled=enabled),
        )

    async def probe(self, target: SemanticTarget) -> ResolvedElement | None:
        """Run one sweep over the candidates without waiting."""
        for index, spec in enumerate(target.candidates):
            resolved = await self._try_candidate(target, index, spec)
            if resolved is not None:
                return resolved
            logger.debug(f"[Resolver] {target.name}: no visible match for {spec.describe()}")
        return None

    async def resolve(self, target: SemanticTarget, timeout_ms: int | None = None) -> ResolvedElement:
        """Resolve ``target`` to the first satisfiable candidate within the budget.

        Raises:
            ElementNotFoundError: no candidate matched before the budget elapsed
            AmbiguousMatchError: ``target.unique`` and several visible matches
        """
        budget = self.default_timeout_ms if timeout_ms is None else timeout_ms
        loop = asyncio.get_running_loop()
        deadline = loop.time() + budget / 1000
        sweeps = 0

        while True:
            sweeps += 1
            resolved = await self.probe(target)
            if resolved is not None:
                logger.info(
                    f"[Resolver] {target.name}: matched candidate {resolved.matched_candidate_index} "
                    f"({resolved.candidate.describe()}) after {sweeps} sweep(s)"
                )
                return resolved

            remaining = deadline - loop.time()
            if remaining <= 0:
                break
            await asyncio.sleep(min(self.poll_interval_ms / 1000, remaining))

        logger.info(f"[Resolver] {target.name}: not found after {sweeps} sweep(s) in {budget}ms")
        raise ElementNotFoundError(target.name, target.describe_candidates(), budget)

    async def is_present(self, target: SemanticTarget, timeout_ms: int = 0) -> bool:
        """Answer whether ``target`` resolves, turning not-found into ``False``."""
        try:
            await self.resolve(target, timeout_ms=timeout_ms)
        except ElementNotFoundError:
            return False
        return True
