"""Page object plumbing: the per-context session and the page base class."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar
from urllib.parse import urljoin

from ..config.settings import Settings
from ..core.nav.navigator import NavigationCoordinator
from ..core.overlay.watcher import OverlayWatcher
from ..core.readiness.detector import ReadinessDetector
from ..core.resolver.resolve import ElementResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from playwright.async_api import Page

    from ..core.ir.model import (
        NavigationOutcome,
        OverlayRule,
        ReadinessCondition,
        ReadinessSet,
        ReadyResult,
        ResolvedElement,
        SemanticTarget,
    )

logger = logging.getLogger(__name__)


@dataclass
class PageSession:
    """Everything bound to one browsing context.

    Page objects receive a session instead of reaching for shared state, so
    parallel test cases never see each other's page.
    """

    page: Page
    settings: Settings
    resolver: ElementResolver
    readiness: ReadinessDetector
    navigator: NavigationCoordinator
    overlays: OverlayWatcher

    @classmethod
    def create(cls, page: Page, settings: Settings | None = None) -> PageSession:
        settings = settings or Settings.from_env()
        resolver = ElementResolver(
            page,
            default_timeout_ms=settings.expect_timeout_ms,
            poll_interval_ms=settings.poll_interval_ms,
        )
        readiness = ReadinessDetector(
            page,
            resolver,
            default_timeout_ms=settings.expect_timeout_ms,
            poll_interval_ms=settings.poll_interval_ms,
        )
        navigator = NavigationCoordinator(
            page,
            readiness,
            click_grace_ms=settings.click_grace_ms,
            navigation_timeout_ms=settings.navigation_timeout_ms,
        )
        overlays = OverlayWatcher(page, resolver, poll_interval_ms=max(settings.poll_interval_ms, 250))
        return cls(page, settings, resolver, readiness, navigator, overlays)

    async def close(self) -> None:
        await self.overlays.uninstall()


class BasePage:
    path: ClassVar[str | None] = None  # relative to BASE_URL
    ready_when: ClassVar[ReadinessSet | None] = None
    overlay_rules: ClassVar[tuple[OverlayRule, ...]] = ()

    def __init__(self, session: PageSession):
        self.session = session
        self.page = session.page

    @property
    def url(self) -> str:
        if self.path is None:
            raise ValueError(f"{type(self).__name__} is only reachable by navigation")
        return urljoin(self.session.settings.base_url, self.path)

    async def visit(self, url: str | None = None) -> None:
        """Install overlay rules and load ``url`` (default: the page's own address)."""
        url = url or self.url
        await self.session.overlays.install(self.overlay_rules)
        logger.info(f"[Session] visiting {url}")
        await self.page.goto(url)
        await self.page.wait_for_load_state("load")

    async def close_visit(self) -> None:
        await self.session.overlays.uninstall()

    async def is_loaded(self, timeout_ms: int | None = None) -> ReadyResult:
        """Block until the page is ready; raises ReadinessTimeoutError otherwise."""
        if self.ready_when is None:
            raise NotImplementedError(f"{type(self).__name__} declares no readiness")
        return await self.session.readiness.await_ready(self.ready_when, timeout_ms)

    async def resolve(self, target: SemanticTarget, timeout_ms: int | None = None) -> ResolvedElement:
        return await self.session.resolver.resolve(target, timeout_ms)

    async def is_present(self, target: SemanticTarget, timeout_ms: int = 0) -> bool:
        return await self.session.resolver.is_present(target, timeout_ms)

    async def follow(
        self,
        target: SemanticTarget,
        destination: ReadinessSet | Iterable[ReadinessCondition] | None = None,
        timeout_ms: int | None = None,
    ) -> NavigationOutcome:
        element = await self.resolve(target, timeout_ms)
        return await self.session.navigator.navigate(element, destination)
