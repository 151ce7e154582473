from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ...core.ir.model import ReadinessCondition, ReadinessSet, SemanticTarget, by_css, by_role

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ...core.ir.model import NavigationOutcome, ReadyResult
    from ..base import PageSession

FOOTER_CONTAINER = SemanticTarget.of("footer container", by_css("footer"), by_role("contentinfo"))


def _footer_link(label: str) -> SemanticTarget:
    # Footer copy first; the same link elsewhere on the page is only a fallback
    pattern = re.compile(label, re.IGNORECASE)
    return SemanticTarget.of(
        f"footer {label} link",
        by_role("link", pattern, scope="footer"),
        by_role("link", pattern),
    )


CONTACT_US = _footer_link("contact us")
WHERE_TO_BUY = _footer_link("where to buy")
LEGAL_INFORMATION = _footer_link("legal information")
PRIVACY_POLICY = _footer_link("privacy policy")

FOOTER_READY = ReadinessSet.any_of(ReadinessCondition("footer container visible", target=FOOTER_CONTAINER))


class Footer:
    def __init__(self, session: PageSession):
        self.session = session

    async def is_visible(self, timeout_ms: int | None = None) -> ReadyResult:
        return await self.session.readiness.await_ready(FOOTER_READY, timeout_ms)

    async def _open(
        self,
        target: SemanticTarget,
        destination: ReadinessSet | Iterable[ReadinessCondition] | None,
    ) -> NavigationOutcome:
        element = await self.session.resolver.resolve(target)
        return await self.session.navigator.navigate(element, destination)

    async def open_contact_us(self, destination=None) -> NavigationOutcome:
        return await self._open(CONTACT_US, destination)

    async def open_where_to_buy(self, destination=None) -> NavigationOutcome:
        return await self._open(WHERE_TO_BUY, destination)

    async def has_legal_links(self) -> bool:
        resolver = self.session.resolver
        return await resolver.is_present(LEGAL_INFORMATION) and await resolver.is_present(PRIVACY_POLICY)
