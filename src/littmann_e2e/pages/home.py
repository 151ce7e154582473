from __future__ import annotations

import re

from ..core.ir.model import ReadinessCondition, ReadinessSet, SemanticTarget, by_css, by_role
from .base import BasePage
from .components.consent import COOKIE_RULES
from .components.footer import Footer
from .components.header import Header

HERO = SemanticTarget.of(
    "hero section",
    by_css(".hero"),
    by_role("heading", level=1),
)

HOME_READY = ReadinessSet.any_of(
    ReadinessCondition("home hero visible", target=HERO, title=re.compile("Littmann", re.IGNORECASE)),
)


class HomePage(BasePage):
    path = ""
    ready_when = HOME_READY
    overlay_rules = COOKIE_RULES

    def __init__(self, session):
        super().__init__(session)
        self.header = Header(session)
        self.footer = Footer(session)

    async def navigate(self) -> None:
        """Open the landing page with the cookie banner handled for the whole visit."""
        await self.visit()

    async def title(self) -> str:
        return await self.page.title()
