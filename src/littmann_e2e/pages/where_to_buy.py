from __future__ import annotations

import re

from ..core.ir.model import ReadinessCondition, ReadinessSet, SemanticTarget, by_css, by_text
from .base import BasePage
from .components.header import Header

PAGE_HEADING = SemanticTarget.of(
    "where to buy heading",
    by_css("h1, h2", has_text=re.compile("Where to Buy", re.IGNORECASE)),
)

ONLINE_RETAILERS = SemanticTarget.of("online retailers section", by_text("Online Retailers"))

WHERE_TO_BUY_READY = ReadinessSet.any_of(
    ReadinessCondition(
        "where to buy heading visible",
        target=PAGE_HEADING,
        url=re.compile("where-to-buy", re.IGNORECASE),
    ),
)


class WhereToBuyPage(BasePage):
    ready_when = WHERE_TO_BUY_READY

    def __init__(self, session):
        super().__init__(session)
        self.header = Header(session)

    async def has_online_retailers(self) -> bool:
        return await self.is_present(ONLINE_RETAILERS)
