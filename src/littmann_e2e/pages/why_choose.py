from __future__ import annotations

import re

from ..core.ir.model import ReadinessCondition, ReadinessSet, SemanticTarget, by_role
from .base import BasePage
from .components.footer import Footer
from .components.header import Header

PAGE_HEADING = SemanticTarget.of(
    "why choose heading",
    by_role("heading", re.compile("Why Choose", re.IGNORECASE), level=1),
)

WHY_CHOOSE_READY = ReadinessSet.any_of(
    ReadinessCondition("why choose heading visible", target=PAGE_HEADING, url=re.compile(r"/why-choose/")),
)


class WhyChoosePage(BasePage):
    ready_when = WHY_CHOOSE_READY

    def __init__(self, session):
        super().__init__(session)
        self.header = Header(session)
        self.footer = Footer(session)
