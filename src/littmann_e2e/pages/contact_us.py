from __future__ import annotations

import re

from ..core.ir.model import ReadinessCondition, ReadinessSet, SemanticTarget, by_role
from .base import BasePage
from .components.footer import Footer
from .components.header import Header

PAGE_HEADING = SemanticTarget.of(
    "customer service heading",
    by_role("heading", re.compile("Customer Service", re.IGNORECASE), level=2),
)

# Either a button expanding the form or a link to it, depending on the template
SHOW_FORM = SemanticTarget.of(
    "show form control",
    by_role("button", re.compile("Show Form|Email Us", re.IGNORECASE)),
    by_role("link", re.compile("Show Form|Email Us", re.IGNORECASE)),
)

CONTACT_US_READY = ReadinessSet.any_of(
    ReadinessCondition("contact heading visible", target=PAGE_HEADING, url=re.compile(r"/contact-us/")),
)


class ContactUsPage(BasePage):
    ready_when = CONTACT_US_READY

    def __init__(self, session):
        super().__init__(session)
        self.header = Header(session)
        self.footer = Footer(session)

    async def has_contact_form_control(self) -> bool:
        return await self.is_present(SHOW_FORM, self.session.resolver.default_timeout_ms)
