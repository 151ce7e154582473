"""Cookie consent banner shown on first visit and after consent resets."""

from __future__ import annotations

import re

from ...core.ir.model import OverlayRule, SemanticTarget, by_role

ACCEPT_COOKIES = SemanticTarget.of(
    "Accept Cookies button",
    by_role("button", "Accept Cookies"),
    by_role("button", re.compile(r"accept (all )?cookies", re.IGNORECASE)),
)

REJECT_COOKIES = SemanticTarget.of(
    "Reject Non-Essential Cookies button",
    by_role("button", "Reject Non-Essential Cookies"),
)

COOKIE_RULES: tuple[OverlayRule, ...] = (
    OverlayRule(ACCEPT_COOKIES, name="cookie-consent"),
    OverlayRule(REJECT_COOKIES, name="cookie-consent-reject"),
)
