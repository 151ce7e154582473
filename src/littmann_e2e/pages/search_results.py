"""Search results page.

The site answers an unknown query either with an empty-state message or with
fuzzy fallback results, so readiness accepts the grid, the empty state or the
results heading.
"""

from __future__ import annotations

import logging
import re

from ..core.ir.model import ReadinessCondition, ReadinessSet, SemanticTarget, by_css
from .base import BasePage
from .components.header import Header
from .product_detail import PRODUCT_DETAIL_READY

logger = logging.getLogger(__name__)

RESULTS_GRID = SemanticTarget.of("result grid", by_css(".mds-grid"))

PRODUCT_CARDS = SemanticTarget.of("product cards", by_css("a.mds-link"), collection=True)

NO_RESULTS = SemanticTarget.of(
    "empty-state message",
    by_css(".mds-font_paragraph", has_text=re.compile(r"No products|0 products", re.IGNORECASE)),
)

RESULTS_HEADING = SemanticTarget.of(
    "results heading",
    by_css("h1", has_text=re.compile(r"Results for|products", re.IGNORECASE)),
)

PAGE_HEADING = SemanticTarget.of("page heading", by_css("h1"))

FILTER_SIDEBAR = SemanticTarget.of("filter sidebar", by_css(".m-lhn"))

SEARCH_RESULTS_READY = ReadinessSet.any_of(
    ReadinessCondition("result grid visible", target=RESULTS_GRID),
    ReadinessCondition("empty-state visible", target=NO_RESULTS),
    ReadinessCondition("fallback heading visible", target=RESULTS_HEADING),
)


class SearchResultsPage(BasePage):
    ready_when = SEARCH_RESULTS_READY

    def __init__(self, session):
        super().__init__(session)
        self.header = Header(session)

    async def result_count(self) -> int:
        cards = await self.session.resolver.probe(PRODUCT_CARDS)
        return cards.match_count if cards else 0

    async def has_no_results(self) -> bool:
        return await self.is_present(NO_RESULTS)

    async def has_heading(self) -> bool:
        return await self.is_present(PAGE_HEADING, self.session.resolver.default_timeout_ms)

    async def has_filters(self) -> bool:
        return await self.is_present(FILTER_SIDEBAR)

    async def result_label(self, index: int = 0) -> str:
        cards = await self.resolve(PRODUCT_CARDS)
        card = cards.item(index)
        return (await card.handle.locator("p").first.inner_text()).strip()

    async def open_result(self, index: int = 0):
        """Open the ``index``-th result and wait for the product detail page."""
        cards = await self.resolve(PRODUCT_CARDS)
        card = cards.item(index)
        logger.info(f"[Search] opening result #{index}")
        return await self.session.navigator.navigate(card, PRODUCT_DETAIL_READY)
