"""All-products listing (PLP) with category and color filters."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

from ..core.errors import ElementNotFoundError
from ..core.ir.model import (
    ReadinessCondition,
    ReadinessSet,
    SemanticTarget,
    by_css,
    by_role,
)
from .base import BasePage
from .components.footer import Footer
from .components.header import Header
from .product_detail import PRODUCT_DETAIL_READY

logger = logging.getLogger(__name__)

PAGE_HEADING = SemanticTarget.of("listing heading", by_role("heading", level=1))

FILTERS = SemanticTarget.of("filters section", by_css(".filter-container, #filters, aside"))

PRODUCT_GRID = SemanticTarget.of("product grid", by_css('.product-grid, .grid-layout, [role="list"]'))

PRODUCT_CARDS = SemanticTarget.of(
    "product cards",
    by_css(".product-grid a, .grid-layout a, [role='list'] a"),
    by_css("a.mds-link"),
    collection=True,
)

# Text is steadier than the card markup, which changed several times
FIRST_PRODUCT_LINK = SemanticTarget.of(
    "first product link",
    by_css("a", has_text=re.compile(r"Classic III|Cardiology IV|Master Cardiology", re.IGNORECASE)),
)

ALL_PRODUCTS_LINK = SemanticTarget.of("all products link", by_css('a[href="/3M/en_IN/p/"]'))

LISTING_READY = ReadinessSet.any_of(
    ReadinessCondition("listing heading visible", target=PAGE_HEADING, url=re.compile(r"/p/")),
)


def category_link(name: str) -> SemanticTarget:
    return SemanticTarget.of(
        f"{name} category link",
        by_css("a.mds-link_secondary", has_text=re.compile(re.escape(name), re.IGNORECASE)),
    )


def color_filter(name: str) -> SemanticTarget:
    label = re.compile(re.escape(name), re.IGNORECASE)
    return SemanticTarget.of(
        f"{name} color filter",
        by_role("checkbox", label),
        by_css("[class*='color'] a, [class*='colour'] a", has_text=label),
    )


class ProductListingPage(BasePage):
    path = "/3M/en_IN/p/"
    ready_when = LISTING_READY

    def __init__(self, session):
        super().__init__(session)
        self.header = Header(session)
        self.footer = Footer(session)

    async def open(self, category: str | None = None) -> None:
        """Load the full listing, or one category's listing such as ``stethoscopes``."""
        await self.visit(urljoin(self.url, f"pc/{category}/") if category else None)

    async def has_structure(self) -> bool:
        """Heading, filters and grid are all on the page."""
        for target in (PAGE_HEADING, FILTERS, PRODUCT_GRID):
            if not await self.is_present(target, self.session.resolver.default_timeout_ms):
                return False
        return True

    async def product_count(self) -> int:
        cards = await self.session.resolver.probe(PRODUCT_CARDS)
        return cards.match_count if cards else 0

    async def product_card_details(self, index: int = 0) -> dict[str, object]:
        cards = await self.resolve(PRODUCT_CARDS)
        card = cards.item(index).handle
        return {
            "title": (await card.inner_text()).strip(),
            "has_image": await card.locator("img").count() > 0,
        }

    async def select_first_product(self):
        """Open the first known product and wait for its detail page."""
        try:
            link = await self.resolve(FIRST_PRODUCT_LINK, timeout_ms=5000)
        except ElementNotFoundError:
            texts = await self.page.evaluate(
                "() => Array.from(document.querySelectorAll('a')).map(a => a.innerText)"
            )
            logger.info("[Listing] visible links: " + " | ".join(t for t in texts if t))
            raise
        return await self.session.navigator.navigate(link, PRODUCT_DETAIL_READY)

    async def filter_by_category(self, name: str):
        return await self.follow(category_link(name), LISTING_READY)

    async def filter_by_color(self, name: str):
        """Apply a color filter; raises ElementNotFoundError when the site has none."""
        return await self.follow(color_filter(name), LISTING_READY, timeout_ms=5000)

    async def clear_filters(self):
        if await self.is_present(ALL_PRODUCTS_LINK, timeout_ms=2000):
            return await self.follow(ALL_PRODUCTS_LINK, LISTING_READY)
        logger.info("[Listing] no 'All' link, loading the listing address")
        await self.visit()
        return await self.is_loaded()
