from __future__ import annotations

import re

from ..core.ir.model import (
    ReadinessCondition,
    ReadinessSet,
    SemanticTarget,
    by_css,
    by_role,
)
from .base import BasePage
from .components.header import Header

PRODUCT_TITLE = SemanticTarget.of("product title", by_css("h1"))

# The country crumb is the most stable breadcrumb entry; the container is the fallback
BREADCRUMB = SemanticTarget.of(
    "breadcrumb",
    by_role("link", "India", exact=True),
    by_css('nav[aria-label="Breadcrumb"], .breadcrumbs, nav.breadcrumbs'),
)

PRODUCT_IMAGE = SemanticTarget.of(
    "product image",
    by_css(".product-image"),
    by_css(".main-image"),
    by_css('img[alt*="Littmann"]'),
)

IMAGE_THUMBNAILS = SemanticTarget.of(
    "image thumbnails", by_css(".thumbnail, .image-thumb"), collection=True
)

SPECIFICATIONS = SemanticTarget.of(
    "specifications section",
    by_css('[id*="spec"], [class*="spec"], section', has_text=re.compile(r"specification|technical|details", re.IGNORECASE)),
)

RESOURCES = SemanticTarget.of(
    "resources section",
    by_css('[id*="resource"], section', has_text=re.compile(r"resource|download|brochure", re.IGNORECASE)),
)

RELATED_PRODUCTS = SemanticTarget.of(
    "related products section",
    by_css("section, div", has_text=re.compile(r"you may also like|related|recommended", re.IGNORECASE)),
)

REVIEWS = SemanticTarget.of(
    "reviews section",
    by_css('[id*="review"], section', has_text=re.compile(r"review|rating", re.IGNORECASE)),
)

WHERE_TO_BUY_BUTTON = SemanticTarget.of(
    "where to buy button", by_role("link", re.compile("where to buy", re.IGNORECASE))
)

ALL_LINKS = SemanticTarget.of("page links", by_css("a[href]"), collection=True)

PRODUCT_DETAIL_READY = ReadinessSet.any_of(
    ReadinessCondition("product title visible", target=PRODUCT_TITLE),
)

MOBILE_VIEWPORT = {"width": 375, "height": 667}


class ProductDetailPage(BasePage):
    ready_when = PRODUCT_DETAIL_READY

    def __init__(self, session):
        super().__init__(session)
        self.header = Header(session)

    async def title(self) -> str:
        element = await self.resolve(PRODUCT_TITLE)
        return (await element.handle.inner_text()).strip()

    async def verify_breadcrumb(self) -> int:
        """Resolve the breadcrumb; returns the index of the candidate that matched."""
        element = await self.resolve(BREADCRUMB, timeout_ms=5000)
        return element.matched_candidate_index

    async def has_product_image(self) -> bool:
        return await self.is_present(PRODUCT_IMAGE)

    async def has_specifications(self) -> bool:
        return await self.is_present(SPECIFICATIONS)

    async def has_resources(self) -> bool:
        return await self.is_present(RESOURCES)

    async def has_related_products(self) -> bool:
        return await self.is_present(RELATED_PRODUCTS)

    async def has_reviews(self) -> bool:
        return await self.is_present(REVIEWS)

    async def click_image_thumbnail(self, index: int) -> None:
        thumbs = await self.resolve(IMAGE_THUMBNAILS)
        await thumbs.item(index).handle.click()
        await self.page.wait_for_timeout(500)

    async def open_where_to_buy(self, destination=None):
        return await self.follow(WHERE_TO_BUY_BUTTON, destination)

    async def open_resource_link(self, index: int = 0) -> None:
        section = await self.resolve(RESOURCES)
        await section.handle.locator("a").nth(index).click()

    async def all_links(self) -> list[str]:
        links = await self.session.resolver.probe(ALL_LINKS)
        if links is None:
            return []
        hrefs: list[str] = []
        for i in range(links.match_count):
            href = await links.item(i).handle.get_attribute("href")
            if href:
                hrefs.append(href)
        return hrefs

    async def set_mobile_viewport(self) -> None:
        await self.page.set_viewport_size(MOBILE_VIEWPORT)

    async def has_horizontal_scrollbar(self) -> bool:
        return await self.page.evaluate(
            "() => document.documentElement.scrollWidth > document.documentElement.clientWidth"
        )
