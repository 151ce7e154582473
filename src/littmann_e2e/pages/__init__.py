"""Page objects for the storefront.

Test scripts only talk to these classes; selectors stay inside the page
modules.
"""

from __future__ import annotations

from .base import BasePage, PageSession
from .components.footer import Footer
from .components.header import Header
from .contact_us import ContactUsPage
from .home import HomePage
from .product_detail import ProductDetailPage
from .product_listing import ProductListingPage
from .search_results import SearchResultsPage
from .where_to_buy import WhereToBuyPage
from .why_choose import WhyChoosePage

__all__ = [
    "BasePage",
    "ContactUsPage",
    "Footer",
    "Header",
    "HomePage",
    "PageSession",
    "ProductDetailPage",
    "ProductListingPage",
    "SearchResultsPage",
    "WhereToBuyPage",
    "WhyChoosePage",
]
