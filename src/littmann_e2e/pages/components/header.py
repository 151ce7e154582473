"""Site header: search box and top navigation menus."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ...core.ir.model import SemanticTarget, by_placeholder, by_role, by_text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ...core.ir.model import NavigationOutcome, ReadinessCondition, ReadinessSet
    from ..base import PageSession

SEARCH_INPUT = SemanticTarget.of(
    "search input",
    by_role("searchbox", re.compile("search", re.IGNORECASE)),
    by_placeholder("Search"),
)

SEARCH_BUTTON = SemanticTarget.of(
    "search button",
    by_role("button", re.compile("search", re.IGNORECASE)),
)

MENU_NAMES = (
    "Products",
    "Our Innovation",
    "Tools & Resources",
    "Education & Training",
    "Latest News",
    "Where to Buy",
)


def menu_target(name: str) -> SemanticTarget:
    """Top navigation entry: an exact link first, the bare label as fallback."""
    return SemanticTarget.of(
        f"{name} menu",
        by_role("link", name, exact=True),
        by_text(name, exact=True),
    )


def submenu_target(name: str) -> SemanticTarget:
    label = re.compile(re.escape(name), re.IGNORECASE)
    return SemanticTarget.of(
        f"{name} submenu entry",
        by_role("link", label),
        by_role("menuitem", label),
    )


MENUS = {name: menu_target(name) for name in MENU_NAMES}


class Header:
    def __init__(self, session: PageSession):
        self.session = session
        self.resolver = session.resolver

    async def search(self, query: str) -> None:
        """Type ``query`` into the search box and submit with Enter."""
        box = await self.resolver.resolve(SEARCH_INPUT)
        await box.handle.fill(query)
        await box.handle.press("Enter")

    async def type_search(self, text: str) -> None:
        box = await self.resolver.resolve(SEARCH_INPUT)
        await box.handle.click()
        await box.handle.fill(text)

    async def clear_search(self) -> None:
        box = await self.resolver.resolve(SEARCH_INPUT)
        await box.handle.fill("")

    async def submit_search(self) -> None:
        box = await self.resolver.resolve(SEARCH_INPUT)
        await box.handle.press("Enter")

    async def search_value(self) -> str:
        box = await self.resolver.resolve(SEARCH_INPUT)
        return await box.handle.input_value()

    async def search_placeholder(self) -> str | None:
        box = await self.resolver.resolve(SEARCH_INPUT)
        return await box.handle.get_attribute("placeholder")

    async def is_search_visible(self) -> bool:
        return await self.resolver.is_present(SEARCH_INPUT, self.resolver.default_timeout_ms) and (
            await self.resolver.is_present(SEARCH_BUTTON, self.resolver.default_timeout_ms)
        )

    async def is_menu_visible(self, name: str) -> bool:
        return await self.resolver.is_present(MENUS[name], self.resolver.default_timeout_ms)

    async def open_menu(
        self,
        name: str,
        destination: ReadinessSet | Iterable[ReadinessCondition] | None = None,
    ) -> NavigationOutcome:
        """Open a top-level menu entry, following its address when it has one."""
        element = await self.resolver.resolve(MENUS[name])
        return await self.session.navigator.navigate(element, destination)

    async def hover_menu(self, name: str) -> None:
        element = await self.resolver.resolve(MENUS[name])
        await element.handle.hover()

    async def open_submenu(
        self,
        name: str,
        destination: ReadinessSet | Iterable[ReadinessCondition] | None = None,
    ) -> NavigationOutcome:
        element = await self.resolver.resolve(submenu_target(name))
        return await self.session.navigator.navigate(element, destination)
