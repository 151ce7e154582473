"""Tests for navigation mode selection and execution."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from fakes import FakeNode, timeout_error
from littmann_e2e.core.errors import NavigationError, ReadinessTimeoutError
from littmann_e2e.core.ir.model import (
    BoundingState,
    ReadinessCondition,
    ResolvedElement,
    SemanticTarget,
    by_css,
    by_role,
)
from littmann_e2e.core.nav.navigator import NavigationCoordinator, direct_address
from littmann_e2e.core.readiness.detector import ReadinessDetector
from littmann_e2e.core.resolver.resolve import ElementResolver

CURRENT = "https://shop.example/3M/en_IN/home/"

LINK = SemanticTarget.of("products link", by_role("link", "Products", exact=True))
BUTTON = SemanticTarget.of("menu toggle", by_css("button.menu"))


@pytest.fixture
def resolver(fake_page):
    return ElementResolver(fake_page, default_timeout_ms=200, poll_interval_ms=10)


@pytest.fixture
def navigator(fake_page, resolver):
    readiness = ReadinessDetector(fake_page, resolver, default_timeout_ms=200, poll_interval_ms=10)
    return NavigationCoordinator(fake_page, readiness, click_grace_ms=50, navigation_timeout_ms=1000)


class TestDirectAddress:
    @pytest.mark.parametrize(
        "href,expected",
        [
            ("/3M/en_IN/p/", "https://shop.example/3M/en_IN/p/"),
            ("../p/", "https://shop.example/3M/en_IN/p/"),
            ("https://other.example/x", "https://other.example/x"),
            ("/3M/en_IN/p/#top", "https://shop.example/3M/en_IN/p/#top"),
        ],
    )
    def test_usable_hrefs_are_made_absolute(self, href, expected):
        assert direct_address(href, CURRENT) == expected

    @pytest.mark.parametrize(
        "href",
        [None, "", "   ", "#", "#main", "javascript:void(0)", "JavaScript:;", "mailto:a@b.c", "tel:123", CURRENT + "#x"],
    )
    def test_non_navigating_hrefs_need_a_click(self, href):
        assert direct_address(href, CURRENT) is None


class TestModeSelection:
    @pytest.mark.asyncio
    async def test_href_navigates_directly_without_click(self, fake_page, resolver, navigator):
        fake_page.add(LINK.candidates[0], FakeNode(attrs={"href": "/3M/en_IN/p/"}))
        element = await resolver.resolve(LINK)

        outcome = await navigator.navigate(element)

        assert outcome.intent.mode == "direct-address"
        assert outcome.url == "https://shop.example/3M/en_IN/p/"
        assert fake_page.clicks() == []
        assert ("goto", "https://shop.example/3M/en_IN/p/") in fake_page.calls

    @pytest.mark.asyncio
    async def test_same_plan_every_time(self, fake_page, resolver, navigator):
        fake_page.add(LINK.candidates[0], FakeNode(attrs={"href": "/3M/en_IN/p/"}))
        element = await resolver.resolve(LINK)

        first = await navigator.plan(element)
        second = await navigator.plan(element)

        assert (first.mode, first.target_address) == (second.mode, second.target_address)

    @pytest.mark.asyncio
    async def test_no_href_simulates_click(self, fake_page, resolver, navigator):
        fake_page.add(BUTTON.candidates[0])
        element = await resolver.resolve(BUTTON)

        outcome = await navigator.navigate(element)

        assert outcome.intent.mode == "simulate-click"
        assert outcome.intent.target_address is None
        assert outcome.escalated is False
        assert [c[0] for c in fake_page.clicks()] == ["click"]
        assert not any(c[0] == "goto" for c in fake_page.calls)

    @pytest.mark.asyncio
    async def test_fragment_href_simulates_click(self, fake_page, resolver, navigator):
        fake_page.add(LINK.candidates[0], FakeNode(attrs={"href": "#"}))
        element = await resolver.resolve(LINK)

        outcome = await navigator.navigate(element)

        assert outcome.intent.mode == "simulate-click"

    @pytest.mark.asyncio
    async def test_unreadable_href_plans_click(self, navigator):
        handle = MagicMock()
        handle.get_attribute = AsyncMock(side_effect=PlaywrightError("element is not attached"))
        element = ResolvedElement(
            target=LINK,
            handle=handle,
            matched_candidate_index=0,
            bounding_state=BoundingState(visible=True, attached=True),
        )

        intent = await navigator.plan(element)

        assert intent.mode == "simulate-click"


class TestClickEscalation:
    @pytest.mark.asyncio
    async def test_blocked_click_escalates_to_dispatch(self, fake_page, resolver, navigator):
        fake_page.add(BUTTON.candidates[0], FakeNode(click_error=timeout_error()))
        element = await resolver.resolve(BUTTON)

        outcome = await navigator.navigate(element)

        assert outcome.escalated is True
        assert [c[0] for c in fake_page.clicks()] == ["click", "dispatch"]

    @pytest.mark.asyncio
    async def test_failed_dispatch_raises_navigation_error(self, fake_page, resolver, navigator):
        fake_page.add(
            BUTTON.candidates[0],
            FakeNode(click_error=timeout_error(), dispatch_error=PlaywrightError("detached")),
        )
        element = await resolver.resolve(BUTTON)

        with pytest.raises(NavigationError) as exc_info:
            await navigator.navigate(element)

        assert exc_info.value.mode == "simulate-click"


class TestDirectFailure:
    @pytest.mark.asyncio
    async def test_goto_failure_does_not_fall_back_to_click(self, fake_page, resolver, navigator):
        fake_page.add(LINK.candidates[0], FakeNode(attrs={"href": "/3M/en_IN/p/"}))
        fake_page.goto_error = PlaywrightError("net::ERR_CONNECTION_RESET")
        element = await resolver.resolve(LINK)

        with pytest.raises(NavigationError) as exc_info:
            await navigator.navigate(element)

        assert exc_info.value.mode == "direct-address"
        assert fake_page.clicks() == []


class TestDestination:
    @pytest.mark.asyncio
    async def test_destination_readiness_is_awaited(self, fake_page, resolver, navigator):
        heading = SemanticTarget.of("listing heading", by_role("heading", level=1))
        fake_page.add(LINK.candidates[0], FakeNode(attrs={"href": "/3M/en_IN/p/"}))
        fake_page.on_goto = lambda url: fake_page.add(heading.candidates[0])
        element = await resolver.resolve(LINK)

        outcome = await navigator.navigate(
            element, [ReadinessCondition("listing heading visible", target=heading, url="/p/")]
        )

        assert outcome.ready is not None
        assert outcome.ready.fired == "listing heading visible"

    @pytest.mark.asyncio
    async def test_destination_never_ready_raises(self, fake_page, resolver, navigator):
        fake_page.add(BUTTON.candidates[0])
        element = await resolver.resolve(BUTTON)

        with pytest.raises(ReadinessTimeoutError):
            await navigator.navigate(element, [ReadinessCondition("never", url="/nowhere/")])
