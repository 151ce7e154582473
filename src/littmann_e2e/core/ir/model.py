"""Locator, readiness and navigation IR shared by the core and the page objects."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Union

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

Pattern = Union[str, re.Pattern]

SelectorKind = Literal["role", "text", "placeholder", "label", "attribute", "css"]
NavigationMode = Literal["simulate-click", "direct-address"]


def describe_pattern(pattern: Pattern | None) -> str:
    if pattern is None:
        return ""
    if isinstance(pattern, re.Pattern):
        flags = "i" if pattern.flags & re.IGNORECASE else ""
        return f"/{pattern.pattern}/{flags}"
    return f'"{pattern}"'


@dataclass(frozen=True)
class SelectorSpec:
    """One concrete way to find a semantic target."""

    kind: SelectorKind
    pattern: Pattern | None = None  # accessible name, text, value or CSS depending on kind
    role: str | None = None  # ARIA role for kind="role"
    scope: str | None = None  # CSS of the containing region; hard filter
    exact: bool = False
    has_text: Pattern | None = None  # extra text filter on top of the match
    level: int | None = None  # heading level for role="heading"
    attribute: str | None = None  # attribute name for kind="attribute"

    def __post_init__(self) -> None:
        if self.kind == "role" and not self.role:
            raise ValueError("role selectors need a role")
        if self.kind == "attribute" and not self.attribute:
            raise ValueError("attribute selectors need an attribute name")
        if self.kind in ("text", "placeholder", "label", "css") and self.pattern is None:
            raise ValueError(f"{self.kind} selectors need a pattern")

    def describe(self) -> str:
        if self.kind == "role":
            body = f"role={self.role}"
            if self.pattern is not None:
                body += f"[name={describe_pattern(self.pattern)}]"
            if self.level is not None:
                body += f"[level={self.level}]"
        elif self.kind == "attribute":
            value = describe_pattern(self.pattern) if self.pattern is not None else "*"
            body = f"attribute[{self.attribute}={value}]"
        elif self.kind == "css":
            body = f"css={self.pattern}"
        else:
            body = f"{self.kind}={describe_pattern(self.pattern)}"
        if self.exact:
            body += "[exact]"
        if self.has_text is not None:
            body += f" has_text {describe_pattern(self.has_text)}"
        if self.scope:
            body = f"{self.scope} >> {body}"
        return body


def by_role(
    role: str,
    name: Pattern | None = None,
    *,
    exact: bool = False,
    level: int | None = None,
    scope: str | None = None,
) -> SelectorSpec:
    return SelectorSpec("role", pattern=name, role=role, exact=exact, level=level, scope=scope)


def by_text(text: Pattern, *, exact: bool = False, scope: str | None = None) -> SelectorSpec:
    return SelectorSpec("text", pattern=text, exact=exact, scope=scope)


def by_placeholder(text: Pattern, *, exact: bool = False, scope: str | None = None) -> SelectorSpec:
    return SelectorSpec("placeholder", pattern=text, exact=exact, scope=scope)


def by_label(text: Pattern, *, exact: bool = False, scope: str | None = None) -> SelectorSpec:
    return SelectorSpec("label", pattern=text, exact=exact, scope=scope)


def by_attribute(attribute: str, value: str | None = None, *, scope: str | None = None) -> SelectorSpec:
    return SelectorSpec("attribute", pattern=value, attribute=attribute, scope=scope)


def by_css(
    selector: str, *, has_text: Pattern | None = None, scope: str | None = None
) -> SelectorSpec:
    return SelectorSpec("css", pattern=selector, has_text=has_text, scope=scope)


@dataclass(frozen=True)
class SemanticTarget:
    """A named UI element and the ordered ways to find it."""

    name: str
    candidates: tuple[SelectorSpec, ...]
    collection: bool = False  # resolve to every visible match of the winning candidate
    unique: bool = False  # several visible matches raise instead of taking the first

    def __post_init__(self) -> None:
        if not self.candidates:
            raise ValueError(f"target '{self.name}' has no candidates")
        if self.collection and self.unique:
            raise ValueError(f"target '{self.name}' cannot be both collection and unique")
        object.__setattr__(self, "candidates", tuple(self.candidates))

    @classmethod
    def of(cls, name: str, *candidates: SelectorSpec, **kwargs: Any) -> SemanticTarget:
        return cls(name=name, candidates=tuple(candidates), **kwargs)

    def describe_candidates(self) -> list[str]:
        return [c.describe() for c in self.candidates]


@dataclass(frozen=True)
class BoundingState:
    visible: bool
    attached: bool
    enabled: bool = True

    @property
    def interactable(self) -> bool:
        return self.visible and self.attached and self.enabled


@dataclass
class ResolvedElement:
    """Outcome of resolution; valid only for the document it was resolved in."""

    target: SemanticTarget
    handle: Any  # playwright Locator pinned to the winning match
    matched_candidate_index: int
    bounding_state: BoundingState
    match_count: int = 1
    visible_indexes: tuple[int, ...] = ()  # collection positions among all matches

    @property
    def candidate(self) -> SelectorSpec:
        return self.target.candidates[self.matched_candidate_index]

    def item(self, index: int) -> ResolvedElement:
        """Pin one match of a collection target."""
        if not 0 <= index < self.match_count:
            raise IndexError(f"'{self.target.name}' has {self.match_count} match(es), no #{index}")
        return ResolvedElement(
            target=self.target,
            handle=self.handle.nth(self.visible_indexes[index] if self.visible_indexes else index),
            matched_candidate_index=self.matched_candidate_index,
            bounding_state=self.bounding_state,
        )


@dataclass(frozen=True)
class ReadinessCondition:
    """Named predicate over document state; every given requirement must hold."""

    name: str
    target: SemanticTarget | None = None  # element visible
    url: Pattern | None = None  # page URL matches
    title: Pattern | None = None  # document title matches

    def __post_init__(self) -> None:
        if self.target is None and self.url is None and self.title is None:
            raise ValueError(f"readiness condition '{self.name}' has no requirement")


@dataclass(frozen=True)
class ReadinessSet:
    """Unordered OR of readiness conditions sharing one timeout."""

    conditions: tuple[ReadinessCondition, ...]
    timeout_ms: int | None = None

    def __post_init__(self) -> None:
        if not self.conditions:
            raise ValueError("readiness set needs at least one condition")
        object.__setattr__(self, "conditions", tuple(self.conditions))

    @classmethod
    def any_of(cls, *conditions: ReadinessCondition, timeout_ms: int | None = None) -> ReadinessSet:
        return cls(conditions=tuple(conditions), timeout_ms=timeout_ms)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.conditions]

    def __iter__(self) -> Iterator[ReadinessCondition]:
        return iter(self.conditions)


@dataclass(frozen=True)
class ReadyResult:
    fired: str
    elapsed: float  # seconds


@dataclass
class NavigationIntent:
    mode: NavigationMode
    source_element: ResolvedElement
    target_address: str | None = None  # absolute URL, only for direct-address


@dataclass
class NavigationOutcome:
    intent: NavigationIntent
    url: str
    escalated: bool = False  # click was replaced by a dispatched event
    ready: ReadyResult | None = None


@dataclass(frozen=True)
class OverlayRule:
    """Dismiss action for a transient overlay such as a cookie banner."""

    target: SemanticTarget
    action: Literal["click", "dispatch"] = "click"
    name: str | None = None

    @property
    def key(self) -> str:
        return self.name or self.target.name


def conditions_of(conditions: ReadinessSet | Iterable[ReadinessCondition]) -> list[ReadinessCondition]:
    if isinstance(conditions, ReadinessSet):
        return list(conditions.conditions)
    return list(conditions)

