"""Typed failures raised by the resolution and readiness layer.

Each error carries enough context (target name, candidates, conditions,
mode) for a test report to classify the failure without parsing messages.
"""

from __future__ import annotations

from collections.abc import Sequence


class LittmannE2EError(Exception):
    """Base class for every failure raised by the core."""


class ElementNotFoundError(LittmannE2EError):
    """No candidate selector matched a visible element within the budget."""

    def __init__(self, target_name: str, tried: Sequence[str], timeout_ms: int | None = None):
        self.target_name = target_name
        self.tried = list(tried)
        self.timeout_ms = timeout_ms
        budget = f" within {timeout_ms}ms" if timeout_ms is not None else ""
        super().__init__(
            f"'{target_name}' not found{budget}; tried: " + "; ".join(self.tried)
        )


class AmbiguousMatchError(LittmannE2EError):
    """A target that requires a unique match resolved to several elements."""

    def __init__(self, target_name: str, count: int, candidate: str):
        self.target_name = target_name
        self.count = count
        self.candidate = candidate
        super().__init__(f"'{target_name}' matched {count} visible elements via {candidate}")


class ReadinessTimeoutError(LittmannE2EError):
    """None of the readiness conditions fired within the budget."""

    def __init__(self, conditions: Sequence[str], timeout_ms: int):
        self.conditions = list(conditions)
        self.timeout_ms = timeout_ms
        super().__init__(
            f"none of [{', '.join(self.conditions)}] became true within {timeout_ms}ms"
        )


class NavigationError(LittmannE2EError):
    """The chosen navigation action failed outright."""

    def __init__(self, mode: str, cause: BaseException | str):
        self.mode = mode
        self.cause = cause
        super().__init__(f"{mode} navigation failed: {cause}")
