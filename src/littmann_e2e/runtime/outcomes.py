"""Per-test-case outcomes handed to the reporting side.

Every failure the core can raise maps to a stable ``failure_kind`` so a
report can group failures without parsing messages.
"""

from __future__ import annotations

import json
import threading
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

from ..core.errors import (
    AmbiguousMatchError,
    ElementNotFoundError,
    NavigationError,
    ReadinessTimeoutError,
)

if TYPE_CHECKING:
    from pathlib import Path

FailureKind = Literal[
    "element_not_found",
    "ambiguous_match",
    "readiness_timeout",
    "navigation_error",
    "assertion",
    "error",
]


class CaseOutcome(BaseModel):
    case_id: str = Field(..., description="pytest node id")
    outcome: Literal["passed", "failed", "skipped"]
    failure_kind: FailureKind | None = None
    elapsed_s: float = 0.0
    message: str | None = None
    diagnostics: dict[str, Any] = Field(
        default_factory=dict,
        description="Context attached by the failing error, e.g. target name and tried candidates",
    )


def classify_failure(exc: BaseException) -> tuple[FailureKind, dict[str, Any]]:
    """Map an exception to its failure kind and structured diagnostics."""
    if isinstance(exc, ElementNotFoundError):
        return "element_not_found", {
            "target": exc.target_name,
            "tried": exc.tried,
            "timeout_ms": exc.timeout_ms,
        }
    if isinstance(exc, AmbiguousMatchError):
        return "ambiguous_match", {
            "target": exc.target_name,
            "count": exc.count,
            "candidate": exc.candidate,
        }
    if isinstance(exc, ReadinessTimeoutError):
        return "readiness_timeout", {"conditions": exc.conditions, "timeout_ms": exc.timeout_ms}
    if isinstance(exc, NavigationError):
        return "navigation_error", {"mode": exc.mode, "cause": str(exc.cause)}
    if isinstance(exc, AssertionError):
        return "assertion", {}
    return "error", {"type": exc.__class__.__name__}


class OutcomeLog:
    """Thread-safe collection of outcomes for one test session."""

    def __init__(self) -> None:
        self._outcomes: list[CaseOutcome] = []
        self._lock = threading.Lock()

    def record(
        self,
        case_id: str,
        outcome: Literal["passed", "failed", "skipped"],
        elapsed_s: float = 0.0,
        exc: BaseException | None = None,
    ) -> CaseOutcome:
        kind = None
        diagnostics: dict[str, Any] = {}
        message = None
        if exc is not None:
            kind, diagnostics = classify_failure(exc)
            message = str(exc)
        item = CaseOutcome(
            case_id=case_id,
            outcome=outcome,
            failure_kind=kind,
            elapsed_s=elapsed_s,
            message=message,
            diagnostics=diagnostics,
        )
        with self._lock:
            self._outcomes.append(item)
        return item

    @property
    def outcomes(self) -> list[CaseOutcome]:
        with self._lock:
            return list(self._outcomes)

    def dump(self, path: Path) -> None:
        payload = [o.model_dump() for o in self.outcomes]
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
