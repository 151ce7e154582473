"""Tests for failure classification and the outcome log."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from littmann_e2e.core.errors import (
    AmbiguousMatchError,
    ElementNotFoundError,
    NavigationError,
    ReadinessTimeoutError,
)
from littmann_e2e.runtime.outcomes import CaseOutcome, OutcomeLog, classify_failure
from littmann_e2e.runtime.storage import case_screenshot_dir, outcomes_path, safe_case_id


@pytest.mark.parametrize(
    "exc,kind",
    [
        (ElementNotFoundError("Products menu", ["role=link"], 100), "element_not_found"),
        (AmbiguousMatchError("title", 2, "css=h1"), "ambiguous_match"),
        (ReadinessTimeoutError(["a", "b"], 100), "readiness_timeout"),
        (NavigationError("simulate-click", "detached"), "navigation_error"),
        (AssertionError("boom"), "assertion"),
        (RuntimeError("boom"), "error"),
    ],
)
def test_classify_failure(exc, kind):
    assert classify_failure(exc)[0] == kind


def test_not_found_diagnostics_name_the_target():
    exc = ElementNotFoundError("Products menu", ["role=link[name=\"Products\"]", "text=\"Products\""], 100)

    _, diagnostics = classify_failure(exc)

    assert diagnostics["target"] == "Products menu"
    assert len(diagnostics["tried"]) == 2
    assert diagnostics["timeout_ms"] == 100


def test_record_and_dump(tmp_path: Path):
    log = OutcomeLog()
    log.record("tests/e2e/test_search.py::test_ok", "passed", 1.5)
    failed = log.record(
        "tests/e2e/test_search.py::test_bad",
        "failed",
        2.0,
        ReadinessTimeoutError(["result grid visible"], 10000),
    )

    assert failed.failure_kind == "readiness_timeout"
    assert "result grid visible" in failed.message

    path = outcomes_path(tmp_path)
    log.dump(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [d["outcome"] for d in data] == ["passed", "failed"]
    assert CaseOutcome.model_validate(data[1]).diagnostics["timeout_ms"] == 10000


def test_screenshot_dir_is_created(tmp_path: Path):
    screenshots = case_screenshot_dir(tmp_path, "tests/e2e/test_nav.py::test_menu[Products]")

    assert screenshots.is_dir()
    assert [p.name for p in tmp_path.iterdir()] == ["screenshots"]
    assert screenshots.name == "tests_e2e_test_nav.py_test_menu_Products"


def test_safe_case_id_never_empty():
    assert safe_case_id("::") == "case"
