"""Tests for the result document model."""

import json
from pathlib import Path

import pytest

from siteaudit.errors import ResultsNotFoundError
from siteaudit.models.results import (
    ResultDocument,
    display_title,
    load_results,
    screenshot_name,
)


def test_display_title_joins_title_path() -> None:
    """A list title is joined with single spaces."""
    assert display_title(["CA site", "Home page", "verification"]) == "CA site Home page verification"


def test_display_title_plain_string() -> None:
    assert display_title("Home page verification") == "Home page verification"


def test_display_title_none() -> None:
    assert display_title(None) == ""


def test_screenshot_name_replaces_spaces() -> None:
    title = display_title(["Full audit", "for CA site"])
    assert screenshot_name(title) == "Full-audit-for-CA-site.png"


def test_screenshot_name_failure_suffix() -> None:
    assert screenshot_name("Home page verification", failure=True) == "Home-page-verification-failure.png"


def test_first_result_is_authoritative() -> None:
    document = ResultDocument.model_validate({
        "suites": [{"specs": [{"tests": [{"results": [
            {"status": "failed"},
            {"status": "passed"},
        ]}]}]}],
    })
    assert document.suites[0].specs[0].tests[0].status == "failed"


def test_status_unknown_without_results() -> None:
    document = ResultDocument.model_validate({"suites": [{"specs": [{"tests": [{"title": "t"}]}]}]})
    assert document.suites[0].specs[0].tests[0].status == "unknown"


def test_null_lists_are_empty() -> None:
    """Null collections load as empty lists instead of failing."""
    document = ResultDocument.model_validate({
        "suites": [{"specs": None, "suites": None}],
    })
    assert document.suites[0].specs == []
    assert document.suites[0].suites == []


def test_playwright_aliases_and_extra_keys() -> None:
    document = ResultDocument.model_validate({
        "config": {"version": "1.50"},
        "suites": [{"specs": [{"tests": [{
            "projectName": "chromium",
            "results": [{"status": "timedOut", "startTime": "2025-01-01T00:00:00Z", "duration": 60000}],
        }]}]}],
    })
    test = document.suites[0].specs[0].tests[0]
    assert test.project_name == "chromium"
    assert test.results[0].start_time == "2025-01-01T00:00:00Z"
    assert document.model_extra == {"config": {"version": "1.50"}}


def test_load_results_missing(tmp_path: Path) -> None:
    with pytest.raises(ResultsNotFoundError) as exc_info:
        load_results(tmp_path / "missing.json")
    assert "missing.json" in str(exc_info.value)


def test_load_results_malformed(tmp_path: Path) -> None:
    """Parse errors propagate unchanged."""
    path = tmp_path / "results.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_results(path)


def test_load_results(write_document) -> None:
    path = write_document({"suites": [{"title": "AU.audit.py", "specs": []}]})
    document = load_results(path)
    assert document.suites[0].title == "AU.audit.py"
