"""Tests for the debug inspector."""

from pathlib import Path

import pytest

from siteaudit.core.inspector import inspect_results
from siteaudit.errors import ResultsNotFoundError


def test_nested_test_sample(write_document, console) -> None:
    path = write_document({
        "config": {},
        "suites": [{
            "title": "tests",
            "specs": [],
            "suites": [{"title": "CA", "tests": [
                {"title": "Home page verification", "results": [{"status": "passed"}]},
                {"title": "Business page verification", "results": []},
            ]}],
        }],
        "stats": {},
    })

    summary = inspect_results(path, console)

    assert summary["keys"] == ["config", "suites", "stats"]
    assert summary["suite_count"] == 1
    assert summary["suite_keys"] == ["title", "specs", "suites"]
    assert summary["test_count"] == 2
    assert summary["sample_title"] == "Home page verification"
    assert summary["sample_status"] == "passed"
    output = console.file.getvalue()
    assert "Found 1 top-level suite(s)" in output
    assert "Sample test title: Home page verification" in output


def test_no_nested_tests_warns(write_document, console, caplog: pytest.LogCaptureFixture) -> None:
    path = write_document({"suites": [{"title": "AU.audit.py", "specs": [{"title": "x", "tests": []}]}]})

    summary = inspect_results(path, console)

    assert "sample_title" not in summary
    assert "No nested tests found inside suites" in caplog.text


def test_no_suites(write_document, console, caplog: pytest.LogCaptureFixture) -> None:
    path = write_document({"suites": []})

    summary = inspect_results(path, console)

    assert summary["suite_count"] == 0
    assert "No test suites found" in caplog.text


def test_missing_file(tmp_path: Path, console) -> None:
    with pytest.raises(ResultsNotFoundError):
        inspect_results(tmp_path / "results.json", console)
