"""Tests for the command line entry point."""

import json
from pathlib import Path

import pytest

from audit import main


def test_report_missing_input_exits_1(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    output = tmp_path / "report.html"

    code = main(["report", "--results", str(tmp_path / "results.json"), "--output", str(output), "--no-open"])

    assert code == 1
    assert "Test results not found" in capsys.readouterr().err
    assert not output.exists()


def test_inspect_missing_input_exits_1(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    code = main(["inspect", "--results", str(tmp_path / "results.json")])

    assert code == 1
    assert "Test results not found" in capsys.readouterr().err


def test_report_generates_file(tmp_path: Path, write_document, spec_document) -> None:
    results = write_document(spec_document({"title": "Home", "results": [{"status": "passed"}]}))
    output = tmp_path / "report.html"

    code = main([
        "report", "--results", str(results), "--output", str(output),
        "--screenshots", str(tmp_path / "screenshots"), "--no-open",
    ])

    assert code == 0
    assert "Status: PASSED" in output.read_text(encoding="utf-8")


def test_inspect_exits_0(write_document) -> None:
    results = write_document({"suites": []})

    assert main(["inspect", "--results", str(results)]) == 0


def test_run_unknown_suite(capsys: pytest.CaptureFixture) -> None:
    assert main(["run", "nope"]) == 1
    assert "Unknown suite 'nope'" in capsys.readouterr().err


def test_list(capsys: pytest.CaptureFixture) -> None:
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "forbes-ca-pages" in out
    assert "usat" in out


def test_list_json(capsys: pytest.CaptureFixture) -> None:
    assert main(["list", "--json"]) == 0
    suites = json.loads(capsys.readouterr().out)
    ca_pages = next(s for s in suites if s["name"] == "forbes-ca-pages")
    assert ca_pages["challenge_guard"] is True
    assert ca_pages["scenarios"][0]["heading"]["target"] == {"kind": "css", "selector": "h1"}
