"""Print the shape of a result document. Debugging aid only."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from siteaudit import config
from siteaudit.models.results import read_document

logger = logging.getLogger(__name__)


def _first(items) -> dict | None:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return None


def inspect_results(path: str | Path = config.RESULTS_FILE, console: Console | None = None) -> dict:
    """Print top-level keys, suite count and a sample nested test.

    Returns what was printed as a dict. Raises ResultsNotFoundError if the
    file is missing.
    """
    console = console or Console()
    data = read_document(path)
    summary: dict = {"keys": list(data.keys()), "suite_count": 0}

    console.print(f"Top-level keys: {escape(str(summary['keys']))}")

    suites = data.get("suites") or []
    first_suite = _first(suites)
    if first_suite is None:
        logger.error("No test suites found in %s", path)
        return summary

    summary["suite_count"] = len(suites)
    summary["suite_keys"] = list(first_suite.keys())
    console.print(f"Found {len(suites)} top-level suite(s)")
    console.print(f"Sample suite keys: {escape(str(summary['suite_keys']))}")

    nested_suite = _first(first_suite.get("suites"))
    tests = (nested_suite or {}).get("tests") or []
    sample = _first(tests)
    if sample is None:
        logger.warning("No nested tests found inside suites")
        return summary

    results = sample.get("results") or []
    summary["test_count"] = len(tests)
    summary["sample_title"] = sample.get("title")
    summary["sample_status"] = results[0].get("status") if results else None
    console.print(f"Found {len(tests)} test(s)")
    console.print(f"Sample test title: {escape(str(summary['sample_title']))}")
    console.print(f"Status: {summary['sample_status']}")
    return summary
