"""Render the result document as a static HTML report.

One block per test: title, color-coded status and the screenshot the
audit saved under the test's sanitized title. The screenshot is only
referenced by path; a missing file shows the alt text.
"""

from __future__ import annotations

import html
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from siteaudit import config
from siteaudit.models.results import ResultDocument, display_title, load_results, screenshot_name

logger = logging.getLogger(__name__)

PostRenderHook = Callable[[Path], None]

STATUS_COLORS = {"passed": "green", "failed": "red"}

_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Site Audit Report</title>
  <style>
    body { font-family: Arial, sans-serif; background-color: #f9f9f9; padding: 20px; }
    h1 { text-align: center; }
    .test-case { background: #fff; border-radius: 8px; box-shadow: 0 0 10px rgba(0,0,0,0.1); margin-bottom: 20px; padding: 20px; }
    .status { font-weight: bold; }
    .screenshot { width: 300px; margin-top: 10px; border: 1px solid #ddd; }
    .passed { color: green; }
    .failed { color: red; }
  </style>
</head>
<body>
  <h1>Site Audit Report</h1>
"""

_FOOT = "</body></html>\n"


@dataclass
class ReportEntry:
    title: str
    status: str
    screenshot: str


def collect_report_entries(document: ResultDocument, screenshots_dir: str | Path = config.SCREENSHOTS_DIR) -> list[ReportEntry]:
    """Walk suites -> specs -> tests, three levels and no deeper."""
    prefix = Path(screenshots_dir).as_posix()
    entries = []
    for suite in document.suites:
        for spec in suite.specs:
            for test in spec.tests:
                title = display_title(test.title if test.title is not None else spec.title)
                entries.append(ReportEntry(
                    title=title,
                    status=test.status,
                    screenshot=f"{prefix}/{screenshot_name(title)}",
                ))
    return entries


def render_entry(entry: ReportEntry) -> str:
    status = html.escape(entry.status)
    return (
        '  <div class="test-case">\n'
        f"    <h2>{html.escape(entry.title)}</h2>\n"
        f'    <p class="status {status}">Status: {status.upper()}</p>\n'
        f'    <img src="{html.escape(entry.screenshot, quote=True)}" class="screenshot" alt="Screenshot not found">\n'
        "  </div>\n"
    )


def render_report(document: ResultDocument, screenshots_dir: str | Path = config.SCREENSHOTS_DIR) -> str:
    blocks = [render_entry(e) for e in collect_report_entries(document, screenshots_dir)]
    return _HEAD + "".join(blocks) + _FOOT


def open_in_viewer(path: Path):
    """Open the report with the default application. Windows only, best effort."""
    if sys.platform != "win32":
        return
    try:
        os.startfile(str(path))  # type: ignore[attr-defined]
    except OSError as e:
        logger.warning("Could not open %s: %s", path, e)


def generate_report(
    results_path: str | Path = config.RESULTS_FILE,
    output_path: str | Path = config.REPORT_FILE,
    screenshots_dir: str | Path = config.SCREENSHOTS_DIR,
    post_render: PostRenderHook | None = open_in_viewer,
) -> list[ReportEntry]:
    """Read the result document and overwrite the HTML report.

    Raises ResultsNotFoundError when the document is missing; a malformed
    document raises its parse error.
    """
    document = load_results(results_path)
    Path(screenshots_dir).mkdir(parents=True, exist_ok=True)

    entries = collect_report_entries(document, screenshots_dir)
    output_path = Path(output_path)
    output_path.write_text(render_report(document, screenshots_dir), encoding="utf-8")
    logger.info("Report generated: %s", output_path)

    if post_render is not None:
        try:
            post_render(output_path)
        except Exception as e:
            logger.warning("Post-render hook failed: %s", e)
    return entries


def print_summary(entries: list[ReportEntry], console: Console | None = None):
    console = console or Console()
    if not entries:
        console.print("  [yellow]No tests found in the result document.[/yellow]\n")
        return

    table = Table(title="Audit Results", show_header=True, header_style="bold", padding=(0, 1))
    table.add_column("Test", min_width=40)
    table.add_column("Status", width=12)
    table.add_column("Screenshot", max_width=60)

    for entry in entries:
        color = STATUS_COLORS.get(entry.status)
        status = f"[{color}]{entry.status.upper()}[/{color}]" if color else entry.status.upper()
        table.add_row(escape(entry.title), status, escape(entry.screenshot))

    console.print(table)
    passed = sum(1 for e in entries if e.status == "passed")
    console.print(f"  {passed}/{len(entries)} passed\n")
