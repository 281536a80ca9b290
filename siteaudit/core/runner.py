"""Runs audit suites in a real browser and writes the result document.

Every scenario gets its own browser context and page, runs under the
site's wall-clock budget and ends up as one spec in
test-results/results.json, in the same shape Playwright's JSON reporter
produces. That file is what the report generator and inspector read.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

from playwright.async_api import Page, async_playwright

from siteaudit import config
from siteaudit.core.audit import run_audit
from siteaudit.detectors.challenge import KeywordChallengeDetector
from siteaudit.errors import ChallengeTimeoutError
from siteaudit.models.scenario import ScenarioConfig, SiteConfig
from siteaudit.models.types import Annotation, PerformanceEntry, TestStatus

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict], None]

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class ScenarioRun:
    scenario: ScenarioConfig
    status: TestStatus
    started_at: datetime
    duration_ms: int = 0
    error: str | None = None
    annotations: list[Annotation] = field(default_factory=list)
    performance: list[PerformanceEntry] = field(default_factory=list)

    def to_spec(self, file: str) -> dict:
        result = {
            "status": self.status.value,
            "duration": self.duration_ms,
            "startTime": self.started_at.isoformat(),
        }
        if self.error:
            result["error"] = {"message": self.error}
        return {
            "title": self.scenario.title,
            "file": file,
            "ok": self.status == TestStatus.PASSED,
            "tests": [{
                "title": self.scenario.title,
                "projectName": "chromium",
                "annotations": [a.to_dict() for a in self.annotations],
                "performance": [p.to_dict() for p in self.performance],
                "results": [result],
            }],
        }


@dataclass
class SiteRun:
    site: SiteConfig
    runs: list[ScenarioRun] = field(default_factory=list)

    def to_suite(self) -> dict:
        return {
            "title": self.site.file,
            "file": self.site.file,
            "specs": [r.to_spec(self.site.file) for r in self.runs],
            "suites": [],
        }


def build_document(site_runs: list[SiteRun], started_at: datetime, duration_ms: int) -> dict:
    runs = [r for s in site_runs for r in s.runs]
    return {
        "config": {"reporter": "siteaudit", "version": 1},
        "suites": [s.to_suite() for s in site_runs],
        "stats": {
            "startTime": started_at.isoformat(),
            "duration": duration_ms,
            "expected": sum(1 for r in runs if r.status == TestStatus.PASSED),
            "unexpected": sum(1 for r in runs if r.status in (TestStatus.FAILED, TestStatus.TIMED_OUT)),
            "skipped": sum(1 for r in runs if r.status == TestStatus.SKIPPED),
            "flaky": 0,
        },
    }


def write_results(document: dict, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


class AuditRunner:
    """Executes the scenarios of one or more sites, one after another."""

    def __init__(
        self,
        sites: list[SiteConfig],
        results_file: str | Path = config.RESULTS_FILE,
        screenshots_dir: str | Path = config.SCREENSHOTS_DIR,
        headful: bool = config.HEADFUL,
        on_progress: ProgressCallback | None = None,
    ):
        self.sites = sites
        self.results_file = Path(results_file)
        self.screenshots_dir = Path(screenshots_dir)
        self._headful = headful
        self._on_progress = on_progress or (lambda *_: None)

    async def run(self) -> dict:
        started_at = datetime.now()
        t0 = time.monotonic()
        site_runs: list[SiteRun] = []

        async with async_playwright() as pw:
            browser = await pw.chromium.launch(headless=not self._headful)
            try:
                for site in self.sites:
                    site_run = SiteRun(site=site)
                    for scenario in site.scenarios:
                        ctx = await browser.new_context(viewport=config.VIEWPORT, user_agent=USER_AGENT)
                        try:
                            page = await ctx.new_page()
                            site_run.runs.append(await self.run_scenario(page, scenario, site))
                        finally:
                            await ctx.close()
                    site_runs.append(site_run)
                    self._on_progress("suite_complete", {
                        "suite": site.name,
                        "passed": sum(1 for r in site_run.runs if r.status == TestStatus.PASSED),
                        "total": len(site_run.runs),
                    })
            finally:
                await browser.close()

        document = build_document(site_runs, started_at, int((time.monotonic() - t0) * 1000))
        write_results(document, self.results_file)
        logger.info("Results written to %s", self.results_file)
        return document

    async def run_scenario(self, page: Page, scenario: ScenarioConfig, site: SiteConfig) -> ScenarioRun:
        """Run one scenario under the site's time budget and classify the outcome."""
        self._on_progress("scenario_start", {"suite": site.name, "title": scenario.title, "url": scenario.url})
        run = ScenarioRun(scenario=scenario, status=TestStatus.PASSED, started_at=datetime.now())
        detector = KeywordChallengeDetector() if site.challenge_guard else None
        t0 = time.monotonic()

        try:
            outcome = await asyncio.wait_for(
                run_audit(page, scenario, site, self.screenshots_dir, challenge_detector=detector),
                timeout=site.timeout_s,
            )
            run.annotations = outcome.annotations
            run.performance = outcome.performance
        except ChallengeTimeoutError as e:
            run.status = TestStatus.FAILED
            run.error = str(e)
        except asyncio.TimeoutError:
            run.status = TestStatus.TIMED_OUT
            run.error = f"Test timeout of {site.timeout_s * 1000}ms exceeded."
        except Exception as e:
            run.status = TestStatus.FAILED
            run.error = str(e)[:2000]

        run.duration_ms = int((time.monotonic() - t0) * 1000)
        self._on_progress("scenario_complete", {
            "suite": site.name,
            "title": scenario.title,
            "status": run.status.value,
            "duration_ms": run.duration_ms,
            "error": run.error,
        })
        return run
