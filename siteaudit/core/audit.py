"""Shared audit procedure for every scenario of every site.

Each scenario is described by a ScenarioConfig; run_audit executes it
the same way every time:

1. fix the viewport and log in-page script errors
2. navigate (retried), clearing a verification challenge if the site has one
3. assert the heading, scenario checks and interactions, common elements
4. capture the slowest resources and the elapsed time
5. take a full-page screenshot (a "-failure" one if anything above raised)
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from playwright.async_api import Page, expect

from siteaudit import config
from siteaudit.detectors.challenge import ChallengeDetector
from siteaudit.detectors.performance import PerformanceDetector
from siteaudit.models.results import screenshot_name
from siteaudit.models.scenario import (
    Check, CommonElements, Interaction, Locator, ScenarioConfig, SiteConfig,
)
from siteaudit.models.types import PerformanceEntry, ScenarioOutcome
from siteaudit.utils.retry_engine import retry_async

logger = logging.getLogger(__name__)


def resolve(page: Page, loc: Locator):
    """Turn a Locator description into a Playwright locator."""
    role_kwargs = {}
    if loc.name:
        role_kwargs["name"] = loc.name
    if loc.exact:
        role_kwargs["exact"] = True

    if loc.kind == "role":
        return page.get_by_role(loc.role, **role_kwargs)
    if loc.kind == "css":
        return page.locator(loc.selector)
    if loc.kind == "label":
        return page.get_by_label(loc.name)
    if loc.kind == "frame_role":
        return page.frame_locator(loc.frame).get_by_role(loc.role, **role_kwargs)
    raise ValueError(f"Unknown locator kind: {loc.kind}")


async def setup_page(page: Page, outcome: ScenarioOutcome | None = None):
    await page.set_viewport_size(config.VIEWPORT)

    def _on_page_error(error):
        logger.error("[RUNTIME ERROR] %s", error)
        if outcome is not None:
            outcome.runtime_errors.append(str(error)[:300])

    page.on("pageerror", _on_page_error)


async def run_check(page: Page, check: Check):
    target = resolve(page, check.target)
    if check.text:
        await expect(target).to_contain_text(check.text)
    else:
        await expect(target).to_be_visible()


async def perform(page: Page, interaction: Interaction):
    if interaction.action == "click":
        await resolve(page, interaction.target).click()
    elif interaction.action == "scroll":
        if interaction.target:
            await resolve(page, interaction.target).scroll_into_view_if_needed()
        else:
            await page.mouse.wheel(0, config.VIEWPORT["height"])
    else:
        raise ValueError(f"Unknown interaction: {interaction.action}")

    for check in interaction.checks:
        await run_check(page, check)


async def verify_common_elements(page: Page, elements: CommonElements):
    """Brand logo, subscribe control and brand link must all be visible."""
    for loc in elements.locators():
        await expect(resolve(page, loc)).to_be_visible()


async def track_performance_metrics(
    page: Page,
    label: str,
    site: SiteConfig | None = None,
    detector: PerformanceDetector | None = None,
) -> list[PerformanceEntry]:
    detector = detector or PerformanceDetector()
    if site is None:
        return await detector.snapshot(page, label)
    same_site = site.is_same_site if site.same_site_only else None
    return await detector.snapshot(page, label, same_site=same_site, limit=site.top_n)


async def run_audit(
    page: Page,
    scenario: ScenarioConfig,
    site: SiteConfig,
    screenshots_dir: str | Path = config.SCREENSHOTS_DIR,
    challenge_detector: ChallengeDetector | None = None,
    performance: PerformanceDetector | None = None,
) -> ScenarioOutcome:
    """Execute one scenario. Assertion failures propagate after the failure screenshot."""
    outcome = ScenarioOutcome(title=scenario.title, url=scenario.url)
    shots = Path(screenshots_dir)
    shots.mkdir(parents=True, exist_ok=True)
    start = time.monotonic()

    async def navigate():
        await page.goto(scenario.url, wait_until=site.wait_until)
        if challenge_detector is not None:
            await challenge_detector.handle(page)

    try:
        logger.info("[STATUS] Starting audit for %s", scenario.title)
        await setup_page(page, outcome)
        await retry_async(navigate, label=f"navigation to {scenario.url}")

        if scenario.heading:
            await run_check(page, scenario.heading)
            logger.info("[INFO] Heading check passed for %s", scenario.title)
        for check in scenario.checks:
            await run_check(page, check)
        for interaction in scenario.interactions:
            await perform(page, interaction)

        if scenario.verify_common:
            await verify_common_elements(page, site.common)
            if site.pause_after_common_ms:
                await page.wait_for_timeout(site.pause_after_common_ms)

        outcome.performance = await track_performance_metrics(page, scenario.title, site, performance)

        load_time = time.monotonic() - start
        outcome.add_metric(f"LoadTime:{load_time:.3f}")

        path = shots / screenshot_name(scenario.title)
        await page.screenshot(path=str(path), full_page=True)
        outcome.screenshots.append(str(path))
        logger.info("[INFO] Screenshot saved for %s", scenario.title)
        logger.info("[STATUS] %s audit complete", scenario.title)
    except Exception as e:
        logger.error("[ERROR] %s audit failed: %s", scenario.title, str(e)[:300])
        path = shots / screenshot_name(scenario.title, failure=True)
        try:
            await page.screenshot(path=str(path), full_page=True)
            outcome.screenshots.append(str(path))
        except Exception as shot_error:
            logger.warning("Could not capture failure screenshot for %s: %s", scenario.title, shot_error)
        raise

    outcome.duration_ms = int((time.monotonic() - start) * 1000)
    return outcome
