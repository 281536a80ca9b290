"""Runtime settings for SiteAudit.

Constants live here; a few paths and the browser mode can be overridden
from the environment. CLI flags take precedence over both.
"""

from __future__ import annotations

import os


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


RESULTS_FILE = os.environ.get("SITEAUDIT_RESULTS_FILE", "test-results/results.json")
REPORT_FILE = os.environ.get("SITEAUDIT_REPORT_FILE", "report.html")
SCREENSHOTS_DIR = os.environ.get("SITEAUDIT_SCREENSHOTS_DIR", "screenshots")
HEADFUL = _env_flag("SITEAUDIT_HEADFUL")

VIEWPORT = {"width": 1280, "height": 720}

# Navigation retry
NAV_ATTEMPTS = 3
NAV_RETRY_DELAY_MS = 2000

# Bot-verification handling
CHALLENGE_KEYWORDS = ("captcha", "CAPTCHA", "robot", "verification")
EVASION_ACTIONS = 3
EVASION_DELAY_MS = 1000
CHALLENGE_TIMEOUT_S = 30
CHALLENGE_POLL_MS = 1000

# Resource timing
TOP_SAME_SITE = 5
TOP_UNFILTERED = 10
