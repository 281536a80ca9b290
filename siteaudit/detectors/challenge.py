"""Bot-verification challenge handling.

Some audited sites put a verification interstitial in front of the
page when they suspect automation. Detection is plain keyword matching
on the page text; evasion is a handful of human-looking pointer moves
and clicks. Both live behind ChallengeDetector so a different keyword
list or strategy can be plugged in without touching the scenarios.

    NO_CHALLENGE --keywords--> CHALLENGE_DETECTED --> EVADING
    EVADING --keywords gone--> RESOLVED
    EVADING --keywords remain--> STUCK --cleared within timeout--> RESOLVED
    STUCK --timeout--> ChallengeTimeoutError
"""

from __future__ import annotations

import logging
import random
from enum import Enum

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from siteaudit import config
from siteaudit.errors import ChallengeTimeoutError

logger = logging.getLogger(__name__)


_PAGE_TEXT_JS = "() => (document.body && document.body.innerText) || ''"

_KEYWORDS_CLEARED_JS = """(keywords) => {
    const text = (document.body && document.body.innerText) || '';
    return !keywords.some(k => text.includes(k));
}"""


class ChallengeState(str, Enum):
    NO_CHALLENGE = "no_challenge"
    CHALLENGE_DETECTED = "challenge_detected"
    EVADING = "evading"
    RESOLVED = "resolved"
    STUCK = "stuck"


class ChallengeDetector:
    """Detects a challenge on the current page and tries to get past it.

    Subclasses implement ``detect``, ``evade`` and ``wait_until_cleared``;
    ``handle`` drives the state machine and is shared.
    """

    def __init__(self):
        self.state = ChallengeState.NO_CHALLENGE
        self.history: list[ChallengeState] = []

    def _transition(self, state: ChallengeState, url: str = ""):
        self.state = state
        self.history.append(state)
        logger.info("[CHALLENGE] %s %s", state.value, url)

    async def detect(self, page: Page) -> bool:
        raise NotImplementedError

    async def evade(self, page: Page):
        raise NotImplementedError

    async def wait_until_cleared(self, page: Page):
        raise NotImplementedError

    async def handle(self, page: Page) -> ChallengeState:
        self.state = ChallengeState.NO_CHALLENGE
        self.history = []

        if not await self.detect(page):
            self._transition(ChallengeState.NO_CHALLENGE, page.url)
            return self.state

        self._transition(ChallengeState.CHALLENGE_DETECTED, page.url)
        self._transition(ChallengeState.EVADING, page.url)
        await self.evade(page)

        if not await self.detect(page):
            self._transition(ChallengeState.RESOLVED, page.url)
            return self.state

        self._transition(ChallengeState.STUCK, page.url)
        await self.wait_until_cleared(page)
        self._transition(ChallengeState.RESOLVED, page.url)
        return self.state


class KeywordChallengeDetector(ChallengeDetector):
    """Treats the page as challenged while its text mentions captcha/robot/verification."""

    def __init__(
        self,
        keywords: tuple[str, ...] = config.CHALLENGE_KEYWORDS,
        actions: int = config.EVASION_ACTIONS,
        delay_ms: int = config.EVASION_DELAY_MS,
        timeout_s: float = config.CHALLENGE_TIMEOUT_S,
        poll_ms: int = config.CHALLENGE_POLL_MS,
        rng: random.Random | None = None,
    ):
        super().__init__()
        self.keywords = tuple(keywords)
        self.actions = actions
        self.delay_ms = delay_ms
        self.timeout_s = timeout_s
        self.poll_ms = poll_ms
        self._rng = rng or random.Random()

    async def detect(self, page: Page) -> bool:
        text = await page.evaluate(_PAGE_TEXT_JS)
        return any(k in (text or "") for k in self.keywords)

    async def evade(self, page: Page):
        size = page.viewport_size or config.VIEWPORT
        for _ in range(self.actions):
            x = self._rng.randint(100, max(101, size["width"] - 100))
            y = self._rng.randint(100, max(101, size["height"] - 100))
            await page.mouse.move(x, y, steps=self._rng.randint(5, 15))
            await page.mouse.click(x, y)
            await page.wait_for_timeout(self.delay_ms)

    async def wait_until_cleared(self, page: Page):
        try:
            await page.wait_for_function(
                _KEYWORDS_CLEARED_JS,
                arg=list(self.keywords),
                timeout=self.timeout_s * 1000,
                polling=self.poll_ms,
            )
        except PlaywrightTimeoutError as e:
            raise ChallengeTimeoutError(page.url, self.timeout_s) from e
