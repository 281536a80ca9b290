"""Tests for bot-verification challenge handling."""

import random

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from siteaudit.detectors.challenge import ChallengeState, KeywordChallengeDetector
from siteaudit.errors import ChallengeTimeoutError


def _detector() -> KeywordChallengeDetector:
    return KeywordChallengeDetector(delay_ms=0, timeout_s=30, rng=random.Random(7))


def _page_texts(fake_page, *texts: str) -> list[int]:
    """Serve page texts in order; record how many pointer moves preceded each read."""
    moves_seen: list[int] = []
    remaining = list(texts)

    async def evaluate(script, *args):
        moves_seen.append(fake_page.mouse.move.await_count)
        return remaining.pop(0) if len(remaining) > 1 else remaining[0]

    fake_page.evaluate.side_effect = evaluate
    return moves_seen


async def test_no_challenge(fake_page) -> None:
    _page_texts(fake_page, "Smart Financial Decisions Made Simple")
    detector = _detector()

    state = await detector.handle(fake_page)

    assert state == ChallengeState.NO_CHALLENGE
    fake_page.mouse.move.assert_not_awaited()


async def test_resolved_after_evasion(fake_page) -> None:
    moves_seen = _page_texts(fake_page, "Please complete the CAPTCHA", "Welcome back")
    detector = _detector()

    state = await detector.handle(fake_page)

    assert state == ChallengeState.RESOLVED
    assert moves_seen == [0, 3]
    assert fake_page.mouse.click.await_count == 3
    assert detector.history == [
        ChallengeState.CHALLENGE_DETECTED,
        ChallengeState.EVADING,
        ChallengeState.RESOLVED,
    ]
    fake_page.wait_for_function.assert_not_awaited()


async def test_each_action_moves_then_clicks_same_point(fake_page) -> None:
    _page_texts(fake_page, "verification required", "ok")

    await _detector().handle(fake_page)

    for move, click in zip(fake_page.mouse.move.await_args_list, fake_page.mouse.click.await_args_list):
        assert move.args == click.args
        x, y = click.args
        assert 100 <= x <= 1180
        assert 100 <= y <= 620


async def test_stuck_then_cleared(fake_page) -> None:
    _page_texts(fake_page, "Are you a robot?")
    detector = _detector()

    state = await detector.handle(fake_page)

    assert state == ChallengeState.RESOLVED
    assert ChallengeState.STUCK in detector.history
    kwargs = fake_page.wait_for_function.await_args.kwargs
    assert kwargs["timeout"] == 30000
    assert kwargs["arg"] == ["captcha", "CAPTCHA", "robot", "verification"]


async def test_stuck_past_timeout_raises_timeout_error(fake_page) -> None:
    """Three pointer actions, re-check, then a timeout-specific failure."""
    moves_seen = _page_texts(fake_page, "captcha")
    fake_page.wait_for_function.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded.")
    detector = _detector()

    with pytest.raises(ChallengeTimeoutError) as exc_info:
        await detector.handle(fake_page)

    assert moves_seen == [0, 3]
    assert isinstance(exc_info.value, TimeoutError)
    assert exc_info.value.timeout_s == 30
    assert detector.state == ChallengeState.STUCK


async def test_custom_keywords(fake_page) -> None:
    _page_texts(fake_page, "Checking your browser")
    detector = KeywordChallengeDetector(keywords=("Checking your browser",), delay_ms=0)

    assert await detector.detect(fake_page) is True
