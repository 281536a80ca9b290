"""Shared fixtures: fake Playwright pages and result documents on disk."""

import io
import json
import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console


@pytest.fixture(autouse=True)
def _reset_siteaudit_logger() -> Generator[None, None, None]:
    """The CLI installs its own handler; keep records flowing to caplog."""
    yield
    logger = logging.getLogger("siteaudit")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, force_terminal=False)


def make_locator() -> MagicMock:
    locator = MagicMock()
    locator.click = AsyncMock()
    locator.scroll_into_view_if_needed = AsyncMock()
    return locator


@pytest.fixture
def fake_page() -> MagicMock:
    """A stand-in for playwright.async_api.Page with async methods mocked."""
    page = MagicMock()
    page.url = "https://www.forbes.com/advisor/ca/"
    page.viewport_size = {"width": 1280, "height": 720}
    page.goto = AsyncMock()
    page.set_viewport_size = AsyncMock()
    page.screenshot = AsyncMock()
    page.evaluate = AsyncMock(return_value=[])
    page.wait_for_timeout = AsyncMock()
    page.wait_for_function = AsyncMock()
    page.mouse.move = AsyncMock()
    page.mouse.click = AsyncMock()
    page.mouse.wheel = AsyncMock()
    page.get_by_role.return_value = make_locator()
    page.locator.return_value = make_locator()
    page.get_by_label.return_value = make_locator()
    return page


@pytest.fixture
def write_document(tmp_path: Path):
    def _write(document: dict, name: str = "results.json") -> Path:
        path = tmp_path / "test-results" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def spec_document():
    """Build a document with one suite, one spec and the given tests."""

    def _build(*tests: dict) -> dict:
        return {
            "config": {},
            "suites": [{
                "title": "CA.audit.py",
                "specs": [{"title": "spec", "tests": list(tests)}],
            }],
        }

    return _build
