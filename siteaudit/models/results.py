"""The structured result document written after an audit run.

The shape follows Playwright's JSON reporter, so documents produced by
``npx playwright test --reporter=json`` load here as well as the ones
written by siteaudit.core.runner:

    {"suites": [{"title": ..., "suites": [...], "specs": [
        {"title": ..., "tests": [{"results": [{"status": ...}]}]}]}]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from siteaudit.errors import ResultsNotFoundError

Title = Union[str, list[str], None]


def display_title(title: Title) -> str:
    """A title path like ["CA", "Home page"] displays as "CA Home page"."""
    if title is None:
        return ""
    if isinstance(title, list):
        return " ".join(str(part) for part in title)
    return str(title)


def screenshot_name(title: str, failure: bool = False) -> str:
    stem = title.replace(" ", "-")
    if failure:
        stem += "-failure"
    return f"{stem}.png"


class _Node(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


class RunResult(_Node):
    status: str | None = None
    duration: float = 0
    start_time: str | None = Field(default=None, alias="startTime")
    error: Any = None


class SpecTest(_Node):
    title: Title = None
    results: list[RunResult] = Field(default_factory=list)
    annotations: list[dict] = Field(default_factory=list)
    project_name: str | None = Field(default=None, alias="projectName")

    @field_validator("results", "annotations", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return _none_to_list(value)

    @property
    def status(self) -> str:
        """Status of the first result; "unknown" when there is none."""
        if self.results and self.results[0].status:
            return self.results[0].status
        return "unknown"


class Spec(_Node):
    title: Title = None
    file: str | None = None
    tests: list[SpecTest] = Field(default_factory=list)

    @field_validator("tests", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return _none_to_list(value)


class Suite(_Node):
    title: Title = None
    file: str | None = None
    specs: list[Spec] = Field(default_factory=list)
    suites: list["Suite"] = Field(default_factory=list)

    @field_validator("specs", "suites", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return _none_to_list(value)


class ResultDocument(_Node):
    suites: list[Suite] = Field(default_factory=list)
    stats: dict = Field(default_factory=dict)

    @field_validator("suites", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return _none_to_list(value)


def read_document(path: str | Path) -> dict:
    """Read the raw JSON document.

    Raises ResultsNotFoundError if the file is missing. Malformed JSON
    raises json.JSONDecodeError.
    """
    path = Path(path)
    if not path.exists():
        raise ResultsNotFoundError(str(path))
    return json.loads(path.read_text(encoding="utf-8"))


def load_results(path: str | Path) -> ResultDocument:
    return ResultDocument.model_validate(read_document(path))
