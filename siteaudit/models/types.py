from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TestStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    TIMED_OUT = "timedOut"
    SKIPPED = "skipped"
    INTERRUPTED = "interrupted"


@dataclass
class PerformanceEntry:
    name: str
    duration: float
    initiator_type: str = "unknown"

    @classmethod
    def from_raw(cls, raw: dict) -> "PerformanceEntry":
        return cls(
            name=str(raw.get("name", "")),
            duration=round(float(raw.get("duration") or 0), 1),
            initiator_type=raw.get("initiatorType") or "unknown",
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "duration": self.duration,
            "initiatorType": self.initiator_type,
        }


@dataclass
class Annotation:
    type: str
    description: str

    def to_dict(self) -> dict:
        return {"type": self.type, "description": self.description}


@dataclass
class ScenarioOutcome:
    """What a single audit scenario produced, pass or fail."""

    title: str
    url: str
    annotations: list[Annotation] = field(default_factory=list)
    performance: list[PerformanceEntry] = field(default_factory=list)
    screenshots: list[str] = field(default_factory=list)
    runtime_errors: list[str] = field(default_factory=list)
    duration_ms: int = 0

    def add_metric(self, description: str):
        self.annotations.append(Annotation(type="metric", description=description))
