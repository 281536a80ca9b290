"""Scenario configuration objects.

A SiteConfig groups the scenarios that audit one site or locale. Each
ScenarioConfig describes a single navigate-assert-capture procedure;
the shared runner in siteaudit.core.audit executes them all the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlparse


@dataclass
class Locator:
    """How to find an element on the page.

    kind is one of: role | css | label | frame_role.
    For frame_role, ``frame`` is the iframe selector and ``role`` is looked
    up inside it.
    """

    kind: str = "role"
    role: str = ""
    name: str = ""
    exact: bool = False
    selector: str = ""
    frame: str = ""

    def to_dict(self) -> dict:
        d = {"kind": self.kind}
        for key in ("role", "name", "selector", "frame"):
            value = getattr(self, key)
            if value:
                d[key] = value
        if self.exact:
            d["exact"] = True
        return d


def role(role_name: str, name: str = "", exact: bool = False) -> Locator:
    return Locator(kind="role", role=role_name, name=name, exact=exact)


def css(selector: str) -> Locator:
    return Locator(kind="css", selector=selector)


def label(text: str) -> Locator:
    return Locator(kind="label", name=text)


def in_frame(frame_selector: str, role_name: str, name: str = "") -> Locator:
    return Locator(kind="frame_role", frame=frame_selector, role=role_name, name=name)


@dataclass
class Check:
    """An assertion: the located element is visible, or contains ``text``."""

    target: Locator
    text: str = ""

    def to_dict(self) -> dict:
        d = {"target": self.target.to_dict()}
        if self.text:
            d["text"] = self.text
        return d


@dataclass
class Interaction:
    """A step performed before the checks that follow it.

    action is one of: click | scroll.
    """

    action: str
    target: Locator | None = None
    checks: list[Check] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "action": self.action,
            "target": self.target.to_dict() if self.target else None,
            "checks": [c.to_dict() for c in self.checks],
        }


@dataclass
class CommonElements:
    """Brand chrome expected on every page of a site."""

    logo: Locator | None = None
    subscribe: Locator | None = None
    brand_link: Locator | None = None

    def locators(self) -> list[Locator]:
        return [loc for loc in (self.logo, self.subscribe, self.brand_link) if loc]


@dataclass
class ScenarioConfig:
    title: str
    url: str
    heading: Check | None = None
    checks: list[Check] = field(default_factory=list)
    interactions: list[Interaction] = field(default_factory=list)
    verify_common: bool = True

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "heading": self.heading.to_dict() if self.heading else None,
            "checks": [c.to_dict() for c in self.checks],
            "interactions": [i.to_dict() for i in self.interactions],
            "verify_common": self.verify_common,
        }


@dataclass
class SiteConfig:
    """Everything shared by the scenarios of one audit file."""

    name: str
    file: str
    domain: str
    scenarios: list[ScenarioConfig] = field(default_factory=list)
    common: CommonElements = field(default_factory=CommonElements)
    wait_until: str = "load"          # load | networkidle
    challenge_guard: bool = False
    same_site_only: bool = False
    top_n: int = 10
    timeout_s: int = 60
    pause_after_common_ms: int = 0

    def is_same_site(self, url: str) -> bool:
        try:
            host = urlparse(url).hostname
        except ValueError:
            return False
        return bool(host) and self.domain in host

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "file": self.file,
            "domain": self.domain,
            "wait_until": self.wait_until,
            "challenge_guard": self.challenge_guard,
            "same_site_only": self.same_site_only,
            "top_n": self.top_n,
            "timeout_s": self.timeout_s,
            "scenarios": [s.to_dict() for s in self.scenarios],
        }
