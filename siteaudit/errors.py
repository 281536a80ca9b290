"""Exceptions raised by SiteAudit."""

from __future__ import annotations


class AuditError(Exception):
    """Base class for SiteAudit errors."""


class ResultsNotFoundError(AuditError):
    """The result document does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Test results not found at {path}. Run 'siteaudit run' first.")


class ChallengeTimeoutError(AuditError, TimeoutError):
    """A bot-verification challenge did not clear within the poll window."""

    def __init__(self, url: str, timeout_s: float):
        self.url = url
        self.timeout_s = timeout_s
        super().__init__(f"Verification challenge still present on {url} after {timeout_s}s")


class UnknownSuiteError(AuditError, KeyError):
    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        super().__init__(f"Unknown suite '{name}'. Available: {', '.join(known)}")

    def __str__(self) -> str:
        return self.args[0]
