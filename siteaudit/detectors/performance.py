"""Resource-timing snapshot: which resources were slowest to load."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from rich.console import Console
from rich.table import Table

from siteaudit import config
from siteaudit.models.types import PerformanceEntry

logger = logging.getLogger(__name__)


_RESOURCE_TIMING_JS = """() => performance.getEntriesByType('resource').map(entry => ({
    name: entry.name,
    duration: entry.duration,
    initiatorType: entry.initiatorType || 'unknown',
}))"""


def rank_entries(
    entries: Iterable[PerformanceEntry],
    limit: int,
    keep: Callable[[str], bool] | None = None,
) -> list[PerformanceEntry]:
    """Slowest first, at most ``limit`` entries.

    ``keep`` receives each entry's URL; entries it rejects are dropped
    before ranking regardless of their duration.
    """
    if keep is not None:
        entries = [e for e in entries if keep(e.name)]
    return sorted(entries, key=lambda e: e.duration, reverse=True)[:limit]


class PerformanceDetector:

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    async def collect_entries(self, page) -> list[PerformanceEntry]:
        raw = await page.evaluate(_RESOURCE_TIMING_JS)
        return [PerformanceEntry.from_raw(r) for r in raw or []]

    async def snapshot(
        self,
        page,
        label: str,
        same_site: Callable[[str], bool] | None = None,
        limit: int | None = None,
    ) -> list[PerformanceEntry]:
        """Collect and rank resource timings, then print them as a table.

        Unless ``limit`` is given, a same-site predicate keeps the top 5
        internal resources, otherwise the top 10 of everything are kept.
        """
        if limit is None:
            limit = config.TOP_SAME_SITE if same_site else config.TOP_UNFILTERED
        ranked = rank_entries(await self.collect_entries(page), limit, same_site)

        scope = "internal resources" if same_site else "resources"
        self._console.print(self.render_table(ranked, f"Top {limit} slowest {scope} for {label}"))
        logger.debug("Captured %d resource timings for %s", len(ranked), label)
        return ranked

    @staticmethod
    def render_table(entries: list[PerformanceEntry], title: str) -> Table:
        table = Table(title=title, show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Resource", max_width=80, overflow="fold")
        table.add_column("Duration", width=10, justify="right")
        table.add_column("Initiator", width=12)

        for entry in entries:
            style = "green" if entry.duration < 500 else "yellow" if entry.duration < 1500 else "red"
            table.add_row(entry.name, f"[{style}]{entry.duration}ms[/{style}]", entry.initiator_type)
        return table
