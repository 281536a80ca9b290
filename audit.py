#!/usr/bin/env python3
"""
SiteAudit CLI
Usage: python audit.py run [suite ...] [--headful]
       python audit.py report [--no-open]
       python audit.py inspect
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from rich.console import Console

from siteaudit import config
from siteaudit.core.inspector import inspect_results
from siteaudit.core.report import generate_report, open_in_viewer, print_summary
from siteaudit.core.runner import AuditRunner
from siteaudit.errors import ResultsNotFoundError, UnknownSuiteError
from siteaudit.logs import setup_logging
from siteaudit.suites.registry import SUITES, get_suite


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="siteaudit",
        description="SiteAudit: scripted browser audits with an HTML report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n"
               "  python audit.py run forbes-ca-pages\n"
               "  python audit.py run --headful usat\n"
               "  python audit.py report --no-open",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run audit suites and write the result document")
    run.add_argument("suites", nargs="*", help="Suites to run (default: all)")
    run.add_argument("--headful", action="store_true", default=config.HEADFUL, help="Run browser visibly")
    run.add_argument("--results", default=config.RESULTS_FILE, help=f"Result document (default: {config.RESULTS_FILE})")
    run.add_argument("--screenshots", default=config.SCREENSHOTS_DIR, help=f"Screenshot directory (default: {config.SCREENSHOTS_DIR})")

    report = sub.add_parser("report", help="Render the HTML report from the result document")
    report.add_argument("--results", default=config.RESULTS_FILE)
    report.add_argument("--output", default=config.REPORT_FILE, help=f"Report file (default: {config.REPORT_FILE})")
    report.add_argument("--screenshots", default=config.SCREENSHOTS_DIR)
    report.add_argument("--no-open", action="store_true", help="Do not open the report afterwards")

    inspect = sub.add_parser("inspect", help="Print the shape of the result document")
    inspect.add_argument("--results", default=config.RESULTS_FILE)

    listing = sub.add_parser("list", help="List available suites")
    listing.add_argument("--json", action="store_true", help="Print suite configurations as JSON")
    return parser


def _cli_progress(event_type: str, data: dict):
    if event_type == "scenario_start":
        print(f"   [{data.get('suite', '')}] {data.get('title', '')}")
    elif event_type == "scenario_complete":
        status = data.get("status", "")
        print(f"         {status.upper()} ({data.get('duration_ms', 0)}ms)")
        if data.get("error"):
            print(f"         {data['error'].splitlines()[0][:120]}")
    elif event_type == "suite_complete":
        print(f"\n   Done: {data.get('suite', '')} {data.get('passed', 0)}/{data.get('total', 0)} passed\n")


def cmd_run(args) -> int:
    try:
        sites = [get_suite(name) for name in args.suites] if args.suites else list(SUITES.values())
    except UnknownSuiteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    total = sum(len(s.scenarios) for s in sites)
    print(f"\n  SiteAudit running {len(sites)} suite(s), {total} scenario(s)")
    print(f"  Mode: {'headful' if args.headful else 'headless'}\n")

    runner = AuditRunner(
        sites=sites,
        results_file=args.results,
        screenshots_dir=args.screenshots,
        headful=args.headful,
        on_progress=_cli_progress,
    )
    document = asyncio.run(runner.run())
    return 0 if document["stats"]["unexpected"] == 0 else 1


def cmd_report(args) -> int:
    try:
        entries = generate_report(
            results_path=args.results,
            output_path=args.output,
            screenshots_dir=args.screenshots,
            post_render=None if args.no_open else open_in_viewer,
        )
    except ResultsNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print_summary(entries, Console())
    print(f"  Report generated: {args.output}")
    return 0


def cmd_inspect(args) -> int:
    try:
        inspect_results(args.results, Console())
    except ResultsNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_list(args) -> int:
    if args.json:
        print(json.dumps([site.to_dict() for site in SUITES.values()], indent=2, ensure_ascii=False))
        return 0
    for name, site in SUITES.items():
        print(f"  {name:<18} {len(site.scenarios):>2} scenario(s)  {site.file}")
    return 0


COMMANDS = {"run": cmd_run, "report": cmd_report, "inspect": cmd_inspect, "list": cmd_list}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
