"""
CLI (Command Line Interface).

    weekendplanner <start-url> [--username U] [--password P] [--timeout S] [-v]

Prints one progress line per finished stage, e.g.

    Scraping Links...OK
    Scraping Date...OK
    Scraping Cinema...OK
    Scraping Restaurant...OK

followed by the suggestions. Logs and errors go to stderr.

Note:
- All scraping lives in weekendplanner.pipeline; this module only presents results
"""

from __future__ import annotations

import argparse
import logging
import sys

from weekendplanner.config import Settings
from weekendplanner.errors import NoCommonDay, PlannerError
from weekendplanner.fetch import Fetcher
from weekendplanner.model import Plan, StageResult
from weekendplanner.pipeline import Planner
from weekendplanner.reconcile import render

logger = logging.getLogger(__name__)

NO_SUGGESTIONS = "No suggestions found."


def _print_stage(result: StageResult) -> None:
    status = "OK" if result.ok else "FAILED"
    print(f"Scraping {result.name}...{status}", flush=True)


def format_plan(plan: Plan) -> str:
    """
    Render the final output block for a finished plan.
    """
    if not plan.has_common_day:
        return str(NoCommonDay())

    lines = render(plan.suggestions)
    if not lines:
        return NO_SUGGESTIONS
    return "\nSuggestions:\n" + "\n".join(lines)


def _configure_logging(level_name: str, verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser.
    """
    parser = argparse.ArgumentParser(
        prog="weekendplanner",
        description="Suggest a day, a movie and a dinner table that fit everyone's calendar",
    )
    parser.add_argument("url", type=str, help="Start page listing the calendar, cinema and restaurant sites")
    parser.add_argument("--username", type=str, default=None, help="Restaurant login name")
    parser.add_argument("--password", type=str, default=None, help="Restaurant login password")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds to wait for each request")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Runs the planner and exits via SystemExit with a return code.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env().override(
            username=args.username,
            password=args.password,
            timeout=args.timeout,
        )
    except ValueError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        raise SystemExit(2)

    _configure_logging(settings.log_level, args.verbose)

    with Fetcher(timeout=settings.timeout) as fetcher:
        try:
            plan = Planner(fetcher, settings).run(args.url.strip(), on_stage=_print_stage)
        except PlannerError as exc:
            logger.debug("Run aborted", exc_info=True)
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1)

    print(format_plan(plan))
    raise SystemExit(0)
