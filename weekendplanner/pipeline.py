"""
Planning pipeline.

Stages run strictly one after another:

    Links      start page -> calendar / cinema / restaurant links
    Date       friends' calendars -> common ok days
    Cinema     common days -> showings with free seats
    Restaurant login + booking page -> table windows matching the showings

Each stage produces a StageResult that is handed to an optional callback as
soon as the stage finishes. Printing is left to the caller (cli.py).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from weekendplanner.calendars import common_days, scrape_ok_days
from weekendplanner.cinema import collect_showings
from weekendplanner.config import Settings
from weekendplanner.errors import NoCommonDay, PlannerError
from weekendplanner.fetch import Fetcher
from weekendplanner.links import scrape_links
from weekendplanner.model import Plan, Showing, SiteLinks, StageResult
from weekendplanner.reconcile import build_suggestions, match_reservations
from weekendplanner.restaurant import authenticate

logger = logging.getLogger(__name__)

StageCallback = Callable[[StageResult], None]


class Planner:
    def __init__(self, fetcher: Optional[Fetcher] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings if settings is not None else Settings()
        self.fetcher = fetcher if fetcher is not None else Fetcher(timeout=self.settings.timeout)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def discover_sites(self, start_url: str) -> SiteLinks:
        return SiteLinks.from_links(scrape_links(self.fetcher, start_url))

    def find_common_days(self, calendar_link: str) -> List[str]:
        """
        Read every friend's calendar linked from calendar_link and intersect.

        Raises NoCommonDay when the intersection is empty.
        """
        friend_pages = scrape_links(self.fetcher, calendar_link)
        day_lists = [scrape_ok_days(self.fetcher, url) for url in friend_pages]

        days = common_days(day_lists)
        if not days:
            raise NoCommonDay()
        return days

    def collect_showings(self, cinema_link: str, days: Sequence[str]) -> List[Showing]:
        showings: List[Showing] = []
        for day in days:
            showings.extend(collect_showings(self.fetcher, cinema_link, day))
        return showings

    def collect_reservations(self, restaurant_link: str, showings: Sequence[Showing], days: Sequence[str]) -> List[str]:
        html = authenticate(self.fetcher, restaurant_link, self.settings.credentials)
        return match_reservations(html, showings, days)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def _stage(self, plan: Plan, name: str, fn: Callable[[], Any], on_stage: Optional[StageCallback]) -> Any:
        """
        Run one stage, record its StageResult and pass it to on_stage.

        NoCommonDay is still a completed stage (the calendars were read fine),
        so it is reported as ok before it propagates.
        """
        try:
            result = StageResult(name=name, ok=True, value=fn())
        except NoCommonDay as exc:
            result = StageResult(name=name, ok=True, value=[], error=exc)
            self._report(plan, result, on_stage)
            raise
        except PlannerError as exc:
            result = StageResult(name=name, ok=False, error=exc)
            self._report(plan, result, on_stage)
            raise

        self._report(plan, result, on_stage)
        return result.value

    @staticmethod
    def _report(plan: Plan, result: StageResult, on_stage: Optional[StageCallback]) -> None:
        plan.stages.append(result)
        if on_stage is not None:
            on_stage(result)

    def run(self, start_url: str, on_stage: Optional[StageCallback] = None) -> Plan:
        """
        Run all stages and return the plan.

        When no day is common to all calendars the plan comes back with empty
        days and the cinema / restaurant stages are skipped. Every other
        PlannerError propagates.
        """
        plan = Plan()

        sites = self._stage(plan, "Links", lambda: self.discover_sites(start_url), on_stage)

        try:
            plan.days = self._stage(plan, "Date", lambda: self.find_common_days(sites.calendar), on_stage)
        except NoCommonDay:
            logger.info("No common day, skipping cinema and restaurant")
            return plan

        plan.showings = self._stage(plan, "Cinema", lambda: self.collect_showings(sites.cinema, plan.days), on_stage)
        plan.reservations = self._stage(
            plan,
            "Restaurant",
            lambda: self.collect_reservations(sites.restaurant, plan.showings, plan.days),
            on_stage,
        )

        plan.suggestions = build_suggestions(plan.days, plan.showings, plan.reservations)
        return plan
