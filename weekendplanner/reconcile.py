"""
Availability reconciliation.

Joins the common days, the showings and the restaurant's free tables.

Two-hour rule:
    a table fits a showing when table_start == showing_hour + 2

Final assembly pairs every day with every showing and every matched table
window, except windows that start at the showing's own hour.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from weekendplanner.errors import ParseFailure
from weekendplanner.model import Showing, Suggestion, TableSlot
from weekendplanner.restaurant import parse_slot_codes

logger = logging.getLogger(__name__)

DINNER_OFFSET_HOURS = 2


def filter_slots_for_days(codes: Iterable[str], days: Sequence[str]) -> List[TableSlot]:
    """
    Decode the slot codes whose day prefix starts one of the available days.

    Malformed codes are logged and skipped.
    """
    day_names = [d.lower() for d in days]

    slots: List[TableSlot] = []
    for code in codes:
        try:
            slot = TableSlot.from_code(code)
        except ParseFailure as exc:
            logger.warning("%s", exc)
            continue
        if any(day.startswith(slot.day_prefix) for day in day_names):
            slots.append(slot)
    return slots


def match_reservations(html: str, showings: Sequence[Showing], days: Sequence[str]) -> List[str]:
    """
    Return the table windows ('18-20') that start two hours after a showing.

    One entry per (showing, matching slot), in showing order. Not deduplicated.
    """
    slots = filter_slots_for_days(parse_slot_codes(html), days)

    reservations: List[str] = []
    for showing in showings:
        target = showing.hour + DINNER_OFFSET_HOURS
        reservations.extend(slot.window for slot in slots if slot.start_hour == target)
    return reservations


def _window_start(window: str) -> int:
    return int(window.split("-")[0])


def build_suggestions(
    days: Sequence[str], showings: Sequence[Showing], reservations: Sequence[str]
) -> List[Suggestion]:
    """
    Cross days x showings x reservations into unique suggestions.

    A window starting at the showing's own hour is left out; earlier or
    later windows are kept.
    """
    seen: dict[Suggestion, None] = {}
    for day in days:
        for showing in showings:
            for window in reservations:
                if _window_start(window) == showing.hour:
                    continue
                suggestion = Suggestion(day=day, title=showing.title, time=showing.time, window=window)
                seen.setdefault(suggestion, None)
    return list(seen)


def render(suggestions: Iterable[Suggestion]) -> List[str]:
    # dict keeps first-seen order while dropping repeated sentences
    return list(dict.fromkeys(s.sentence() for s in suggestions))
