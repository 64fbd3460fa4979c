"""
Central data model definitions used across the project.

All entities live for a single run only:
- Showing: one movie start time with free seats
- TableSlot: one bookable restaurant window, decoded from a slot code
- Suggestion: one (day, showing, table window) combination
- StageResult / Plan: what the pipeline hands back to the presentation layer
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from weekendplanner.errors import ParseFailure


@dataclass(frozen=True)
class SiteLinks:
    """
    The three sites listed on the start page, in sorted link order.
    """

    calendar: str
    cinema: str
    restaurant: str

    @classmethod
    def from_links(cls, links: List[str]) -> "SiteLinks":
        if len(links) < 3:
            raise ParseFailure(f"Expected 3 site links on the start page, found {len(links)}")
        return cls(calendar=links[0], cinema=links[1], restaurant=links[2])


@dataclass(frozen=True)
class Showing:
    """
    A movie title paired with a start time ('HH:MM') that still has seats.
    """

    title: str
    time: str

    @property
    def hour(self) -> int:
        return int(self.time.split(":")[0])


@dataclass(frozen=True)
class TableSlot:
    """
    A restaurant booking window decoded from a slot code such as 'fri1820'.

    The first three characters name the day, the next two the start hour,
    the remainder the end hour.
    """

    day_prefix: str
    start_hour: int
    end_hour: int

    @classmethod
    def from_code(cls, code: str) -> "TableSlot":
        raw = code.strip()
        prefix, start, end = raw[:3], raw[3:5], raw[5:]
        if len(prefix) != 3 or not re.fullmatch(r"[0-9]{2}", start) or not re.fullmatch(r"[0-9]+", end):
            raise ParseFailure(f"Invalid slot code: {code!r}")
        return cls(day_prefix=prefix.lower(), start_hour=int(start), end_hour=int(end))

    @property
    def window(self) -> str:
        return f"{self.start_hour}-{self.end_hour}"


@dataclass(frozen=True)
class Suggestion:
    day: str
    title: str
    time: str
    window: str

    def sentence(self) -> str:
        return (
            f'On {self.day}, "{self.title}" begins at {self.time}, '
            f"and there is a free table between {self.window}."
        )


@dataclass
class StageResult:
    """
    Outcome of one pipeline stage ('Links', 'Date', 'Cinema', 'Restaurant').

    ok is False when the stage failed; error then holds the exception.
    """

    name: str
    ok: bool
    value: Any = None
    error: Optional[Exception] = None


@dataclass
class Plan:
    """
    Everything one run produced.
    """

    days: List[str] = field(default_factory=list)
    showings: List[Showing] = field(default_factory=list)
    reservations: List[str] = field(default_factory=list)
    suggestions: List[Suggestion] = field(default_factory=list)
    stages: List[StageResult] = field(default_factory=list)

    @property
    def has_common_day(self) -> bool:
        return bool(self.days)
