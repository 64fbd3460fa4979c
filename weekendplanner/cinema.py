"""
Cinema showtimes.

The cinema page offers two <select> controls:
- 'movie': value = numeric movie id, text = title
- 'day':   value = numeric day id, text = day name

Seat availability per (day, movie) comes from a JSON endpoint:

    {base}/check?day=DD&movie=MM  ->  [{"status": 0|1, "time": "HH:MM", ...}, ...]

status 0 means sold out.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from bs4 import BeautifulSoup

from weekendplanner.errors import NetworkFailure, ParseFailure
from weekendplanner.fetch import Fetcher
from weekendplanner.model import Showing

logger = logging.getLogger(__name__)

TIME_RE = re.compile(r"[0-9]{1,2}:[0-9]{2}")


def parse_options(html: str, select_id: str) -> Dict[int, str]:
    """
    Map option id -> option label for the <select id=select_id>.

    Ids come from the value attribute. Placeholder options (empty or
    non-numeric value) are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    select = soup.find(id=select_id)
    if select is None:
        raise ParseFailure(f"No <select id='{select_id}'> on cinema page")

    options: Dict[int, str] = {}
    for option in select.find_all("option"):
        value = str(option.get("value", "")).strip()
        if not re.fullmatch(r"[0-9]+", value):
            continue
        options[int(value)] = option.get_text(strip=True)
    return options


def check_url(base: str, day_id: int, movie_id: int) -> str:
    return f"{base.rstrip('/')}/check?day={day_id:02d}&movie={movie_id:02d}"


def available_times(entries: Any) -> List[str]:
    """
    Return the times of all entries that still have seats (status != 0).

    A time that is not HH:MM makes the whole response unusable.
    """
    if not isinstance(entries, list):
        raise ParseFailure(f"Expected a list of showtimes, got {type(entries).__name__}")

    times: List[str] = []
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("status") == 0:
            continue
        time_str = str(entry.get("time", "")).strip()
        if not TIME_RE.fullmatch(time_str):
            raise ParseFailure(f"Invalid showtime {time_str!r}")
        times.append(time_str)
    return times


def _find_day_id(days: Dict[int, str], day: str) -> int | None:
    for day_id, label in days.items():
        if label == day:
            return day_id
    return None


def collect_showings(fetcher: Fetcher, cinema_link: str, day: str) -> List[Showing]:
    """
    Collect every showing with free seats on one day, movies in ascending id order.

    Failures for the page or for a single movie are logged and treated as
    'no data' for that unit.
    """
    try:
        page = fetcher.get_text(cinema_link)
        movies = parse_options(page.text, "movie")
        days = parse_options(page.text, "day")
    except (NetworkFailure, ParseFailure) as exc:
        logger.warning("Could not read cinema page for %s: %s", day, exc)
        return []

    day_id = _find_day_id(days, day)
    if day_id is None:
        logger.warning("Cinema has no option for day %r", day)
        return []

    showings: List[Showing] = []
    for movie_id in sorted(movies):
        url = check_url(cinema_link, day_id, movie_id)
        try:
            times = available_times(fetcher.get_json(url))
        except (NetworkFailure, ParseFailure) as exc:
            logger.warning("Skipping movie %02d on %s: %s", movie_id, day, exc)
            continue

        title = movies[movie_id]
        showings.extend(Showing(title=title, time=t) for t in times)

    logger.info("%s: %d showings with free seats", day, len(showings))
    return showings
