"""
Calendar parsing (HTML -> ok days).

Each friend's calendar page is a table with the day names in <th> cells and
the matching status in <td> cells. A day counts as free when its status is
'ok' (any case).

Rules:
- the i-th header belongs to the i-th data cell; unequal counts are an error
- the common days are the days every calendar marks ok
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from bs4 import BeautifulSoup

from weekendplanner.errors import ParseFailure
from weekendplanner.fetch import Fetcher

logger = logging.getLogger(__name__)


def parse_calendar(html: str) -> List[Tuple[str, str]]:
    """
    Pair every day header with its status cell.
    """
    soup = BeautifulSoup(html, "html.parser")
    headers = [th.get_text(strip=True) for th in soup.find_all("th")]
    cells = [td.get_text(strip=True) for td in soup.find_all("td")]

    if len(headers) != len(cells):
        raise ParseFailure(f"Calendar has {len(headers)} day headers but {len(cells)} status cells")

    return list(zip(headers, cells))


def parse_ok_days(html: str) -> List[str]:
    return [day for day, status in parse_calendar(html) if status.lower() == "ok"]


def common_days(day_lists: Sequence[Sequence[str]]) -> List[str]:
    """
    Intersect the ok-day lists, keeping the order of the first list.

    No lists at all, or any empty list, gives an empty result.
    """
    if not day_lists:
        return []

    first, *rest = day_lists
    return [day for day in first if all(day in other for other in rest)]


def scrape_ok_days(fetcher: Fetcher, url: str) -> List[str]:
    page = fetcher.get_text(url)
    days = parse_ok_days(page.text)
    logger.info("%s: ok days %s", url, days)
    return days
