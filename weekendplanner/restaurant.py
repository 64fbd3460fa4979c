"""
Restaurant login and slot codes.

Login flow:
1. POST {base}/login with JSON credentials, redirects disabled
2. keep the session cookie (Set-Cookie) and the redirect target (Location)
3. GET the redirect target with that cookie -> booking page HTML

The booking page lists free tables as <input name="group1" value=CODE>.
"""

from __future__ import annotations

import logging
from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from weekendplanner.config import Credentials
from weekendplanner.errors import AuthFailure
from weekendplanner.fetch import Fetcher

logger = logging.getLogger(__name__)


def login_url(restaurant_link: str) -> str:
    return f"{restaurant_link.rstrip('/')}/login"


def _session_cookie(set_cookie: str) -> str:
    # Only the 'name=value' part goes back to the server
    return set_cookie.split(";", 1)[0].strip()


def authenticate(fetcher: Fetcher, restaurant_link: str, credentials: Credentials) -> str:
    """
    Log in and return the HTML of the page the login redirects to.

    Raises AuthFailure when the response carries no cookie or no redirect.
    """
    resp = fetcher.post_json(login_url(restaurant_link), credentials.as_payload(), allow_redirects=False)

    set_cookie = resp.headers.get("Set-Cookie")
    if not set_cookie or not _session_cookie(set_cookie):
        raise AuthFailure("Login response has no session cookie")

    location = resp.headers.get("Location")
    if not location:
        raise AuthFailure("Login response has no redirect location")

    target = urljoin(restaurant_link.rstrip("/") + "/", location)
    logger.debug("Logged in, following redirect to %s", target)
    return fetcher.get_with_cookie(target, _session_cookie(set_cookie))


def parse_slot_codes(html: str) -> List[str]:
    soup = BeautifulSoup(html, "html.parser")
    codes: List[str] = []
    for inp in soup.select("input[name='group1']"):
        value = inp.get("value")
        if value:
            codes.append(str(value).strip())
    return codes
