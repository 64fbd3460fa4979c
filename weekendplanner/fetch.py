"""
HTTP access for all scrapers.

A thin wrapper around requests.Session that:
- applies the configured timeout to every call
- turns requests errors and bad status codes into NetworkFailure
- remembers the final URL after redirects (needed to resolve relative links)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from weekendplanner.config import DEFAULT_TIMEOUT
from weekendplanner.errors import NetworkFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    url: str
    text: str


class Fetcher:
    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise NetworkFailure(f"{method} {url} failed: {exc}") from exc

        # 3xx is only seen when redirects are disabled, and then the caller wants it
        if resp.status_code >= 400:
            raise NetworkFailure(f"{method} {url} returned HTTP {resp.status_code}")
        return resp

    def get_text(self, url: str, headers: Optional[dict[str, str]] = None) -> FetchedPage:
        """
        GET a page and return its body together with the final URL.
        """
        resp = self._request("GET", url, headers=headers)
        return FetchedPage(url=resp.url or url, text=resp.text)

    def get_json(self, url: str) -> Any:
        resp = self._request("GET", url)
        try:
            return resp.json()
        except ValueError as exc:
            raise NetworkFailure(f"GET {url} did not return JSON") from exc

    def post_json(self, url: str, payload: dict[str, Any], allow_redirects: bool = False) -> requests.Response:
        return self._request("POST", url, json=payload, allow_redirects=allow_redirects)

    def get_with_cookie(self, url: str, cookie: str) -> str:
        return self.get_text(url, headers={"Cookie": cookie}).text
