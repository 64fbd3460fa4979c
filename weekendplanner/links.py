"""
Link extraction.

Collects absolute links from a page. Only anchors whose href starts with
'http://', 'https://' or './' are considered; relative ones are resolved
against the URL the page was actually served from.
"""

from __future__ import annotations

from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from weekendplanner.fetch import Fetcher

ANCHOR_SELECTOR = "a[href^='http://'], a[href^='https://'], a[href^='./']"


def extract_links(html: str, base_url: str) -> List[str]:
    """
    Return the sorted, duplicate-free absolute links found in html.

    Example:
        base 'https://x.test/a/b' + href './c' -> 'https://x.test/a/c'
    """
    soup = BeautifulSoup(html, "html.parser")

    links: set[str] = set()
    for a in soup.select(ANCHOR_SELECTOR):
        href = a.get("href")
        if not href:
            continue
        links.add(urljoin(base_url, href.strip()))

    # Deduplicate & sort for stable output
    return sorted(links)


def scrape_links(fetcher: Fetcher, url: str) -> List[str]:
    page = fetcher.get_text(url)
    return extract_links(page.text, page.url)
