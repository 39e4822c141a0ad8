import logging
import re
from typing import Optional

import requests

logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": "woodshed/0.1 (dashboard feeds)"}
REQUEST_TIMEOUT = 10

_ITEM = re.compile(r"<item>([\s\S]*?)</item>")


class FeedError(Exception):
    """Raised when a feed cannot be fetched"""

    pass


def fetch_feed(url: str, session: Optional[requests.Session] = None) -> str:
    """Download an RSS document, raising FeedError on any failure"""
    http = session or requests
    try:
        response = http.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Failed to fetch feed {url}: {e}")
        raise FeedError(f"Failed to fetch {url}: {str(e)}")
    return response.text


def first_item(document: str) -> Optional[str]:
    match = _ITEM.search(document)
    return match.group(1) if match else None


def extract(item: str, tag: str) -> Optional[str]:
    """Pull the trimmed text of ``<tag>`` out of an RSS item, unwrapping CDATA"""
    name = re.escape(tag)
    match = re.search(rf"<{name}>(?:<!\[CDATA\[)?([\s\S]*?)(?:\]\]>)?</{name}>", item)
    return match.group(1).strip() if match else None
