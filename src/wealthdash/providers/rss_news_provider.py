"""
Yahoo Finance RSS headlines.

Best effort: fetch or parse failures produce an empty feed tagged with a
status, never an exception.
"""

import html
import logging
import re
import time
from typing import Optional

import requests

from wealthdash.core.timezone import parse_datetime_utc
from wealthdash.domain.models import FeedStatus
from wealthdash.domain.views import NewsFeed, NewsItem

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://feeds.finance.yahoo.com/rss/2.0/headline"
DESCRIPTION_MAX_CHARS = 200

_ITEM_RE = re.compile(r"<item>(.*?)</item>", re.S)
_TAG_RE = re.compile(r"<[^>]*>")


def _field_patterns(tag: str, cdata: bool) -> list[re.Pattern]:
    patterns = []
    if cdata:
        patterns.append(re.compile(rf"<{tag}>\s*<!\[CDATA\[(.*?)\]\]>\s*</{tag}>", re.S))
    patterns.append(re.compile(rf"<{tag}>(.*?)</{tag}>", re.S))
    return patterns


# field -> patterns tried in order (CDATA block first, then plain tag)
_FIELDS: dict[str, list[re.Pattern]] = {
    "title": _field_patterns("title", cdata=True),
    "link": _field_patterns("link", cdata=False),
    "pubDate": _field_patterns("pubDate", cdata=False),
    "description": _field_patterns("description", cdata=True),
}


def _extract(block: str, field: str) -> str:
    for index, pattern in enumerate(_FIELDS[field]):
        match = pattern.search(block)
        if match:
            value = match.group(1)
            # Plain-tag values are XML-escaped; CDATA values are raw
            is_plain = index == len(_FIELDS[field]) - 1
            return html.unescape(value) if is_plain else value
    return ""


def _format_pub_date(value: str) -> Optional[str]:
    if not value:
        return None
    dt = parse_datetime_utc(value)
    if dt is None:
        return None
    return dt.isoformat().replace("+00:00", "Z")


def parse_feed(text: str, limit: Optional[int] = None) -> list[NewsItem]:
    """
    Extract news items from RSS text in document order.

    Items without a title or link are skipped. Descriptions have HTML tags
    removed and are cut to 200 characters.
    """
    items: list[NewsItem] = []
    for match in _ITEM_RE.finditer(text):
        block = match.group(1)
        title = _extract(block, "title").strip()
        link = _extract(block, "link").strip()
        if not title or not link:
            continue

        description = _TAG_RE.sub("", _extract(block, "description")).strip()
        items.append(
            NewsItem(
                title=title,
                link=link,
                pub_date=_format_pub_date(_extract(block, "pubDate").strip()),
                description=description[:DESCRIPTION_MAX_CHARS],
            )
        )
        if limit is not None and len(items) >= limit:
            break
    return items


class RssNewsProvider:
    """Fetches and parses the Yahoo Finance headline feed for a symbol."""

    def __init__(
        self,
        feed_url: str = DEFAULT_FEED_URL,
        limit: int = 10,
        cache_ttl_seconds: float = 300,
        timeout_seconds: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self._feed_url = feed_url
        self._limit = limit
        self._ttl = cache_ttl_seconds
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        # symbol -> (feed, cached_at); only successful feeds are kept
        self._cache: dict[str, tuple[NewsFeed, float]] = {}

    def fetch_news(self, symbol: str) -> NewsFeed:
        """Return up to `limit` headlines for symbol; never raises."""
        key = symbol.strip().upper()
        now = time.monotonic()
        for stale_key in [k for k, (_, cached_at) in self._cache.items() if now - cached_at > self._ttl]:
            del self._cache[stale_key]
        cached = self._cache.get(key)
        if cached:
            return cached[0]

        try:
            response = self._session.get(
                self._feed_url,
                params={"s": symbol, "region": "US", "lang": "en-US"},
                timeout=self._timeout,
            )
            if not response.ok:
                logger.warning("News feed unavailable for %s: HTTP %s", symbol, response.status_code)
                return NewsFeed(news=[], source=FeedStatus.UNAVAILABLE)
            items = parse_feed(response.text, limit=self._limit)
        except Exception as exc:
            logger.error("News feed error for %s: %s", symbol, exc)
            return NewsFeed(news=[], source=FeedStatus.ERROR, error=str(exc))

        feed = NewsFeed(news=items, source=FeedStatus.YAHOO_RSS)
        self._cache[key] = (feed, now)
        return feed
