"""Enumerations for domain models."""

from enum import Enum


class PriceSource(str, Enum):
    """Where a resolved price came from."""

    CACHE = "cache"  # non-expired cache entry
    LIVE = "live"  # fresh provider fetch
    STALE = "stale"  # expired cache entry after a failed fetch
    NONE = "none"  # nothing available; price is the zero sentinel


class FeedStatus(str, Enum):
    """Outcome tag attached to every news feed response."""

    YAHOO_RSS = "yahoo_rss"
    UNAVAILABLE = "unavailable"
    ERROR = "error"
