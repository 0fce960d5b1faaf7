"""View models for news feed output."""

from dataclasses import dataclass, field
from typing import Optional

from wealthdash.domain.models.enums import FeedStatus


@dataclass
class NewsItem:
    """One headline extracted from a feed."""

    title: str
    link: str
    pub_date: Optional[str] = None
    description: str = ""
    source: str = "Yahoo Finance"


@dataclass
class NewsFeed:
    """Best-effort news result; status tells how the fetch went."""

    news: list[NewsItem] = field(default_factory=list)
    source: FeedStatus = FeedStatus.YAHOO_RSS
    error: Optional[str] = None
