"""View models for service outputs."""

from wealthdash.domain.views.price import (
    PriceResolution,
    Candle,
    ChartView,
    HistoricalPrice,
)
from wealthdash.domain.views.news import NewsItem, NewsFeed

__all__ = [
    "PriceResolution",
    "Candle",
    "ChartView",
    "HistoricalPrice",
    "NewsItem",
    "NewsFeed",
]
