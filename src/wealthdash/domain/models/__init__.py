"""Domain models package."""

from wealthdash.domain.models.enums import PriceSource, FeedStatus
from wealthdash.domain.models.market import MarketData, CurrencyCode
from wealthdash.domain.models.banking import NormalizedBalance, NormalizedTransaction
from wealthdash.domain.models.cache import PriceCacheEntry

__all__ = [
    "PriceSource",
    "FeedStatus",
    "MarketData",
    "CurrencyCode",
    "NormalizedBalance",
    "NormalizedTransaction",
    "PriceCacheEntry",
]
