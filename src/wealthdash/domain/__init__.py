"""Domain layer - pure value types with no external dependencies."""

from wealthdash.domain.models import (
    PriceSource,
    FeedStatus,
    MarketData,
    CurrencyCode,
    NormalizedBalance,
    NormalizedTransaction,
    PriceCacheEntry,
)

__all__ = [
    "PriceSource",
    "FeedStatus",
    "MarketData",
    "CurrencyCode",
    "NormalizedBalance",
    "NormalizedTransaction",
    "PriceCacheEntry",
]
