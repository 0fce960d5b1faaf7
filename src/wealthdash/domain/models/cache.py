"""Persisted price cache entry."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from wealthdash.domain.models.market import CurrencyCode


@dataclass
class PriceCacheEntry:
    """
    Cached price for a symbol, written only by the price resolution service.

    Entries are upserted on each successful fetch and never deleted here;
    expired entries remain available as the stale fallback.
    """

    symbol: str
    currency: CurrencyCode
    price: Decimal
    provider: str
    fetched_at: datetime
    expires_at: datetime

    def __post_init__(self) -> None:
        self.symbol = self.symbol.strip().upper()
        self.currency = self.currency.strip().upper()
