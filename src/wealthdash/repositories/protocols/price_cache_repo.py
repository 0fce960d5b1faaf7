"""Price cache repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from wealthdash.domain.models import PriceCacheEntry


class PriceCacheRepository(Protocol):
    """
    Interface for the persisted price cache.

    Implementations raise CacheUnavailableError when the store fails.
    """

    def get_current(self, symbol: str, now: datetime) -> Optional[PriceCacheEntry]:
        """Most recently fetched entry for symbol with expires_at > now, any currency."""
        ...

    def get_latest(self, symbol: str) -> Optional[PriceCacheEntry]:
        """Most recently fetched entry for symbol regardless of expiry or currency."""
        ...

    def upsert(self, entry: PriceCacheEntry) -> PriceCacheEntry:
        """Insert or replace the entry for (symbol, currency)."""
        ...

    def list_for_symbol(self, symbol: str) -> list[PriceCacheEntry]:
        """All entries for symbol, newest first."""
        ...
