"""Price resolution: persisted cache in front of a market data connector."""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable

from wealthdash.core.exceptions import ProviderUnavailableError, SymbolNotFoundError
from wealthdash.core.timezone import now_utc
from wealthdash.core.util import is_number
from wealthdash.domain.models import CurrencyCode, PriceCacheEntry, PriceSource
from wealthdash.domain.views import PriceResolution
from wealthdash.providers.connector import MarketDataConnector
from wealthdash.repositories.protocols import PriceCacheRepository

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
ZERO = Decimal("0")


class PriceService:
    """
    Resolves the current price of a symbol.

    Order of resolution:
    1. a non-expired cache entry for the symbol (any currency);
    2. a live fetch from the connector, stored back with a fresh TTL;
    3. on fetch failure, the most recently fetched entry even if expired;
    4. otherwise zero.

    Storage failures (CacheUnavailableError) are not recovered.
    Concurrent misses for the same symbol each fetch independently.
    """

    def __init__(
        self,
        cache_repo: PriceCacheRepository,
        connector: MarketDataConnector,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._cache = cache_repo
        self._connector = connector
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def get_price(self, symbol: str, currency: CurrencyCode) -> Decimal:
        """
        Return the price of symbol, always as a number.

        Zero means no price could be found at all; use resolve() to tell it apart.
        """
        return self.resolve(symbol, currency).price

    def resolve(self, symbol: str, currency: CurrencyCode) -> PriceResolution:
        """Return the price of symbol together with where it came from."""
        symbol = symbol.strip().upper()
        currency = currency.strip().upper()
        now = self._clock()

        cached = self._cache.get_current(symbol, now)
        if cached:
            return PriceResolution(
                symbol=symbol,
                currency=cached.currency,
                price=cached.price,
                source=PriceSource.CACHE,
                fetched_at=cached.fetched_at,
            )

        try:
            market_data = self._connector.fetch_price(symbol, currency)
            if market_data is None or not is_number(market_data.price):
                raise SymbolNotFoundError(symbol, self._connector.name)
        except (ProviderUnavailableError, SymbolNotFoundError) as exc:
            logger.warning("Error fetching price for %s via %s: %s", symbol, self._connector.name, exc.message)
            return self._fallback(symbol, currency)

        entry = self._cache.upsert(
            PriceCacheEntry(
                symbol=symbol,
                currency=market_data.currency or currency,
                price=market_data.price,
                provider=self._connector.name,
                fetched_at=now,
                expires_at=now + self._ttl,
            )
        )
        return PriceResolution(
            symbol=symbol,
            currency=entry.currency,
            price=market_data.price,
            source=PriceSource.LIVE,
            fetched_at=now,
        )

    def _fallback(self, symbol: str, currency: CurrencyCode) -> PriceResolution:
        # Latest by fetched_at across all currencies
        last_known = self._cache.get_latest(symbol)
        if last_known:
            logger.warning(
                "Serving stale price for %s fetched at %s",
                symbol,
                last_known.fetched_at.isoformat(),
            )
            return PriceResolution(
                symbol=symbol,
                currency=last_known.currency,
                price=last_known.price,
                source=PriceSource.STALE,
                fetched_at=last_known.fetched_at,
            )

        logger.warning("No price available for %s; returning zero", symbol)
        return PriceResolution(
            symbol=symbol,
            currency=currency,
            price=ZERO,
            source=PriceSource.NONE,
        )
