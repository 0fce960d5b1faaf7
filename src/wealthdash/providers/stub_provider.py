"""Stub market data connector for offline/testing use."""

import random
from decimal import Decimal

from wealthdash.core.timezone import now_utc
from wealthdash.domain.models import CurrencyCode, MarketData


# Deterministic fake prices (USD) for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "SPY": Decimal("485.25"),
    "VTI": Decimal("252.30"),
    "BTC": Decimal("64250.00"),
    "ETH": Decimal("3150.40"),
}


class StubMarketDataConnector:
    """
    Stub connector with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates a seeded random
    price for unknown symbols. Prices are reported in the requested currency
    without conversion.
    """

    name = "stub"

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._generated: dict[str, Decimal] = {}

    def test_connection(self) -> bool:
        return True

    def fetch_price(self, symbol: str, currency: CurrencyCode) -> MarketData:
        upper_symbol = symbol.strip().upper()
        price = _STUB_PRICES.get(upper_symbol) or self._generated.get(upper_symbol)
        if price is None:
            price = Decimal(str(50 + self._rng.random() * 200)).quantize(Decimal("0.01"))
            self._generated[upper_symbol] = price

        return MarketData(
            symbol=upper_symbol,
            price=price,
            currency=currency.strip().upper(),
            last_updated=now_utc(),
        )
