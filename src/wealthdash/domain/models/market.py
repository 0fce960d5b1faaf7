"""Normalized market data model produced by every market data connector."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

# ISO-4217 style code, upper-case ("USD", "EUR")
CurrencyCode = str


@dataclass(frozen=True)
class MarketData:
    """
    Latest price of one instrument in one currency.

    Immutable; a newer fetch produces a new instance.
    """

    symbol: str
    price: Decimal
    currency: CurrencyCode
    last_updated: datetime
