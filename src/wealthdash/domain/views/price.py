"""View models for price lookups and chart data."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from wealthdash.domain.models.enums import PriceSource


@dataclass
class PriceResolution:
    """Resolved price together with where it came from."""

    symbol: str
    currency: str
    price: Decimal
    source: PriceSource
    fetched_at: Optional[datetime] = None

    @property
    def is_stale(self) -> bool:
        return self.source in (PriceSource.STALE, PriceSource.NONE)


@dataclass
class Candle:
    """One OHLCV bar; time is a UNIX timestamp in seconds."""

    time: int
    open: float
    high: Optional[float]
    low: Optional[float]
    close: float
    volume: Optional[int] = None


@dataclass
class ChartView:
    """Price history for a symbol over a named range."""

    symbol: str
    range: str
    data: list[Candle] = field(default_factory=list)
    currency: str = "USD"
    regular_market_price: Optional[float] = None
    previous_close: Optional[float] = None


@dataclass
class HistoricalPrice:
    """Price of a symbol on a given day."""

    symbol: str
    date: date
    price: float
    currency: str
    source: str  # "current" | "historical" | "nearest"
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    actual_date: Optional[date] = None
