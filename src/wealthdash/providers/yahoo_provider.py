"""Yahoo Finance connector: equity/ETF/index prices, FX rates, charts."""

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Callable, Optional

from wealthdash.core.exceptions import (
    AppError,
    ProviderUnavailableError,
    SymbolNotFoundError,
)
from wealthdash.core.timezone import UTC, now_utc
from wealthdash.core.util import is_number
from wealthdash.domain.models import CurrencyCode, MarketData
from wealthdash.domain.views import Candle, ChartView, HistoricalPrice

logger = logging.getLogger(__name__)

# range -> (lookback, bar interval); None lookback means from 1970
CHART_RANGES: dict[str, tuple[Optional[timedelta], str]] = {
    "1d": (timedelta(days=1), "5m"),
    "5d": (timedelta(days=5), "15m"),
    "1mo": (timedelta(days=30), "1d"),
    "3mo": (timedelta(days=90), "1d"),
    "6mo": (timedelta(days=180), "1d"),
    "1y": (timedelta(days=365), "1wk"),
    "5y": (timedelta(days=5 * 365), "1mo"),
    "max": (None, "1mo"),
}
DEFAULT_CHART_RANGE = "1mo"
NEAREST_LOOKBACK_DAYS = 7


class YahooMarketDataConnector:
    """
    MarketDataConnector and FXConnector backed by the shared Yahoo client.

    The client is injected; it is selected once per process by
    yahoo_client.get_yahoo_client().
    """

    name = "yahoo"

    def __init__(
        self,
        client: Any,
        probe_symbol: str = "SPY",
        clock: Callable[[], datetime] = now_utc,
    ):
        self._client = client
        self._probe_symbol = probe_symbol
        self._clock = clock

    def _call(self, method: str, *args: Any) -> Any:
        fn = getattr(self._client, method, None)
        if not callable(fn):
            raise ProviderUnavailableError(
                self.name, "Yahoo Finance instance is not correctly initialized"
            )
        try:
            return fn(*args)
        except AppError:
            raise
        except Exception as exc:
            raise ProviderUnavailableError(
                self.name, str(exc) or exc.__class__.__name__
            ) from exc

    # Raw passthroughs used by the HTTP layer

    def quote(self, symbol: str) -> dict:
        """Return the raw Yahoo quote for symbol."""
        return self._call("quote", symbol)

    def search(self, query: str) -> dict:
        """Return raw Yahoo search results for query."""
        return self._call("search", query)

    # Connector

    def test_connection(self) -> bool:
        try:
            self.quote(self._probe_symbol)
        except AppError as exc:
            logger.warning("Yahoo Finance connection test failed: %s", exc.message)
            return False
        return True

    def fetch_price(self, symbol: str, currency: CurrencyCode) -> MarketData:
        quote = self.quote(symbol)
        price = quote.get("regularMarketPrice") if isinstance(quote, dict) else None
        if not is_number(price):
            raise SymbolNotFoundError(symbol, self.name)

        return MarketData(
            symbol=symbol.strip().upper(),
            price=Decimal(str(price)),
            currency=(quote.get("currency") or currency).upper(),
            last_updated=self._clock(),
        )

    def fetch_rate(self, base: CurrencyCode, target: CurrencyCode) -> Decimal:
        base, target = base.upper(), target.upper()
        if base == target:
            return Decimal("1")
        pair = f"{base}{target}=X"
        return self.fetch_price(pair, target).price

    # Charts

    def chart(self, symbol: str, range_: str = DEFAULT_CHART_RANGE) -> ChartView:
        """
        Return OHLCV bars for a named range.

        Unknown ranges fall back to one month. Bars without open or close are dropped.
        """
        if range_ not in CHART_RANGES:
            range_ = DEFAULT_CHART_RANGE
        lookback, interval = CHART_RANGES[range_]
        period2 = self._clock()
        period1 = period2 - lookback if lookback else datetime(1970, 1, 1, tzinfo=UTC)

        data = self._call("chart", symbol, period1, period2, interval) or {}
        meta = data.get("meta") or {}
        candles = [
            Candle(
                time=int(row["date"].timestamp()),
                open=row["open"],
                high=row.get("high"),
                low=row.get("low"),
                close=row["close"],
                volume=row.get("volume"),
            )
            for row in data.get("quotes") or []
            if row.get("open") is not None and row.get("close") is not None
        ]
        return ChartView(
            symbol=symbol,
            range=range_,
            data=candles,
            currency=meta.get("currency") or "USD",
            regular_market_price=meta.get("regularMarketPrice"),
            previous_close=meta.get("previousClose"),
        )

    def historical_price(self, symbol: str, target_date: date) -> HistoricalPrice:
        """
        Return the price of symbol on target_date.

        Today or later uses the live quote; past days use that day's close,
        or the closest close within the previous week.
        """
        if target_date >= self._clock().date():
            quote = self.quote(symbol)
            price = quote.get("regularMarketPrice") if isinstance(quote, dict) else None
            if not is_number(price):
                raise SymbolNotFoundError(symbol, self.name)
            return HistoricalPrice(
                symbol=symbol,
                date=target_date,
                price=float(price),
                currency=quote.get("currency") or "USD",
                source="current",
            )

        day_start = datetime.combine(target_date, time.min, tzinfo=UTC)
        next_day = day_start + timedelta(days=1)

        rows, currency = self._daily_rows(symbol, day_start, next_day)
        if rows:
            row = rows[0]
            return HistoricalPrice(
                symbol=symbol,
                date=target_date,
                price=row["close"],
                currency=currency,
                source="historical",
                open=row.get("open"),
                high=row.get("high"),
                low=row.get("low"),
            )

        week_before = day_start - timedelta(days=NEAREST_LOOKBACK_DAYS)
        rows, currency = self._daily_rows(symbol, week_before, next_day)
        if rows:
            closest = rows[-1]
            return HistoricalPrice(
                symbol=symbol,
                date=target_date,
                price=closest["close"],
                currency=currency,
                source="nearest",
                actual_date=closest["date"].date(),
            )

        raise SymbolNotFoundError(symbol, self.name)

    def _daily_rows(
        self,
        symbol: str,
        period1: datetime,
        period2: datetime,
    ) -> tuple[list[dict], str]:
        data = self._call("chart", symbol, period1, period2, "1d") or {}
        rows = [row for row in data.get("quotes") or [] if row.get("close") is not None]
        currency = (data.get("meta") or {}).get("currency") or "USD"
        return rows, currency
