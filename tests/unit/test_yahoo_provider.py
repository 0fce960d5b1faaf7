"""
Unit tests for YahooMarketDataConnector.

Tests cover:
- Price and FX rate lookups
- Error wrapping for upstream failures
- Chart ranges and bar filtering
- Historical price: current, exact day, nearest earlier day, none
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from wealthdash.core.exceptions import ProviderUnavailableError, SymbolNotFoundError
from wealthdash.providers.connector import FXConnector, MarketDataConnector
from wealthdash.providers.yahoo_provider import YahooMarketDataConnector

from tests.conftest import FakeQuoteClient, daily_bar, utc_datetime


# Weekday bars for June 3-14, 2024, dated at the 04:00 UTC session open
JUNE_DAYS = [3, 4, 5, 6, 7, 10, 11, 12, 13, 14]


def june_bars():
    return [daily_bar(utc_datetime(2024, 6, d, 4), close=180.0 + d) for d in JUNE_DAYS]


@pytest.fixture
def connector(fake_quote_client, fixed_now) -> YahooMarketDataConnector:
    fake_quote_client.bars = {"AAPL": june_bars()}
    return YahooMarketDataConnector(client=fake_quote_client, clock=lambda: fixed_now)


class TestFetchPrice:
    """Tests for fetch_price and fetch_rate."""

    def test_satisfies_connector_protocols(self, connector):
        assert isinstance(connector, MarketDataConnector)
        assert isinstance(connector, FXConnector)

    def test_fetch_price(self, connector, fixed_now):
        """
        GIVEN Yahoo quotes AAPL at 185.5 USD
        WHEN I fetch the price
        THEN a MarketData with a Decimal price is returned
        """
        data = connector.fetch_price("aapl", "USD")

        assert data.symbol == "AAPL"
        assert data.price == Decimal("185.5")
        assert data.currency == "USD"
        assert data.last_updated == fixed_now

    def test_quote_currency_wins_over_requested(self, connector):
        assert connector.fetch_price("AAPL", "EUR").currency == "USD"

    def test_quote_without_price_is_not_found(self, fixed_now):
        client = FakeQuoteClient(quotes={"ZZZ": {"symbol": "ZZZ", "regularMarketPrice": None}})
        connector = YahooMarketDataConnector(client=client, clock=lambda: fixed_now)

        with pytest.raises(SymbolNotFoundError):
            connector.fetch_price("ZZZ", "USD")

    def test_upstream_error_is_wrapped(self, connector):
        """
        GIVEN the client raises for an unknown symbol
        WHEN I fetch the price
        THEN ProviderUnavailableError carries the upstream message
        """
        with pytest.raises(ProviderUnavailableError) as exc_info:
            connector.fetch_price("NOPE", "USD")

        assert exc_info.value.provider == "yahoo"
        assert exc_info.value.upstream_message == "Quote not found for symbol: NOPE"

    def test_uninitialized_client(self):
        connector = YahooMarketDataConnector(client={"not": "a client"})

        with pytest.raises(ProviderUnavailableError) as exc_info:
            connector.quote("AAPL")

        assert exc_info.value.upstream_message == "Yahoo Finance instance is not correctly initialized"

    def test_fetch_rate(self, connector, fake_quote_client):
        assert connector.fetch_rate("eur", "usd") == Decimal("1.0825")
        assert ("quote", "EURUSD=X") in fake_quote_client.calls

    def test_fetch_rate_same_currency(self, connector, fake_quote_client):
        assert connector.fetch_rate("USD", "USD") == Decimal("1")
        assert fake_quote_client.calls == []


class TestConnection:
    def test_probe_symbol_reachable(self, fake_quote_client):
        fake_quote_client.quotes["SPY"] = {"symbol": "SPY", "regularMarketPrice": 540.0}

        assert YahooMarketDataConnector(client=fake_quote_client).test_connection() is True

    def test_probe_failure(self):
        client = FakeQuoteClient(error=ConnectionError("Network unavailable"))

        assert YahooMarketDataConnector(client=client).test_connection() is False


class TestChart:
    """Tests for chart ranges."""

    def test_one_month_daily_bars(self, connector, fake_quote_client, fixed_now):
        chart = connector.chart("AAPL", "1mo")

        _, symbol, period1, period2, interval = fake_quote_client.calls[-1]
        assert interval == "1d"
        assert period2 == fixed_now
        assert period1 == fixed_now - timedelta(days=30)
        assert chart.range == "1mo"
        assert len(chart.data) == len(JUNE_DAYS)
        assert chart.data[0].time == int(utc_datetime(2024, 6, 3, 4).timestamp())
        assert chart.data[-1].close == 194.0
        assert chart.currency == "USD"
        assert chart.regular_market_price == 185.5
        assert chart.previous_close == 184.25

    def test_bars_without_open_or_close_are_dropped(self, connector, fake_quote_client):
        fake_quote_client.bars["AAPL"][0]["open"] = None
        fake_quote_client.bars["AAPL"][1]["close"] = None

        chart = connector.chart("AAPL", "1mo")

        assert len(chart.data) == len(JUNE_DAYS) - 2

    def test_unknown_range_falls_back_to_one_month(self, connector, fake_quote_client):
        chart = connector.chart("AAPL", "2w")

        assert chart.range == "1mo"
        assert fake_quote_client.calls[-1][4] == "1d"

    @pytest.mark.parametrize("range_,interval", [
        ("1d", "5m"),
        ("5d", "15m"),
        ("1y", "1wk"),
        ("5y", "1mo"),
    ])
    def test_range_intervals(self, connector, fake_quote_client, range_, interval):
        connector.chart("AAPL", range_)

        assert fake_quote_client.calls[-1][4] == interval

    def test_max_starts_at_epoch(self, connector, fake_quote_client):
        connector.chart("AAPL", "max")

        assert fake_quote_client.calls[-1][2] == utc_datetime(1970, 1, 1)


class TestHistoricalPrice:
    """Tests for historical_price."""

    def test_today_uses_live_quote(self, connector, fixed_now):
        price = connector.historical_price("AAPL", fixed_now.date())

        assert price.source == "current"
        assert price.price == 185.5

    def test_exact_trading_day(self, connector):
        """
        GIVEN a bar on 2024-06-14
        WHEN I ask for 2024-06-14
        THEN that day's close is returned with OHLC
        """
        price = connector.historical_price("AAPL", date(2024, 6, 14))

        assert price.source == "historical"
        assert price.price == 194.0
        assert price.open == 193.0
        assert price.actual_date is None

    def test_weekend_uses_nearest_earlier_day(self, connector):
        """
        GIVEN no bar on Sunday 2024-06-09
        WHEN I ask for that day
        THEN Friday 2024-06-07 is used and reported as actual_date
        """
        price = connector.historical_price("AAPL", date(2024, 6, 9))

        assert price.source == "nearest"
        assert price.price == 187.0
        assert price.actual_date == date(2024, 6, 7)

    def test_no_data_in_window(self, connector):
        with pytest.raises(SymbolNotFoundError):
            connector.historical_price("AAPL", date(2023, 1, 1))
