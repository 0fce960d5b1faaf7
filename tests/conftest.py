"""
Pytest configuration and fixtures for price resolution tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and call-forbidding connectors
- A fake Yahoo quote client with canned quotes and daily bars
- Fixed and mutable UTC clocks
- An API test client wired to the fakes
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from wealthdash.main import app
from wealthdash.api import deps
from wealthdash.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from wealthdash.repositories.sqlalchemy import orm_models  # noqa: F401
from wealthdash.repositories.sqlalchemy import SqlAlchemyPriceCacheRepository
from wealthdash.providers.yahoo_client import reset_yahoo_client
from wealthdash.domain.models import FeedStatus, MarketData
from wealthdash.domain.views import NewsFeed, NewsItem
from wealthdash.core.exceptions import ProviderUnavailableError
from wealthdash.core.timezone import UTC
from wealthdash.config.settings import reset_settings


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create an aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class MutableClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def clock(fixed_now) -> MutableClock:
    """Provide a clock starting at fixed_now."""
    return MutableClock(fixed_now)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def price_cache_repo(test_session) -> SqlAlchemyPriceCacheRepository:
    """Provide test PriceCacheRepository."""
    return SqlAlchemyPriceCacheRepository(test_session)


# =============================================================================
# CONNECTOR FIXTURES
# =============================================================================


class DeterministicConnector:
    """
    Market data connector with fixed prices and a call counter.

    Unknown symbols raise ProviderUnavailableError, like an upstream miss.
    """

    name = "deterministic"

    FIXED_PRICES = {
        "AAPL": Decimal("185.50"),
        "MSFT": Decimal("378.25"),
        "BTC": Decimal("64250.00"),
    }

    def __init__(self, as_of: Optional[datetime] = None, currency: Optional[str] = None):
        self._as_of = as_of or utc_datetime(2024, 6, 15, 14, 30, 0)
        # Report this currency instead of the requested one
        self._currency = currency
        self.calls: list[tuple[str, str]] = []

    def test_connection(self) -> bool:
        return True

    def fetch_price(self, symbol: str, currency: str) -> MarketData:
        self.calls.append((symbol, currency))
        price = self.FIXED_PRICES.get(symbol.upper())
        if price is None:
            raise ProviderUnavailableError(self.name, f"no data for {symbol}")
        return MarketData(
            symbol=symbol.upper(),
            price=price,
            currency=self._currency or currency,
            last_updated=self._as_of,
        )


class FailingConnector:
    """Connector that always fails as if the network were down."""

    name = "failing"

    def __init__(self):
        self.calls = 0

    def test_connection(self) -> bool:
        return False

    def fetch_price(self, symbol: str, currency: str) -> MarketData:
        self.calls += 1
        raise ProviderUnavailableError(self.name, "Network unavailable")


class LoudConnector:
    """Connector that fails the test if it is ever asked for a price."""

    name = "loud"

    def test_connection(self) -> bool:
        return True

    def fetch_price(self, symbol: str, currency: str) -> MarketData:
        pytest.fail(f"connector called for {symbol}/{currency}")


@pytest.fixture
def deterministic_connector(fixed_now) -> DeterministicConnector:
    """Provide deterministic connector."""
    return DeterministicConnector(as_of=fixed_now)


@pytest.fixture
def failing_connector() -> FailingConnector:
    """Provide a connector that always fails."""
    return FailingConnector()


@pytest.fixture
def loud_connector() -> LoudConnector:
    """Provide a connector that must not be called."""
    return LoudConnector()


# =============================================================================
# YAHOO CLIENT FIXTURES
# =============================================================================


def daily_bar(day: datetime, close: float, open_: Optional[float] = None) -> dict:
    """Daily bar shaped like YahooQuoteClient.chart() rows."""
    open_ = close - 1 if open_ is None else open_
    return {
        "date": day,
        "open": open_,
        "high": max(open_, close) + 0.5,
        "low": min(open_, close) - 0.5,
        "close": close,
        "volume": 1000,
    }


class FakeQuoteClient:
    """
    Stand-in for YahooQuoteClient.

    quote() serves canned quotes; chart() returns the bars whose date falls
    in [period1, period2). Setting `error` makes every call raise it.
    """

    def __init__(
        self,
        quotes: Optional[dict[str, dict]] = None,
        bars: Optional[dict[str, list[dict]]] = None,
        error: Optional[Exception] = None,
    ):
        self.quotes = quotes if quotes is not None else {
            "AAPL": {
                "symbol": "AAPL",
                "shortName": "Apple Inc.",
                "currency": "USD",
                "regularMarketPrice": 185.5,
                "regularMarketPreviousClose": 184.25,
            },
            "EURUSD=X": {
                "symbol": "EURUSD=X",
                "currency": "USD",
                "regularMarketPrice": 1.0825,
            },
        }
        self.bars = bars or {}
        self.error = error
        self.calls: list[tuple] = []

    def _maybe_fail(self) -> None:
        if self.error is not None:
            raise self.error

    def quote(self, symbol: str) -> dict:
        self.calls.append(("quote", symbol))
        self._maybe_fail()
        quote = self.quotes.get(symbol.upper())
        if quote is None:
            raise ValueError(f"Quote not found for symbol: {symbol}")
        return dict(quote)

    def search(self, query: str) -> dict:
        self.calls.append(("search", query))
        self._maybe_fail()
        matches = [
            {"symbol": symbol, "shortname": quote.get("shortName")}
            for symbol, quote in self.quotes.items()
            if query.upper() in symbol
        ]
        return {"quotes": matches, "news": []}

    def chart(self, symbol: str, period1: datetime, period2: datetime, interval: str) -> dict:
        self.calls.append(("chart", symbol, period1, period2, interval))
        self._maybe_fail()
        rows = [
            row for row in self.bars.get(symbol.upper(), [])
            if period1 <= row["date"] < period2
        ]
        quote = self.quotes.get(symbol.upper(), {})
        return {
            "meta": {
                "currency": quote.get("currency", "USD"),
                "regularMarketPrice": quote.get("regularMarketPrice"),
                "previousClose": quote.get("regularMarketPreviousClose"),
            },
            "quotes": rows,
        }


class FakeNewsProvider:
    """News provider returning a fixed feed per symbol."""

    def __init__(self, feeds: Optional[dict[str, NewsFeed]] = None):
        self.feeds = feeds or {}

    def fetch_news(self, symbol: str) -> NewsFeed:
        return self.feeds.get(symbol.upper(), NewsFeed(news=[], source=FeedStatus.UNAVAILABLE))


@pytest.fixture
def fake_quote_client() -> FakeQuoteClient:
    """Provide fake Yahoo quote client."""
    return FakeQuoteClient()


@pytest.fixture
def fake_news_provider() -> FakeNewsProvider:
    """Provide a news provider with one AAPL headline."""
    return FakeNewsProvider({
        "AAPL": NewsFeed(
            news=[
                NewsItem(
                    title="Apple hits record",
                    link="https://finance.yahoo.com/news/apple-record",
                    pub_date="2024-06-14T20:00:00Z",
                    description="Shares closed higher.",
                )
            ],
            source=FeedStatus.YAHOO_RSS,
        )
    })


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, fake_quote_client, fake_news_provider, monkeypatch) -> TestClient:
    """Provide FastAPI test client with test database and fake upstreams."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    reset_settings()
    reset_database()
    reset_yahoo_client()
    deps.reset_providers()

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_quote_client] = lambda: fake_quote_client
    app.dependency_overrides[deps.get_news_provider] = lambda: fake_news_provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_yahoo_client()
    deps.reset_providers()
    reset_settings()
