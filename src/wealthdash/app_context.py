"""Application context for in-process service management.

Provides a centralized way to resolve prices without HTTP, e.g. from
server-side dashboard rendering or scripts.
"""

from pathlib import Path
from typing import Any, Optional

from wealthdash.config.settings import Settings, set_settings, get_settings
from wealthdash.repositories.sqlalchemy.database import init_db_with_path, get_session
from wealthdash.repositories.sqlalchemy import SqlAlchemyPriceCacheRepository
from wealthdash.providers.connector import MarketDataConnector
from wealthdash.providers.coingecko_provider import CoinGeckoConnector
from wealthdash.providers.rss_news_provider import RssNewsProvider
from wealthdash.providers.stub_provider import StubMarketDataConnector
from wealthdash.providers.yahoo_client import get_yahoo_client
from wealthdash.providers.yahoo_provider import YahooMarketDataConnector
from wealthdash.services import MarketDataService, PriceService


class AppContext:
    """
    Application context providing in-process access to the price services.

    The quote client is selected once per process; connectors and services
    are built lazily on top of it.
    """

    def __init__(self, data_dir: Optional[Path] = None, quote_client: Any = None):
        """
        Initialize application context.

        Args:
            data_dir: Optional data directory. If not provided, uses default.
            quote_client: Optional Yahoo client; the shared instance is used otherwise.
        """
        self._data_dir = data_dir
        self._quote_client = quote_client
        self._session = None
        self._initialized = False

        # Service instances (lazy initialized)
        self._price_service: Optional[PriceService] = None
        self._market_data_service: Optional[MarketDataService] = None
        self._connector: Optional[MarketDataConnector] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Args:
            data_dir: Data directory path. Uses default if not provided.
        """
        if data_dir:
            self._data_dir = data_dir

        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)

        self.close()
        init_db_with_path(settings.get_data_dir() / "wealthdash.db")
        self._price_service = None
        self._market_data_service = None
        self._connector = None

        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Get the current data directory."""
        return get_settings().get_data_dir()

    def _get_session(self):
        """Get or create database session."""
        if self._session is None:
            self._session = get_session()
        return self._session

    def _get_quote_client(self) -> Any:
        if self._quote_client is None:
            self._quote_client = get_yahoo_client()
        return self._quote_client

    def _build_connector(self) -> MarketDataConnector:
        settings = get_settings()
        if settings.price_provider == "coingecko":
            return CoinGeckoConnector(
                api_key=settings.coingecko_api_key,
                base_url=settings.coingecko_base_url,
                cache_ttl_seconds=settings.upstream_cache_ttl_seconds,
                timeout_seconds=settings.http_timeout_seconds,
            )
        if settings.price_provider == "stub":
            return StubMarketDataConnector()
        return YahooMarketDataConnector(client=self._get_quote_client())

    @property
    def connector(self) -> MarketDataConnector:
        """Get the connector used for price resolution."""
        if self._connector is None:
            self._connector = self._build_connector()
        return self._connector

    @property
    def prices(self) -> PriceService:
        """Get the PriceService instance."""
        if self._price_service is None:
            self._price_service = PriceService(
                cache_repo=SqlAlchemyPriceCacheRepository(self._get_session()),
                connector=self.connector,
                ttl_seconds=get_settings().price_cache_ttl_seconds,
            )
        return self._price_service

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            settings = get_settings()
            self._market_data_service = MarketDataService(
                yahoo=YahooMarketDataConnector(client=self._get_quote_client()),
                news_provider=RssNewsProvider(
                    feed_url=settings.news_feed_url,
                    limit=settings.news_limit,
                    cache_ttl_seconds=settings.upstream_cache_ttl_seconds,
                    timeout_seconds=settings.http_timeout_seconds,
                ),
            )
        return self._market_data_service

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None
