"""Dependency injection for FastAPI."""

from typing import Any, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from wealthdash.config.settings import get_settings
from wealthdash.providers.connector import Connector, MarketDataConnector
from wealthdash.providers.coingecko_provider import CoinGeckoConnector
from wealthdash.providers.rss_news_provider import RssNewsProvider
from wealthdash.providers.stub_provider import StubMarketDataConnector
from wealthdash.providers.yahoo_client import get_yahoo_client
from wealthdash.providers.yahoo_provider import YahooMarketDataConnector
from wealthdash.repositories.sqlalchemy import SqlAlchemyPriceCacheRepository
from wealthdash.repositories.sqlalchemy.database import get_db
from wealthdash.services import MarketDataService, PriceService

# Long-lived adapters; they hold the short upstream response caches
_coingecko: Optional[CoinGeckoConnector] = None
_news_provider: Optional[RssNewsProvider] = None
_stub: Optional[StubMarketDataConnector] = None


def reset_providers() -> None:
    """Drop long-lived adapters so they are rebuilt from current settings."""
    global _coingecko, _news_provider, _stub
    _coingecko = None
    _news_provider = None
    _stub = None


def get_price_cache_repo(db: Session = Depends(get_db)) -> SqlAlchemyPriceCacheRepository:
    """Provide PriceCacheRepository instance."""
    return SqlAlchemyPriceCacheRepository(db)


def get_quote_client() -> Any:
    """Provide the process-wide Yahoo quote client."""
    return get_yahoo_client()


def get_yahoo_connector(client: Any = Depends(get_quote_client)) -> YahooMarketDataConnector:
    """Provide the Yahoo connector bound to the shared client."""
    return YahooMarketDataConnector(client=client)


def get_coingecko_connector() -> CoinGeckoConnector:
    """Provide the CoinGecko connector."""
    global _coingecko
    if _coingecko is None:
        settings = get_settings()
        _coingecko = CoinGeckoConnector(
            api_key=settings.coingecko_api_key,
            base_url=settings.coingecko_base_url,
            cache_ttl_seconds=settings.upstream_cache_ttl_seconds,
            timeout_seconds=settings.http_timeout_seconds,
        )
    return _coingecko


def get_stub_connector() -> StubMarketDataConnector:
    """Provide the offline stub connector."""
    global _stub
    if _stub is None:
        _stub = StubMarketDataConnector()
    return _stub


def get_news_provider() -> RssNewsProvider:
    """Provide the RSS news provider."""
    global _news_provider
    if _news_provider is None:
        settings = get_settings()
        _news_provider = RssNewsProvider(
            feed_url=settings.news_feed_url,
            limit=settings.news_limit,
            cache_ttl_seconds=settings.upstream_cache_ttl_seconds,
            timeout_seconds=settings.http_timeout_seconds,
        )
    return _news_provider


def get_price_connector(
    yahoo: YahooMarketDataConnector = Depends(get_yahoo_connector),
) -> MarketDataConnector:
    """Provide the connector configured for price resolution (PRICE_PROVIDER)."""
    provider = get_settings().price_provider
    if provider == "coingecko":
        return get_coingecko_connector()
    if provider == "stub":
        return get_stub_connector()
    return yahoo


def get_price_service(
    cache_repo: SqlAlchemyPriceCacheRepository = Depends(get_price_cache_repo),
    connector: MarketDataConnector = Depends(get_price_connector),
) -> PriceService:
    """Provide PriceService instance."""
    return PriceService(
        cache_repo=cache_repo,
        connector=connector,
        ttl_seconds=get_settings().price_cache_ttl_seconds,
    )


def get_market_data_service(
    yahoo: YahooMarketDataConnector = Depends(get_yahoo_connector),
    news_provider: RssNewsProvider = Depends(get_news_provider),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    return MarketDataService(yahoo=yahoo, news_provider=news_provider)


def get_status_connectors(
    yahoo: YahooMarketDataConnector = Depends(get_yahoo_connector),
    coingecko: CoinGeckoConnector = Depends(get_coingecko_connector),
) -> list[Connector]:
    """Provide every external connector for liveness checks."""
    return [yahoo, coingecko]
