"""Market data connectors and provider adapters."""

from wealthdash.providers.connector import (
    Connector,
    MarketDataConnector,
    BankingConnector,
    FXConnector,
)
from wealthdash.providers.yahoo_client import (
    YahooQuoteClient,
    get_yahoo_client,
    reset_yahoo_client,
    resolve_client_instance,
)
from wealthdash.providers.yahoo_provider import YahooMarketDataConnector
from wealthdash.providers.coingecko_provider import CoinGeckoConnector
from wealthdash.providers.rss_news_provider import RssNewsProvider, parse_feed
from wealthdash.providers.stub_provider import StubMarketDataConnector

__all__ = [
    "Connector",
    "MarketDataConnector",
    "BankingConnector",
    "FXConnector",
    "YahooQuoteClient",
    "get_yahoo_client",
    "reset_yahoo_client",
    "resolve_client_instance",
    "YahooMarketDataConnector",
    "CoinGeckoConnector",
    "RssNewsProvider",
    "parse_feed",
    "StubMarketDataConnector",
]
