"""Market data service for the research endpoints (quotes, search, news, charts)."""

import logging
from datetime import date

from wealthdash.core.exceptions import ProviderUnavailableError
from wealthdash.domain.views import ChartView, HistoricalPrice, NewsFeed
from wealthdash.providers.connector import Connector
from wealthdash.providers.rss_news_provider import RssNewsProvider
from wealthdash.providers.yahoo_provider import YahooMarketDataConnector

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for uncached market lookups.

    Provider failures are logged with the symbol or query and re-raised;
    news lookups never fail.
    """

    def __init__(
        self,
        yahoo: YahooMarketDataConnector,
        news_provider: RssNewsProvider,
    ):
        self._yahoo = yahoo
        self._news = news_provider

    def get_quote(self, symbol: str) -> dict:
        """Raw quote for symbol."""
        try:
            return self._yahoo.quote(symbol)
        except ProviderUnavailableError as exc:
            logger.error("Yahoo Finance quote error for %s: %s", symbol, exc.upstream_message)
            raise

    def search(self, query: str) -> dict:
        """Raw symbol search results for query."""
        try:
            return self._yahoo.search(query)
        except ProviderUnavailableError as exc:
            logger.error("Yahoo Finance search error for %r: %s", query, exc.upstream_message)
            raise

    def get_news(self, symbol: str) -> NewsFeed:
        """Headlines for symbol, tagged with the feed status."""
        return self._news.fetch_news(symbol)

    def get_chart(self, symbol: str, range_: str) -> ChartView:
        """Price bars for symbol over a named range."""
        try:
            return self._yahoo.chart(symbol, range_)
        except ProviderUnavailableError as exc:
            logger.error("Chart error for %s (%s): %s", symbol, range_, exc.upstream_message)
            raise

    def get_historical_price(self, symbol: str, target_date: date) -> HistoricalPrice:
        """Price of symbol on target_date."""
        try:
            return self._yahoo.historical_price(symbol, target_date)
        except ProviderUnavailableError as exc:
            logger.error(
                "Historical price error for %s on %s: %s",
                symbol,
                target_date.isoformat(),
                exc.upstream_message,
            )
            raise

    @staticmethod
    def connection_status(connectors: list[Connector]) -> dict[str, bool]:
        """Run each connector's liveness probe."""
        return {connector.name: connector.test_connection() for connector in connectors}
