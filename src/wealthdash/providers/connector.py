"""Connector protocols: capability-scoped interfaces to external financial data."""

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, runtime_checkable

from wealthdash.domain.models import (
    CurrencyCode,
    MarketData,
    NormalizedBalance,
    NormalizedTransaction,
)


@runtime_checkable
class Connector(Protocol):
    """
    Base capability shared by every connector.

    name is the provider tag recorded alongside cached values.
    """

    name: str

    def test_connection(self) -> bool:
        """
        Liveness probe.

        Returns False on any network or auth failure; never raises.
        """
        ...


@runtime_checkable
class MarketDataConnector(Connector, Protocol):
    """Connector that prices a tradable instrument."""

    def fetch_price(self, symbol: str, currency: CurrencyCode) -> MarketData:
        """
        Fetch the latest price of symbol in currency.

        Raises ProviderUnavailableError when the upstream call fails and
        SymbolNotFoundError when the response carries no price.
        """
        ...


@runtime_checkable
class BankingConnector(Connector, Protocol):
    """Connector that reads balances and transactions from a bank."""

    def fetch_balances(self) -> list[NormalizedBalance]:
        ...

    def fetch_transactions(
        self,
        account_id: str,
        from_date: Optional[date] = None,
    ) -> list[NormalizedTransaction]:
        ...


@runtime_checkable
class FXConnector(Connector, Protocol):
    """Connector that quotes currency exchange rates."""

    def fetch_rate(self, base: CurrencyCode, target: CurrencyCode) -> Decimal:
        """Return how many units of target one unit of base buys."""
        ...
