"""Normalized banking models for BankingConnector implementations."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from wealthdash.domain.models.market import CurrencyCode


@dataclass(frozen=True)
class NormalizedBalance:
    """
    One account balance reported by a banking provider.

    external_id is the provider's own account identifier, used to reconcile
    against locally stored accounts.
    """

    external_id: str
    name: str
    balance: Decimal
    currency: CurrencyCode
    type: str


@dataclass(frozen=True)
class NormalizedTransaction:
    """
    One ledger movement reported by a banking provider.

    external_id is the dedup key across repeated imports from the same source.
    """

    external_id: str
    date: date
    description: str
    amount: Decimal
    currency: CurrencyCode
    category: Optional[str] = field(default=None)
    merchant: Optional[str] = field(default=None)
