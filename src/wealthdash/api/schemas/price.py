"""Pydantic schemas for price resolution endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PriceResponse(BaseModel):
    """Resolved price of a symbol."""

    symbol: str
    currency: str
    price: Decimal
    source: str
    fetched_at: Optional[datetime] = None


class CacheEntryResponse(BaseModel):
    """One persisted price cache entry."""

    symbol: str
    currency: str
    price: Decimal
    provider: str
    fetched_at: datetime
    expires_at: datetime
