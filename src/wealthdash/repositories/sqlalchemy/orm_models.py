"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import Column, String, DateTime, Numeric, Index

from wealthdash.repositories.sqlalchemy.database import Base


class PriceCacheORM(Base):
    """
    SQLAlchemy model for PriceCacheEntry.

    Timestamps are stored as naive UTC.
    """

    __tablename__ = "price_cache"

    symbol = Column(String(32), primary_key=True)
    currency = Column(String(8), primary_key=True)
    price = Column(Numeric(precision=24, scale=8), nullable=False, default=Decimal("0"))
    provider = Column(String(32), nullable=False)
    fetched_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_price_cache_symbol_fetched_at", "symbol", "fetched_at"),
        Index("ix_price_cache_symbol_expires_at", "symbol", "expires_at"),
    )
