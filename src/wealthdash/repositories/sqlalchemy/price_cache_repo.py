"""SQLAlchemy implementation of PriceCacheRepository."""

import logging
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wealthdash.core.exceptions import CacheUnavailableError
from wealthdash.core.timezone import to_utc
from wealthdash.domain.models import PriceCacheEntry
from wealthdash.repositories.sqlalchemy.orm_models import PriceCacheORM

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}
_UPDATED_COLUMNS = ("price", "provider", "fetched_at", "expires_at")


def _to_db_time(dt: datetime) -> datetime:
    """Aware datetime -> naive UTC for storage and comparison."""
    return to_utc(dt).replace(tzinfo=None)


class SqlAlchemyPriceCacheRepository:
    """SQLAlchemy-backed price cache repository."""

    def __init__(self, db: Session):
        self._db = db

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("Price cache %s failed: %s", action, exc)
            self._db.rollback()
            raise CacheUnavailableError(f"Price cache {action} failed") from exc

    def get_current(self, symbol: str, now: datetime) -> Optional[PriceCacheEntry]:
        """Most recently fetched entry for symbol with expires_at > now, any currency."""
        with self._store_errors("lookup"):
            orm_entry = (
                self._db.query(PriceCacheORM)
                .filter(
                    PriceCacheORM.symbol == symbol.upper(),
                    PriceCacheORM.expires_at > _to_db_time(now),
                )
                .order_by(PriceCacheORM.fetched_at.desc())
                .first()
            )
        return self._to_domain(orm_entry) if orm_entry else None

    def get_latest(self, symbol: str) -> Optional[PriceCacheEntry]:
        """Most recently fetched entry for symbol regardless of expiry or currency."""
        with self._store_errors("lookup"):
            orm_entry = (
                self._db.query(PriceCacheORM)
                .filter(PriceCacheORM.symbol == symbol.upper())
                .order_by(PriceCacheORM.fetched_at.desc())
                .first()
            )
        return self._to_domain(orm_entry) if orm_entry else None

    def upsert(self, entry: PriceCacheEntry) -> PriceCacheEntry:
        """
        Insert or replace the entry for (symbol, currency).

        Runs as a single INSERT ... ON CONFLICT DO UPDATE, so two requests
        that missed the cache for the same pair both succeed and the last
        write wins.
        """
        with self._store_errors("upsert"):
            dialect = self._db.get_bind().dialect.name
            insert = _UPSERT_INSERTS.get(dialect)
            if insert is None:
                raise CacheUnavailableError(f"Price cache upsert is not supported on {dialect}")

            stmt = insert(PriceCacheORM).values(
                symbol=entry.symbol,
                currency=entry.currency,
                price=entry.price,
                provider=entry.provider,
                fetched_at=_to_db_time(entry.fetched_at),
                expires_at=_to_db_time(entry.expires_at),
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["symbol", "currency"],
                set_={name: stmt.excluded[name] for name in _UPDATED_COLUMNS},
            )
            self._db.execute(stmt)
            self._db.commit()

            orm_entry = self._db.get(
                PriceCacheORM,
                (entry.symbol, entry.currency),
                populate_existing=True,
            )
        return self._to_domain(orm_entry)

    def list_for_symbol(self, symbol: str) -> list[PriceCacheEntry]:
        """All entries for symbol, newest first."""
        with self._store_errors("lookup"):
            orm_entries = (
                self._db.query(PriceCacheORM)
                .filter(PriceCacheORM.symbol == symbol.upper())
                .order_by(PriceCacheORM.fetched_at.desc())
                .all()
            )
        return [self._to_domain(e) for e in orm_entries]

    @staticmethod
    def _to_domain(orm: PriceCacheORM) -> PriceCacheEntry:
        """Convert ORM entry to domain model."""
        return PriceCacheEntry(
            symbol=orm.symbol,
            currency=orm.currency,
            price=Decimal(str(orm.price)) if orm.price is not None else Decimal("0"),
            provider=orm.provider,
            fetched_at=to_utc(orm.fetched_at),
            expires_at=to_utc(orm.expires_at),
        )
