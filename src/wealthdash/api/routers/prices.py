"""Price resolution endpoints."""

from fastapi import APIRouter, Depends, Query

from wealthdash.api.deps import get_price_cache_repo, get_price_service
from wealthdash.api.schemas import CacheEntryResponse, PriceResponse
from wealthdash.repositories.sqlalchemy import SqlAlchemyPriceCacheRepository
from wealthdash.services import PriceService

router = APIRouter(prefix="/prices", tags=["prices"])


@router.get("/{symbol}", response_model=PriceResponse)
def get_price(
    symbol: str,
    currency: str = Query("USD", min_length=3, max_length=8, description="Requested currency"),
    prices: PriceService = Depends(get_price_service),
) -> PriceResponse:
    """
    Resolve the current price of a symbol.

    source is one of cache, live, stale, none; price is 0 when source is none.
    """
    resolution = prices.resolve(symbol, currency)
    return PriceResponse(
        symbol=resolution.symbol,
        currency=resolution.currency,
        price=resolution.price,
        source=resolution.source.value,
        fetched_at=resolution.fetched_at,
    )


@router.get("/{symbol}/cache", response_model=list[CacheEntryResponse])
def list_cache_entries(
    symbol: str,
    cache_repo: SqlAlchemyPriceCacheRepository = Depends(get_price_cache_repo),
) -> list[CacheEntryResponse]:
    """List persisted cache entries for a symbol, newest first."""
    return [
        CacheEntryResponse(
            symbol=e.symbol,
            currency=e.currency,
            price=e.price,
            provider=e.provider,
            fetched_at=e.fetched_at,
            expires_at=e.expires_at,
        )
        for e in cache_repo.list_for_symbol(symbol)
    ]
