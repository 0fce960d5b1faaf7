"""Pydantic schemas for API request/response."""

from wealthdash.api.schemas.finance import (
    ErrorResponse,
    NewsItemResponse,
    NewsResponse,
    CandleResponse,
    ChartMetaResponse,
    ChartResponse,
    HistoricalPriceResponse,
)
from wealthdash.api.schemas.price import PriceResponse, CacheEntryResponse

__all__ = [
    "ErrorResponse",
    "NewsItemResponse",
    "NewsResponse",
    "CandleResponse",
    "ChartMetaResponse",
    "ChartResponse",
    "HistoricalPriceResponse",
    "PriceResponse",
    "CacheEntryResponse",
]
