"""Pydantic schemas for the research (finance) endpoints."""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error payload returned when an upstream provider fails."""

    error: str
    details: Optional[str] = None


class NewsItemResponse(BaseModel):
    """A single headline."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    link: str
    pub_date: Optional[str] = Field(default=None, alias="pubDate")
    description: str = ""
    source: str


class NewsResponse(BaseModel):
    """Headlines plus the feed status tag (yahoo_rss, unavailable, error)."""

    news: list[NewsItemResponse]
    source: str
    error: Optional[str] = None


class CandleResponse(BaseModel):
    """One OHLCV bar."""

    time: int
    open: float
    high: Optional[float] = None
    low: Optional[float] = None
    close: float
    volume: Optional[int] = None


class ChartMetaResponse(BaseModel):
    """Chart metadata."""

    model_config = ConfigDict(populate_by_name=True)

    currency: str
    regular_market_price: Optional[float] = Field(default=None, alias="regularMarketPrice")
    previous_close: Optional[float] = Field(default=None, alias="previousClose")


class ChartResponse(BaseModel):
    """Response for GET /finance/chart."""

    symbol: str
    range: str
    data: list[CandleResponse]
    meta: ChartMetaResponse


class HistoricalPriceResponse(BaseModel):
    """Response for GET /finance/historical."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    date: datetime.date
    price: float
    currency: str
    source: str
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    actual_date: Optional[datetime.date] = Field(default=None, alias="actualDate")
