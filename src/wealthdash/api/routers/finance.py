"""Research endpoints: quote, search, news, chart, historical price."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from wealthdash.api.deps import get_market_data_service
from wealthdash.api.schemas import (
    CandleResponse,
    ErrorResponse,
    ChartMetaResponse,
    ChartResponse,
    HistoricalPriceResponse,
    NewsItemResponse,
    NewsResponse,
)
from wealthdash.core.exceptions import ProviderUnavailableError, SymbolNotFoundError
from wealthdash.services import MarketDataService

router = APIRouter(prefix="/finance", tags=["finance"])

_LOG_HINT = "Check server logs for more information"
_ERRORS = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def _provider_error(exc: ProviderUnavailableError, default_message: str) -> JSONResponse:
    """500 with the upstream message and a hint; the full error is in the logs."""
    return JSONResponse(
        status_code=500,
        content={"error": exc.upstream_message or default_message, "details": _LOG_HINT},
    )


@router.get("/quote", responses=_ERRORS)
def get_quote(
    symbol: Optional[str] = Query(None, description="Ticker symbol (e.g. AAPL)"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Return the raw Yahoo quote for a symbol."""
    if not (symbol or "").strip():
        return _bad_request("Symbol is required")
    try:
        return market.get_quote(symbol.strip())
    except ProviderUnavailableError as exc:
        return _provider_error(exc, "Failed to fetch quote")


@router.get("/search", responses=_ERRORS)
def search(
    q: Optional[str] = Query(None, description="Free-text search query"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Search symbols and related headlines."""
    if not (q or "").strip():
        return _bad_request("Query is required")
    try:
        return market.search(q.strip())
    except ProviderUnavailableError as exc:
        return _provider_error(exc, "Failed to search")


@router.get("/news", response_model=NewsResponse, responses={400: {"model": ErrorResponse}})
def get_news(
    symbol: Optional[str] = Query(None, description="Ticker symbol"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """
    Return recent headlines for a symbol.

    Always 200 once a symbol is given; `source` tells whether the feed worked.
    """
    if not (symbol or "").strip():
        return _bad_request("Symbol is required")
    feed = market.get_news(symbol.strip())
    return NewsResponse(
        news=[
            NewsItemResponse(
                title=item.title,
                link=item.link,
                pub_date=item.pub_date,
                description=item.description,
                source=item.source,
            )
            for item in feed.news
        ],
        source=feed.source.value,
        error=feed.error,
    )


@router.get("/chart", response_model=ChartResponse, responses=_ERRORS)
def get_chart(
    symbol: Optional[str] = Query(None, description="Ticker symbol"),
    range_: str = Query("1mo", alias="range", description="1d, 5d, 1mo, 3mo, 6mo, 1y, 5y, max"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Return OHLCV bars for a symbol over a named range."""
    if not (symbol or "").strip():
        return _bad_request("Symbol is required")
    try:
        chart = market.get_chart(symbol.strip(), range_)
    except ProviderUnavailableError as exc:
        return _provider_error(exc, "Failed to fetch chart data")

    if not chart.data:
        return JSONResponse(status_code=404, content={"error": "No data found"})

    return ChartResponse(
        symbol=chart.symbol,
        range=chart.range,
        data=[
            CandleResponse(
                time=c.time,
                open=c.open,
                high=c.high,
                low=c.low,
                close=c.close,
                volume=c.volume,
            )
            for c in chart.data
        ],
        meta=ChartMetaResponse(
            currency=chart.currency,
            regular_market_price=chart.regular_market_price,
            previous_close=chart.previous_close,
        ),
    )


@router.get("/historical", response_model=HistoricalPriceResponse, responses=_ERRORS)
def get_historical_price(
    symbol: Optional[str] = Query(None, description="Ticker symbol"),
    date_: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD"),
    market: MarketDataService = Depends(get_market_data_service),
):
    """Return the price of a symbol on a given day."""
    if not (symbol or "").strip():
        return _bad_request("Symbol is required")
    if not (date_ or "").strip():
        return _bad_request("Date is required")
    try:
        target_date = date.fromisoformat(date_.strip())
    except ValueError:
        return _bad_request("Date must be YYYY-MM-DD")

    try:
        price = market.get_historical_price(symbol.strip(), target_date)
    except SymbolNotFoundError:
        return JSONResponse(
            status_code=404,
            content={
                "error": "No historical data available for this date",
                "symbol": symbol.strip(),
                "date": target_date.isoformat(),
            },
        )
    except ProviderUnavailableError as exc:
        return _provider_error(exc, "Failed to fetch historical price")

    return HistoricalPriceResponse(
        symbol=price.symbol,
        date=price.date,
        price=price.price,
        currency=price.currency,
        source=price.source,
        open=price.open,
        high=price.high,
        low=price.low,
        actual_date=price.actual_date,
    )
