"""
Yahoo Finance quote client and its process-wide instance.

The client export has not always had the same shape (a class, a factory
nested under ``default``, or an already-built object). The instance is
selected once through an ordered probe table and reused for every request.
"""

import inspect
import logging
import math
import warnings
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


# Fields copied from Ticker.info into the quote payload
_QUOTE_FIELDS = (
    "symbol",
    "shortName",
    "longName",
    "currency",
    "exchange",
    "quoteType",
    "marketState",
    "regularMarketPrice",
    "regularMarketPreviousClose",
    "regularMarketOpen",
    "regularMarketDayHigh",
    "regularMarketDayLow",
    "regularMarketVolume",
    "regularMarketChange",
    "regularMarketChangePercent",
    "marketCap",
    "fiftyTwoWeekHigh",
    "fiftyTwoWeekLow",
    "trailingPE",
    "dividendYield",
)

_REQUIRED_METHODS = ("quote", "search")


def _clean(value: Any) -> Any:
    """Turn pandas NaN into None; leave everything else alone."""
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class YahooQuoteClient:
    """
    Thin quote/search client over yfinance.

    Returns plain dicts shaped like Yahoo's quote API so callers never see
    yfinance objects or DataFrames.
    """

    def __init__(self) -> None:
        self._log_validation_errors = True
        self._suppressed_notices: set[str] = set()

    def quote(self, symbol: str) -> dict:
        """Return the quote for one symbol; raises ValueError if Yahoo has none."""
        yf = _get_yf()
        info = yf.Ticker(symbol).info
        if not isinstance(info, dict) or not info:
            raise ValueError(f"Quote not found for symbol: {symbol}")

        quote = {key: _clean(info[key]) for key in _QUOTE_FIELDS if key in info}
        # Equities report currentPrice, indices and FX only regularMarketPrice
        if quote.get("regularMarketPrice") is None:
            quote["regularMarketPrice"] = _clean(info.get("currentPrice"))
        if quote.get("regularMarketPreviousClose") is None:
            quote["regularMarketPreviousClose"] = _clean(info.get("previousClose"))
        quote.setdefault("symbol", symbol.upper())
        return quote

    def search(self, query: str) -> dict:
        """Search symbols and related headlines."""
        yf = _get_yf()
        result = yf.Search(query, max_results=10, news_count=5)
        return {
            "quotes": list(result.quotes or []),
            "news": list(result.news or []),
        }

    def chart(
        self,
        symbol: str,
        period1: datetime,
        period2: datetime,
        interval: str,
    ) -> dict:
        """
        Return price bars between period1 and period2.

        Shape: {"meta": {...}, "quotes": [{"date", "open", "high", "low", "close", "volume"}]}.
        """
        yf = _get_yf()
        ticker = yf.Ticker(symbol)
        df = ticker.history(
            start=period1,
            end=period2,
            interval=interval,
            auto_adjust=False,
        )

        quotes = []
        if df is not None and not df.empty:
            for idx, row in df.iterrows():
                volume = _clean(row.get("Volume"))
                quotes.append({
                    "date": idx.to_pydatetime() if hasattr(idx, "to_pydatetime") else idx,
                    "open": _clean(row.get("Open")),
                    "high": _clean(row.get("High")),
                    "low": _clean(row.get("Low")),
                    "close": _clean(row.get("Close")),
                    "volume": int(volume) if volume is not None else None,
                })

        try:
            metadata = ticker.get_history_metadata() or {}
        except Exception as exc:
            logger.debug("No history metadata for %s: %s", symbol, exc)
            metadata = {}

        return {
            "meta": {
                "currency": metadata.get("currency"),
                "regularMarketPrice": metadata.get("regularMarketPrice"),
                "previousClose": metadata.get("chartPreviousClose") or metadata.get("previousClose"),
            },
            "quotes": quotes,
        }

    def set_global_config(self, config: dict) -> None:
        """Apply client-wide settings; only validation.logErrors is honoured."""
        validation = config.get("validation") or {}
        if "logErrors" in validation:
            self._log_validation_errors = bool(validation["logErrors"])
            level = logging.WARNING if self._log_validation_errors else logging.CRITICAL
            logging.getLogger("yfinance").setLevel(level)

    def suppress_notices(self, notices: list[str]) -> None:
        """Silence advisory warnings emitted by the upstream library."""
        self._suppressed_notices.update(notices)
        warnings.filterwarnings("ignore", category=FutureWarning, module="yfinance")
        warnings.filterwarnings("ignore", category=DeprecationWarning, module="yfinance")


# =============================================================================
# INSTANCE SELECTION
# =============================================================================


def _is_constructor(candidate: Any) -> bool:
    return inspect.isclass(candidate) or inspect.isfunction(candidate)


def _has_client_surface(candidate: Any) -> bool:
    return all(callable(getattr(candidate, method, None)) for method in _REQUIRED_METHODS)


def _probe_constructor(export: Any) -> Optional[Any]:
    if _is_constructor(export):
        return export()
    return None


def _probe_nested_default(export: Any) -> Optional[Any]:
    if isinstance(export, Mapping):
        nested = export.get("default")
    else:
        nested = getattr(export, "default", None)
    if _is_constructor(nested):
        return nested()
    return None


def _probe_instance(export: Any) -> Optional[Any]:
    if _has_client_surface(export):
        return export
    return None


# Tried in order; the first probe yielding an object with quote/search wins
_PROBES: tuple[tuple[str, Callable[[Any], Optional[Any]]], ...] = (
    ("constructor", _probe_constructor),
    ("nested default constructor", _probe_nested_default),
    ("pre-built instance", _probe_instance),
)


def resolve_client_instance(export: Any) -> Any:
    """
    Select a working client from whatever shape the export has.

    Never raises. When no probe succeeds the raw export is returned so that
    later calls fail explicitly instead of at import time.
    """
    for label, probe in _PROBES:
        try:
            instance = probe(export)
        except Exception as exc:
            logger.warning("Yahoo Finance client probe '%s' failed: %s", label, exc)
            continue
        if instance is not None and _has_client_surface(instance):
            logger.debug("Yahoo Finance client selected via %s", label)
            return instance

    logger.error(
        "Yahoo Finance initialization error: could not find a valid constructor or instance"
    )
    return export


def configure_client(instance: Any) -> Any:
    """Turn off upstream validation noise on the selected instance."""
    set_global_config = getattr(instance, "set_global_config", None)
    if callable(set_global_config):
        try:
            set_global_config({"validation": {"logErrors": False}})
        except Exception as exc:
            logger.warning("Failed to set global config for Yahoo Finance client: %s", exc)

    suppress_notices = getattr(instance, "suppress_notices", None)
    if callable(suppress_notices):
        try:
            suppress_notices(["yahooSurvey"])
        except Exception as exc:
            logger.warning("Failed to suppress Yahoo Finance notices: %s", exc)

    return instance


# Process-wide instance (selected once, reused by every request)
_client: Optional[Any] = None


def get_yahoo_client(export: Any = YahooQuoteClient) -> Any:
    """Return the shared client, selecting and configuring it on first use."""
    global _client
    if _client is None:
        _client = configure_client(resolve_client_instance(export))
    return _client


def reset_yahoo_client() -> None:
    """Drop the shared client so the next call selects it again."""
    global _client
    _client = None
