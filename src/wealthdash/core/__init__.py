"""Core utilities and shared functionality."""

from wealthdash.core.timezone import (
    now_utc,
    to_utc,
    parse_datetime_utc,
    UTC,
)
from wealthdash.core.exceptions import (
    AppError,
    ProviderUnavailableError,
    MalformedUpstreamResponseError,
    SymbolNotFoundError,
    CacheUnavailableError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "parse_datetime_utc",
    "UTC",
    "AppError",
    "ProviderUnavailableError",
    "MalformedUpstreamResponseError",
    "SymbolNotFoundError",
    "CacheUnavailableError",
]
