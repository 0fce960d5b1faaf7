"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ProviderUnavailableError(AppError):
    """Raised when an upstream provider cannot be reached or refuses the call."""

    def __init__(
        self,
        provider: str,
        upstream_message: str,
        code: str = "PROVIDER_UNAVAILABLE",
    ):
        self.provider = provider
        self.upstream_message = upstream_message
        super().__init__(f"{provider}: {upstream_message}", code=code)


class MalformedUpstreamResponseError(ProviderUnavailableError):
    """Raised when an upstream response does not have the expected shape."""

    def __init__(self, provider: str, upstream_message: str):
        super().__init__(provider, upstream_message, code="MALFORMED_UPSTREAM_RESPONSE")


class SymbolNotFoundError(AppError):
    """Raised when a well-formed upstream response has no price for the symbol."""

    def __init__(self, symbol: str, provider: Optional[str] = None):
        self.symbol = symbol
        self.provider = provider
        source = f" ({provider})" if provider else ""
        super().__init__(f"No price found for {symbol}{source}", code="SYMBOL_NOT_FOUND")


class CacheUnavailableError(AppError):
    """Raised when the persisted price cache cannot be read or written."""

    def __init__(self, message: str):
        super().__init__(message, code="CACHE_UNAVAILABLE")
