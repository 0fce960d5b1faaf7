"""Repository protocol definitions (interfaces)."""

from wealthdash.repositories.protocols.price_cache_repo import PriceCacheRepository

__all__ = [
    "PriceCacheRepository",
]
