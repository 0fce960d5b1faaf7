"""Repository layer - data access abstractions and implementations."""

from wealthdash.repositories.protocols import PriceCacheRepository

__all__ = [
    "PriceCacheRepository",
]
