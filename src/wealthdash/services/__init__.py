"""Service layer - business logic orchestration."""

from wealthdash.services.price_service import PriceService
from wealthdash.services.market_data_service import MarketDataService

__all__ = [
    "PriceService",
    "MarketDataService",
]
