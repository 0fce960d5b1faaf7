"""API routers package."""

from wealthdash.api.routers.finance import router as finance_router
from wealthdash.api.routers.prices import router as prices_router
from wealthdash.api.routers.providers import router as providers_router

__all__ = [
    "finance_router",
    "prices_router",
    "providers_router",
]
