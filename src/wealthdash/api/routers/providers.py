"""Provider liveness endpoint."""

from fastapi import APIRouter, Depends

from wealthdash.api.deps import get_status_connectors
from wealthdash.providers.connector import Connector
from wealthdash.services import MarketDataService

router = APIRouter(prefix="/providers", tags=["providers"])


@router.get("/status")
def get_provider_status(
    connectors: list[Connector] = Depends(get_status_connectors),
) -> dict[str, bool]:
    """Run each connector's connection test; true means reachable."""
    return MarketDataService.connection_status(connectors)
