"""
Liveness endpoint for orchestrators and load balancers.

Lives outside /v2, so neither the broker API version check nor the
catalog is involved. Reports the release of the running application.
"""

from fastapi import APIRouter, Depends

from servicebroker.core.config import Settings
from servicebroker.interfaces.broker.dependencies import get_settings
from servicebroker.interfaces.broker.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Broker liveness")
def health_check(config: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", version=config.version)
