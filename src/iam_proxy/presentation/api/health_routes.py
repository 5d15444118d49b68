# Assumptions:
# - Health and readiness endpoints for container orchestration
# - Health reflects configuration state, readiness only that the service exists

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from iam_proxy.application.service import AuthServicer
from iam_proxy.client.paths import HEALTH_PATH, READY_PATH
from iam_proxy.domain.value_objects.health import HealthStatus
from iam_proxy.presentation.schema.iam_schemas import HealthResponse, ReadyResponse

router = APIRouter()
logger = structlog.get_logger(__name__)

HEALTH_STATUS_CODES = {
    HealthStatus.ALIVE: 200,
    HealthStatus.DEGRADED: 500,
    HealthStatus.UNAVAILABLE: 503,
}


def get_auth_service(request: Request) -> AuthServicer:
    """Dependency to get the auth service"""
    return request.app.state.auth_service


@router.get(HEALTH_PATH, response_model=HealthResponse)
async def health_check(auth_service: AuthServicer = Depends(get_auth_service)):
    """Health check endpoint: 200 Alive, 500 Degraded, 503 Unavailable"""
    health = await auth_service.health()

    if health.status is not HealthStatus.ALIVE:
        logger.warning("Service is not healthy", status=health.status.value, detail=health.iam)

    return JSONResponse(status_code=HEALTH_STATUS_CODES[health.status], content=health.to_dict())


@router.get(READY_PATH, response_model=ReadyResponse)
async def readiness_check(auth_service: AuthServicer = Depends(get_auth_service)):
    """Readiness check endpoint"""
    try:
        await auth_service.ready()
    except Exception as e:
        logger.info("Service is not ready", error=str(e))
        return JSONResponse(status_code=503, content={"status": "not_ready"})

    return ReadyResponse(status="ready")
