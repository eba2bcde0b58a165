"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if database is unreachable (readiness)
    - Readiness reports the gateway command count when the gateway is initialized
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import intranet_api.infrastructure.database as db_module
import intranet_api.services.gateway_service as gateway_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "intranet-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    gateway = gateway_module.gateway_service
    return {
        "status": "ready",
        "checks": {
            "database": "healthy",
            "gateway_commands": len(gateway.table) if gateway else None,
        },
    }
