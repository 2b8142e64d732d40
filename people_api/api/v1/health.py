from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from people_api.core.db import get_unit_of_work
from people_api.core.logging_config import AppLogger, get_app_logger
from people_api.services.unit_of_work import UnitOfWork

router = APIRouter()

@router.get("/")
def health_check():
    """basic liveness check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "people-api"
    }

@router.get("/ready")
async def readiness_check(
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    """readiness check - verifies the database answers a query"""
    checks = {}
    all_healthy = True

    try:
        total = await uow.people.count()
        checks["database"] = {"status": "healthy", "message": f"connected, {total} people registered"}
    except Exception as e:
        log.error("readiness check failed", e)
        checks["database"] = {"status": "unhealthy", "message": str(e)}
        all_healthy = False

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content={
            "status": "healthy" if all_healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks
        },
    )
