# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Tells load balancers and monitoring whether the CV Builder is up and running.
# 🧪 Purpose (Technical Summary):
# Liveness endpoint reporting service name, version and uptime, plus a readiness check that
# checks Supabase connectivity through SupabaseManager.health_check.
# 🔗 Dependencies:
# FastAPI, app.shared.config.settings, app.shared.config.supabase
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.shared.config.settings import Settings, get_settings
from app.shared.config.supabase import get_supabase_manager

logger = logging.getLogger(__name__)

# Create router for health endpoints
health_router = APIRouter()

# Application start time for uptime calculation
_app_start_time = datetime.now(timezone.utc)


@health_router.get("/health",
                  summary="Basic Health Check",
                  description="Basic health check endpoint for load balancers and monitoring")
def health_check(settings: Settings = Depends(get_settings)) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "status": "healthy",
        "timestamp": now.isoformat(),
        "service": "cv-builder-api",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "uptime_seconds": int((now - _app_start_time).total_seconds()),
    }


@health_router.get("/health/ready",
                  summary="Readiness Check",
                  description="Readiness check of data store connectivity")
def readiness_check(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """
    Readiness check

    Returns 200 when the configured data store answers, 503 otherwise.
    The in-memory backend is always ready.
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    if settings.DATA_STORE_BACKEND == "memory":
        return JSONResponse(status_code=200, content={"status": "ready", "timestamp": timestamp})

    db_health = get_supabase_manager().health_check()
    if db_health["database_service"]:
        return JSONResponse(status_code=200, content={"status": "ready", "timestamp": timestamp})

    logger.warning(f"Readiness check failed: {db_health['error']}")
    return JSONResponse(
        status_code=503,
        content={
            "status": "not_ready",
            "reason": "database_unhealthy",
            "timestamp": timestamp,
        }
    )
