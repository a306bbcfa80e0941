# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# Acts like a traffic director for all API version 1 requests, sending CV requests to the CV
# handlers and health checks to the health handler.
# 🧪 Purpose (Technical Summary):
# Main API v1 router aggregation combining module routers under their configured prefixes.
# 🔗 Dependencies:
# FastAPI, app.api.v1.health, app.modules.cv_management.presentation.api.v1.cvs
# 🔄 Connected Modules / Calls From:
# app.main.py

import logging

from fastapi import APIRouter

from app.modules.cv_management.presentation.api.v1.cvs import cvs_router

from . import ROUTE_PREFIXES
from .health import health_router

logger = logging.getLogger(__name__)

# Create main API v1 router
api_v1_router = APIRouter()

api_v1_router.include_router(
    health_router,
    tags=["Health Check"]
)

api_v1_router.include_router(
    cvs_router,
    prefix=ROUTE_PREFIXES["cvs"],
    tags=["CVs"]
)
