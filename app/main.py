# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts up the CV Builder, connects all the different parts together,
# and makes sure everything is ready to handle requests from the web app.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point with logging setup, middleware, exception handler
# and router registration for the modular monolith.
#
# 🔗 Dependencies:
# - FastAPI framework
# - app.shared.config.settings
# - app.shared.utils.logging
# - app.api.v1.router
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - tests (create_application with test settings)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import API_PREFIX, CURRENT_VERSION
from app.api.middleware.error_handling import register_exception_handlers
from app.api.middleware.logging import RequestLoggingMiddleware
from app.api.v1.router import api_v1_router
from app.shared.config.settings import Settings, get_settings
from app.shared.config.supabase import get_supabase_manager
from app.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)

API_V1_PREFIX = f"{API_PREFIX}/{CURRENT_VERSION}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    The data store client is created lazily on first use, so startup
    only announces the configuration in effect.
    """
    settings: Settings = app.state.settings
    logger.info(
        f"{settings.APP_NAME} starting up (environment={settings.ENVIRONMENT}, "
        f"data_store={settings.DATA_STORE_BACKEND})"
    )
    yield
    if settings.DATA_STORE_BACKEND == "supabase":
        get_supabase_manager().close()
    logger.info(f"{settings.APP_NAME} shutting down")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application with middleware,
    exception handlers and routers based on the current settings.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.settings = settings

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix=API_V1_PREFIX)

    @app.get("/", include_in_schema=False)
    def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": f"{API_V1_PREFIX}/health",
            "api_base": API_V1_PREFIX,
        }

    return app


# Create the FastAPI application
app = create_application()


def main():
    """Run the application with uvicorn in development."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
