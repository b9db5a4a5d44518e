"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.exceptions import ExternalServiceError
from .models.errors import error_response
from .routes import health
from modules.admin.routes import page_router as admin_pages, router as admin_router
from modules.auth.routes import router as auth_router
from modules.profiles.routes import router as profiles_router
from modules.routing.routes import page_router as pages, router as navigation_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


async def external_service_error_handler(request: Request, exc: ExternalServiceError):
    """Gateway failures surface as 502."""
    logger.warning("%s %s failed upstream (%s): %s", request.method, request.url.path, exc.service, exc.message)
    return error_response(502, exc)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Auth, profile gate and role routing for the PetConnect marketplace",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(ExternalServiceError, external_service_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(profiles_router, prefix="/api/profiles", tags=["profiles"])
    app.include_router(navigation_router, prefix="/api/navigation", tags=["navigation"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
    app.include_router(pages, tags=["pages"])
    app.include_router(admin_pages, tags=["admin pages"])

    return app


# Application instance for uvicorn
app = create_app()
