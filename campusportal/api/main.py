"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (metadata, middleware, routers, handlers)
  - Own the container lifecycle in the lifespan (pool, HTTP clients)
  - Expose health check and metrics endpoints

Collaborators:
  - container.py: build_container / Container
  - crosscutting.middleware.RequestContextMiddleware
  - crosscutting.security.SecurityHeadersMiddleware
  - api/*_routes.py
  - api/exception_handlers.py

Constraints:
  - Settings are validated in the lifespan, so a missing secret fails
    startup, never a request
  - /healthz is public; /metrics is GlobalAdmin only

Notes:
  - Middleware order (outermost first): RequestContext -> SecurityHeaders -> CORS
  - create_app(container=...) lets tests inject a prebuilt container; the
    lifespan then leaves its lifecycle to the caller
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import Container, build_container, get_container
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.exceptions import ConfigurationFatal
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..crosscutting.security import SecurityHeadersMiddleware
from ..identity.gate import GLOBAL_ADMIN, Principal
from .auth_routes import router as auth_router
from .dependencies import require_api
from .event_routes import router as event_router
from .exception_handlers import register_exception_handlers
from .image_routes import router as image_router
from .infoscreen_routes import router as infoscreen_router
from .page_routes import router as page_router
from .profile_routes import router as profile_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and opens resources."""
    container: Optional[Container] = getattr(app.state, "container", None)
    owns_container = container is None

    if owns_container:
        # Raises ConfigurationFatal on missing/invalid env
        settings = get_settings()
        container = await build_container(settings)
        app.state.container = container

    settings = container.settings
    logger.info(
        "Campus portal starting up",
        extra={
            "app_env": settings.app_env,
            "storage_backend": settings.storage_backend,
            "geocoding_enabled": settings.geocoding_enabled(),
            "db_pool_min": settings.db_pool_min_size,
            "db_pool_max": settings.db_pool_max_size,
        },
    )

    try:
        yield
    finally:
        if owns_container:
            await container.aclose()
            app.state.container = None
        logger.info("Campus portal shutting down")


def _startup_settings(settings: Optional[Settings]) -> Optional[Settings]:
    """Settings for middleware wiring, with fallback for import-time errors."""
    if settings is not None:
        return settings
    try:
        return get_settings()
    except ConfigurationFatal:
        # The lifespan raises the same error before the first request
        return None


def create_app(
    settings: Optional[Settings] = None, container: Optional[Container] = None
) -> FastAPI:
    """R: Assemble the portal application."""
    if container is not None and settings is None:
        settings = container.settings
    startup_settings = _startup_settings(settings)

    app = FastAPI(
        title="Campus Portal",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Sign-in, sessions, password rotation"},
            {"name": "pages", "description": "Page data (redirects when signed out)"},
            {"name": "events", "description": "Event editing (EVENT_EDITOR)"},
            {"name": "infoscreens", "description": "Info-screen campaigns"},
            {"name": "profile", "description": "Organizer profile"},
            {"name": "images", "description": "Image upload and delivery"},
        ],
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=(
            startup_settings.get_allowed_origins_list()
            if startup_settings
            else ["http://localhost:3000"]
        ),
        allow_credentials=(
            startup_settings.cors_allow_credentials if startup_settings else False
        ),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )
    app.add_middleware(
        SecurityHeadersMiddleware,
        is_production=startup_settings.is_production() if startup_settings else True,
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(auth_router)
    app.include_router(page_router)
    app.include_router(event_router)
    app.include_router(infoscreen_router)
    app.include_router(profile_router)
    app.include_router(image_router)

    register_exception_handlers(app)

    @app.get("/healthz")
    async def healthz(request: Request, container: Container = Depends(get_container)):
        """
        R: Health check for orchestration.

        Returns:
            ok: True if the database answers
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_ok = await container.database_ok()
        if not db_ok:
            logger.warning("Health check: DB unavailable")
        return {
            "ok": db_ok,
            "db": "connected" if db_ok else "disconnected",
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics")
    async def metrics(_principal: Principal = Depends(require_api(GLOBAL_ADMIN))):
        """R: Prometheus text format metrics."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
