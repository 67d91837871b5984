"""
Name: FastAPI Application Factory

Responsibilities:
  - Build the FastAPI application around one ServiceContext
  - Configure middleware (body limit, request context, CORS)
  - Mount the bugs router under API_PREFIX (default /api)
  - Expose the /health endpoint
  - Drive the ServiceContext lifecycle from the lifespan

Collaborators:
  - container.build_service_context / ServiceContext
  - crosscutting.middleware: BodyLimitMiddleware, RequestContextMiddleware
  - interfaces.api.http.router.build_router
  - api.exception_handlers.register_exception_handlers

Notes:
  - Middleware order: CORS -> RequestContext -> BodyLimit -> routes
  - A failed startup connection is logged at critical and re-raised, which
    aborts server startup
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..container import ServiceContext, build_service_context
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..interfaces.api.http.router import build_router
from ..interfaces.api.http.schemas.bugs import HealthRes
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle: start and close the ServiceContext."""
    services: ServiceContext = app.state.services
    settings = services.settings

    try:
        await services.start()
    except DatabaseError as exc:
        logger.critical(
            "database connection failed, aborting startup",
            extra={"error_id": exc.error_id, "error_message": exc.message},
        )
        raise

    try:
        logger.info(
            "Bug Tracker API starting up",
            extra={
                "app_env": settings.app_env,
                "api_prefix": settings.api_prefix,
                "store": "mongo" if services.store is not None else "memory",
                "memory_monitor": services.memory_monitor_running,
            },
        )
        yield
    finally:
        await services.close()
        logger.info("Bug Tracker API shutting down")


def create_app(services: ServiceContext | None = None) -> FastAPI:
    """Build an application that owns `services` (composed from Settings if None)."""
    services = services or build_service_context()
    settings = services.settings

    app = FastAPI(
        title="Bug Tracker API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "bugs", "description": "Bug record management"},
            {"name": "health", "description": "Liveness"},
        ],
    )
    app.state.services = services

    # add_middleware prepends: the last one added is the outermost.
    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        RequestContextMiddleware, verbose=settings.is_development()
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    app.include_router(build_router(), prefix=settings.api_prefix)
    register_exception_handlers(app)

    @app.get("/health", response_model=HealthRes, tags=["health"])
    def health(request: Request) -> HealthRes:
        context: ServiceContext = request.app.state.services
        return HealthRes(
            status="OK",
            timestamp=datetime.now(timezone.utc),
            uptime=context.uptime_seconds(),
        )

    return app


app = create_app()
