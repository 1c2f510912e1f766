"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.federation.api.http.app_data import ApplicationDependencies
from src.federation.api.http.routers.federation import router as federation_router
from src.federation.api.http.routers.health import router as health_router
from src.federation.api.utils.app_startup import configure_logging
from src.federation.core.services import DbSessionService, RegistryProviderFactory
from src.federation.core.services.database.db_manage import create_all
from src.federation.runtime.context import get_config


def build_dependencies() -> ApplicationDependencies:
    database_service = DbSessionService()
    create_all(database_service)
    provider_factory = RegistryProviderFactory(database_service)
    provider_factory.init()
    return ApplicationDependencies(
        database_service=database_service, provider_factory=provider_factory
    )


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the application.

    When ``dependencies`` is given it is installed immediately; otherwise the
    lifespan builds them from configuration at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "app_dependencies", None) is None:
            configure_logging()
            app.state.app_dependencies = build_dependencies()
        yield
        logger.info("Shutting down federation service")

    app = FastAPI(
        lifespan=lifespan,
        docs_url=None if get_config().app.environment == "production" else "/docs",
        redoc_url=None if get_config().app.environment == "production" else "/redoc",
    )
    app.state.app_dependencies = dependencies

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()

        with logger.contextualize(
            request_id=request_id, method=request.method, path=request.url.path
        ):
            try:
                logger.info("request.start")
                response = await call_next(request)
            except Exception as exc:
                logger.bind(error_type=type(exc).__name__).exception("request.error")
                return JSONResponse(
                    status_code=500,
                    content={"detail": "Internal Server Error", "request_id": request_id},
                    headers={"X-Request-ID": request_id},
                )

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code, duration_ms=round(duration_ms, 1)
            ).info("request.end")
            response.headers.setdefault("X-Request-ID", request_id)
            return response

    app.include_router(health_router)
    app.include_router(federation_router)
    return app


app = create_app()

__all__ = ["app", "create_app", "build_dependencies"]
