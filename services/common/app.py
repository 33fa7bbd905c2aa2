from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import health
from .claims import ClaimStoreError
from .config import settings
from .logging import configure_logging, get_correlation_id
from .middleware import CorrelationIdMiddleware

logger = structlog.get_logger()


def create_app(service_name: str, title: str, routers: list[APIRouter]) -> FastAPI:
    """
    Build a bonus claims service.

    Args:
        service_name: Name used in logs
        title: OpenAPI title
        routers: Service-specific routers, mounted after the health routes

    Returns:
        The FastAPI application
    """
    configure_logging(service_name, settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting application",
            service=service_name,
            port=settings.port,
            table_name=settings.table_name,
        )
        if not settings.table_name:
            logger.warning("TABLE_NAME is not set, claim routes will return 500")
        yield
        logger.info("Application shutdown complete")

    app = FastAPI(title=title, version="0.1.0", lifespan=lifespan)
    app.add_middleware(CorrelationIdMiddleware)

    @app.exception_handler(ClaimStoreError)
    async def claim_store_error_handler(request: Request, exc: ClaimStoreError) -> JSONResponse:
        logger.error("Claim store request failed", error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "correlation_id": get_correlation_id()},
        )

    app.include_router(health.router)
    for router in routers:
        app.include_router(router)

    return app
