import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_pagination import add_pagination
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging_utils import configure_structlog
from db_models.session import dispose_async_engine
from shop_api import __VERSION__
from shop_api.api.v1 import api_router
from shop_api.core.config import settings

configure_structlog(logging.getLevelName(settings.LOG_LEVEL.upper()))

logger = structlog.get_logger()


class MetricsProtectionMiddleware(BaseHTTPMiddleware):
    """Block /metrics access from external requests (via ingress)"""

    async def dispatch(self, request: Request, call_next):
        # Internal cluster requests do not carry X-Forwarded-For.
        if request.url.path == "/metrics" and request.headers.get("X-Forwarded-For"):
            return JSONResponse(status_code=404, content={"detail": "Not Found"})
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log incoming requests and their responses"""

    async def dispatch(self, request: Request, call_next):
        logger.info(
            "Incoming request",
            method=request.method,
            url=str(request.url),
            client=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
            logger.info(
                "Response",
                status_code=response.status_code,
                method=request.method,
                url=str(request.url),
            )
            return response
        except Exception as e:
            logger.error(
                "Error while handling the request",
                error=str(e),
                method=request.method,
                url=str(request.url),
                exc_info=True,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"},
            )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle.
    Runs at startup and shutdown.
    """
    logger.info("Starting the API", version=__VERSION__)
    logger.info("Environment", environment=settings.ENVIRONMENT)
    instrumentator.expose(app, include_in_schema=False)

    yield

    await dispose_async_engine()
    logger.info("API stopped")


# Prefix used for the OpenAPI urls
root_path = "/api" if settings.ENVIRONMENT == "proxy" else ""

app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="Customers, items and orders served from an async SQLAlchemy session.",
    version=__VERSION__,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan,
    root_path=root_path,
)
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)
add_pagination(app)

app.add_middleware(RequestLoggingMiddleware)  # type: ignore[arg-type]
app.add_middleware(MetricsProtectionMiddleware)  # type: ignore[arg-type]

instrumentator: Instrumentator = Instrumentator(
    should_group_status_codes=False,
    excluded_handlers=["/redoc", "/docs", "/openapi.json", "/metrics"],
).instrument(
    app,
    metric_namespace="shop_api",
)


@app.get("/", include_in_schema=False)
async def root():
    """
    Root entry point of the API.
    """
    return {
        "message": f"Welcome to the {settings.PROJECT_NAME} API",
        "version": __VERSION__,
        "documentation": f"{settings.API_V1_STR}/docs",
    }


@app.get("/health", include_in_schema=False)
async def health_check():
    """
    Health check endpoint.
    """
    return {"status": "healthy"}
