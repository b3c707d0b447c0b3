"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from runway_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from runway_ledger.api.v1 import partners, projections, transactions
from runway_ledger.infrastructure.database.session import init_db
from runway_ledger.infrastructure.observability.logging import setup_logging
from runway_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Runway Ledger",
        description="Shared pool ledger with runway and funding-need projections",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(partners.router, prefix="/v1", tags=["partners"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(projections.router, prefix="/v1", tags=["projections"])

    return app


app = create_app()
