"""FastAPI application factory"""

from typing import Optional

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from factoring_simulator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from factoring_simulator.api.v1 import simulation, rate_tables
from factoring_simulator.infrastructure.observability.logging import setup_logging
from factoring_simulator.config import Settings, settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Factoring Simulator",
        description="Net proceeds of factoring operations under Brazilian tax law",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check reports the pricing context simulations run under
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": app_settings.service_name,
            "currency": app_settings.currency.value,
            "iof_entity_type": app_settings.iof_entity_type.value,
            "configured_municipalities": len(app_settings.municipality_iss_rates),
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(simulation.router, prefix="/v1", tags=["simulations"])
    app.include_router(rate_tables.router, prefix="/v1", tags=["rate-tables"])

    return app


app = create_app()
