"""
cep_weather.api.app

FastAPI app factories for the gateway and temperature services.

Responsibilities:
- Build each application and register routers/middleware.
- Create and dispose process-wide infrastructure (HTTP client, tracing).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI

from cep_weather import __version__
from cep_weather.api.routers.cep import router as cep_router
from cep_weather.api.routers.health import router as health_router
from cep_weather.api.routers.temperature import router as temperature_router
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import RequestContextMiddleware
from cep_weather.observability.tracing import Tracing, build_tracing
from cep_weather.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    if settings.role == "temperature":
        return create_temperature_app(settings=settings)
    return create_gateway_app(settings=settings)


def create_gateway_app(
    *,
    settings: Settings,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    return _build_app(
        title="CEP Weather Gateway",
        default_service_name="service-a",
        router=cep_router,
        settings=settings,
        tracing=tracing,
        transport=transport,
    )


def create_temperature_app(
    *,
    settings: Settings,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    return _build_app(
        title="CEP Weather Temperature Service",
        default_service_name="service-b",
        router=temperature_router,
        settings=settings,
        tracing=tracing,
        transport=transport,
    )


def _build_app(
    *,
    title: str,
    default_service_name: str,
    router: APIRouter,
    settings: Settings,
    tracing: Tracing | None,
    transport: httpx.AsyncBaseTransport | None,
) -> FastAPI:
    # service-a / service-b keep the names the collector dashboards already use.
    service_name = settings.service_name or default_service_name
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, service_name=service_name)
        app.state.tracing = tracing or build_tracing(settings, service_name=service_name)
        # One pooled client per process; no client-side timeout, the caller's
        # cancellation bounds every outbound call.
        app.state.http = httpx.AsyncClient(transport=transport, timeout=None)
        try:
            yield
        finally:
            await app.state.http.aclose()
            # Flush pending spans before the process exits.
            app.state.tracing.shutdown()
            log.info("shutdown")

    app = FastAPI(
        title=title,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.service_name = service_name
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(router)
    return app


# --- Module Notes -----------------------------------------------------------
# `transport`/`tracing` are injection points for tests (httpx.MockTransport,
# in-memory span exporters); production relies on the settings-driven defaults.
