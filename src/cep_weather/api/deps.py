"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose settings, tracing and the shared HTTP client stored on app.state.
"""

from __future__ import annotations

import httpx
from fastapi import Request

from cep_weather.observability.tracing import Tracing
from cep_weather.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def tracing_dep(request: Request) -> Tracing:
    # Created in the app lifespan (see `cep_weather.api.app`).
    return request.app.state.tracing  # type: ignore[attr-defined]


def http_dep(request: Request) -> httpx.AsyncClient:
    return request.app.state.http  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Everything here is process-scoped; request-scoped state lives in the services.
