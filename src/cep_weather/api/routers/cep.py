"""
cep_weather.api.routers.cep

Public endpoint of the gateway role.

Responsibilities:
- Open the root `handle-cep` span for the whole trace.
- Delegate validation + relay to `GatewayService`.
- Render local failures as plain-text status responses.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from cep_weather.api.deps import http_dep, settings_dep, tracing_dep
from cep_weather.errors import LookupFailure, status_code_for
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing, mark_failure
from cep_weather.services.gateway_service import GatewayService
from cep_weather.settings import Settings

router = APIRouter(tags=["cep"])

log = get_logger(__name__)


@router.post("/cep")
async def lookup_cep(
    request: Request,
    settings: Settings = Depends(settings_dep),
    tracing: Tracing = Depends(tracing_dep),
    http: httpx.AsyncClient = Depends(http_dep),
) -> Response:
    with tracing.span(
        "handle-cep",
        attributes={"http.method": request.method, "http.path": request.url.path},
    ) as span:
        svc = GatewayService(settings=settings, http=http, tracing=tracing)
        try:
            relayed = await svc.relay(await request.body())
        except LookupFailure as e:
            mark_failure(span, e)
            log.info("cep.rejected", kind=e.kind.value, detail=e.detail)
            return PlainTextResponse(e.message, status_code=status_code_for(e.kind))

        span.set_attribute("http.status_code", relayed.status_code)
        return Response(
            content=relayed.body,
            status_code=relayed.status_code,
            media_type=relayed.media_type,
        )


# --- Module Notes -----------------------------------------------------------
# Downstream error statuses (404/422/500) are relayed as responses, not failures,
# so the gateway's root span only errors on its own local failures.
