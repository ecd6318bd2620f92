"""
cep_weather.api.routers.temperature

Internal endpoint of the temperature role.

Responsibilities:
- Continue the caller's trace (extract before the root span opens).
- Decode the body and run the lookup pipeline.
- Map classified failures onto caller-facing statuses.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from cep_weather.api.deps import http_dep, settings_dep, tracing_dep
from cep_weather.domain.temperature import decode_cep_request
from cep_weather.errors import LookupFailure, status_code_for
from cep_weather.observability.tracing import Tracing, mark_failure
from cep_weather.services.temperature_service import TemperatureService
from cep_weather.settings import Settings

router = APIRouter(tags=["temperature"])


@router.post("/temperature")
async def temperature(
    request: Request,
    settings: Settings = Depends(settings_dep),
    tracing: Tracing = Depends(tracing_dep),
    http: httpx.AsyncClient = Depends(http_dep),
) -> Response:
    parent = tracing.extract(dict(request.headers))
    with tracing.span(
        "handle-temperature",
        context=parent,
        attributes={"http.method": request.method, "http.path": request.url.path},
    ) as span:
        try:
            body = decode_cep_request(await request.body())
            span.set_attribute("cep", body.cep)
            svc = TemperatureService(settings=settings, http=http, tracing=tracing)
            result = await svc.resolve(body.cep)
        except LookupFailure as e:
            mark_failure(span, e)
            return PlainTextResponse(e.message, status_code=status_code_for(e.kind))

        span.set_attribute("temperature.c", result.celsius)
        span.set_attribute("temperature.f", result.fahrenheit)
        span.set_attribute("temperature.k", result.kelvin)
        return JSONResponse(result.to_payload())


# --- Module Notes -----------------------------------------------------------
# The CEP is re-validated by `TemperatureService`: this endpoint is reachable by any
# internal caller, not just the gateway.
