"""
cep_weather.lookup_clients.geocoding

HTTP client boundary for resolving a CEP to a city name.

Responsibilities:
- Call a ViaCEP-compatible lookup (`GET {base}/{cep}/json/`).
- Classify every outcome into the shared failure taxonomy.
- Record status and resolved city on the `fetch-city-from-cep` span.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ValidationError
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from cep_weather.errors import (
    MSG_CITY_FETCH_FAILED,
    MSG_CITY_NOT_RESOLVED,
    MSG_INVALID_ZIPCODE,
    MSG_ZIPCODE_NOT_FOUND,
    ErrorKind,
    LookupFailure,
)
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import Settings

log = get_logger(__name__)


class ViaCepPayload(BaseModel):
    localidade: str | None = None
    # ViaCEP answers unknown (but well-formed) codes with 200 {"erro": true}.
    erro: bool = False


class GeocodingClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._base_url = settings.viacep_base_url.rstrip("/")
        self._http = http
        self._tracing = tracing

    async def city_for(self, cep: str) -> str:
        with self._tracing.span(
            "fetch-city-from-cep",
            attributes={"cep": cep, "api.url": urlsplit(self._base_url).hostname},
        ) as span:
            try:
                r = await self._http.get(f"{self._base_url}/{cep}/json/")
            except httpx.HTTPError as e:
                raise LookupFailure(
                    ErrorKind.UPSTREAM_UNAVAILABLE, MSG_CITY_FETCH_FAILED, detail=str(e)
                ) from e

            span.set_attribute("http.status_code", r.status_code)
            if r.status_code == HTTP_400_BAD_REQUEST:
                raise LookupFailure(ErrorKind.INVALID_POSTAL_CODE, MSG_INVALID_ZIPCODE)
            if r.status_code == HTTP_404_NOT_FOUND:
                raise LookupFailure(ErrorKind.POSTAL_CODE_NOT_FOUND, MSG_ZIPCODE_NOT_FOUND)
            if not r.is_success:
                raise LookupFailure(
                    ErrorKind.UPSTREAM_UNAVAILABLE,
                    MSG_CITY_FETCH_FAILED,
                    detail=f"geocoding provider returned {r.status_code}",
                )

            try:
                payload = ViaCepPayload.model_validate_json(r.content)
            except ValidationError as e:
                raise LookupFailure(
                    ErrorKind.UPSTREAM_UNAVAILABLE, MSG_CITY_FETCH_FAILED, detail=str(e)
                ) from e

            if payload.erro:
                raise LookupFailure(ErrorKind.POSTAL_CODE_NOT_FOUND, MSG_ZIPCODE_NOT_FOUND)
            if not payload.localidade:
                raise LookupFailure(ErrorKind.CITY_NOT_RESOLVED, MSG_CITY_NOT_RESOLVED)

            span.set_attribute("city", payload.localidade)
            log.info("geocoding.resolved", cep=cep, city=payload.localidade)
            return payload.localidade


# --- Module Notes -----------------------------------------------------------
# No retries and no caching: one round trip per request, failures surface as-is.
