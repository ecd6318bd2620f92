"""
cep_weather.lookup_clients.weather

HTTP client boundary for current conditions by city name.

Responsibilities:
- Call a WeatherAPI-compatible `current.json` endpoint with the access key.
- Classify provider, transport and decoding failures.
- Record the resolved temperature and location on the `fetch-temperature` span.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, Field, ValidationError

from cep_weather.errors import MSG_TEMPERATURE_FETCH_FAILED, ErrorKind, LookupFailure
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import Settings

log = get_logger(__name__)

# The provider reports missing data as 0. A genuine 0 °C reading is therefore
# indistinguishable from "no data" and is reported as unavailable; known defect,
# kept for compatibility with existing consumers.
NO_DATA_SENTINEL = 0.0


class _Current(BaseModel):
    # null, missing and 0 all mean "no reading".
    temp_c: float | None = None


class _Location(BaseModel):
    name: str = ""


class WeatherPayload(BaseModel):
    current: _Current = Field(default_factory=_Current)
    location: _Location = Field(default_factory=_Location)


class WeatherClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._url = settings.weather_api_url
        self._api_key = settings.weather_api_key
        self._http = http
        self._tracing = tracing

    async def celsius_for(self, city: str) -> float:
        # The access key goes in the query string only; never on spans or logs.
        with self._tracing.span(
            "fetch-temperature",
            attributes={"city": city, "weather.api": urlsplit(self._url).hostname},
        ) as span:
            try:
                # httpx query-escapes `q` (spaces, accents) on the wire.
                r = await self._http.get(
                    self._url, params={"key": self._api_key, "q": city, "aqi": "no"}
                )
            except httpx.HTTPError as e:
                raise LookupFailure(
                    ErrorKind.UPSTREAM_UNAVAILABLE, MSG_TEMPERATURE_FETCH_FAILED, detail=str(e)
                ) from e

            span.set_attribute("http.status_code", r.status_code)
            if not r.is_success:
                log.warning("weather.provider_error", city=city, status_code=r.status_code)
                raise LookupFailure(
                    ErrorKind.WEATHER_PROVIDER_ERROR,
                    MSG_TEMPERATURE_FETCH_FAILED,
                    detail=r.text,
                )

            try:
                payload = WeatherPayload.model_validate_json(r.content)
            except ValidationError as e:
                raise LookupFailure(
                    ErrorKind.UPSTREAM_UNAVAILABLE, MSG_TEMPERATURE_FETCH_FAILED, detail=str(e)
                ) from e

            temp_c = payload.current.temp_c
            if temp_c is None or temp_c == NO_DATA_SENTINEL:
                raise LookupFailure(
                    ErrorKind.TEMPERATURE_UNAVAILABLE,
                    MSG_TEMPERATURE_FETCH_FAILED,
                    detail="provider returned no temperature",
                )

            span.set_attribute("temperature.c", temp_c)
            span.set_attribute("location", payload.location.name)
            log.info(
                "weather.resolved",
                city=city,
                location=payload.location.name,
                temp_c=temp_c,
            )
            return temp_c


# --- Module Notes -----------------------------------------------------------
# Every weather failure maps to a server error upstream: the provider failing is
# never the caller's fault.
