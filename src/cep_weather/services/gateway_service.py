"""
cep_weather.services.gateway_service

Validate-and-relay service for the gateway (upstream) role.

Responsibilities:
- Decode and validate the CEP before any network call.
- Forward the request to the temperature service with trace context injected.
- Hand back the downstream status and body untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from cep_weather.domain.postal_code import is_valid_postal_code
from cep_weather.domain.temperature import CepRequest, decode_cep_request
from cep_weather.errors import (
    MSG_INTERNAL,
    MSG_INVALID_ZIPCODE,
    MSG_SERVICE_CALL_FAILED,
    ErrorKind,
    LookupFailure,
)
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RelayResponse:
    status_code: int
    body: bytes
    media_type: str


class GatewayService:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._url = f"{settings.temperature_service_url.rstrip('/')}/temperature"
        self._http = http
        self._tracing = tracing

    async def relay(self, raw_body: bytes) -> RelayResponse:
        req = decode_cep_request(raw_body)

        with self._tracing.span("validate-cep", attributes={"cep": req.cep}):
            if not is_valid_postal_code(req.cep):
                raise LookupFailure(ErrorKind.INVALID_POSTAL_CODE, MSG_INVALID_ZIPCODE)

        payload = self._marshal(req)

        # Sibling of validate-cep: both are children of the gateway's root span.
        with self._tracing.span(
            "call-temperature-service", attributes={"peer.url": self._url}
        ) as span:
            headers = {"Content-Type": "application/json"}
            self._tracing.inject(headers)
            try:
                r = await self._http.post(self._url, content=payload, headers=headers)
            except httpx.HTTPError as e:
                raise LookupFailure(
                    ErrorKind.UPSTREAM_UNAVAILABLE, MSG_SERVICE_CALL_FAILED, detail=str(e)
                ) from e
            span.set_attribute("http.status_code", r.status_code)

        log.info("relay.completed", cep=req.cep, status_code=r.status_code)
        return RelayResponse(
            status_code=r.status_code,
            body=r.content,
            media_type=r.headers.get("content-type", "application/json"),
        )

    @staticmethod
    def _marshal(req: CepRequest) -> bytes:
        try:
            return req.model_dump_json().encode()
        except ValueError as e:
            raise LookupFailure(ErrorKind.INTERNAL_FAILURE, MSG_INTERNAL, detail=str(e)) from e


# --- Module Notes -----------------------------------------------------------
# The gateway never reinterprets downstream statuses: once validation passes it is
# a transparent relay.
