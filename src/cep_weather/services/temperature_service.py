"""
cep_weather.services.temperature_service

Lookup pipeline service for the temperature (downstream) role.

Responsibilities:
- Wire the geocoding/weather clients into the lookup graph.
- Reject malformed CEPs before any provider is contacted.
- Run exactly one pass of the graph per request (no retries).
"""

from __future__ import annotations

import httpx
from opentelemetry import trace

from cep_weather.domain.postal_code import is_valid_postal_code
from cep_weather.domain.temperature import TemperatureResult
from cep_weather.errors import MSG_INVALID_ZIPCODE, ErrorKind, LookupFailure
from cep_weather.lookup_clients.geocoding import GeocodingClient
from cep_weather.lookup_clients.weather import WeatherClient
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing
from cep_weather.orchestrator.graph import build_graph
from cep_weather.orchestrator.state import LookupState
from cep_weather.settings import Settings

log = get_logger(__name__)


class TemperatureService:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._graph = build_graph(
            geocoding=GeocodingClient(settings=settings, http=http, tracing=tracing),
            weather=WeatherClient(settings=settings, http=http, tracing=tracing),
            tracing=tracing,
        )

    async def resolve(self, cep: str) -> TemperatureResult:
        """
        Run the lookup graph once for `cep`.

        Records the terminal stage (`responded` or `failed`, plus the last stage
        reached before the failure) on the active span and in the logs.
        """

        span = trace.get_current_span()
        last: LookupState = {"cep": cep, "stage": "received"}
        try:
            # Only syntactically valid codes may reach the geocoding provider.
            if not is_valid_postal_code(cep):
                raise LookupFailure(ErrorKind.INVALID_POSTAL_CODE, MSG_INVALID_ZIPCODE)
            async for snapshot in self._graph.astream(dict(last), stream_mode="values"):
                last = snapshot
        except LookupFailure as e:
            span.set_attribute("lookup.stage", "failed")
            span.set_attribute("lookup.last_stage", last["stage"])
            log.warning(
                "lookup.failed",
                cep=cep,
                kind=e.kind.value,
                last_stage=last["stage"],
                detail=e.detail,
            )
            raise

        result = last["result"]
        span.set_attribute("lookup.stage", "responded")
        log.info("lookup.completed", cep=cep, city=result.city, temp_c=result.celsius)
        return result


# --- Module Notes -----------------------------------------------------------
# Failures propagate unchanged; mapping kinds to HTTP statuses happens in the router.
