"""
tests.conftest

Shared fixtures: deterministic provider stubs, in-memory tracing, and the two
services wired together in-process.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

import httpx
import pytest
import pytest_asyncio
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.api.app import create_gateway_app, create_temperature_app
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import Settings

VIACEP_HOST = "viacep.test"
WEATHER_HOST = "weather.test"


@dataclass
class Providers:
    """
    Stub for both external lookups, routed by host.

    Unknown CEPs answer 404; `geocoding_status` forces a status per CEP.
    """

    cities: dict[str, str] = field(default_factory=lambda: {"01001000": "São Paulo"})
    geocoding_status: dict[str, int] = field(default_factory=dict)
    temperatures: dict[str, float] = field(default_factory=lambda: {"São Paulo": 22.5})
    weather_status: int = 200
    weather_error_body: str = '{"error": {"code": 1006, "message": "No matching location found."}}'
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == VIACEP_HOST:
            return self._geocoding(request)
        if request.url.host == WEATHER_HOST:
            return self._weather(request)
        raise httpx.ConnectError(f"unexpected host {request.url.host}", request=request)

    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]

    def _geocoding(self, request: httpx.Request) -> httpx.Response:
        # /ws/{cep}/json/
        cep = request.url.path.split("/")[2]
        if cep in self.geocoding_status:
            return httpx.Response(self.geocoding_status[cep])
        if cep not in self.cities:
            return httpx.Response(404)
        return httpx.Response(200, json={"cep": cep, "localidade": self.cities[cep], "uf": "SP"})

    def _weather(self, request: httpx.Request) -> httpx.Response:
        if self.weather_status != 200:
            return httpx.Response(self.weather_status, text=self.weather_error_body)
        city = request.url.params["q"]
        body = {
            "location": {"name": city, "country": "Brazil"},
            "current": {"temp_c": self.temperatures.get(city, 0.0)},
        }
        return httpx.Response(
            200,
            content=json.dumps(body, ensure_ascii=False).encode(),
            headers={"content-type": "application/json"},
        )


@dataclass
class Stack:
    client: httpx.AsyncClient
    gateway_spans: InMemorySpanExporter
    temperature_spans: InMemorySpanExporter
    providers: Providers


def memory_tracing(service_name: str) -> tuple[Tracing, InMemorySpanExporter]:
    exporter = InMemorySpanExporter()
    return Tracing(service_name=service_name, exporter=exporter, batch=False), exporter


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        trace_exporter="none",
        viacep_base_url=f"http://{VIACEP_HOST}/ws",
        weather_api_url=f"http://{WEATHER_HOST}/v1/current.json",
        weather_api_key="test-key",
        temperature_service_url="http://service-b.test",
    )


@pytest.fixture
def providers() -> Providers:
    return Providers()


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracing(span_exporter: InMemorySpanExporter) -> Tracing:
    return Tracing(service_name="test", exporter=span_exporter, batch=False)


@pytest_asyncio.fixture
async def stack(settings: Settings, providers: Providers) -> AsyncIterator[Stack]:
    temperature_tracing, temperature_spans = memory_tracing("service-b")
    gateway_tracing, gateway_spans = memory_tracing("service-a")

    temperature_app = create_temperature_app(
        settings=settings,
        tracing=temperature_tracing,
        transport=httpx.MockTransport(providers.handler),
    )
    # The gateway reaches the temperature service in-process (no real network).
    gateway_app = create_gateway_app(
        settings=settings,
        tracing=gateway_tracing,
        transport=httpx.ASGITransport(app=temperature_app),
    )

    # httpx ASGITransport does not manage lifespan automatically; do it explicitly.
    async with temperature_app.router.lifespan_context(temperature_app):
        async with gateway_app.router.lifespan_context(gateway_app):
            transport = httpx.ASGITransport(app=gateway_app)
            async with httpx.AsyncClient(
                transport=transport, base_url="http://gateway.test"
            ) as client:
                yield Stack(
                    client=client,
                    gateway_spans=gateway_spans,
                    temperature_spans=temperature_spans,
                    providers=providers,
                )


# --- Module Notes -----------------------------------------------------------
# Stubs are deterministic: the same request always yields the same response, which
# is what the idempotence tests rely on.
