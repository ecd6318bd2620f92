"""
tests.test_temperature_api

`POST /temperature` on the temperature service, called directly.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from opentelemetry.trace import StatusCode

from cep_weather.api.app import create_temperature_app

TRACE_ID = "4bf92f3577b34da6a3ce929d0e0e4736"
PARENT_SPAN_ID = "00f067aa0ba902b7"


@pytest_asyncio.fixture
async def client(settings, providers, tracing) -> AsyncIterator[httpx.AsyncClient]:
    app = create_temperature_app(
        settings=settings, tracing=tracing, transport=httpx.MockTransport(providers.handler)
    )
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://service-b.test") as c:
            yield c


def _span(exporter, name: str):
    return next(s for s in exporter.get_finished_spans() if s.name == name)


@pytest.mark.asyncio
async def test_resolves_city_and_converts(client, span_exporter) -> None:
    r = await client.post("/temperature", json={"cep": "01001000"})

    assert r.status_code == 200
    assert r.json() == {"city": "São Paulo", "temp_C": 22.5, "temp_F": 72.5, "temp_K": 295.5}

    names = [s.name for s in span_exporter.get_finished_spans()]
    assert names == [
        "fetch-city-from-cep",
        "fetch-temperature",
        "convert-temperature",
        "handle-temperature",
    ]
    root = _span(span_exporter, "handle-temperature")
    for name in ("fetch-city-from-cep", "fetch-temperature", "convert-temperature"):
        assert _span(span_exporter, name).parent.span_id == root.context.span_id
    assert root.attributes["temperature.k"] == 295.5


@pytest.mark.asyncio
async def test_continues_the_callers_trace(client, span_exporter) -> None:
    r = await client.post(
        "/temperature",
        json={"cep": "01001000"},
        headers={"traceparent": f"00-{TRACE_ID}-{PARENT_SPAN_ID}-01"},
    )
    assert r.status_code == 200

    root = _span(span_exporter, "handle-temperature")
    assert format(root.context.trace_id, "032x") == TRACE_ID
    assert format(root.parent.span_id, "016x") == PARENT_SPAN_ID
    assert root.parent.is_remote


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"", b"{not json", b'{"cep": 1001000}'])
async def test_undecodable_body_is_bad_request(client, providers, content: bytes) -> None:
    r = await client.post("/temperature", content=content)

    assert r.status_code == 400
    assert r.text == "invalid request body"
    assert providers.requests == []


@pytest.mark.asyncio
async def test_unknown_cep_is_not_found(client, providers) -> None:
    r = await client.post("/temperature", json={"cep": "00000000"})

    assert r.status_code == 404
    assert r.text == "can not find zipcode"
    assert providers.hosts() == ["viacep.test"]


@pytest.mark.asyncio
async def test_provider_rejected_cep_is_unprocessable(client, providers) -> None:
    providers.geocoding_status["99999999"] = 400

    r = await client.post("/temperature", json={"cep": "99999999"})

    assert r.status_code == 422
    assert r.text == "invalid zipcode"


@pytest.mark.asyncio
async def test_record_without_city_is_unprocessable(client, providers) -> None:
    providers.cities["70000000"] = ""

    r = await client.post("/temperature", json={"cep": "70000000"})

    assert r.status_code == 422
    assert r.text == "can not resolve city for zipcode"
    assert providers.hosts() == ["viacep.test"]


@pytest.mark.asyncio
async def test_geocoding_outage_is_server_error(client, providers) -> None:
    providers.geocoding_status["01001000"] = 502

    r = await client.post("/temperature", json={"cep": "01001000"})

    assert r.status_code == 500
    assert r.text == "failed to fetch city"


@pytest.mark.asyncio
@pytest.mark.parametrize("weather_status", [400, 401, 403, 404, 500])
async def test_weather_failures_are_always_server_errors(
    client, providers, span_exporter, weather_status: int
) -> None:
    providers.weather_status = weather_status

    r = await client.post("/temperature", json={"cep": "01001000"})

    assert r.status_code == 500
    assert r.text == "failed to fetch temperature"
    root = _span(span_exporter, "handle-temperature")
    assert root.status.status_code is StatusCode.ERROR
    assert root.attributes["error.kind"] == "weather_provider_error"


@pytest.mark.asyncio
async def test_zero_reading_is_server_error(client, providers, span_exporter) -> None:
    providers.temperatures["São Paulo"] = 0.0

    r = await client.post("/temperature", json={"cep": "01001000"})

    assert r.status_code == 500
    assert _span(span_exporter, "fetch-temperature").attributes["error.kind"] == (
        "temperature_unavailable"
    )
    assert not [s for s in span_exporter.get_finished_spans() if s.name == "convert-temperature"]


@pytest.mark.asyncio
@pytest.mark.parametrize("cep", ["123", "01001000?x=1#", "../../evil", "0100100/", "01001-000"])
async def test_malformed_cep_never_reaches_the_provider(
    client, providers, span_exporter, cep: str
) -> None:
    r = await client.post("/temperature", json={"cep": cep})

    assert r.status_code == 422
    assert r.text == "invalid zipcode"
    assert providers.requests == []
    root = _span(span_exporter, "handle-temperature")
    assert root.attributes["error.kind"] == "invalid_postal_code"
    assert root.attributes["lookup.last_stage"] == "received"


@pytest.mark.asyncio
async def test_success_records_responded_stage(client, span_exporter) -> None:
    await client.post("/temperature", json={"cep": "01001000"})

    root = _span(span_exporter, "handle-temperature")
    assert root.attributes["lookup.stage"] == "responded"
    assert "lookup.last_stage" not in root.attributes


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("cep", "weather_status", "last_stage"),
    [
        ("00000000", 200, "received"),
        ("01001000", 500, "geocoding"),
    ],
)
async def test_failure_records_last_stage_reached(
    client, providers, span_exporter, cep: str, weather_status: int, last_stage: str
) -> None:
    providers.weather_status = weather_status

    r = await client.post("/temperature", json={"cep": cep})

    assert r.status_code in (404, 500)
    root = _span(span_exporter, "handle-temperature")
    assert root.attributes["lookup.stage"] == "failed"
    assert root.attributes["lookup.last_stage"] == last_stage
