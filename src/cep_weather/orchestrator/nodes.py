from __future__ import annotations

from cep_weather.domain.temperature import convert
from cep_weather.lookup_clients.geocoding import GeocodingClient
from cep_weather.lookup_clients.weather import WeatherClient
from cep_weather.observability.tracing import Tracing
from cep_weather.orchestrator.state import LookupState


async def geocoding_node(state: LookupState, *, client: GeocodingClient) -> LookupState:
    city = await client.city_for(state["cep"])
    return {"city": city, "stage": "geocoding"}


async def weather_lookup_node(state: LookupState, *, client: WeatherClient) -> LookupState:
    celsius = await client.celsius_for(state["city"])
    return {"celsius": celsius, "stage": "weather_lookup"}


async def convert_node(state: LookupState, *, tracing: Tracing) -> LookupState:
    with tracing.span("convert-temperature", attributes={"temperature.c": state["celsius"]}) as span:
        result = convert(state["city"], state["celsius"])
        span.set_attribute("temperature.f", result.fahrenheit)
        span.set_attribute("temperature.k", result.kelvin)
    return {"result": result, "stage": "converted"}
