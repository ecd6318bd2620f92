from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from langgraph.graph import END, START, StateGraph

from cep_weather.lookup_clients.geocoding import GeocodingClient
from cep_weather.lookup_clients.weather import WeatherClient
from cep_weather.observability.tracing import Tracing
from cep_weather.orchestrator.nodes import convert_node, geocoding_node, weather_lookup_node
from cep_weather.orchestrator.state import LookupState


def build_graph(*, geocoding: GeocodingClient, weather: WeatherClient, tracing: Tracing):
    """
    Returns a compiled LangGraph runnable: geocoding -> weather_lookup -> convert.
    """

    graph = StateGraph(LookupState)

    graph.add_node("geocoding", _bind(geocoding_node, client=geocoding))
    graph.add_node("weather_lookup", _bind(weather_lookup_node, client=weather))
    graph.add_node("convert", _bind(convert_node, tracing=tracing))

    graph.add_edge(START, "geocoding")
    graph.add_edge("geocoding", "weather_lookup")
    graph.add_edge("weather_lookup", "convert")
    graph.add_edge("convert", END)

    return graph.compile()


def _bind(
    fn: Callable[..., Awaitable[LookupState]],
    **deps: Any,
) -> Callable[[LookupState], Awaitable[LookupState]]:
    async def _wrapped(state: LookupState) -> LookupState:
        return await fn(state, **deps)

    return _wrapped
