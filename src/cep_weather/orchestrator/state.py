"""
cep_weather.orchestrator.state

Typed state schema used by the lookup graph.
"""

from __future__ import annotations

from typing import Literal, TypedDict

from cep_weather.domain.temperature import TemperatureResult

# Graph stages only; the terminal outcome (responded/failed) is recorded by
# `TemperatureService.resolve` on the request span.
Stage = Literal["received", "geocoding", "weather_lookup", "converted"]


class LookupState(TypedDict, total=False):
    # Input
    cep: str

    # Produced by the nodes, in order
    city: str
    celsius: float
    result: TemperatureResult

    # Last state the machine reached
    stage: Stage


# --- Module Notes -----------------------------------------------------------
# State is request-scoped: a fresh dict per graph invocation, nothing shared.
