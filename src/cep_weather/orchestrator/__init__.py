"""
cep_weather.orchestrator

Lookup pipeline state machine for the temperature service (LangGraph).

Responsibilities:
- Typed state schema.
- Node implementations (geocoding -> weather lookup -> conversion).
- Graph builder (wiring + linear transitions).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nodes raise `LookupFailure` to end the run; the service layer owns the response.
