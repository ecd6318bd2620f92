"""
cep_weather.api

API package for the gateway and temperature services.

Responsibilities:
- FastAPI app factories and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: root span + decoding + delegation to services.
