"""
cep_weather.lookup_clients

Outbound lookup client package.

Responsibilities:
- Provide client interfaces for the geocoding (ViaCEP) and weather (WeatherAPI)
  providers used by the temperature service.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends on these boundaries, never on raw HTTP.
