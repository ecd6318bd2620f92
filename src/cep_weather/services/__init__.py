"""
cep_weather.services

Service layer package.

Responsibilities:
- Temperature service: run the lookup graph for one CEP.
- Gateway service: validate and relay a request to the temperature service.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers stay thin: they open the root span, call a service, and render the outcome.
