"""
cep_weather.api.routers

HTTP routers for both service roles.
"""

# Package marker.
