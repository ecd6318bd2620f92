"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- Distributed tracing (explicit `Tracing` object, W3C context propagation).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers and clients receive a `Tracing` instance; nothing here registers globals
# in the OpenTelemetry API.
