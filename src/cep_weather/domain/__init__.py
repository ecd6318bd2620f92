"""
cep_weather.domain

Pure domain logic shared by both services.

Responsibilities:
- Postal code (CEP) syntax validation.
- Temperature scale conversion and the request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O or touches tracing.
