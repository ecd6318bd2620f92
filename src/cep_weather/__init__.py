"""
cep_weather

Top-level package for the CEP-to-temperature services (gateway + temperature).

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "1.0.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal to avoid import-time side effects across the codebase.
