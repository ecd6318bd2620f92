"""
cep_weather.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for both service roles (gateway, temperature).
- Hide the weather provider credential from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CEPW_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    # Which of the two services this process serves.
    role: Literal["gateway", "temperature"] = "gateway"
    # Empty: each app factory picks its own default (service-a / service-b).
    service_name: str = ""
    service_version: str = "1.0.0"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Gateway -> temperature service hop
    temperature_service_url: str = "http://service-b:8081"

    # Outbound lookups
    viacep_base_url: str = "https://viacep.com.br/ws"
    weather_api_url: str = "http://api.weatherapi.com/v1/current.json"
    weather_api_key: str = Field(default="", repr=False)

    # Tracing
    trace_exporter: Literal["zipkin", "console", "none"] = "zipkin"
    zipkin_endpoint: str = "http://zipkin:9411/api/v2/spans"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Both roles share one settings model; unused fields for a role are simply ignored.
