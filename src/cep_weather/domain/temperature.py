"""
cep_weather.domain.temperature

Request/response models and the Celsius conversion.

Responsibilities:
- Decode the `{"cep": ...}` request body shared by both services (JSON or fail).
- Convert Celsius to Fahrenheit and Kelvin with the system's fixed formulas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cep_weather.errors import MSG_INVALID_BODY, ErrorKind, LookupFailure


class CepRequest(BaseModel):
    # A missing "cep" decodes to "" and is rejected by validation, not by decoding.
    cep: str = ""


def decode_cep_request(raw: bytes) -> CepRequest:
    try:
        return CepRequest.model_validate_json(raw)
    except ValidationError as e:
        raise LookupFailure(ErrorKind.MALFORMED_REQUEST, MSG_INVALID_BODY, detail=str(e)) from e


class TemperatureResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city: str
    celsius: float = Field(alias="temp_C")
    fahrenheit: float = Field(alias="temp_F")
    kelvin: float = Field(alias="temp_K")

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


def to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def to_kelvin(celsius: float) -> float:
    # +273 (not 273.15) is the published contract of this API; keep it.
    return celsius + 273


def convert(city: str, celsius: float) -> TemperatureResult:
    return TemperatureResult(
        city=city,
        celsius=celsius,
        fahrenheit=to_fahrenheit(celsius),
        kelvin=to_kelvin(celsius),
    )


# --- Module Notes -----------------------------------------------------------
# Field aliases carry the wire names (temp_C/temp_F/temp_K); Python code uses the
# descriptive attribute names.
