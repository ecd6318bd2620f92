"""
cep_weather.errors

Failure taxonomy shared by both services.

Responsibilities:
- Enumerate every way a lookup request can fail (`ErrorKind`).
- Carry a classified failure through the pipeline (`LookupFailure`).
- Map a failure kind onto the caller-facing HTTP status.
"""

from __future__ import annotations

import enum
from http import HTTPStatus


class ErrorKind(str, enum.Enum):
    MALFORMED_REQUEST = "malformed_request"
    INVALID_POSTAL_CODE = "invalid_postal_code"
    POSTAL_CODE_NOT_FOUND = "postal_code_not_found"
    CITY_NOT_RESOLVED = "city_not_resolved"
    TEMPERATURE_UNAVAILABLE = "temperature_unavailable"
    WEATHER_PROVIDER_ERROR = "weather_provider_error"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    INTERNAL_FAILURE = "internal_failure"


# Caller-facing messages (plain text bodies).
MSG_INVALID_BODY = "invalid request body"
MSG_INVALID_ZIPCODE = "invalid zipcode"
MSG_ZIPCODE_NOT_FOUND = "can not find zipcode"
MSG_CITY_NOT_RESOLVED = "can not resolve city for zipcode"
MSG_CITY_FETCH_FAILED = "failed to fetch city"
MSG_TEMPERATURE_FETCH_FAILED = "failed to fetch temperature"
MSG_INTERNAL = "internal server error"
MSG_SERVICE_CALL_FAILED = "failed to call temperature service"


class LookupFailure(Exception):
    """
    A classified failure.

    `message` is safe to show to the caller; `detail` is diagnostic only and ends
    up on the span (e.g. the weather provider's raw response body).
    """

    def __init__(self, kind: ErrorKind, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail

    def __repr__(self) -> str:
        return f"LookupFailure(kind={self.kind.value!r}, message={self.message!r})"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.MALFORMED_REQUEST: HTTPStatus.BAD_REQUEST,
    ErrorKind.INVALID_POSTAL_CODE: HTTPStatus.UNPROCESSABLE_ENTITY,
    ErrorKind.CITY_NOT_RESOLVED: HTTPStatus.UNPROCESSABLE_ENTITY,
    ErrorKind.POSTAL_CODE_NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.TEMPERATURE_UNAVAILABLE: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorKind.WEATHER_PROVIDER_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorKind.UPSTREAM_UNAVAILABLE: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL_FAILURE: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def status_code_for(kind: ErrorKind) -> int:
    return int(_STATUS_BY_KIND[kind])


# --- Module Notes -----------------------------------------------------------
# Status selection switches on `ErrorKind`, never on message text; adding a kind
# without a status entry fails loudly with KeyError (covered by tests).
