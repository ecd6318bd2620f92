"""
cep_weather.domain.postal_code

Syntactic validation of Brazilian postal codes (CEP).
"""

from __future__ import annotations

CEP_LENGTH = 8


def is_valid_postal_code(value: str) -> bool:
    """
    True iff `value` is exactly eight ASCII digits.

    No normalization: "01001-000" or " 01001000" are rejected, not repaired.
    """

    if len(value) != CEP_LENGTH:
        return False
    # str.isdigit alone accepts non-ASCII digits such as "²" or "٣".
    return value.isascii() and value.isdigit()


# --- Module Notes -----------------------------------------------------------
# A valid CEP is not necessarily a real one; resolution is the geocoding client's job.
