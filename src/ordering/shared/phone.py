"""Kenyan mobile number normalization.

Customers type numbers in either the local form (``07XXXXXXXX`` or
``01XXXXXXXX``) or the international form (``2547XXXXXXXX``), often with
spaces, dashes or a leading ``+``. Orders always store the international
form, which is also what the M-Pesa payment prompt expects.
"""

import re

from protean.exceptions import ValidationError

COUNTRY_CODE = "254"

_LOCAL = re.compile(r"^0([71]\d{8})$")
_INTERNATIONAL = re.compile(r"^254([71]\d{8})$")


def normalize_phone(raw: str | None, field: str = "phone") -> str:
    """Return the canonical ``254XXXXXXXXX`` form of ``raw``.

    Raises ValidationError keyed by ``field`` when the digits match neither
    accepted shape.
    """
    digits = re.sub(r"\D", "", raw or "")

    match = _LOCAL.match(digits) or _INTERNATIONAL.match(digits)
    if match is None:
        raise ValidationError({field: ["Enter a valid phone number, e.g. 0722 000 000 or 254722000000"]})

    return COUNTRY_CODE + match.group(1)


def is_valid_phone(raw: str | None) -> bool:
    try:
        normalize_phone(raw)
    except ValidationError:
        return False
    return True
