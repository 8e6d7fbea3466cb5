"""Phone extraction and normalization for Shopify order payloads."""

from __future__ import annotations

import re
from typing import Any, Mapping

DEFAULT_COUNTRY_CODE = "359"

# Order payload locations holding a phone number, highest priority first
PHONE_LOCATIONS = ("customer", "billing_address", "shipping_address")

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(raw: Any, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Normalize a raw phone number to digits prefixed with the country code.

    ``"0888 123 456"`` and ``"+359 888 123 456"`` both become ``"359888123456"``.
    Numbers that match neither the international nor the trunk-prefixed
    national form are returned as bare digits. Returns ``""`` when there is
    nothing to normalize.
    """
    if not raw:
        return ""
    digits = _NON_DIGITS.sub("", str(raw))

    if digits.startswith("00"):
        digits = digits[2:]
    if digits.startswith(country_code):
        return digits
    if digits.startswith("0"):
        return country_code + digits[1:]
    return digits


def extract_phone(order: Mapping[str, Any]) -> str:
    """Return the first non-empty phone from the order's contact locations.

    Sections that are missing or not objects are skipped.
    """
    for location in PHONE_LOCATIONS:
        section = order.get(location)
        if not isinstance(section, Mapping):
            continue
        phone = section.get("phone")
        if phone:
            return phone
    return ""
