"""E.164 rendering of contact phone numbers for person summaries."""

from functools import partial

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat


def normalize_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """E.164 form of raw, or None when it does not read as a valid number.

    Contacts are usually stored with their prefix ("+39 02 1234567");
    default_region only applies to numbers entered without one.
    """
    text = str(raw).strip() if raw is not None else ""
    if not text:
        return None
    try:
        number = phonenumbers.parse(text, default_region)
    except NumberParseException:
        return None
    if phonenumbers.is_valid_number(number):
        return phonenumbers.format_number(number, PhoneNumberFormat.E164)
    return None


def phone_normalizer(default_region: str | None):
    """One-argument normalizer bound to a region, as expected by summarize()."""
    return partial(normalize_phone, default_region=default_region)
