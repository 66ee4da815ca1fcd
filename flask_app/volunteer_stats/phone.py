"""
Phone number normalization for volunteer records.

Stored phones are canonical when they are exactly 10 digits (US) or a ``+``
followed by digits (international). Older rows may still hold formatted
values such as ``(123) 456-7890``; reading them yields a correction that the
caller persists out of band.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

# Accepts the common U.S. formats: optional leading country digit, optional
# parentheses around the area code, optional space/dash separators.
# Leading/trailing whitespace is ignored and letters are rejected.
PHONE_REGEX = re.compile(
    r"^\s*(?:[0-9](?: |-)?)?(?:\(?([0-9]{3})\)?|[0-9]{3})(?: |-)?(?:([0-9]{3})(?: |-)?([0-9]{4}))\s*$"
)

# Accepted phone number format in the database
STRICT_US_REGEX = re.compile(r"([0-9]{3})([0-9]{3})([0-9]{4})")

# Any Unicode decimal digit; stored as its ASCII equivalent
_DIGITS = re.compile(r"\d")


@dataclass(frozen=True)
class PhoneRead:
    """Result of reading a stored phone: what to show, and what to store instead."""

    display: str | None
    correction: str | None = None

    @property
    def needs_correction(self) -> bool:
        return self.correction is not None


def is_international(phone: str | None) -> bool:
    return bool(phone) and phone[0] == "+"


def match_us_phone(value: str) -> tuple[str, str, str] | None:
    """Return the (area, prefix, line) groups of a U.S. number, or None."""
    matches = PHONE_REGEX.match(value)
    if not matches:
        return None
    area, prefix, line = matches.groups()
    return area, prefix, line


def format_for_display(stored_phone: str | None) -> str | None:
    """
    Human-readable form of a stored phone.

    International numbers are returned unchanged; U.S. numbers are rendered as
    ``AAA-PPP-LLLL``. Anything unparseable yields None.
    """
    if not stored_phone:
        return None

    # TODO: format international numbers per country once we store the country code separately
    if is_international(stored_phone):
        return stored_phone

    groups = match_us_phone(stored_phone)
    if groups is None:
        return None

    area, prefix, line = groups
    return f"{area}-{prefix}-{line}"


def pending_correction(stored_phone: str | None) -> str | None:
    """
    Canonical value that should replace ``stored_phone``, or None if it is
    already canonical (or cannot be corrected).
    """
    if not stored_phone or is_international(stored_phone):
        return None

    groups = match_us_phone(stored_phone)
    if groups is None:
        return None

    if STRICT_US_REGEX.fullmatch(stored_phone):
        return None
    return "".join(groups)


def read_phone(stored_phone: str | None) -> PhoneRead:
    return PhoneRead(
        display=format_for_display(stored_phone),
        correction=pending_correction(stored_phone),
    )


def set_from_input(raw_input: str | None) -> str | None:
    """
    Canonical value to store for a free-form phone input.

    Input that is neither international nor a recognizable U.S. number is not
    rejected: the empty groups are concatenated as-is, so the stored value
    becomes the degenerate string ``"NoneNoneNone"``.
    """
    if not raw_input:
        return raw_input

    if is_international(raw_input):
        return "+" + "".join(str(unicodedata.decimal(digit)) for digit in _DIGITS.findall(raw_input))

    area, prefix, line = match_us_phone(raw_input) or (None, None, None)
    return f"{area}{prefix}{line}"


__all__ = [
    "PHONE_REGEX",
    "PhoneRead",
    "format_for_display",
    "is_international",
    "match_us_phone",
    "pending_correction",
    "read_phone",
    "set_from_input",
]
